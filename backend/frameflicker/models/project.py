"""
SQLAlchemy model for the Project (booking) entity
Project: FrameFlicker Studios (Studio Manager)

A booking ties one client to one package and carries its own financial
snapshot. price, deposit_percent, deposit_amount and balance_amount are
written once at creation; afterwards only payment postings/reversals move
amount_paid and balance_amount, always by the same delta in opposite
directions.
"""


from __future__ import annotations
import uuid
from decimal import Decimal
from typing import Optional, TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frameflicker.models import Base
from frameflicker.models.mixins import TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from frameflicker.models.client import Client
    from frameflicker.models.package import Package
    from frameflicker.models.payment import Payment


class Project(Base, UUIDMixin, TimestampMixin):
    """
    Booking.

    Attributes:
        id: UUID primary key
        client_id: Referenced client (NULL once the client is deleted)
        package_id: Referenced package (NULL once the package is deleted)
        event_type: Wedding, birthday, corporate...
        event_date: Event date, as entered by the studio
        event_time: Event time, as entered by the studio
        location: Venue
        status: Workflow status (New ... Completed / Cancelled)
        price: Price snapshot taken at creation
        deposit_percent: Deposit share applied at creation (0.50 / 0.25)
        deposit_amount: Required upfront amount
        balance_amount: Amount still owed
        amount_paid: Sum of posted payments
        revision_limit: Revisions included in the price
        revisions_used: Revisions consumed so far
        drive_link: Shared delivery folder
        internal_path: Path on the studio NAS
        crew_assigned: Free-text crew list
        notes: Internal notes
        created_at: Creation timestamp

    Relationships:
        client, package: Referenced entities
        payments: Ledger entries, deleted together with the project
    """

    __tablename__ = "projects"

    # ------------------------------------------------------------
    # References
    # ------------------------------------------------------------
    client_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    package_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("packages.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # ------------------------------------------------------------
    # Event details
    # ------------------------------------------------------------
    event_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    event_date: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    event_time: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="New",
        doc="Workflow status",
    )

    # ------------------------------------------------------------
    # Financial snapshot
    # ------------------------------------------------------------
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    deposit_percent: Mapped[Decimal] = mapped_column(Numeric(5, 4), nullable=False)
    deposit_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    balance_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    amount_paid: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0"),
    )

    # ------------------------------------------------------------
    # Revisions
    # ------------------------------------------------------------
    revision_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    revisions_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # ------------------------------------------------------------
    # Free text
    # ------------------------------------------------------------
    drive_link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    internal_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    crew_assigned: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------
    client: Mapped[Optional["Client"]] = relationship(
        "Client",
        back_populates="projects",
    )

    package: Mapped[Optional["Package"]] = relationship(
        "Package",
        back_populates="projects",
    )

    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_projects_price_non_negative"),
        CheckConstraint("revisions_used >= 0", name="ck_projects_revisions_used_non_negative"),
        Index("ix_projects_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, status='{self.status}', price={self.price})>"
