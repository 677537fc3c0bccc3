"""
SQLAlchemy model for the Payment entity
Project: FrameFlicker Studios (Studio Manager)

A payment is a ledger entry against exactly one booking. It is never
edited; deleting it reverses its effect on the booking totals.
"""


from __future__ import annotations
import uuid
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frameflicker.models import Base
from frameflicker.models.mixins import TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from frameflicker.models.project import Project


class Payment(Base, UUIDMixin, TimestampMixin):
    """
    Ledger entry.

    Attributes:
        id: UUID primary key
        project_id: Booking the payment belongs to
        amount: Amount received, strictly positive
        method: Cash, Bank Transfer, Card, Other
        reference: Bank reference, receipt number...
        note: Free-text note
        created_at: Posting timestamp
    """

    __tablename__ = "payments"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        doc="Amount received",
    )

    method: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        doc="Payment method",
    )

    reference: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Bank reference or receipt number",
    )

    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    project: Mapped["Project"] = relationship(
        "Project",
        back_populates="payments",
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, project_id={self.project_id}, amount={self.amount})>"
