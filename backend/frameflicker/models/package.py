"""
SQLAlchemy model for the Package entity
Project: FrameFlicker Studios (Studio Manager)

Priced service offerings (wedding coverage, event video, ...).
Editing a package never touches the price stored on existing bookings.
"""


from __future__ import annotations
from decimal import Decimal
from typing import Optional, TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frameflicker.models import Base
from frameflicker.models.mixins import UUIDMixin

if TYPE_CHECKING:
    from frameflicker.models.project import Project


class Package(Base, UUIDMixin):
    """
    Priced service offering.

    Attributes:
        id: UUID primary key
        name: Package name (required)
        category: Free-text category (Wedding, Event, ...)
        price: List price, non-negative
        hours: Coverage hours, free text
        deliverables: What the client receives
        description: Marketing description
    """

    __tablename__ = "packages"

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_packages_price_non_negative"),
    )

    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        doc="Package name",
    )

    category: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        doc="Package category",
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        doc="List price",
    )

    hours: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        doc="Coverage hours",
    )

    deliverables: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Deliverables",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Description",
    )

    projects: Mapped[List["Project"]] = relationship(
        "Project",
        back_populates="package",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, name='{self.name}', price={self.price})>"
