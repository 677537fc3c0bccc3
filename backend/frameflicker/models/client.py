"""
SQLAlchemy model for the Client entity
Project: FrameFlicker Studios (Studio Manager)

Studio customers. A client can have several bookings.
"""


from __future__ import annotations
from typing import Optional, TYPE_CHECKING, List

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frameflicker.models import Base
from frameflicker.models.mixins import TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from frameflicker.models.project import Project


class Client(Base, UUIDMixin, TimestampMixin):
    """
    Studio customer.

    Attributes:
        id: UUID primary key
        name: Full name (required)
        phone: Phone number
        email: Email address
        address: Postal address
        created_at: Creation timestamp, immutable

    Relationships:
        projects: Bookings referencing this client
    """

    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        doc="Client full name",
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        doc="Phone number",
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Email address",
    )

    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Postal address",
    )

    projects: Mapped[List["Project"]] = relationship(
        "Project",
        back_populates="client",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"
