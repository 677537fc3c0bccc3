"""
SQLAlchemy model for the TeamMember entity
Project: FrameFlicker Studios (Studio Manager)
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from frameflicker.models import Base
from frameflicker.models.mixins import UUIDMixin


class TeamMember(Base, UUIDMixin):
    """Crew roster entry. Not involved in the booking ledger."""

    __tablename__ = "team_members"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    role: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, doc="Photographer, videographer, editor..."
    )
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<TeamMember(id={self.id}, name='{self.name}', role='{self.role}')>"
