"""
SQLAlchemy database models
Project: FrameFlicker Studios (Studio Manager)

Central import of every model, so Base.metadata is complete before
create_all() runs.

Models:
- Client: Studio customers
- Package: Priced service offerings
- Project: Bookings, carrying their own financial snapshot
- Payment: Ledger entries against a booking
- TeamMember: Crew roster
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for every SQLAlchemy model."""
    pass


from frameflicker.models.client import Client
from frameflicker.models.package import Package
from frameflicker.models.project import Project
from frameflicker.models.payment import Payment
from frameflicker.models.team_member import TeamMember

__all__ = [
    "Base",
    "Client",
    "Package",
    "Project",
    "Payment",
    "TeamMember",
]
