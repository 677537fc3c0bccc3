"""
Pydantic schemas for the Project (booking) entity
Project: FrameFlicker Studios (Studio Manager)
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from frameflicker.schemas.common import blank_to_none, reject_null


# -------------------------------------------------------------------
# Booking status
# -------------------------------------------------------------------

class ProjectStatus(str, Enum):
    """Booking workflow statuses, in their usual order."""
    NEW = "New"
    CONFIRMED = "Confirmed"
    DEPOSIT_PAID = "Deposit Paid"
    SCHEDULED = "Scheduled"
    SHOOTING = "Shooting"
    EDITING = "Editing"
    REVIEW = "Review"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# No further work (or money) is expected on these
TERMINAL_STATUSES: frozenset[ProjectStatus] = frozenset(
    {ProjectStatus.COMPLETED, ProjectStatus.CANCELLED}
)


_TEXT_FIELDS = (
    "event_type", "event_date", "event_time", "location",
    "drive_link", "internal_path", "crew_assigned", "notes",
)


# -------------------------------------------------------------------
# Input schemas
# -------------------------------------------------------------------

class ProjectCreate(BaseModel):
    """
    Booking creation.

    client_id and package_id are checked by the service so that a missing
    reference surfaces as a business validation error. price overrides the
    package list price when given; the deposit split is always derived.
    """

    client_id: Optional[uuid.UUID] = Field(None, description="Client UUID")
    package_id: Optional[uuid.UUID] = Field(None, description="Package UUID")
    event_type: Optional[str] = Field(None, max_length=100)
    event_date: Optional[str] = Field(None, max_length=20, description="Event date")
    event_time: Optional[str] = Field(None, max_length=20, description="Event time")
    location: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(
        None, max_digits=10, decimal_places=2, description="Price override"
    )
    revision_limit: Optional[int] = Field(None, ge=0, description="Included revisions")
    drive_link: Optional[str] = None
    internal_path: Optional[str] = None
    crew_assigned: Optional[str] = None
    notes: Optional[str] = None

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class ProjectUpdate(BaseModel):
    """
    Descriptive fields only.

    Financial fields and status have their own operations; sending them
    here is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    event_type: Optional[str] = Field(None, max_length=100)
    event_date: Optional[str] = Field(None, max_length=20)
    event_time: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=255)
    revision_limit: Optional[int] = Field(None, ge=0)
    drive_link: Optional[str] = None
    internal_path: Optional[str] = None
    crew_assigned: Optional[str] = None
    notes: Optional[str] = None

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)

    @field_validator("revision_limit")
    @classmethod
    def revision_limit_not_null(cls, v: Optional[int]) -> int:
        return reject_null(v)


class ProjectStatusUpdate(BaseModel):
    """
    Status change request.

    A plain string: membership in ProjectStatus is checked by the service.
    """
    status: str = Field(..., description="Target status")


# -------------------------------------------------------------------
# Output schemas
# -------------------------------------------------------------------

class ProjectRead(BaseModel):
    """Booking with its financial snapshot and joined display fields."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    client_id: Optional[uuid.UUID] = None
    package_id: Optional[uuid.UUID] = None
    event_type: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    status: str = ProjectStatus.NEW.value
    price: Decimal
    deposit_percent: Decimal
    deposit_amount: Decimal
    balance_amount: Decimal
    amount_paid: Decimal = Decimal("0")
    revision_limit: int = 2
    revisions_used: int = 0
    drive_link: Optional[str] = None
    internal_path: Optional[str] = None
    crew_assigned: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime.datetime

    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    client_email: Optional[str] = None
    package_name: Optional[str] = None
    package_category: Optional[str] = None


class RevisionResult(BaseModel):
    """Outcome of recording a revision."""
    project_id: uuid.UUID
    revisions_used: int
    revision_limit: int
    extra_revision: bool = Field(..., description="True once revisions_used exceeds the limit")
    message: str
