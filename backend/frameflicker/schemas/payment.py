"""
Pydantic schemas for the Payment entity
Project: FrameFlicker Studios (Studio Manager)
"""

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from frameflicker.schemas.common import blank_to_none


class PaymentMethod(str, Enum):
    """Accepted payment methods."""
    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    CARD = "Card"
    OTHER = "Other"


class PaymentCreate(BaseModel):
    """
    Payment posting.

    amount and method are kept loose here; the ledger service rejects
    non-positive amounts and unknown methods with a business error.
    """

    project_id: uuid.UUID = Field(..., description="Booking UUID")
    amount: Decimal = Field(..., max_digits=10, decimal_places=2, description="Amount received")
    method: str = Field(..., description="Cash, Bank Transfer, Card or Other")
    reference: Optional[str] = Field(None, max_length=255, description="Bank reference / receipt")
    note: Optional[str] = Field(None, description="Note")

    @field_validator("reference", "note", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    amount: Decimal
    method: str
    reference: Optional[str] = None
    note: Optional[str] = None
    created_at: datetime.datetime

    client_name: Optional[str] = None
    event_type: Optional[str] = None


class ProjectPaymentSummary(BaseModel):
    """Payments of one booking with their total."""
    project_id: uuid.UUID
    payments: list[PaymentRead] = Field(default_factory=list)
    total_paid: Decimal = Decimal("0")
