"""
Pydantic schemas for the Package entity
Project: FrameFlicker Studios (Studio Manager)
"""

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from frameflicker.core.config import get_settings
from frameflicker.core.ledger import DepositSplit, calculate_deposit
from frameflicker.schemas.common import blank_to_none, reject_null


class PackageBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=150, description="Package name")
    category: Optional[str] = Field(None, max_length=100, description="Category (Wedding, Event...)")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="List price")
    hours: Optional[str] = Field(None, max_length=50, description="Coverage hours")
    deliverables: Optional[str] = Field(None, description="Deliverables")
    description: Optional[str] = Field(None, description="Description")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("category", "hours", "deliverables", "description", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    """Partial update. Existing bookings keep their own price snapshot."""

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    category: Optional[str] = Field(None, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    hours: Optional[str] = Field(None, max_length=50)
    deliverables: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        v = reject_null(v).strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v

    @field_validator("price")
    @classmethod
    def price_not_null(cls, v: Optional[Decimal]) -> Decimal:
        return reject_null(v)

    @field_validator("category", "hours", "deliverables", "description", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class PackageRead(BaseModel):
    """
    Package as returned by the API.

    Carries a preview of the deposit a booking at list price would require.
    """

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    category: Optional[str] = None
    price: Decimal
    hours: Optional[str] = None
    deliverables: Optional[str] = None
    description: Optional[str] = None

    def _deposit_preview(self) -> DepositSplit:
        settings = get_settings()
        return calculate_deposit(
            self.price,
            threshold=settings.deposit_threshold,
            percent_low=settings.deposit_percent_low,
            percent_high=settings.deposit_percent_high,
        )

    @computed_field
    @property
    def deposit_percent(self) -> Decimal:
        return self._deposit_preview().percent

    @computed_field
    @property
    def deposit_amount(self) -> Decimal:
        return self._deposit_preview().deposit_amount

    @computed_field
    @property
    def balance_amount(self) -> Decimal:
        return self._deposit_preview().balance_amount
