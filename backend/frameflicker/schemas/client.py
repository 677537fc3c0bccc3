"""
Pydantic schemas for the Client entity
Project: FrameFlicker Studios (Studio Manager)
"""

import datetime
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from frameflicker.schemas.common import blank_to_none, normalize_phone, reject_null


class ClientBase(BaseModel):
    """Fields shared by create and read schemas."""

    name: str = Field(..., min_length=1, max_length=150, description="Client full name")
    phone: Optional[str] = Field(None, max_length=50, description="Phone number")
    email: Optional[EmailStr] = Field(None, description="Email address")
    address: Optional[str] = Field(None, description="Postal address")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)

    @field_validator("email", "address", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    """Partial update: only the fields sent are changed."""

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        v = reject_null(v).strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)

    @field_validator("email", "address", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class ClientRead(BaseModel):
    """
    Client as returned by the repository and the API.

    No validators here: stored values are returned as they are.
    """

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime.datetime
