import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from frameflicker.schemas.common import blank_to_none, normalize_phone


class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150, description="Full name")
    role: Optional[str] = Field(None, max_length=100, description="Photographer, editor...")
    phone: Optional[str] = Field(None, max_length=50, description="Phone")
    email: Optional[EmailStr] = Field(None, description="Email")

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

    @field_validator("role", "email", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class TeamMemberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
