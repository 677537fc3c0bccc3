"""
Shared schema helpers
Project: FrameFlicker Studios (Studio Manager)
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, Field


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """
    Normalize optional text: strip it, and turn "" into None.

    The dashboard posts empty strings for untouched form fields.
    """
    if value is None:
        return None
    value = value.strip()
    return value or None


def reject_null(value: Any) -> Any:
    """
    Reject an explicit null on a partial update.

    Omitting a field leaves it unchanged; sending null for a required
    column is an error.
    """
    if value is None:
        raise ValueError("Field cannot be null")
    return value


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number.

    Drops spaces, dashes and brackets; accepts an optional leading +.

    Raises:
        ValueError: If anything other than digits remains
    """
    phone = blank_to_none(phone)
    if phone is None:
        return None

    normalized = re.sub(r"[\s\-()]", "", phone)
    if not re.match(r"^\+?\d+$", normalized):
        raise ValueError("Invalid phone number")

    return normalized


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str = Field(..., description="Outcome message")
