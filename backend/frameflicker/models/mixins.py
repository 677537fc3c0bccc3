"""
SQLAlchemy model mixins
Project: FrameFlicker Studios (Studio Manager)

Reusable columns shared by the models.
"""

import datetime
import uuid

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class TimestampMixin:
    """
    Adds created_at, set once on insert and never updated.

    Usage:
        class MyModel(Base, TimestampMixin):
            __tablename__ = "my_table"
            ...
    """

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        doc="Record creation timestamp",
    )


class UUIDMixin:
    """
    Adds a UUID primary key generated on insert.

    Usage:
        class MyModel(Base, UUIDMixin):
            __tablename__ = "my_table"
            ...
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="UUID primary key",
    )
