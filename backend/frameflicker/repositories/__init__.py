"""
Repositories
Project: FrameFlicker Studios (Studio Manager)

Storage adapters behind a single StudioRepository interface.
"""

from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.repositories.memory_repository import InMemoryRepository
from frameflicker.repositories.sql_repository import SQLAlchemyRepository

__all__ = [
    "RecordKind",
    "StudioRepository",
    "InMemoryRepository",
    "SQLAlchemyRepository",
]
