"""
Database configuration - SQLAlchemy 2.0 Async
Project: FrameFlicker Studios (Studio Manager)

Owns the async engine and session factory for the SQL repository.
A Database is built explicitly in the application lifespan and disposed
on shutdown; nothing here is created at import time.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from frameflicker.core.config import Settings

logger = logging.getLogger(__name__)

# Seconds a SQLite connection waits for another writer before failing
SQLITE_BUSY_TIMEOUT = 30


class Database:
    """
    Async engine + session factory with an explicit lifetime.

    Usage:
        database = Database.from_settings(settings)
        await database.create_schema()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
    ) -> None:
        engine_kwargs = {
            "echo": echo,
            "pool_pre_ping": True,
        }
        # SQLite has no server-side pool to size; concurrent writers wait on the file lock
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"timeout": SQLITE_BUSY_TIMEOUT}
        else:
            if pool_size is not None:
                engine_kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                engine_kwargs["max_overflow"] = max_overflow

        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Create any missing tables."""
        from frameflicker.models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", self.dialect)

    async def drop_schema(self) -> None:
        """Drop every table. Used by reset_db.py and tests."""
        from frameflicker.models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database schema dropped (%s)", self.dialect)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("Database connections closed")
