"""
Application configuration - Settings
Project: FrameFlicker Studios (Studio Manager)

Defines the application settings loaded from environment variables.
"""


from __future__ import annotations
from functools import lru_cache
from typing import Literal
from decimal import Decimal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration.

    Loads settings from environment variables (or a local .env file).
    Defaults are suitable for local development on the embedded SQLite store.

    To get the shared instance:
    - In FastAPI: use `Depends(get_settings)`
    - Elsewhere: call `get_settings()` directly
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------
    storage_backend: Literal["sql", "memory"] = Field(
        default="sql",
        description="Repository adapter: 'sql' (PostgreSQL/SQLite) or 'memory'",
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./frameflicker.sqlite",
        description="Async SQLAlchemy URL (postgresql+asyncpg://... or sqlite+aiosqlite:///...)",
    )

    db_pool_size: int = Field(
        default=5,
        description="Permanent connections kept in the pool",
    )

    db_max_overflow: int = Field(
        default=10,
        description="Temporary connections allowed beyond pool_size",
    )

    store_timeout_seconds: float | None = Field(
        default=10.0,
        description="Upper bound for a single repository call; None disables it",
    )

    auto_create_schema: bool = Field(
        default=True,
        description="Create missing tables at startup",
    )

    # ------------------------------------------------------------
    # Application
    # ------------------------------------------------------------
    app_name: str = Field(
        default="FrameFlicker Studios API",
        description="Application name",
    )

    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )

    app_env: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Runtime environment (development | production | testing)",
    )

    debug: bool = Field(
        default=False,
        description="Debug mode",
    )

    backend_port: int = Field(
        default=5000,
        description="Backend port",
    )

    # ------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins",
    )

    # ------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # ------------------------------------------------------------
    # Studio rules
    # ------------------------------------------------------------
    currency: str = Field(
        default="LKR",
        description="Display currency for all amounts",
    )

    deposit_threshold: Decimal = Field(
        default=Decimal("15000"),
        description="Highest price (inclusive) that still requires the larger deposit",
    )

    deposit_percent_low: Decimal = Field(
        default=Decimal("0.5"),
        decimal_places=4,
        description="Deposit share for prices up to the threshold",
    )

    deposit_percent_high: Decimal = Field(
        default=Decimal("0.25"),
        decimal_places=4,
        description="Deposit share for prices above the threshold",
    )

    default_revision_limit: int = Field(
        default=2,
        ge=0,
        description="Revisions included with a new booking",
    )

    lock_terminal_statuses: bool = Field(
        default=False,
        description="Reject status changes out of Completed/Cancelled",
    )

    @property
    def is_production(self) -> bool:
        """True when running in production."""
        return self.app_env == "production"

    @property
    def is_sqlite(self) -> bool:
        """True when the SQL backend points at an embedded SQLite file."""
        return self.database_url.startswith("sqlite")

    # ------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------

    @field_validator(
        "deposit_threshold", "deposit_percent_low", "deposit_percent_high", mode="before"
    )
    @classmethod
    def convert_decimal_from_string(cls, v) -> Decimal:
        """Accept comma decimal separators in env values."""
        if v is None:
            return v
        if isinstance(v, str):
            v = v.replace(",", ".")
        return Decimal(str(v))

    @field_validator("deposit_percent_low", "deposit_percent_high")
    @classmethod
    def validate_percent(cls, v: Decimal) -> Decimal:
        if v < 0 or v > 1:
            raise ValueError("Deposit percentages must be between 0 and 1")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Reject development-only settings in production."""
        if self.app_env != "production":
            return self

        errors = []

        if self.debug:
            errors.append("- debug: must be False in production")

        if self.storage_backend == "memory":
            errors.append("- storage_backend: 'memory' loses data on restart")

        for origin in self.cors_origins:
            if "localhost" in origin or "127.0.0.1" in origin:
                errors.append(
                    f"- cors_origins: origin '{origin}' is not allowed in production"
                )

        if errors:
            error_msg = "Invalid production configuration:\n" + "\n".join(errors)
            raise ValueError(error_msg)

        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Return the cached settings instance.

    In tests, call get_settings.cache_clear() to reload from the environment.
    """
    return Settings()


settings = get_settings()
