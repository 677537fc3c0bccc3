"""
Tests for Settings parsing and production guards.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from frameflicker.core.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.deposit_threshold == Decimal("15000")
        assert settings.deposit_percent_low == Decimal("0.5")
        assert settings.deposit_percent_high == Decimal("0.25")
        assert settings.default_revision_limit == 2
        assert settings.lock_terminal_statuses is False
        assert settings.is_sqlite

    def test_comma_decimal_separator(self):
        settings = Settings(_env_file=None, deposit_threshold="15000,50", deposit_percent_high="0,3")

        assert settings.deposit_threshold == Decimal("15000.50")
        assert settings.deposit_percent_high == Decimal("0.3")

    def test_percent_out_of_range(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, deposit_percent_low="1.5")

    def test_percent_precision_limited(self):
        assert Settings(_env_file=None, deposit_percent_low="0.125").deposit_percent_low == Decimal("0.125")

        with pytest.raises(ValidationError):
            Settings(_env_file=None, deposit_percent_high="0.12345")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "memory")
        monkeypatch.setenv("LOCK_TERMINAL_STATUSES", "true")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "memory"
        assert settings.lock_terminal_statuses is True


class TestProductionGuards:

    def test_debug_rejected(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                app_env="production",
                debug=True,
                cors_origins=["https://studio.frameflicker.lk"],
            )

    def test_memory_store_rejected(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                app_env="production",
                storage_backend="memory",
                cors_origins=["https://studio.frameflicker.lk"],
            )

    def test_localhost_cors_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, app_env="production")

    def test_valid_production(self):
        settings = Settings(
            _env_file=None,
            app_env="production",
            database_url="postgresql+asyncpg://studio:secret@db/frameflicker",
            cors_origins=["https://studio.frameflicker.lk"],
        )

        assert settings.is_production
        assert not settings.is_sqlite
