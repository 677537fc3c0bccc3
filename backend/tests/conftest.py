"""
Pytest configuration and fixtures.

Service and repository tests run against both adapters: the in-memory
store and SQLite (aiosqlite) in a temporary directory. API tests drive the
real application through FastAPI's TestClient.
"""

from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from frameflicker.core.config import Settings
from frameflicker.core.database import Database
from frameflicker.main import create_app
from frameflicker.repositories import InMemoryRepository, SQLAlchemyRepository
from frameflicker.schemas.client import ClientCreate
from frameflicker.schemas.package import PackageCreate
from frameflicker.schemas.project import ProjectCreate
from frameflicker.services.client_service import ClientService
from frameflicker.services.package_service import PackageService
from frameflicker.services.project_service import ProjectService


# ============================================================
# Settings
# ============================================================


@pytest.fixture
def test_settings():
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        app_env="testing",
        storage_backend="memory",
        log_level="DEBUG",
    )


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'studio.sqlite'}"


# ============================================================
# Repositories
# ============================================================


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repo(request, tmp_path):
    """Each test using this fixture runs once per adapter."""
    if request.param == "memory":
        yield InMemoryRepository()
        return

    database = Database(sqlite_url(tmp_path))
    await database.create_schema()
    sql = SQLAlchemyRepository(database, timeout=10)
    yield sql
    await sql.close()


# ============================================================
# Domain data
# ============================================================


@pytest.fixture
def project_service(test_settings):
    return ProjectService(test_settings)


@pytest_asyncio.fixture
async def make_booking(repo, project_service):
    """
    Factory creating a client, a package at the given price and a booking
    of that package.
    """

    async def _make(package_price=Decimal("20000"), **overrides):
        client = await ClientService().create(
            repo,
            ClientCreate(name="Nimal Perera", phone="077 123 4567", email="nimal.perera@gmail.com"),
        )
        package = await PackageService().create(
            repo,
            PackageCreate(name="Wedding Gold", category="Wedding", price=package_price, hours="8"),
        )
        return await project_service.create(
            repo,
            ProjectCreate(
                client_id=client.id,
                package_id=package.id,
                event_type="Wedding",
                event_date="2026-12-05",
                location="Galle Face Hotel",
                **overrides,
            ),
        )

    return _make


# ============================================================
# HTTP
# ============================================================


@pytest.fixture(params=["memory", "sql"])
def api(request, tmp_path, test_settings):
    """TestClient over a fully started application, once per backend."""
    if request.param == "memory":
        settings = test_settings
    else:
        settings = test_settings.model_copy(
            update={"storage_backend": "sql", "database_url": sqlite_url(tmp_path)}
        )

    with TestClient(create_app(settings)) as client:
        yield client
