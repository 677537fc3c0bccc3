"""
Main Entry Point - FastAPI Application
Project: FrameFlicker Studios (Studio Manager)

Configures the FastAPI application with middleware, routers and lifecycle.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from frameflicker.api.v1 import api_v1_router
from frameflicker.core.config import Settings, get_settings
from frameflicker.core.database import Database
from frameflicker.core.deps import get_repository
from frameflicker.core.exceptions import AppException, TransientStoreError
from frameflicker.repositories import InMemoryRepository, SQLAlchemyRepository, StudioRepository
from frameflicker.schemas.dashboard import HealthRead

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Repository factory
# ------------------------------------------------------------
async def build_repository(settings: Settings) -> StudioRepository:
    """
    Build the repository selected by STORAGE_BACKEND.

    - sql: SQLAlchemyRepository over DATABASE_URL (PostgreSQL or SQLite)
    - memory: InMemoryRepository, lost on restart
    """
    if settings.storage_backend == "memory":
        logger.warning("Using the in-memory store: data is lost on restart")
        return InMemoryRepository()

    database = Database.from_settings(settings)
    if settings.auto_create_schema:
        await database.create_schema()
    logger.info("Using the %s store", database.dialect)
    return SQLAlchemyRepository(database, timeout=settings.store_timeout_seconds)


# ------------------------------------------------------------
# Exception Handlers
# ------------------------------------------------------------
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handler for every AppException.

    The status code and error code come from the exception class.
    """
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.detail)
    content = {"detail": exc.detail, "error_code": exc.error_code}
    if exc.extra:
        content["extra"] = jsonable_encoder(exc.extra)
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handler for malformed payloads.

    Returned as 400 like every other validation failure.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request",
            "error_code": "REQUEST_VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic handler for every uncaught exception.

    Logs the traceback and returns a plain 500.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method, request.url.path, exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error_code": "INTERNAL_SERVER_ERROR"},
    )


# ------------------------------------------------------------
# Application factory
# ------------------------------------------------------------
def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[StudioRepository] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; defaults to get_settings()
        repository: Prebuilt repository; when omitted the lifespan builds
            one from settings and closes it on shutdown
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifecycle.

        - Startup: build the repository
        - Shutdown: release its connections
        """
        logger.info("Starting %s v%s (%s)", settings.app_name, settings.app_version, settings.app_env)
        app.state.repository = repository or await build_repository(settings)
        logger.info("Application started")

        yield

        logger.info("Shutting down...")
        await app.state.repository.close()
        logger.info("Application stopped")

    app = FastAPI(
        title=settings.app_name,
        description="Photo & video studio manager - Backend API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get(
        "/health",
        name="health_check",
        summary="Application health",
        tags=["System"],
        response_model=HealthRead,
    )
    async def health_check(request: Request, response: Response) -> HealthRead:
        """
        Liveness plus a store ping.

        Returns 503 when the store does not answer.
        """
        database = "connected"
        try:
            await get_repository(request).ping()
        except TransientStoreError as exc:
            logger.warning("Health check: store unreachable (%s)", exc.detail)
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            database = "unreachable"

        return HealthRead(
            status="healthy" if database == "connected" else "degraded",
            app=settings.app_name,
            version=settings.app_version,
            environment=settings.app_env,
            database=database,
        )

    app.include_router(api_v1_router)
    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn on BACKEND_PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.backend_port)


if __name__ == "__main__":
    run()
