"""
Dependency Injection
Project: FrameFlicker Studios (Studio Manager)

FastAPI dependencies shared by the routers.
"""

from typing import Annotated

from fastapi import Depends, Request

from frameflicker.core.config import Settings
from frameflicker.repositories.base import StudioRepository


def get_repository(request: Request) -> StudioRepository:
    """
    Return the repository built by the application lifespan.

    The repository lives on app.state, so tests can swap it by creating
    the app with their own settings.
    """
    return request.app.state.repository


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


# Type aliases for common use
Repository = Annotated[StudioRepository, Depends(get_repository)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


__all__ = [
    "get_repository",
    "get_app_settings",
    "Repository",
    "AppSettings",
]
