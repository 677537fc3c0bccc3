"""
FastAPI router for the Project (booking) entity
Project: FrameFlicker Studios (Studio Manager)

API endpoints for bookings: CRUD, status workflow and revision counter.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from frameflicker.core.deps import AppSettings, Repository
from frameflicker.schemas.project import (
    ProjectCreate,
    ProjectRead,
    ProjectStatusUpdate,
    ProjectUpdate,
    RevisionResult,
)
from frameflicker.services.project_service import ProjectService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
)


# -------------------------------------------------------------------
# Dependency Injection
# -------------------------------------------------------------------

def get_project_service(settings: AppSettings) -> ProjectService:
    """
    Dependency returning a ProjectService bound to the application settings.

    The deposit rule and revision allowance come from those settings.
    """
    return ProjectService(settings)


# -------------------------------------------------------------------
# CRUD
# -------------------------------------------------------------------

@router.get(
    "/",
    name="projects_list",
    summary="List projects",
    description="Bookings newest first, with client and package details.",
    response_model=list[ProjectRead],
)
async def get_projects(
    repo: Repository,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    client_id: Optional[uuid.UUID] = Query(None, description="Filter by client"),
    service: ProjectService = Depends(get_project_service),
) -> list[ProjectRead]:
    return await service.get_all(repo, status=status_filter, client_id=client_id)


@router.get(
    "/{project_id}",
    name="project_detail",
    summary="Project detail",
    response_model=ProjectRead,
)
async def get_project(
    project_id: uuid.UUID,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await service.get_by_id(repo, project_id)


@router.post(
    "/",
    name="project_create",
    summary="Create project",
    description=(
        "Book a package for a client. The deposit (50% up to 15000, 25% above) "
        "and balance are computed from the price at creation."
    ),
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    project_data: ProjectCreate,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    """
    Create a booking.

    Raises:
        ValidationError: If client_id or package_id is missing, or price is negative
        NotFoundError: If the client or package does not exist
    """
    return await service.create(repo, project_data)


@router.put(
    "/{project_id}",
    name="project_update",
    summary="Update project",
    description="Update descriptive fields. Financial fields and status are rejected.",
    response_model=ProjectRead,
)
async def update_project(
    project_id: uuid.UUID,
    project_data: ProjectUpdate,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await service.update(repo, project_id, project_data)


@router.delete(
    "/{project_id}",
    name="project_delete",
    summary="Delete project",
    description="Delete a booking and its payments.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_project(
    project_id: uuid.UUID,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> Response:
    await service.delete(repo, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -------------------------------------------------------------------
# Workflow
# -------------------------------------------------------------------

@router.patch(
    "/{project_id}/status",
    name="project_status",
    summary="Change status",
    response_model=ProjectRead,
)
async def change_project_status(
    project_id: uuid.UUID,
    status_data: ProjectStatusUpdate,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    """
    Move a booking to another status.

    Raises:
        ValidationError: If the status is unknown
        NotFoundError: If the booking does not exist
        ConflictError: If the booking is locked in a terminal status
    """
    return await service.change_status(repo, project_id, status_data.status)


@router.post(
    "/{project_id}/revision",
    name="project_revision",
    summary="Record revision",
    description="Count one revision round; flags rounds beyond the included limit.",
    response_model=RevisionResult,
)
async def record_revision(
    project_id: uuid.UUID,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> RevisionResult:
    return await service.record_revision(repo, project_id)


@router.post(
    "/{project_id}/reset-revisions",
    name="project_reset_revisions",
    summary="Reset revisions",
    response_model=ProjectRead,
)
async def reset_revisions(
    project_id: uuid.UUID,
    repo: Repository,
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await service.reset_revisions(repo, project_id)
