"""
FastAPI router for the Package entity
Project: FrameFlicker Studios (Studio Manager)

API endpoints for the studio price list.
"""

import uuid

from fastapi import APIRouter, Depends, Response, status

from frameflicker.core.deps import Repository
from frameflicker.schemas.package import PackageCreate, PackageRead, PackageUpdate
from frameflicker.services.package_service import PackageService

router = APIRouter(
    prefix="/packages",
    tags=["Packages"],
)


def get_package_service() -> PackageService:
    """Dependency returning a PackageService instance."""
    return PackageService()


@router.get(
    "/",
    name="packages_list",
    summary="List packages",
    description="Every package, cheapest first, with its deposit preview.",
    response_model=list[PackageRead],
)
async def get_packages(
    repo: Repository,
    service: PackageService = Depends(get_package_service),
) -> list[PackageRead]:
    return await service.get_all(repo)


@router.get(
    "/{package_id}",
    name="package_detail",
    summary="Package detail",
    response_model=PackageRead,
)
async def get_package(
    package_id: uuid.UUID,
    repo: Repository,
    service: PackageService = Depends(get_package_service),
) -> PackageRead:
    return await service.get_by_id(repo, package_id)


@router.post(
    "/",
    name="package_create",
    summary="Create package",
    response_model=PackageRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_package(
    package_data: PackageCreate,
    repo: Repository,
    service: PackageService = Depends(get_package_service),
) -> PackageRead:
    return await service.create(repo, package_data)


@router.put(
    "/{package_id}",
    name="package_update",
    summary="Update package",
    description="Update a package. Existing bookings keep their own price.",
    response_model=PackageRead,
)
async def update_package(
    package_id: uuid.UUID,
    package_data: PackageUpdate,
    repo: Repository,
    service: PackageService = Depends(get_package_service),
) -> PackageRead:
    return await service.update(repo, package_id, package_data)


@router.delete(
    "/{package_id}",
    name="package_delete",
    summary="Delete package",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_package(
    package_id: uuid.UUID,
    repo: Repository,
    service: PackageService = Depends(get_package_service),
) -> Response:
    await service.delete(repo, package_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
