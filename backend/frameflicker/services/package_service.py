"""
Service layer for the Package entity
Project: FrameFlicker Studios (Studio Manager)

Packages are price-list templates. A booking copies the package price at
creation time, so editing or deleting a package never touches existing
bookings.
"""

import logging
import uuid

from frameflicker.core.exceptions import NotFoundError
from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.schemas.package import PackageCreate, PackageRead, PackageUpdate

logger = logging.getLogger(__name__)


class PackageService:
    """CRUD operations on packages."""

    async def get_all(self, repo: StudioRepository) -> list[PackageRead]:
        """Every package, cheapest first."""
        packages = await repo.find(RecordKind.PACKAGES)
        logger.info("Retrieved %s packages", len(packages))
        return packages

    async def get_by_id(self, repo: StudioRepository, package_id: uuid.UUID) -> PackageRead:
        """
        Retrieve a package by ID.

        Raises:
            NotFoundError: If the package does not exist
        """
        package = await repo.get(RecordKind.PACKAGES, package_id)
        if package is None:
            logger.warning("Package not found: %s", package_id)
            raise NotFoundError(f"Package with ID {package_id} not found")
        return package

    async def create(self, repo: StudioRepository, package_data: PackageCreate) -> PackageRead:
        package = await repo.insert(RecordKind.PACKAGES, package_data.model_dump())
        logger.info(
            "Created package: %s - %s (price: %s)", package.id, package.name, package.price
        )
        return package

    async def update(
        self,
        repo: StudioRepository,
        package_id: uuid.UUID,
        package_data: PackageUpdate,
    ) -> PackageRead:
        """
        Update the fields sent in the payload.

        A new price applies to future bookings only.

        Raises:
            NotFoundError: If the package does not exist
        """
        update_data = package_data.model_dump(exclude_unset=True)

        package = await repo.update(RecordKind.PACKAGES, package_id, update_data)
        if package is None:
            logger.warning("Update on missing package: %s", package_id)
            raise NotFoundError(f"Package with ID {package_id} not found")

        if "price" in update_data:
            logger.info("Package %s repriced to %s", package.id, package.price)
        logger.info("Updated package: %s - %s", package.id, package.name)
        return package

    async def delete(self, repo: StudioRepository, package_id: uuid.UUID) -> None:
        """
        Delete a package. Bookings keep their price with package_id cleared.

        Raises:
            NotFoundError: If the package does not exist
        """
        if not await repo.delete(RecordKind.PACKAGES, package_id):
            logger.warning("Delete on missing package: %s", package_id)
            raise NotFoundError(f"Package with ID {package_id} not found")
        logger.info("Deleted package: %s", package_id)
