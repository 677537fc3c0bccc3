"""
Service layer for the Project (booking) entity
Project: FrameFlicker Studios (Studio Manager)

Business logic for bookings:
- Creation: copy the package price (or take an override) and compute the
  deposit/balance split once
- Descriptive updates never touch the financial snapshot
- Status workflow: any known status may follow any other
- Revision counter: included revisions vs. billable extras
"""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from frameflicker.core.config import Settings, get_settings
from frameflicker.core.exceptions import ConflictError, NotFoundError, ValidationError
from frameflicker.core.ledger import calculate_deposit
from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.schemas.project import (
    TERMINAL_STATUSES,
    ProjectCreate,
    ProjectRead,
    ProjectStatus,
    ProjectUpdate,
    RevisionResult,
)

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Booking lifecycle.

    The deposit rule, the default revision allowance and terminal-status
    locking come from Settings; pass an explicit instance to override them.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    async def get_all(
        self,
        repo: StudioRepository,
        status: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
    ) -> list[ProjectRead]:
        """Bookings, newest first, optionally filtered by status or client."""
        filters = {}
        if status is not None:
            filters["status"] = self._parse_status(status).value
        if client_id is not None:
            filters["client_id"] = client_id

        projects = await repo.find(RecordKind.PROJECTS, filters)
        logger.info("Retrieved %s projects (filters: %s)", len(projects), filters or "none")
        return projects

    async def get_by_id(self, repo: StudioRepository, project_id: uuid.UUID) -> ProjectRead:
        """
        Retrieve a booking with its joined client and package fields.

        Raises:
            NotFoundError: If the booking does not exist
        """
        project = await repo.get(RecordKind.PROJECTS, project_id)
        if project is None:
            logger.warning("Project not found: %s", project_id)
            raise NotFoundError(f"Project with ID {project_id} not found")
        return project

    # ------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------

    async def create(self, repo: StudioRepository, project_data: ProjectCreate) -> ProjectRead:
        """
        Create a booking.

        The price is the package list price unless the payload overrides
        it. The deposit split is derived here and never recomputed.

        Raises:
            ValidationError: If client_id/package_id is missing or the price is negative
            NotFoundError: If the client or package does not exist
        """
        if project_data.client_id is None:
            raise ValidationError("client_id is required")
        if project_data.package_id is None:
            raise ValidationError("package_id is required")

        client = await repo.get(RecordKind.CLIENTS, project_data.client_id)
        if client is None:
            logger.warning("Booking for missing client: %s", project_data.client_id)
            raise NotFoundError(f"Client with ID {project_data.client_id} not found")

        package = await repo.get(RecordKind.PACKAGES, project_data.package_id)
        if package is None:
            logger.warning("Booking for missing package: %s", project_data.package_id)
            raise NotFoundError(f"Package with ID {project_data.package_id} not found")

        price = project_data.price if project_data.price is not None else package.price
        if price < 0:
            raise ValidationError(f"Price cannot be negative: {price}")

        split = calculate_deposit(
            price,
            threshold=self.settings.deposit_threshold,
            percent_low=self.settings.deposit_percent_low,
            percent_high=self.settings.deposit_percent_high,
        )

        values = project_data.model_dump(exclude={"price", "revision_limit"})
        values.update(
            status=ProjectStatus.NEW.value,
            price=price,
            deposit_percent=split.percent,
            deposit_amount=split.deposit_amount,
            balance_amount=split.balance_amount,
            amount_paid=Decimal("0"),
            revision_limit=(
                project_data.revision_limit
                if project_data.revision_limit is not None
                else self.settings.default_revision_limit
            ),
            revisions_used=0,
        )

        project = await repo.insert(RecordKind.PROJECTS, values)
        logger.info(
            "Created project: %s for client %s (package: %s, price: %s, deposit: %s @ %s)",
            project.id, client.name, package.name,
            project.price, project.deposit_amount, project.deposit_percent,
        )
        return project

    async def update(
        self,
        repo: StudioRepository,
        project_id: uuid.UUID,
        project_data: ProjectUpdate,
    ) -> ProjectRead:
        """
        Update descriptive fields.

        Raises:
            NotFoundError: If the booking does not exist
        """
        update_data = project_data.model_dump(exclude_unset=True)

        project = await repo.update(RecordKind.PROJECTS, project_id, update_data)
        if project is None:
            logger.warning("Update on missing project: %s", project_id)
            raise NotFoundError(f"Project with ID {project_id} not found")

        logger.info("Updated project: %s (%s)", project.id, ", ".join(update_data) or "no changes")
        return project

    async def change_status(
        self, repo: StudioRepository, project_id: uuid.UUID, new_status: str
    ) -> ProjectRead:
        """
        Move a booking to another status.

        Raises:
            ValidationError: If new_status is not a known status
            NotFoundError: If the booking does not exist
            ConflictError: If terminal statuses are locked and the booking
                is Completed or Cancelled
        """
        target = self._parse_status(new_status)
        project = await self.get_by_id(repo, project_id)

        if (
            self.settings.lock_terminal_statuses
            and project.status in {s.value for s in TERMINAL_STATUSES}
            and project.status != target.value
        ):
            logger.warning(
                "Rejected status change %s -> %s on project %s",
                project.status, target.value, project_id,
            )
            raise ConflictError(
                f"Project {project_id} is {project.status} and cannot change status"
            )

        updated = await repo.update(RecordKind.PROJECTS, project_id, {"status": target.value})
        if updated is None:
            raise NotFoundError(f"Project with ID {project_id} not found")

        logger.info("Project %s status: %s -> %s", project_id, project.status, updated.status)
        return updated

    async def record_revision(
        self, repo: StudioRepository, project_id: uuid.UUID
    ) -> RevisionResult:
        """
        Count one more revision round.

        Raises:
            NotFoundError: If the booking does not exist
        """
        project = await repo.increment(RecordKind.PROJECTS, project_id, {"revisions_used": 1})
        if project is None:
            logger.warning("Revision on missing project: %s", project_id)
            raise NotFoundError(f"Project with ID {project_id} not found")

        extra = project.revisions_used > project.revision_limit
        if extra:
            logger.info(
                "Project %s exceeded its revisions (%s/%s)",
                project_id, project.revisions_used, project.revision_limit,
            )
            message = "Extra revision! Consider charging extra."
        else:
            message = "Revision recorded."

        return RevisionResult(
            project_id=project.id,
            revisions_used=project.revisions_used,
            revision_limit=project.revision_limit,
            extra_revision=extra,
            message=message,
        )

    async def reset_revisions(self, repo: StudioRepository, project_id: uuid.UUID) -> ProjectRead:
        project = await repo.update(RecordKind.PROJECTS, project_id, {"revisions_used": 0})
        if project is None:
            logger.warning("Revision reset on missing project: %s", project_id)
            raise NotFoundError(f"Project with ID {project_id} not found")
        logger.info("Project %s revisions reset", project_id)
        return project

    async def delete(self, repo: StudioRepository, project_id: uuid.UUID) -> None:
        """
        Delete a booking together with its payments.

        Raises:
            NotFoundError: If the booking does not exist
        """
        if not await repo.delete(RecordKind.PROJECTS, project_id):
            logger.warning("Delete on missing project: %s", project_id)
            raise NotFoundError(f"Project with ID {project_id} not found")
        logger.info("Deleted project: %s", project_id)

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @staticmethod
    def _parse_status(value: str) -> ProjectStatus:
        try:
            return ProjectStatus(value)
        except ValueError:
            allowed = ", ".join(s.value for s in ProjectStatus)
            logger.warning("Invalid status requested: %r", value)
            raise ValidationError(f"Invalid status '{value}'. Allowed: {allowed}")
