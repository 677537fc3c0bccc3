"""
Service layer for the studio team roster
Project: FrameFlicker Studios (Studio Manager)
"""

import logging
import uuid

from frameflicker.core.exceptions import NotFoundError
from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.schemas.team import TeamMemberCreate, TeamMemberRead

logger = logging.getLogger(__name__)


class TeamService:
    """Roster of photographers, videographers and editors."""

    async def get_all(self, repo: StudioRepository) -> list[TeamMemberRead]:
        return await repo.find(RecordKind.TEAM)

    async def get_by_id(self, repo: StudioRepository, member_id: uuid.UUID) -> TeamMemberRead:
        member = await repo.get(RecordKind.TEAM, member_id)
        if member is None:
            logger.warning("Team member not found: %s", member_id)
            raise NotFoundError(f"Team member with ID {member_id} not found")
        return member

    async def create(
        self, repo: StudioRepository, member_data: TeamMemberCreate
    ) -> TeamMemberRead:
        member = await repo.insert(RecordKind.TEAM, member_data.model_dump())
        logger.info("Added team member: %s - %s (%s)", member.id, member.name, member.role or "N/A")
        return member

    async def delete(self, repo: StudioRepository, member_id: uuid.UUID) -> None:
        if not await repo.delete(RecordKind.TEAM, member_id):
            logger.warning("Delete on missing team member: %s", member_id)
            raise NotFoundError(f"Team member with ID {member_id} not found")
        logger.info("Removed team member: %s", member_id)
