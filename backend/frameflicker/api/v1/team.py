"""
FastAPI router for the team roster
Project: FrameFlicker Studios (Studio Manager)
"""

import uuid

from fastapi import APIRouter, Depends, Response, status

from frameflicker.core.deps import Repository
from frameflicker.schemas.team import TeamMemberCreate, TeamMemberRead
from frameflicker.services.team_service import TeamService

router = APIRouter(
    prefix="/team",
    tags=["Team"],
)


def get_team_service() -> TeamService:
    return TeamService()


@router.get("/", name="team_list", summary="List team members", response_model=list[TeamMemberRead])
async def get_team(
    repo: Repository,
    service: TeamService = Depends(get_team_service),
) -> list[TeamMemberRead]:
    return await service.get_all(repo)


@router.get("/{member_id}", name="team_detail", summary="Team member detail", response_model=TeamMemberRead)
async def get_team_member(
    member_id: uuid.UUID,
    repo: Repository,
    service: TeamService = Depends(get_team_service),
) -> TeamMemberRead:
    return await service.get_by_id(repo, member_id)


@router.post(
    "/",
    name="team_create",
    summary="Add team member",
    response_model=TeamMemberRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_team_member(
    member_data: TeamMemberCreate,
    repo: Repository,
    service: TeamService = Depends(get_team_service),
) -> TeamMemberRead:
    return await service.create(repo, member_data)


@router.delete(
    "/{member_id}",
    name="team_delete",
    summary="Remove team member",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_team_member(
    member_id: uuid.UUID,
    repo: Repository,
    service: TeamService = Depends(get_team_service),
) -> Response:
    await service.delete(repo, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
