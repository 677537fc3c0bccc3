"""
FastAPI router for the dashboard
Project: FrameFlicker Studios (Studio Manager)
"""

from fastapi import APIRouter, Depends

from frameflicker.core.deps import AppSettings, Repository
from frameflicker.schemas.dashboard import DashboardRead
from frameflicker.services.dashboard_service import DashboardService

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


def get_dashboard_service(settings: AppSettings) -> DashboardService:
    return DashboardService(settings)


@router.get(
    "",
    name="dashboard",
    summary="Dashboard",
    description="Client and booking counts, revenue, pending balances and recent bookings.",
    response_model=DashboardRead,
)
async def get_dashboard(
    repo: Repository,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardRead:
    return await service.get_summary(repo)
