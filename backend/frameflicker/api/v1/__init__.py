"""
API v1 Routes
Project: FrameFlicker Studios (Studio Manager)

Version 1 of the API.
"""

from fastapi import APIRouter

from frameflicker.api.v1 import clients, dashboard, packages, payments, projects, team

# Aggregated router for v1
api_v1_router = APIRouter(prefix="/api/v1")

api_v1_router.include_router(clients.router)
api_v1_router.include_router(packages.router)
api_v1_router.include_router(projects.router)
api_v1_router.include_router(payments.router)
api_v1_router.include_router(team.router)
api_v1_router.include_router(dashboard.router)

__all__ = ["api_v1_router"]
