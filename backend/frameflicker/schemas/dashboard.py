"""
Pydantic schemas for the dashboard
Project: FrameFlicker Studios (Studio Manager)
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from frameflicker.schemas.project import ProjectRead


class StatusCount(BaseModel):
    status: str
    count: int


class StoreSummary(BaseModel):
    """Aggregate figures computed by the repository."""
    total_clients: int = 0
    total_projects: int = 0
    total_revenue: Decimal = Decimal("0")
    pending_payments: Decimal = Decimal("0")
    projects_by_status: list[StatusCount] = Field(default_factory=list)


class DashboardRead(StoreSummary):
    """
    Dashboard payload.

    total_revenue: sum of every payment
    pending_payments: sum of (balance_amount - amount_paid) over open bookings
    """
    currency: str = Field(..., description="Display currency")
    recent_projects: list[ProjectRead] = Field(default_factory=list)


class HealthRead(BaseModel):
    status: str
    app: str
    version: str
    environment: str
    database: str
