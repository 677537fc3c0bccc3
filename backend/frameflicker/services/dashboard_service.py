"""
Service layer for the dashboard
Project: FrameFlicker Studios (Studio Manager)
"""

import logging
from typing import Optional

from frameflicker.core.config import Settings, get_settings
from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.schemas.dashboard import DashboardRead
from frameflicker.schemas.project import TERMINAL_STATUSES

logger = logging.getLogger(__name__)

RECENT_PROJECTS = 5


class DashboardService:
    """Studio-wide figures for the home screen."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    async def get_summary(self, repo: StudioRepository) -> DashboardRead:
        """
        Totals, open balances and the most recent bookings.

        pending_payments sums (balance_amount - amount_paid) over bookings
        that are neither Completed nor Cancelled.
        """
        summary = await repo.summarize(s.value for s in TERMINAL_STATUSES)
        recent = await repo.find(RecordKind.PROJECTS, limit=RECENT_PROJECTS)

        logger.debug(
            "Dashboard: %s clients, %s projects, revenue %s",
            summary.total_clients, summary.total_projects, summary.total_revenue,
        )
        return DashboardRead(
            **summary.model_dump(),
            currency=self.settings.currency,
            recent_projects=recent,
        )
