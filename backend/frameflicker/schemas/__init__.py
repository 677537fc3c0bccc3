"""
Pydantic schemas for FrameFlicker Studios

Validation of API payloads and the record types returned by the
repositories.
"""

from frameflicker.schemas.common import MessageResponse
from frameflicker.schemas.client import ClientCreate, ClientRead, ClientUpdate
from frameflicker.schemas.package import PackageCreate, PackageRead, PackageUpdate
from frameflicker.schemas.project import (
    TERMINAL_STATUSES,
    ProjectCreate,
    ProjectRead,
    ProjectStatus,
    ProjectStatusUpdate,
    ProjectUpdate,
    RevisionResult,
)
from frameflicker.schemas.payment import (
    PaymentCreate,
    PaymentMethod,
    PaymentRead,
    ProjectPaymentSummary,
)
from frameflicker.schemas.team import TeamMemberCreate, TeamMemberRead
from frameflicker.schemas.dashboard import (
    DashboardRead,
    HealthRead,
    StatusCount,
    StoreSummary,
)

__all__ = [
    "MessageResponse",
    "ClientCreate",
    "ClientRead",
    "ClientUpdate",
    "PackageCreate",
    "PackageRead",
    "PackageUpdate",
    "TERMINAL_STATUSES",
    "ProjectCreate",
    "ProjectRead",
    "ProjectStatus",
    "ProjectStatusUpdate",
    "ProjectUpdate",
    "RevisionResult",
    "PaymentCreate",
    "PaymentMethod",
    "PaymentRead",
    "ProjectPaymentSummary",
    "TeamMemberCreate",
    "TeamMemberRead",
    "DashboardRead",
    "HealthRead",
    "StatusCount",
    "StoreSummary",
]
