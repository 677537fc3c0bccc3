"""
Repository interface
Project: FrameFlicker Studios (Studio Manager)

Every storage adapter implements StudioRepository. Services only talk to
this interface, so the booking ledger is written once and runs unchanged
over PostgreSQL, SQLite or memory.

Capabilities:
- get / find / insert / update / increment / delete on any RecordKind
- record_payment / reverse_payment: payment row + booking totals in one
  atomic unit, with the ledger check run before commit
- summarize: dashboard aggregates
- ping / close: health and lifetime
"""

import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from frameflicker.schemas.client import ClientRead
from frameflicker.schemas.dashboard import StoreSummary
from frameflicker.schemas.package import PackageRead
from frameflicker.schemas.payment import PaymentRead
from frameflicker.schemas.project import ProjectRead
from frameflicker.schemas.team import TeamMemberRead


class RecordKind(str, Enum):
    """Entity collections handled by a repository."""
    CLIENTS = "clients"
    PACKAGES = "packages"
    PROJECTS = "projects"
    PAYMENTS = "payments"
    TEAM = "team_members"


Record = Union[ClientRead, PackageRead, ProjectRead, PaymentRead, TeamMemberRead]

RECORD_SCHEMAS: dict[RecordKind, type] = {
    RecordKind.CLIENTS: ClientRead,
    RecordKind.PACKAGES: PackageRead,
    RecordKind.PROJECTS: ProjectRead,
    RecordKind.PAYMENTS: PaymentRead,
    RecordKind.TEAM: TeamMemberRead,
}

# (field, descending) used by find()
ORDERING: dict[RecordKind, tuple[str, bool]] = {
    RecordKind.CLIENTS: ("created_at", True),
    RecordKind.PACKAGES: ("price", False),
    RecordKind.PROJECTS: ("created_at", True),
    RecordKind.PAYMENTS: ("created_at", True),
    RecordKind.TEAM: ("name", False),
}

# Receives the booking after the delta is applied, inside the transaction.
# Raising aborts the whole operation.
TotalsCheck = Callable[[ProjectRead], None]


class StudioRepository(ABC):
    """
    Abstract persistence for clients, packages, bookings, payments and team.

    Records are returned as the *Read schemas; projects and payments come
    back enriched with their joined display fields.
    """

    @abstractmethod
    async def get(self, kind: RecordKind, record_id: uuid.UUID) -> Optional[Record]:
        """Return one record, or None if the id does not resolve."""

    @abstractmethod
    async def find(
        self,
        kind: RecordKind,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> list[Record]:
        """Return records matching every equality filter, in ORDERING order."""

    @abstractmethod
    async def insert(self, kind: RecordKind, values: Mapping[str, Any]) -> Record:
        """Store a new record; the store assigns id and created_at."""

    @abstractmethod
    async def update(
        self, kind: RecordKind, record_id: uuid.UUID, values: Mapping[str, Any]
    ) -> Optional[Record]:
        """Overwrite the given fields. Returns None if the id does not resolve."""

    @abstractmethod
    async def increment(
        self, kind: RecordKind, record_id: uuid.UUID, deltas: Mapping[str, Union[int, Decimal]]
    ) -> Optional[Record]:
        """Add each delta to its field in a single atomic step."""

    @abstractmethod
    async def delete(self, kind: RecordKind, record_id: uuid.UUID) -> bool:
        """
        Delete a record. Returns False if the id does not resolve.

        Projects take their payments with them; clients and packages are
        detached from the projects referencing them. Payments cannot be
        deleted here: use reverse_payment.
        """

    @abstractmethod
    async def record_payment(
        self, values: Mapping[str, Any], verify: TotalsCheck
    ) -> tuple[PaymentRead, ProjectRead]:
        """
        Insert a payment and move its amount from balance to paid.

        Raises:
            NotFoundError: If the booking does not exist
            ConsistencyError: If verify rejects the new totals
        """

    @abstractmethod
    async def reverse_payment(
        self,
        payment_id: uuid.UUID,
        verify: TotalsCheck,
        project_id: Optional[uuid.UUID] = None,
    ) -> tuple[PaymentRead, ProjectRead]:
        """
        Delete a payment and move its amount back from paid to balance.

        Raises:
            NotFoundError: If the payment does not exist
            ConsistencyError: If it belongs to a booking other than
                project_id, or verify rejects the new totals
        """

    @abstractmethod
    async def summarize(self, terminal_statuses: Iterable[str]) -> StoreSummary:
        """Aggregate counts and sums for the dashboard."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise TransientStoreError if the store is unreachable."""

    async def close(self) -> None:
        """Release resources held by the adapter."""
