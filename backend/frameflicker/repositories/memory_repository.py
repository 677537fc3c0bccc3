"""
In-memory repository
Project: FrameFlicker Studios (Studio Manager)

StudioRepository kept in process memory. Used by the test-suite and for
local demos (STORAGE_BACKEND=memory); everything is lost on restart.

A single asyncio.Lock serializes every call, so a payment posting and its
totals update are observed together or not at all.
"""

import asyncio
import itertools
import logging
import uuid
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from frameflicker.core.exceptions import ConsistencyError, NotFoundError
from frameflicker.models.mixins import utcnow
from frameflicker.repositories.base import (
    ORDERING,
    RECORD_SCHEMAS,
    RecordKind,
    Record,
    StudioRepository,
    TotalsCheck,
)
from frameflicker.schemas.dashboard import StatusCount, StoreSummary
from frameflicker.schemas.payment import PaymentRead
from frameflicker.schemas.project import ProjectRead

logger = logging.getLogger(__name__)


class InMemoryRepository(StudioRepository):
    """
    Dict-backed repository.

    Stored rows are the *Read schemas without their joined display fields;
    every read returns a fresh copy, so callers can never mutate the store.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._tables: dict[RecordKind, dict[uuid.UUID, Record]] = {
            kind: {} for kind in RecordKind
        }
        # Insertion order, used to break created_at ties
        self._sequence: dict[uuid.UUID, int] = {}
        self._counter = itertools.count()

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _enrich(self, kind: RecordKind, row: Record) -> Record:
        if kind is RecordKind.PROJECTS:
            client = self._tables[RecordKind.CLIENTS].get(row.client_id)
            package = self._tables[RecordKind.PACKAGES].get(row.package_id)
            return row.model_copy(
                update={
                    "client_name": client.name if client else None,
                    "client_phone": client.phone if client else None,
                    "client_email": client.email if client else None,
                    "package_name": package.name if package else None,
                    "package_category": package.category if package else None,
                }
            )
        if kind is RecordKind.PAYMENTS:
            project = self._tables[RecordKind.PROJECTS].get(row.project_id)
            client = (
                self._tables[RecordKind.CLIENTS].get(project.client_id) if project else None
            )
            return row.model_copy(
                update={
                    "client_name": client.name if client else None,
                    "event_type": project.event_type if project else None,
                }
            )
        return row.model_copy()

    def _store(self, kind: RecordKind, values: Mapping[str, Any]) -> Record:
        schema = RECORD_SCHEMAS[kind]
        data = dict(values)
        data.setdefault("id", uuid.uuid4())
        if "created_at" in schema.model_fields:
            data.setdefault("created_at", utcnow())

        row = schema.model_validate(data)
        self._tables[kind][row.id] = row
        self._sequence[row.id] = next(self._counter)
        return row

    def _apply(
        self, kind: RecordKind, record_id: uuid.UUID, changes: Mapping[str, Any]
    ) -> Optional[Record]:
        row = self._tables[kind].get(record_id)
        if row is None:
            return None
        row = row.model_copy(update=dict(changes))
        self._tables[kind][record_id] = row
        return row

    def _moved_totals(self, project: ProjectRead, paid_delta: Decimal) -> ProjectRead:
        return project.model_copy(
            update={
                "amount_paid": project.amount_paid + paid_delta,
                "balance_amount": project.balance_amount - paid_delta,
            }
        )

    # ------------------------------------------------------------
    # Generic CRUD
    # ------------------------------------------------------------

    async def get(self, kind: RecordKind, record_id: uuid.UUID) -> Optional[Record]:
        async with self._lock:
            row = self._tables[kind].get(record_id)
            return self._enrich(kind, row) if row is not None else None

    async def find(
        self,
        kind: RecordKind,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> list[Record]:
        filters = filters or {}
        order_field, descending = ORDERING[kind]

        async with self._lock:
            rows = [
                row
                for row in self._tables[kind].values()
                if all(getattr(row, field) == value for field, value in filters.items())
            ]
            rows.sort(
                key=lambda row: (getattr(row, order_field), self._sequence[row.id]),
                reverse=descending,
            )
            if limit is not None:
                rows = rows[:limit]
            return [self._enrich(kind, row) for row in rows]

    async def insert(self, kind: RecordKind, values: Mapping[str, Any]) -> Record:
        async with self._lock:
            row = self._store(kind, values)
            logger.debug("Inserted %s %s", kind.value, row.id)
            return self._enrich(kind, row)

    async def update(
        self, kind: RecordKind, record_id: uuid.UUID, values: Mapping[str, Any]
    ) -> Optional[Record]:
        async with self._lock:
            row = self._apply(kind, record_id, values)
            return self._enrich(kind, row) if row is not None else None

    async def increment(
        self,
        kind: RecordKind,
        record_id: uuid.UUID,
        deltas: Mapping[str, Union[int, Decimal]],
    ) -> Optional[Record]:
        async with self._lock:
            row = self._tables[kind].get(record_id)
            if row is None:
                return None
            row = self._apply(
                kind,
                record_id,
                {field: getattr(row, field) + delta for field, delta in deltas.items()},
            )
            return self._enrich(kind, row)

    async def delete(self, kind: RecordKind, record_id: uuid.UUID) -> bool:
        if kind is RecordKind.PAYMENTS:
            raise ConsistencyError("Payments can only be removed through reverse_payment")

        async with self._lock:
            if record_id not in self._tables[kind]:
                return False

            projects = self._tables[RecordKind.PROJECTS]
            if kind is RecordKind.PROJECTS:
                payments = self._tables[RecordKind.PAYMENTS]
                for payment_id in [
                    p.id for p in payments.values() if p.project_id == record_id
                ]:
                    del payments[payment_id]
                    self._sequence.pop(payment_id, None)
            elif kind in (RecordKind.CLIENTS, RecordKind.PACKAGES):
                field = "client_id" if kind is RecordKind.CLIENTS else "package_id"
                for project in list(projects.values()):
                    if getattr(project, field) == record_id:
                        self._apply(RecordKind.PROJECTS, project.id, {field: None})

            del self._tables[kind][record_id]
            self._sequence.pop(record_id, None)
            logger.debug("Deleted %s %s", kind.value, record_id)
            return True

    # ------------------------------------------------------------
    # Ledger operations
    # ------------------------------------------------------------

    async def record_payment(
        self, values: Mapping[str, Any], verify: TotalsCheck
    ) -> tuple[PaymentRead, ProjectRead]:
        project_id = values["project_id"]
        amount = Decimal(values["amount"])

        async with self._lock:
            project = self._tables[RecordKind.PROJECTS].get(project_id)
            if project is None:
                raise NotFoundError(f"Project with ID {project_id} not found")

            # Nothing is written until verify accepts the new totals
            updated = self._moved_totals(project, amount)
            verify(updated)

            payment = self._store(RecordKind.PAYMENTS, values)
            self._tables[RecordKind.PROJECTS][project_id] = updated
            return (
                self._enrich(RecordKind.PAYMENTS, payment),
                self._enrich(RecordKind.PROJECTS, updated),
            )

    async def reverse_payment(
        self,
        payment_id: uuid.UUID,
        verify: TotalsCheck,
        project_id: Optional[uuid.UUID] = None,
    ) -> tuple[PaymentRead, ProjectRead]:
        async with self._lock:
            payments = self._tables[RecordKind.PAYMENTS]
            payment = payments.get(payment_id)
            if payment is None:
                raise NotFoundError(f"Payment with ID {payment_id} not found")

            if project_id is not None and payment.project_id != project_id:
                raise ConsistencyError(
                    f"Payment {payment_id} does not belong to project {project_id}"
                )

            project = self._tables[RecordKind.PROJECTS].get(payment.project_id)
            if project is None:
                raise ConsistencyError(
                    f"Payment {payment_id} references missing project {payment.project_id}"
                )

            updated = self._moved_totals(project, -payment.amount)
            verify(updated)

            record = self._enrich(RecordKind.PAYMENTS, payment)
            del payments[payment_id]
            self._sequence.pop(payment_id, None)
            self._tables[RecordKind.PROJECTS][project.id] = updated
            return record, self._enrich(RecordKind.PROJECTS, updated)

    # ------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------

    async def summarize(self, terminal_statuses: Iterable[str]) -> StoreSummary:
        terminal = set(terminal_statuses)
        async with self._lock:
            projects = list(self._tables[RecordKind.PROJECTS].values())
            payments = list(self._tables[RecordKind.PAYMENTS].values())
            total_clients = len(self._tables[RecordKind.CLIENTS])

        by_status: dict[str, int] = {}
        for project in projects:
            by_status[project.status] = by_status.get(project.status, 0) + 1

        return StoreSummary(
            total_clients=total_clients,
            total_projects=len(projects),
            total_revenue=sum((p.amount for p in payments), Decimal("0")),
            pending_payments=sum(
                (
                    p.balance_amount - p.amount_paid
                    for p in projects
                    if p.status not in terminal
                ),
                Decimal("0"),
            ),
            projects_by_status=[
                StatusCount(status=status, count=count)
                for status, count in sorted(by_status.items())
            ],
        )

    async def ping(self) -> None:
        return None
