"""
SQLAlchemy repository
Project: FrameFlicker Studios (Studio Manager)

StudioRepository over an async SQLAlchemy engine. The same adapter serves
the relational backend (postgresql+asyncpg) and the embedded single-file
backend (sqlite+aiosqlite).

Every public method runs in its own session/transaction and is bounded by
the configured timeout. Payment postings and reversals move the booking
totals with a single "SET amount_paid = amount_paid + :delta" statement,
so concurrent postings on the same booking serialize on the row (PostgreSQL)
or on the database write lock (SQLite) and never lose an update.
"""

import asyncio
import functools
import logging
import uuid
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Union

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.exc import DBAPIError, DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from frameflicker.core.database import Database
from frameflicker.core.exceptions import ConsistencyError, NotFoundError, TransientStoreError
from frameflicker.models import Client, Package, Payment, Project, TeamMember
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


MODELS: dict[RecordKind, type] = {
    RecordKind.CLIENTS: Client,
    RecordKind.PACKAGES: Package,
    RecordKind.PROJECTS: Project,
    RecordKind.PAYMENTS: Payment,
    RecordKind.TEAM: TeamMember,
}

# Display fields joined onto projects and payments
_PROJECT_JOINED = (
    ("client_name", Client.name),
    ("client_phone", Client.phone),
    ("client_email", Client.email),
    ("package_name", Package.name),
    ("package_category", Package.category),
)
_PAYMENT_JOINED = (
    ("client_name", Client.name),
    ("event_type", Project.event_type),
)


def _store_call(method):
    """
    Bound a repository coroutine by the adapter timeout and turn
    connectivity failures into TransientStoreError.
    """

    @functools.wraps(method)
    async def wrapper(self: "SQLAlchemyRepository", *args, **kwargs):
        try:
            return await asyncio.wait_for(method(self, *args, **kwargs), self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Store call %s timed out after %ss", method.__name__, self.timeout)
            raise TransientStoreError(
                f"Store call '{method.__name__}' timed out"
            ) from exc
        except (OperationalError, InterfaceError, DisconnectionError) as exc:
            logger.error("Store call %s failed: %s", method.__name__, exc)
            raise TransientStoreError(
                f"Store call '{method.__name__}' failed: backing store unreachable"
            ) from exc
        except DBAPIError as exc:
            if exc.connection_invalidated:
                logger.error("Store connection lost during %s: %s", method.__name__, exc)
                raise TransientStoreError("Backing store connection lost") from exc
            raise
        except OSError as exc:
            logger.error("Store call %s failed: %s", method.__name__, exc)
            raise TransientStoreError("Backing store unreachable") from exc

    return wrapper


class SQLAlchemyRepository(StudioRepository):
    """
    Repository backed by a Database (engine + session factory).

    The repository owns the Database: close() disposes the engine.
    """

    def __init__(self, database: Database, timeout: Optional[float] = None) -> None:
        self.database = database
        self.timeout = timeout

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _select(self, kind: RecordKind) -> Select:
        if kind is RecordKind.PROJECTS:
            return (
                select(Project, *[col.label(name) for name, col in _PROJECT_JOINED])
                .outerjoin(Client, Project.client_id == Client.id)
                .outerjoin(Package, Project.package_id == Package.id)
            )
        if kind is RecordKind.PAYMENTS:
            return (
                select(Payment, *[col.label(name) for name, col in _PAYMENT_JOINED])
                .outerjoin(Project, Payment.project_id == Project.id)
                .outerjoin(Client, Project.client_id == Client.id)
            )
        return select(MODELS[kind])

    def _record(self, kind: RecordKind, row) -> Record:
        record = RECORD_SCHEMAS[kind].model_validate(row[0])
        if kind is RecordKind.PROJECTS:
            joined = _PROJECT_JOINED
        elif kind is RecordKind.PAYMENTS:
            joined = _PAYMENT_JOINED
        else:
            return record
        return record.model_copy(
            update={name: value for (name, _), value in zip(joined, row[1:])}
        )

    async def _fetch(
        self, session: AsyncSession, kind: RecordKind, record_id: uuid.UUID
    ) -> Optional[Record]:
        model = MODELS[kind]
        stmt = (
            self._select(kind)
            .where(model.id == record_id)
            .execution_options(populate_existing=True)
        )
        row = (await session.execute(stmt)).first()
        return self._record(kind, row) if row is not None else None

    # ------------------------------------------------------------
    # Generic CRUD
    # ------------------------------------------------------------

    @_store_call
    async def get(self, kind: RecordKind, record_id: uuid.UUID) -> Optional[Record]:
        async with self.database.session() as session:
            return await self._fetch(session, kind, record_id)

    @_store_call
    async def find(
        self,
        kind: RecordKind,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> list[Record]:
        model = MODELS[kind]
        stmt = self._select(kind)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, field) == value)

        order_field, descending = ORDERING[kind]
        column = getattr(model, order_field)
        stmt = stmt.order_by(column.desc() if descending else column.asc(), model.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self.database.session() as session:
            rows = (await session.execute(stmt)).all()
        return [self._record(kind, row) for row in rows]

    @_store_call
    async def insert(self, kind: RecordKind, values: Mapping[str, Any]) -> Record:
        model = MODELS[kind]
        async with self.database.session.begin() as session:
            obj = model(**values)
            session.add(obj)
            await session.flush()
            record = await self._fetch(session, kind, obj.id)
        logger.debug("Inserted %s %s", kind.value, record.id)
        return record

    @_store_call
    async def update(
        self, kind: RecordKind, record_id: uuid.UUID, values: Mapping[str, Any]
    ) -> Optional[Record]:
        model = MODELS[kind]
        async with self.database.session.begin() as session:
            if values:
                result = await session.execute(
                    update(model)
                    .where(model.id == record_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    return None
            return await self._fetch(session, kind, record_id)

    @_store_call
    async def increment(
        self,
        kind: RecordKind,
        record_id: uuid.UUID,
        deltas: Mapping[str, Union[int, Decimal]],
    ) -> Optional[Record]:
        model = MODELS[kind]
        async with self.database.session.begin() as session:
            result = await session.execute(
                update(model)
                .where(model.id == record_id)
                .values({field: getattr(model, field) + delta for field, delta in deltas.items()})
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            return await self._fetch(session, kind, record_id)

    @_store_call
    async def delete(self, kind: RecordKind, record_id: uuid.UUID) -> bool:
        if kind is RecordKind.PAYMENTS:
            raise ConsistencyError("Payments can only be removed through reverse_payment")

        model = MODELS[kind]
        async with self.database.session.begin() as session:
            if await session.get(model, record_id) is None:
                return False

            # Cascades are issued explicitly: SQLite does not enforce
            # foreign keys unless the pragma is enabled.
            if kind is RecordKind.PROJECTS:
                await session.execute(delete(Payment).where(Payment.project_id == record_id))
            elif kind is RecordKind.CLIENTS:
                await session.execute(
                    update(Project)
                    .where(Project.client_id == record_id)
                    .values(client_id=None)
                    .execution_options(synchronize_session=False)
                )
            elif kind is RecordKind.PACKAGES:
                await session.execute(
                    update(Project)
                    .where(Project.package_id == record_id)
                    .values(package_id=None)
                    .execution_options(synchronize_session=False)
                )

            await session.execute(delete(model).where(model.id == record_id))
        logger.debug("Deleted %s %s", kind.value, record_id)
        return True

    # ------------------------------------------------------------
    # Ledger operations
    # ------------------------------------------------------------

    async def _move_totals(
        self, session: AsyncSession, project_id: uuid.UUID, paid_delta: Decimal
    ) -> Optional[ProjectRead]:
        result = await session.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(
                amount_paid=Project.amount_paid + paid_delta,
                balance_amount=Project.balance_amount - paid_delta,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self._fetch(session, RecordKind.PROJECTS, project_id)

    @_store_call
    async def record_payment(
        self, values: Mapping[str, Any], verify: TotalsCheck
    ) -> tuple[PaymentRead, ProjectRead]:
        project_id = values["project_id"]
        amount = Decimal(values["amount"])

        async with self.database.session.begin() as session:
            project = await self._move_totals(session, project_id, amount)
            if project is None:
                raise NotFoundError(f"Project with ID {project_id} not found")
            verify(project)

            payment = Payment(**values)
            session.add(payment)
            await session.flush()
            record = await self._fetch(session, RecordKind.PAYMENTS, payment.id)

        return record, project

    @_store_call
    async def reverse_payment(
        self,
        payment_id: uuid.UUID,
        verify: TotalsCheck,
        project_id: Optional[uuid.UUID] = None,
    ) -> tuple[PaymentRead, ProjectRead]:
        async with self.database.session.begin() as session:
            payment = await session.get(Payment, payment_id, with_for_update=True)
            if payment is None:
                raise NotFoundError(f"Payment with ID {payment_id} not found")

            if project_id is not None and payment.project_id != project_id:
                raise ConsistencyError(
                    f"Payment {payment_id} does not belong to project {project_id}"
                )

            amount = payment.amount
            owner_id = payment.project_id
            record = await self._fetch(session, RecordKind.PAYMENTS, payment_id)

            result = await session.execute(delete(Payment).where(Payment.id == payment_id))
            if result.rowcount != 1:
                raise ConsistencyError(f"Payment {payment_id} was already reversed")

            project = await self._move_totals(session, owner_id, -amount)
            if project is None:
                raise ConsistencyError(
                    f"Payment {payment_id} references missing project {owner_id}"
                )
            verify(project)

        return record, project

    # ------------------------------------------------------------
    # Aggregates & lifetime
    # ------------------------------------------------------------

    @_store_call
    async def summarize(self, terminal_statuses: Iterable[str]) -> StoreSummary:
        terminal = list(terminal_statuses)
        async with self.database.session() as session:
            total_clients = await session.scalar(select(func.count()).select_from(Client))
            total_projects = await session.scalar(select(func.count()).select_from(Project))
            total_revenue = await session.scalar(
                select(func.coalesce(func.sum(Payment.amount), 0))
            )
            pending_payments = await session.scalar(
                select(
                    func.coalesce(func.sum(Project.balance_amount - Project.amount_paid), 0)
                ).where(Project.status.not_in(terminal))
            )
            by_status = (
                await session.execute(
                    select(Project.status, func.count())
                    .group_by(Project.status)
                    .order_by(Project.status)
                )
            ).all()

        return StoreSummary(
            total_clients=total_clients or 0,
            total_projects=total_projects or 0,
            total_revenue=Decimal(str(total_revenue or 0)),
            pending_payments=Decimal(str(pending_payments or 0)),
            projects_by_status=[
                StatusCount(status=status, count=count) for status, count in by_status
            ],
        )

    @_store_call
    async def ping(self) -> None:
        await self.database.ping()

    async def close(self) -> None:
        await self.database.dispose()
