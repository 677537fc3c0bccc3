"""
Tests for the repository adapters: cascades, ordering, enrichment,
aggregates. Every test runs on both the in-memory and SQLite stores.
"""

import uuid
from decimal import Decimal

import pytest

from frameflicker.repositories import RecordKind
from frameflicker.schemas.package import PackageCreate
from frameflicker.schemas.payment import PaymentCreate
from frameflicker.schemas.team import TeamMemberCreate
from frameflicker.services.client_service import ClientService
from frameflicker.services.package_service import PackageService
from frameflicker.services.payment_service import PaymentService
from frameflicker.services.team_service import TeamService


class TestDeleteCascades:

    @pytest.mark.asyncio
    async def test_project_delete_removes_payments(self, repo, make_booking):
        project = await make_booking()
        other = await make_booking()
        service = PaymentService()
        await service.post(repo, PaymentCreate(project_id=project.id, amount=Decimal("1000"), method="Cash"))
        kept = await service.post(repo, PaymentCreate(project_id=other.id, amount=Decimal("500"), method="Card"))

        assert await repo.delete(RecordKind.PROJECTS, project.id) is True

        assert await repo.get(RecordKind.PROJECTS, project.id) is None
        payments = await repo.find(RecordKind.PAYMENTS)
        assert [p.id for p in payments] == [kept.id]

    @pytest.mark.asyncio
    async def test_client_delete_detaches_projects(self, repo, make_booking):
        project = await make_booking()

        await ClientService().delete(repo, project.client_id)
        reloaded = await repo.get(RecordKind.PROJECTS, project.id)

        assert reloaded is not None
        assert reloaded.client_id is None
        assert reloaded.client_name is None
        assert reloaded.price == project.price
        assert reloaded.package_name == "Wedding Gold"

    @pytest.mark.asyncio
    async def test_package_delete_detaches_projects(self, repo, make_booking):
        project = await make_booking()

        await PackageService().delete(repo, project.package_id)
        reloaded = await repo.get(RecordKind.PROJECTS, project.id)

        assert reloaded.package_id is None
        assert reloaded.package_name is None
        assert reloaded.balance_amount == project.balance_amount

    @pytest.mark.asyncio
    async def test_delete_unknown_returns_false(self, repo):
        for kind in (RecordKind.CLIENTS, RecordKind.PACKAGES, RecordKind.PROJECTS, RecordKind.TEAM):
            assert await repo.delete(kind, uuid.uuid4()) is False


class TestReads:

    @pytest.mark.asyncio
    async def test_reads_are_idempotent(self, repo, make_booking):
        project = await make_booking()

        first = await repo.get(RecordKind.PROJECTS, project.id)
        second = await repo.get(RecordKind.PROJECTS, project.id)

        assert first == second
        assert await repo.find(RecordKind.PROJECTS) == await repo.find(RecordKind.PROJECTS)

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, repo, make_booking):
        project = await make_booking()

        record = await repo.get(RecordKind.PROJECTS, project.id)
        record.status = "Cancelled"

        assert (await repo.get(RecordKind.PROJECTS, project.id)).status == "New"

    @pytest.mark.asyncio
    async def test_packages_ordered_by_price(self, repo):
        service = PackageService()

        for name, price in (("Wedding Platinum", "85000"), ("Portrait", "7500"), ("Event", "25000")):
            await service.create(repo, PackageCreate(name=name, price=Decimal(price)))

        packages = await service.get_all(repo)

        assert [p.name for p in packages] == ["Portrait", "Event", "Wedding Platinum"]
        assert packages[0].deposit_percent == Decimal("0.5")
        assert packages[0].deposit_amount == Decimal("3750")
        assert packages[2].balance_amount == Decimal("63750")

    @pytest.mark.asyncio
    async def test_team_ordered_by_name(self, repo):
        service = TeamService()
        for name, role in (("Tharindu", "Editor"), ("Amali", "Photographer"), ("Kasun", "Videographer")):
            await service.create(repo, TeamMemberCreate(name=name, role=role))

        members = await service.get_all(repo)

        assert [m.name for m in members] == ["Amali", "Kasun", "Tharindu"]

    @pytest.mark.asyncio
    async def test_find_with_limit(self, repo, make_booking):
        for _ in range(3):
            await make_booking()

        assert len(await repo.find(RecordKind.PROJECTS, limit=2)) == 2

    @pytest.mark.asyncio
    async def test_update_unknown_returns_none(self, repo):
        assert await repo.update(RecordKind.CLIENTS, uuid.uuid4(), {"name": "Ghost"}) is None
        assert await repo.increment(RecordKind.PROJECTS, uuid.uuid4(), {"revisions_used": 1}) is None


class TestSummarize:

    @pytest.mark.asyncio
    async def test_empty_store(self, repo):
        summary = await repo.summarize(["Completed", "Cancelled"])

        assert summary.total_clients == 0
        assert summary.total_projects == 0
        assert summary.total_revenue == 0
        assert summary.pending_payments == 0
        assert summary.projects_by_status == []

    @pytest.mark.asyncio
    async def test_totals(self, repo, make_booking, project_service):
        open_project = await make_booking(Decimal("20000"))
        closed_project = await make_booking(Decimal("10000"))
        service = PaymentService()
        await service.post(repo, PaymentCreate(project_id=open_project.id, amount=Decimal("5000"), method="Cash"))
        await service.post(repo, PaymentCreate(project_id=closed_project.id, amount=Decimal("10000"), method="Cash"))
        await project_service.change_status(repo, closed_project.id, "Completed")

        summary = await repo.summarize(["Completed", "Cancelled"])

        assert summary.total_clients == 2
        assert summary.total_projects == 2
        assert summary.total_revenue == Decimal("15000")
        # open booking only: balance 10000 - paid 5000
        assert summary.pending_payments == Decimal("5000")
        assert {(s.status, s.count) for s in summary.projects_by_status} == {
            ("New", 1),
            ("Completed", 1),
        }
