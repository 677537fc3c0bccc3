"""
Tests for ProjectService: booking creation, status workflow, revisions.

Every test runs against both repository adapters.
"""

import uuid
from decimal import Decimal

import pydantic
import pytest

from frameflicker.core.exceptions import ConflictError, NotFoundError, ValidationError
from frameflicker.repositories import RecordKind
from frameflicker.schemas.client import ClientCreate
from frameflicker.schemas.package import PackageCreate, PackageUpdate
from frameflicker.schemas.project import ProjectCreate, ProjectUpdate
from frameflicker.services.client_service import ClientService
from frameflicker.services.package_service import PackageService
from frameflicker.services.project_service import ProjectService


# ============================================================
# Creation
# ============================================================


class TestCreateProject:

    @pytest.mark.asyncio
    async def test_high_tier_booking(self, make_booking):
        project = await make_booking(Decimal("20000"))

        assert project.status == "New"
        assert project.price == Decimal("20000")
        assert project.deposit_percent == Decimal("0.25")
        assert project.deposit_amount == Decimal("5000")
        assert project.balance_amount == Decimal("15000")
        assert project.amount_paid == 0
        assert project.revision_limit == 2
        assert project.revisions_used == 0

    @pytest.mark.asyncio
    async def test_threshold_booking(self, make_booking):
        project = await make_booking(Decimal("15000"))

        assert project.deposit_percent == Decimal("0.5")
        assert project.deposit_amount == Decimal("7500")
        assert project.balance_amount == Decimal("7500")

    @pytest.mark.asyncio
    async def test_enriched_with_client_and_package(self, make_booking):
        project = await make_booking()

        assert project.client_name == "Nimal Perera"
        assert project.client_phone == "0771234567"
        assert project.package_name == "Wedding Gold"
        assert project.package_category == "Wedding"

    @pytest.mark.asyncio
    async def test_price_override(self, make_booking):
        project = await make_booking(Decimal("20000"), price=Decimal("12000"))

        assert project.price == Decimal("12000")
        assert project.deposit_percent == Decimal("0.5")
        assert project.deposit_amount == Decimal("6000")

    @pytest.mark.asyncio
    async def test_negative_price_override_rejected(self, repo, make_booking):
        with pytest.raises(ValidationError):
            await make_booking(Decimal("20000"), price=Decimal("-5"))

        assert await repo.find(RecordKind.PROJECTS) == []

    @pytest.mark.asyncio
    async def test_missing_client_id(self, repo, project_service):
        with pytest.raises(ValidationError):
            await project_service.create(repo, ProjectCreate(package_id=uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_missing_package_id(self, repo, project_service):
        with pytest.raises(ValidationError):
            await project_service.create(repo, ProjectCreate(client_id=uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_unknown_client(self, repo, project_service):
        package = await PackageService().create(
            repo, PackageCreate(name="Portrait", price=Decimal("5000"))
        )

        with pytest.raises(NotFoundError):
            await project_service.create(
                repo, ProjectCreate(client_id=uuid.uuid4(), package_id=package.id)
            )

    @pytest.mark.asyncio
    async def test_unknown_package(self, repo, project_service):
        client = await ClientService().create(repo, ClientCreate(name="Kamala Silva"))

        with pytest.raises(NotFoundError):
            await project_service.create(
                repo, ProjectCreate(client_id=client.id, package_id=uuid.uuid4())
            )

    @pytest.mark.asyncio
    async def test_default_revision_limit_from_settings(self, repo, test_settings):
        service = ProjectService(test_settings.model_copy(update={"default_revision_limit": 4}))
        client = await ClientService().create(repo, ClientCreate(name="Kamala Silva"))
        package = await PackageService().create(
            repo, PackageCreate(name="Music video", price=Decimal("30000"))
        )

        project = await service.create(
            repo, ProjectCreate(client_id=client.id, package_id=package.id)
        )

        assert project.revision_limit == 4

    @pytest.mark.asyncio
    async def test_fractional_deposit_percent_kept(self, repo, test_settings):
        service = ProjectService(
            test_settings.model_copy(update={"deposit_percent_low": Decimal("0.125")})
        )
        client = await ClientService().create(repo, ClientCreate(name="Kamala Silva"))
        package = await PackageService().create(
            repo, PackageCreate(name="Portrait", price=Decimal("12000"))
        )

        project = await service.create(
            repo, ProjectCreate(client_id=client.id, package_id=package.id)
        )
        reloaded = await service.get_by_id(repo, project.id)

        assert reloaded.deposit_percent == Decimal("0.125")
        assert reloaded.deposit_amount == Decimal("1500")
        assert reloaded.balance_amount == Decimal("10500")

    @pytest.mark.asyncio
    async def test_package_reprice_keeps_booking_price(self, repo, make_booking):
        project = await make_booking(Decimal("20000"))

        await PackageService().update(repo, project.package_id, PackageUpdate(price=Decimal("50000")))
        reloaded = await ProjectService().get_by_id(repo, project.id)

        assert reloaded.price == Decimal("20000")
        assert reloaded.deposit_amount == Decimal("5000")


# ============================================================
# Updates
# ============================================================


class TestUpdateProject:

    @pytest.mark.asyncio
    async def test_descriptive_fields(self, repo, make_booking, project_service):
        project = await make_booking()

        updated = await project_service.update(
            repo,
            project.id,
            ProjectUpdate(location="Mount Lavinia", crew_assigned="Ruwan, Dilani", notes=""),
        )

        assert updated.location == "Mount Lavinia"
        assert updated.crew_assigned == "Ruwan, Dilani"
        assert updated.notes is None
        assert updated.balance_amount == project.balance_amount

    def test_financial_fields_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ProjectUpdate(price=Decimal("1"))
        with pytest.raises(pydantic.ValidationError):
            ProjectUpdate(amount_paid=Decimal("1"))

    @pytest.mark.asyncio
    async def test_unknown_project(self, repo, project_service):
        with pytest.raises(NotFoundError):
            await project_service.update(repo, uuid.uuid4(), ProjectUpdate(notes="x"))


# ============================================================
# Status workflow
# ============================================================


class TestChangeStatus:

    @pytest.mark.asyncio
    async def test_any_known_status(self, repo, make_booking, project_service):
        project = await make_booking()

        updated = await project_service.change_status(repo, project.id, "Editing")
        assert updated.status == "Editing"

        updated = await project_service.change_status(repo, project.id, "Confirmed")
        assert updated.status == "Confirmed"

    @pytest.mark.asyncio
    async def test_invalid_status_leaves_status_unchanged(
        self, repo, make_booking, project_service
    ):
        project = await make_booking()
        await project_service.change_status(repo, project.id, "Scheduled")

        with pytest.raises(ValidationError):
            await project_service.change_status(repo, project.id, "Archived")

        reloaded = await project_service.get_by_id(repo, project.id)
        assert reloaded.status == "Scheduled"

    @pytest.mark.asyncio
    async def test_status_is_case_sensitive(self, repo, make_booking, project_service):
        project = await make_booking()

        with pytest.raises(ValidationError):
            await project_service.change_status(repo, project.id, "completed")

    @pytest.mark.asyncio
    async def test_unknown_project(self, repo, project_service):
        with pytest.raises(NotFoundError):
            await project_service.change_status(repo, uuid.uuid4(), "Confirmed")

    @pytest.mark.asyncio
    async def test_terminal_status_reopens_by_default(self, repo, make_booking, project_service):
        project = await make_booking()
        await project_service.change_status(repo, project.id, "Cancelled")

        updated = await project_service.change_status(repo, project.id, "New")

        assert updated.status == "New"

    @pytest.mark.asyncio
    async def test_terminal_status_locked(self, repo, make_booking, test_settings):
        service = ProjectService(test_settings.model_copy(update={"lock_terminal_statuses": True}))
        project = await make_booking()
        await service.change_status(repo, project.id, "Completed")

        with pytest.raises(ConflictError):
            await service.change_status(repo, project.id, "Editing")

        reloaded = await service.get_by_id(repo, project.id)
        assert reloaded.status == "Completed"

    @pytest.mark.asyncio
    async def test_filter_by_status(self, repo, make_booking, project_service):
        first = await make_booking()
        await make_booking()
        await project_service.change_status(repo, first.id, "Confirmed")

        confirmed = await project_service.get_all(repo, status="Confirmed")

        assert [p.id for p in confirmed] == [first.id]


# ============================================================
# Revisions
# ============================================================


class TestRevisions:

    @pytest.mark.asyncio
    async def test_third_revision_is_extra(self, repo, make_booking, project_service):
        project = await make_booking()

        first = await project_service.record_revision(repo, project.id)
        second = await project_service.record_revision(repo, project.id)
        third = await project_service.record_revision(repo, project.id)

        assert (first.revisions_used, first.extra_revision) == (1, False)
        assert (second.revisions_used, second.extra_revision) == (2, False)
        assert (third.revisions_used, third.extra_revision) == (3, True)
        assert third.revision_limit == 2
        assert "Extra revision" in third.message

    @pytest.mark.asyncio
    async def test_reset(self, repo, make_booking, project_service):
        project = await make_booking()
        await project_service.record_revision(repo, project.id)

        reset = await project_service.reset_revisions(repo, project.id)
        again = await project_service.record_revision(repo, project.id)

        assert reset.revisions_used == 0
        assert again.revisions_used == 1

    @pytest.mark.asyncio
    async def test_unknown_project(self, repo, project_service):
        with pytest.raises(NotFoundError):
            await project_service.record_revision(repo, uuid.uuid4())
        with pytest.raises(NotFoundError):
            await project_service.reset_revisions(repo, uuid.uuid4())
