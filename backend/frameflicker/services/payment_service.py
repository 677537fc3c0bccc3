"""
Service layer for payments (booking ledger)
Project: FrameFlicker Studios (Studio Manager)

Posting and reversing payments against a booking. The payment row and the
booking totals move together inside a single repository transaction; the
ledger check (verify_totals) runs before commit, so a rejected operation
leaves no trace.

Ledger invariant, per booking:
    amount_paid + balance_amount == price - deposit_amount
"""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from frameflicker.core.exceptions import NotFoundError, ValidationError
from frameflicker.core.ledger import verify_totals
from frameflicker.repositories.base import RecordKind, StudioRepository
from frameflicker.schemas.payment import (
    PaymentCreate,
    PaymentMethod,
    PaymentRead,
    ProjectPaymentSummary,
)

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Ledger operations on bookings.

    Every write goes through StudioRepository.record_payment /
    reverse_payment, never through generic updates.
    """

    async def get_all(
        self, repo: StudioRepository, project_id: Optional[uuid.UUID] = None
    ) -> list[PaymentRead]:
        """Payments, newest first, optionally for a single booking."""
        filters = {"project_id": project_id} if project_id is not None else None
        payments = await repo.find(RecordKind.PAYMENTS, filters)
        logger.info("Retrieved %s payments", len(payments))
        return payments

    async def get_for_project(
        self, repo: StudioRepository, project_id: uuid.UUID
    ) -> ProjectPaymentSummary:
        """
        Payments of one booking and their total.

        Raises:
            NotFoundError: If the booking does not exist
        """
        if await repo.get(RecordKind.PROJECTS, project_id) is None:
            logger.warning("Payments requested for missing project: %s", project_id)
            raise NotFoundError(f"Project with ID {project_id} not found")

        payments = await repo.find(RecordKind.PAYMENTS, {"project_id": project_id})
        return ProjectPaymentSummary(
            project_id=project_id,
            payments=payments,
            total_paid=sum((p.amount for p in payments), Decimal("0")),
        )

    async def post(self, repo: StudioRepository, payment_data: PaymentCreate) -> PaymentRead:
        """
        Record a payment against a booking.

        amount_paid grows and balance_amount shrinks by the amount, in the
        same transaction that stores the payment.

        Raises:
            ValidationError: If the amount is not positive or the method is unknown
            NotFoundError: If the booking does not exist
            ConsistencyError: If the new totals break the ledger invariant
        """
        if payment_data.amount <= 0:
            raise ValidationError(
                f"Payment amount must be greater than zero (got {payment_data.amount})"
            )

        try:
            method = PaymentMethod(payment_data.method)
        except ValueError:
            allowed = ", ".join(m.value for m in PaymentMethod)
            logger.warning("Invalid payment method: %r", payment_data.method)
            raise ValidationError(
                f"Invalid payment method '{payment_data.method}'. Allowed: {allowed}"
            )

        values = payment_data.model_dump()
        values["method"] = method.value

        payment, project = await repo.record_payment(values, verify_totals)

        logger.info(
            "Payment %s of %s (%s) posted on project %s: paid=%s balance=%s",
            payment.id, payment.amount, payment.method, project.id,
            project.amount_paid, project.balance_amount,
        )
        return payment

    async def reverse(
        self,
        repo: StudioRepository,
        payment_id: uuid.UUID,
        project_id: Optional[uuid.UUID] = None,
    ) -> PaymentRead:
        """
        Remove a payment and give its amount back to the balance.

        When project_id is given, the payment must belong to that booking.

        Raises:
            NotFoundError: If the payment does not exist
            ConsistencyError: If the payment belongs to another booking
        """
        payment, project = await repo.reverse_payment(payment_id, verify_totals, project_id)

        logger.info(
            "Payment %s of %s reversed on project %s: paid=%s balance=%s",
            payment.id, payment.amount, project.id,
            project.amount_paid, project.balance_amount,
        )
        return payment
