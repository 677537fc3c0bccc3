"""
FastAPI router for payments
Project: FrameFlicker Studios (Studio Manager)

API endpoints for the booking ledger. Posting a payment moves its amount
from balance to paid; deleting it moves the amount back.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from frameflicker.core.deps import Repository
from frameflicker.schemas.payment import PaymentCreate, PaymentRead, ProjectPaymentSummary
from frameflicker.services.payment_service import PaymentService

router = APIRouter(
    prefix="/payments",
    tags=["Payments"],
)


def get_payment_service() -> PaymentService:
    """Dependency returning a PaymentService instance."""
    return PaymentService()


@router.get(
    "/",
    name="payments_list",
    summary="List payments",
    description="Payments newest first, optionally for a single booking.",
    response_model=list[PaymentRead],
)
async def get_payments(
    repo: Repository,
    project_id: Optional[uuid.UUID] = Query(None, description="Filter by booking"),
    service: PaymentService = Depends(get_payment_service),
) -> list[PaymentRead]:
    return await service.get_all(repo, project_id=project_id)


@router.get(
    "/project/{project_id}",
    name="payments_by_project",
    summary="Payments of a booking",
    description="Payments of one booking and their total.",
    response_model=ProjectPaymentSummary,
)
async def get_project_payments(
    project_id: uuid.UUID,
    repo: Repository,
    service: PaymentService = Depends(get_payment_service),
) -> ProjectPaymentSummary:
    return await service.get_for_project(repo, project_id)


@router.post(
    "/",
    name="payment_create",
    summary="Post payment",
    response_model=PaymentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_payment(
    payment_data: PaymentCreate,
    repo: Repository,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentRead:
    """
    Record a payment against a booking.

    Raises:
        ValidationError: If the amount is not positive or the method is unknown
        NotFoundError: If the booking does not exist
    """
    return await service.post(repo, payment_data)


@router.delete(
    "/{payment_id}",
    name="payment_reverse",
    summary="Reverse payment",
    description="Delete a payment and restore the booking balance.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def reverse_payment(
    payment_id: uuid.UUID,
    repo: Repository,
    project_id: Optional[uuid.UUID] = Query(
        None, description="Expected booking; rejects the reversal on mismatch"
    ),
    service: PaymentService = Depends(get_payment_service),
) -> Response:
    """
    Reverse a payment.

    Raises:
        NotFoundError: If the payment does not exist
        ConsistencyError: If project_id is given and does not match
    """
    await service.reverse(repo, payment_id, project_id=project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
