"""
Booking ledger rules
Project: FrameFlicker Studios (Studio Manager)

Pure functions shared by the services and the repository adapters:
- calculate_deposit: deposit/balance split computed once at booking time
- verify_totals: invariant checked inside every payment transaction

Rule (whole currency units, ROUND_HALF_UP):
    price <= 15000  ->  50% deposit
    price >  15000  ->  25% deposit
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Protocol

from frameflicker.core.exceptions import BusinessValidationError, ConsistencyError

logger = logging.getLogger(__name__)

DEPOSIT_THRESHOLD = Decimal("15000")
DEPOSIT_PERCENT_LOW = Decimal("0.5")
DEPOSIT_PERCENT_HIGH = Decimal("0.25")

# Deposits are rounded to whole currency units
_WHOLE_UNIT = Decimal("1")


class DepositSplit(NamedTuple):
    percent: Decimal
    deposit_amount: Decimal
    balance_amount: Decimal


class LedgerTotals(Protocol):
    price: Decimal
    deposit_amount: Decimal
    amount_paid: Decimal
    balance_amount: Decimal


def calculate_deposit(
    price: Decimal,
    threshold: Decimal = DEPOSIT_THRESHOLD,
    percent_low: Decimal = DEPOSIT_PERCENT_LOW,
    percent_high: Decimal = DEPOSIT_PERCENT_HIGH,
) -> DepositSplit:
    """
    Split a booking price into deposit and balance.

    The threshold is inclusive on the lower tier: a price of exactly
    15000 still requires 50%.

    Args:
        price: Booking price, non-negative
        threshold: Highest price that uses percent_low
        percent_low: Deposit share up to the threshold
        percent_high: Deposit share above the threshold

    Returns:
        DepositSplit(percent, deposit_amount, balance_amount)

    Raises:
        BusinessValidationError: If price is negative
    """
    price = Decimal(str(price))
    if price < 0:
        raise BusinessValidationError(f"Price cannot be negative: {price}")

    percent = percent_low if price <= threshold else percent_high
    deposit_amount = (price * percent).quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP)
    balance_amount = price - deposit_amount

    return DepositSplit(percent, deposit_amount, balance_amount)


def verify_totals(project: LedgerTotals) -> None:
    """
    Check the ledger invariant on a project's running totals.

    The deposit is part of the price but is not tracked by amount_paid,
    so postings preserve amount_paid + balance_amount == price - deposit_amount.

    Called by the repository adapters inside the payment transaction,
    after the delta is applied and before commit.

    Raises:
        ConsistencyError: If amount_paid + balance_amount != price - deposit_amount,
            or amount_paid went negative
    """
    expected = project.price - project.deposit_amount
    if project.amount_paid + project.balance_amount != expected:
        raise ConsistencyError(
            f"amount_paid ({project.amount_paid}) + balance_amount "
            f"({project.balance_amount}) does not match price less deposit ({expected})"
        )
    if project.amount_paid < 0:
        raise ConsistencyError(
            f"amount_paid cannot go negative ({project.amount_paid})"
        )
    if project.balance_amount < 0:
        logger.warning(
            "Booking overpaid: amount_paid=%s price=%s",
            project.amount_paid, project.price,
        )
