"""
Unit tests for the booking ledger rules (deposit split and totals check).
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from frameflicker.core.exceptions import BusinessValidationError, ConsistencyError
from frameflicker.core.ledger import calculate_deposit, verify_totals


# ============================================================
# Deposit split
# ============================================================


class TestCalculateDeposit:
    """Deposit tiers and rounding."""

    def test_threshold_is_in_lower_tier(self):
        split = calculate_deposit(Decimal("15000"))

        assert split.percent == Decimal("0.5")
        assert split.deposit_amount == Decimal("7500")
        assert split.balance_amount == Decimal("7500")

    def test_above_threshold_uses_quarter(self):
        split = calculate_deposit(Decimal("15001"))

        assert split.percent == Decimal("0.25")
        # 3750.25 rounds down to whole units
        assert split.deposit_amount == Decimal("3750")
        assert split.balance_amount == Decimal("11251")

    def test_zero_price(self):
        split = calculate_deposit(Decimal("0"))

        assert split.deposit_amount == 0
        assert split.balance_amount == 0

    def test_half_rounds_up(self):
        # 25 * 0.5 = 12.5
        split = calculate_deposit(Decimal("25"))

        assert split.deposit_amount == Decimal("13")
        assert split.balance_amount == Decimal("12")

    def test_high_tier_half_rounds_up(self):
        # 15002 * 0.25 = 3750.5
        split = calculate_deposit(Decimal("15002"))

        assert split.deposit_amount == Decimal("3751")
        assert split.balance_amount == Decimal("11251")

    def test_split_always_sums_to_price(self):
        for price in ("1", "999.99", "14999.50", "15000.01", "123456.78"):
            split = calculate_deposit(Decimal(price))
            assert split.deposit_amount + split.balance_amount == Decimal(price)

    def test_accepts_int(self):
        split = calculate_deposit(20000)

        assert split.percent == Decimal("0.25")
        assert split.deposit_amount == Decimal("5000")
        assert split.balance_amount == Decimal("15000")

    def test_negative_price_rejected(self):
        with pytest.raises(BusinessValidationError):
            calculate_deposit(Decimal("-1"))

    def test_custom_rule(self):
        split = calculate_deposit(
            Decimal("10000"),
            threshold=Decimal("5000"),
            percent_low=Decimal("0.4"),
            percent_high=Decimal("0.3"),
        )

        assert split.percent == Decimal("0.3")
        assert split.deposit_amount == Decimal("3000")


# ============================================================
# Totals check
# ============================================================


def _totals(price, deposit, paid, balance):
    return SimpleNamespace(
        price=Decimal(price),
        deposit_amount=Decimal(deposit),
        amount_paid=Decimal(paid),
        balance_amount=Decimal(balance),
    )


class TestVerifyTotals:
    """Invariant amount_paid + balance_amount == price - deposit_amount."""

    def test_fresh_booking_passes(self):
        split = calculate_deposit(Decimal("20000"))

        verify_totals(_totals("20000", split.deposit_amount, "0", split.balance_amount))

    def test_first_posting_passes(self):
        # 20000 booking: deposit 5000, balance 15000, then 5000 paid
        verify_totals(_totals("20000", "5000", "5000", "10000"))

    def test_mismatch_raises(self):
        with pytest.raises(ConsistencyError):
            verify_totals(_totals("20000", "5000", "5000", "9000"))

    def test_sum_equal_to_price_is_a_mismatch(self):
        with pytest.raises(ConsistencyError):
            verify_totals(_totals("20000", "5000", "5000", "15000"))

    def test_negative_paid_raises(self):
        with pytest.raises(ConsistencyError):
            verify_totals(_totals("20000", "5000", "-100", "15100"))

    def test_overpayment_is_allowed_and_logged(self, caplog):
        verify_totals(_totals("20000", "5000", "16000", "-1000"))

        assert "overpaid" in caplog.text
