"""Unit tests for the CreditBalance aggregate."""

import pytest

from storefront.domain.exceptions import InsufficientCreditError, ValidationError
from storefront.domain.model.credit import CreditBalance
from storefront.domain.model.value_objects import Money


def _balance(total: str, available: str) -> CreditBalance:
    return CreditBalance(
        user_id=1, total_credits=Money.of(total), available_credits=Money.of(available)
    )


class TestCreditBalance:

    def test_new_balance_is_zero(self):
        balance = CreditBalance(user_id=1)
        assert balance.available_credits.is_zero
        assert balance.total_credits.is_zero

    def test_earn_raises_both_totals(self):
        balance = _balance("10", "5")
        balance.earn(Money.of("20"))
        assert balance.total_credits == Money.of("30")
        assert balance.available_credits == Money.of("25")

    def test_debit_within_balance(self):
        balance = _balance("100", "100")
        balance.debit(Money.of("80"))
        assert balance.available_credits == Money.of("20")
        assert balance.total_credits == Money.of("100")

    def test_debit_more_than_available_leaves_balance(self):
        balance = _balance("25", "25")
        with pytest.raises(InsufficientCreditError) as exc_info:
            balance.debit(Money.of("50"))
        assert exc_info.value.available == Money.of("25")
        assert balance.available_credits == Money.of("25")

    def test_insufficient_message_names_available_amount(self):
        balance = _balance("25", "25")
        with pytest.raises(InsufficientCreditError, match="you only have R25.00 available"):
            balance.debit(Money.of("50"))

    def test_zero_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _balance("10", "10").debit(Money.zero())

    def test_restore_cannot_exceed_total(self):
        balance = _balance("100", "90")
        with pytest.raises(ValidationError, match="above lifetime total"):
            balance.restore(Money.of("20"))

    def test_fraction_of_a_cent_rejected(self):
        balance = _balance("10", "10")
        with pytest.raises(ValidationError, match="fractions of a cent"):
            balance.earn(Money.of("0.004"))
        with pytest.raises(ValidationError, match="fractions of a cent"):
            balance.debit(Money.of("1.005"))
        assert balance.available_credits == Money.of("10")
