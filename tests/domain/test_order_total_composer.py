"""Unit tests for the OrderTotalComposer domain service."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.service.order_total_composer import OrderTotalComposer


def _compose(subtotal: str, shipping: str, rate="15", credit: str = "0"):
    return OrderTotalComposer().compose(
        Money.of(subtotal), Money.of(shipping), rate, Money.of(credit)
    )


class TestCompose:

    def test_invoice_breakdown(self):
        totals = _compose("599.98", "99.00", credit="150")

        assert totals.vatable_amount == Money.of("698.98")
        assert totals.vat_amount == Money.of("104.85")  # 104.847 rounds up
        assert totals.pre_total == Money.of("803.83")
        assert totals.credit_applied == Money.of("150.00")
        assert totals.final_total == Money.of("653.83")

    def test_parts_add_up(self):
        totals = _compose("599.98", "99.00", credit="150")
        assert totals.vatable_amount + totals.vat_amount == totals.pre_total
        assert totals.final_total + totals.credit_applied == totals.pre_total

    def test_credit_capped_at_pre_total(self):
        totals = _compose("100.00", "0", rate="0", credit="250")
        assert totals.credit_applied == Money.of("100.00")
        assert totals.final_total == Money.zero()

    def test_zero_vat(self):
        totals = _compose("100.00", "85.00", rate=0)
        assert totals.vat_amount == Money.zero()
        assert totals.pre_total == Money.of("185.00")

    def test_rate_kept_on_totals(self):
        assert _compose("10", "0", rate=Decimal("15")).vat_rate == Decimal("15")

    def test_vat_rounded_per_step(self):
        # 0.03 * 15% = 0.0045 -> VAT 0.00, not carried into the total
        totals = _compose("0.03", "0")
        assert totals.vat_amount == Money.zero()
        assert totals.pre_total == Money.of("0.03")

    def test_half_cent_vat_rounds_away_from_zero(self):
        # 0.10 * 15% = 0.015
        totals = _compose("0.10", "0")
        assert totals.vat_amount == Money.of("0.02")


class TestRate:

    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _compose("10", "0", rate="-1")

    def test_garbage_rate_rejected(self):
        with pytest.raises(ValidationError, match="Invalid VAT rate"):
            _compose("10", "0", rate="fifteen")
