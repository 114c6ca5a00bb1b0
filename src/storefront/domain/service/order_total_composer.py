"""Domain service: Order Total Composer.

Turns subtotal, shipping, VAT and credit into the breakdown printed on
the invoice.  Rounding happens at every monetary boundary (VAT amount,
pre-total, final total), not once at the end; the two approaches differ
on half-cent values and invoices have always used per-step rounding.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderTotals
from storefront.domain.model.value_objects import Money, round2

HUNDRED = Decimal("100")
ZERO = Decimal("0.00")


class OrderTotalComposer:

    def compose(
        self,
        subtotal: Money,
        shipping_cost: Money,
        vat_rate: Decimal | str | int,
        credit_requested: Money,
    ) -> OrderTotals:
        """Compose the payable total.

        ``credit_requested`` must already have been checked against the
        customer's balance; here it is only capped at the order's own
        pre-total so the discount cannot go below zero.
        """
        rate = self._parse_rate(vat_rate)

        vatable = subtotal.amount + shipping_cost.amount
        vat_amount = round2(vatable * rate / HUNDRED)
        pre_total = round2(vatable + vat_amount)
        credit_applied = round2(min(credit_requested.amount, pre_total))
        final_total = max(round2(pre_total - credit_applied), ZERO)

        return OrderTotals(
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            vat_rate=rate,
            vatable_amount=Money(vatable),
            vat_amount=Money(vat_amount),
            pre_total=Money(pre_total),
            credit_applied=Money(credit_applied),
            final_total=Money(final_total),
        )

    @staticmethod
    def _parse_rate(vat_rate: Decimal | str | int) -> Decimal:
        try:
            rate = Decimal(str(vat_rate))
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid VAT rate: {vat_rate!r}") from exc
        if rate < 0:
            raise ValidationError(f"VAT rate cannot be negative, got {rate}")
        return rate
