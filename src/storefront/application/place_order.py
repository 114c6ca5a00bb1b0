"""Application service: Place Order use case.

The checkout pipeline:

1. Price the cart from the current catalog.
2. Gate on shipping selection; every problem is reported together.
3. Aggregate shipping and compose the totals.
4. In ONE transaction: save the order, then debit the credit against it.
   If the debit is refused the order row is rolled back too, so no
   order ever exists with a credit line that was not actually charged.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from storefront.application.cart import build_cart
from storefront.application.dto import CartItemSpec, OrderDTO, order_to_dto
from storefront.domain.exceptions import CheckoutBlockedError, InsufficientCreditError
from storefront.domain.model.order import Order, OrderLineItem, OrderShipment
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.cart_partitioner import CartPartitioner
from storefront.domain.service.credit_ledger import CreditLedger
from storefront.domain.service.order_total_composer import OrderTotalComposer
from storefront.domain.service.shipping_aggregator import ShippingAggregator

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork, vat_rate: Decimal) -> None:
        self._uow = uow
        self._vat_rate = vat_rate
        self._composer = OrderTotalComposer()

    def handle(
        self,
        user_id: int,
        item_specs: list[CartItemSpec],
        method_selections: dict[int, int] | None = None,
        credit_requested: str = "0",
    ) -> OrderDTO:
        """Place an order.

        Without ``method_selections`` every supplier ships with its
        default (or first enabled) method.
        """
        credit = Money.of(credit_requested)

        with self._uow:
            cart, products = build_cart(self._uow.products, item_specs)
            aggregator = ShippingAggregator(
                CartPartitioner(self._uow.products, self._uow.suppliers),
                self._uow.shipping,
                self._uow.suppliers,
            )

            if method_selections:
                validation = aggregator.validate_selection(cart, method_selections)
                if not validation.valid:
                    logger.warning("Checkout blocked for user %s: %s", user_id, validation.errors)
                    raise CheckoutBlockedError(validation.errors)

            shipping = aggregator.aggregate(cart, method_selections)
            if not shipping.is_valid:
                logger.warning("Checkout blocked for user %s: %s", user_id, shipping.errors)
                raise CheckoutBlockedError(shipping.errors)

            line_items = [
                OrderLineItem(
                    product_id=item.product_id,
                    product_name=products[item.product_id].name,
                    supplier_id=products[item.product_id].supplier_id,  # type: ignore[arg-type]
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                for item in cart
            ]
            shipments = [
                OrderShipment(
                    supplier_id=line.supplier_id,
                    supplier_name=line.supplier_name,
                    method_id=line.method_id,
                    method_name=line.method_name,
                    cost=line.cost,
                    item_count=line.item_count,
                )
                for line in shipping.breakdown
            ]

            subtotal = Money.zero()
            for item in cart:
                subtotal = subtotal + item.line_total

            totals = self._composer.compose(
                subtotal, shipping.total_cost, self._vat_rate, credit
            )
            order = Order.create(user_id, line_items, shipments, totals)
            self._uow.orders.save(order)

            if not totals.credit_applied.is_zero:
                outcome = CreditLedger(self._uow).apply_credit(
                    user_id, order.id, totals.credit_applied  # type: ignore[arg-type]
                )
                if not outcome.ok:
                    raise InsufficientCreditError(outcome.available, totals.credit_applied)

        logger.info(
            "Order #%s placed for user %s: %s payable across %d shipment(s)",
            order.id, user_id, totals.final_total, len(shipments),
        )
        return order_to_dto(order)
