"""Order aggregate.

An order freezes everything checkout computed: line prices, one shipment
per supplier group, and the total breakdown the invoice prints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PLACED = "PLACED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the product and its price at checkout time."""

    product_id: int
    product_name: str
    supplier_id: int
    quantity: Quantity
    unit_price: Money  # locked at checkout

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderShipment:
    """One shipping charge for one supplier group."""

    supplier_id: int
    supplier_name: str
    method_id: int
    method_name: str
    cost: Money
    item_count: int

    @property
    def display_label(self) -> str:
        return f"{self.supplier_name} - {self.method_name}"


@dataclass(frozen=True)
class OrderTotals:
    """Reproducible money breakdown for an order.

    ``final_total == pre_total - credit_applied`` (floored at zero) and
    ``pre_total == vatable_amount + vat_amount`` hold by construction in
    the composer.
    """

    subtotal: Money
    shipping_cost: Money
    vat_rate: Decimal
    vatable_amount: Money
    vat_amount: Money
    pre_total: Money
    credit_applied: Money
    final_total: Money


MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders; ``__init__`` stays simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: int
    items: list[OrderLineItem]
    shipments: list[OrderShipment]
    totals: OrderTotals
    status: OrderStatus = OrderStatus.PLACED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: int,
        items: list[OrderLineItem],
        shipments: list[OrderShipment],
        totals: OrderTotals,
    ) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")
        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        order = Order(
            id=None,
            user_id=user_id,
            items=list(items),
            shipments=list(shipments),
            totals=totals,
        )

        if order.items_total != totals.subtotal:
            raise ValidationError(
                f"Subtotal {totals.subtotal} does not match line items {order.items_total}"
            )
        if order.shipments_total != totals.shipping_cost:
            raise ValidationError(
                f"Shipping cost {totals.shipping_cost} does not match "
                f"shipments {order.shipments_total}"
            )
        return order

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition PLACED -> CANCELLED.

        Credit refund is coordinated by the application handler.
        """
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError("Order is already cancelled")
        self.status = OrderStatus.CANCELLED

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def shipments_total(self) -> Money:
        result = Money.zero()
        for shipment in self.shipments:
            result = result + shipment.cost
        return result
