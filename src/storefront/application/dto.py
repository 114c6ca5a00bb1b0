"""Data Transfer Objects passed from handlers to the CLI.

Money is already formatted for display, e.g. "R85.00".
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CartItemSpec:
    """Input: a product the customer wants and how many."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class ShippingOptionDTO:
    method_id: int
    method_name: str
    price: str
    is_default: bool


@dataclass(frozen=True)
class ShippingGroupDTO:
    supplier_id: int
    supplier_name: str
    item_count: int
    options: list[ShippingOptionDTO]
    selected_method_id: int | None


@dataclass(frozen=True)
class ShippingLineDTO:
    """Output: one supplier's shipping charge as printed on the invoice."""

    supplier_id: int
    supplier_name: str
    method_id: int
    method_name: str
    cost: str
    item_count: int


@dataclass(frozen=True)
class ShippingQuoteDTO:
    groups: list[ShippingGroupDTO]
    breakdown: list[ShippingLineDTO]
    total_cost: str
    errors: list[str]


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order with its invoice breakdown."""

    id: int
    user_id: int
    status: str
    items: list[OrderLineItemDTO]
    shipments: list[ShippingLineDTO]
    subtotal: str
    shipping_cost: str
    vat_rate: str
    vat_amount: str
    credit_applied: str
    final_total: str
    created_at: str


@dataclass(frozen=True)
class CreditTransactionDTO:
    type: str
    amount: str
    description: str
    order_id: int | None
    created_at: str


@dataclass(frozen=True)
class CreditSummaryDTO:
    user_id: int
    total_credits: str
    available_credits: str
    transactions: list[CreditTransactionDTO]
    reconciled: bool


@dataclass(frozen=True)
class SupplierShippingLineDTO:
    """Output: one method as configured for one supplier (admin view)."""

    method_id: int
    method_name: str
    base_price: str
    effective_price: str
    is_enabled: bool
    is_default: bool
    method_active: bool


def order_to_dto(order: Order) -> OrderDTO:
    totals = order.totals
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        shipments=[
            ShippingLineDTO(
                supplier_id=s.supplier_id,
                supplier_name=s.supplier_name,
                method_id=s.method_id,
                method_name=s.method_name,
                cost=str(s.cost),
                item_count=s.item_count,
            )
            for s in order.shipments
        ],
        subtotal=str(totals.subtotal),
        shipping_cost=str(totals.shipping_cost),
        vat_rate=f"{totals.vat_rate.normalize():f}%",
        vat_amount=str(totals.vat_amount),
        credit_applied=str(totals.credit_applied),
        final_total=str(totals.final_total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
