"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderShipment,
    OrderStatus,
    OrderTotals,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.tables import (
    OrderItemRow,
    OrderRow,
    OrderShipmentRow,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        return self._to_domain(row) if row else None

    def list_for_user(self, user_id: int) -> list[Order]:
        rows = self._session.scalars(
            select(OrderRow).where(OrderRow.user_id == user_id).order_by(OrderRow.id.desc())
        )
        return [self._to_domain(row) for row in rows]

    def save(self, order: Order) -> None:
        if order.id is None:
            row = self._to_row(order)
            self._session.add(row)
            self._session.flush()
            order.id = row.id
            return

        # Only the status changes after an order is placed.
        row = self._session.get(OrderRow, order.id)
        if row is None:
            self._session.add(self._to_row(order))
        else:
            row.status = order.status.value
        self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        totals = order.totals
        return OrderRow(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            created_at=order.created_at,
            subtotal=totals.subtotal.amount,
            shipping_cost=totals.shipping_cost.amount,
            vat_rate=totals.vat_rate,
            vatable_amount=totals.vatable_amount.amount,
            vat_amount=totals.vat_amount.amount,
            pre_total=totals.pre_total.amount,
            credit_applied=totals.credit_applied.amount,
            final_total=totals.final_total.amount,
            items=[
                OrderItemRow(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    supplier_id=item.supplier_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                )
                for item in order.items
            ],
            shipments=[
                OrderShipmentRow(
                    supplier_id=s.supplier_id,
                    supplier_name=s.supplier_name,
                    method_id=s.method_id,
                    method_name=s.method_name,
                    cost=s.cost.amount,
                    item_count=s.item_count,
                )
                for s in order.shipments
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        created_at = row.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=row.id,
            user_id=row.user_id,
            items=[
                OrderLineItem(
                    product_id=i.product_id,
                    product_name=i.product_name,
                    supplier_id=i.supplier_id,
                    quantity=Quantity(i.quantity),
                    unit_price=Money(i.unit_price),
                )
                for i in row.items
            ],
            shipments=[
                OrderShipment(
                    supplier_id=s.supplier_id,
                    supplier_name=s.supplier_name,
                    method_id=s.method_id,
                    method_name=s.method_name,
                    cost=Money(s.cost),
                    item_count=s.item_count,
                )
                for s in row.shipments
            ],
            totals=OrderTotals(
                subtotal=Money(row.subtotal),
                shipping_cost=Money(row.shipping_cost),
                vat_rate=row.vat_rate,
                vatable_amount=Money(row.vatable_amount),
                vat_amount=Money(row.vat_amount),
                pre_total=Money(row.pre_total),
                credit_applied=Money(row.credit_applied),
                final_total=Money(row.final_total),
            ),
            status=OrderStatus(row.status),
            created_at=created_at,
        )
