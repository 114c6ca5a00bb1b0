"""Application service: Quote Shipping use case (query).

Shows the customer how a cart splits across suppliers, which methods
each supplier offers and what shipping will cost, without writing
anything.
"""

from __future__ import annotations

from storefront.application.cart import build_cart
from storefront.application.dto import (
    CartItemSpec,
    ShippingGroupDTO,
    ShippingLineDTO,
    ShippingOptionDTO,
    ShippingQuoteDTO,
)
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.cart_partitioner import CartPartitioner
from storefront.domain.service.shipping_aggregator import (
    ShippingAggregation,
    ShippingAggregator,
)


class QuoteShippingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        item_specs: list[CartItemSpec],
        method_selections: dict[int, int] | None = None,
    ) -> ShippingQuoteDTO:
        with self._uow:
            cart, _ = build_cart(self._uow.products, item_specs)
            aggregator = ShippingAggregator(
                CartPartitioner(self._uow.products, self._uow.suppliers),
                self._uow.shipping,
                self._uow.suppliers,
            )
            aggregation = aggregator.aggregate(cart, method_selections or {})
        return self._to_dto(aggregation)

    @staticmethod
    def _to_dto(aggregation: ShippingAggregation) -> ShippingQuoteDTO:
        return ShippingQuoteDTO(
            groups=[
                ShippingGroupDTO(
                    supplier_id=group.supplier_id,
                    supplier_name=group.supplier.name,
                    item_count=group.item_count,
                    options=[
                        ShippingOptionDTO(
                            method_id=option.method_id,
                            method_name=option.method.name,
                            price=str(option.effective_price),
                            is_default=option.is_default,
                        )
                        for option in group.applicable_methods
                    ],
                    selected_method_id=group.selected.method_id if group.selected else None,
                )
                for group in aggregation.groups
            ],
            breakdown=[
                ShippingLineDTO(
                    supplier_id=line.supplier_id,
                    supplier_name=line.supplier_name,
                    method_id=line.method_id,
                    method_name=line.method_name,
                    cost=str(line.cost),
                    item_count=line.item_count,
                )
                for line in aggregation.breakdown
            ],
            total_cost=str(aggregation.total_cost),
            errors=list(aggregation.errors),
        )
