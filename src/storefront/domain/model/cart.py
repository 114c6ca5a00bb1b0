"""Cart line items as seen by checkout."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartItem:
    """One line of a cart.

    There is deliberately no supplier field: the supplier is looked up
    through the product at checkout time.
    """

    product_id: int
    quantity: Quantity
    unit_price: Money  # snapshot taken when the item was added

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value
