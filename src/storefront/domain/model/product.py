"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products move between suppliers, products are retired.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``supplier_id`` is nullable in storage.  A product without a supplier
    is a data-integrity defect that checkout reports rather than hides.
    """

    id: int
    name: str
    price: Money
    supplier_id: int | None = None
    is_active: bool = True

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def assign_supplier(self, supplier_id: int) -> None:
        """Move the product to another supplier.

        Open carts pick this up at their next checkout, since cart items
        never store the supplier themselves.
        """
        self.supplier_id = supplier_id
