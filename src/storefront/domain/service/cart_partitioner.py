"""Domain service: Cart Partitioner.

Splits a cart into supplier groups.  The supplier of a cart item is
never stored on the item; it is read from the product at the moment of
partitioning, so re-assigning a product moves open carts with it.

Partitioning fails softly: an item that cannot be attributed to a usable
supplier is reported and left out, and the rest of the cart is still
grouped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.cart import CartItem
from storefront.domain.model.supplier import Supplier
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.supplier_repository import SupplierRepository


@dataclass
class CartPartition:
    """Result of partitioning.

    ``groups`` preserves the order in which suppliers were first seen
    while scanning the cart; invoice lines follow that order.
    """

    groups: dict[int, list[CartItem]] = field(default_factory=dict)
    suppliers: dict[int, Supplier] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def supplier_ids(self) -> list[int]:
        return list(self.groups)


class CartPartitioner:

    def __init__(
        self,
        product_repo: ProductRepository,
        supplier_repo: SupplierRepository,
    ) -> None:
        self._product_repo = product_repo
        self._supplier_repo = supplier_repo

    def partition(self, items: list[CartItem]) -> CartPartition:
        result = CartPartition()
        if not items:
            return result

        product_ids = list(dict.fromkeys(item.product_id for item in items))
        products = {p.id: p for p in self._product_repo.get_by_ids(product_ids)}
        rejected: set[int] = set()

        for item in items:
            product = products.get(item.product_id)
            if product is None or product.supplier_id is None:
                result.errors.append(f"Product {item.product_id} has no supplier assigned")
                continue

            supplier_id = product.supplier_id
            if supplier_id in rejected:
                continue

            if supplier_id not in result.groups:
                supplier = self._supplier_repo.get_by_id(supplier_id)
                if supplier is None:
                    result.errors.append(f"Supplier {supplier_id} not found")
                    rejected.add(supplier_id)
                    continue
                if not supplier.is_active:
                    result.errors.append(f"Supplier {supplier.name} is not currently active")
                    rejected.add(supplier_id)
                    continue
                result.groups[supplier_id] = []
                result.suppliers[supplier_id] = supplier

            result.groups[supplier_id].append(item)

        return result
