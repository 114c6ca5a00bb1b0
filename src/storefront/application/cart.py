"""Turns customer input into CartItems priced from the current catalog."""

from __future__ import annotations

from storefront.application.dto import CartItemSpec
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import CartItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository


def build_cart(
    product_repo: ProductRepository,
    specs: list[CartItemSpec],
) -> tuple[list[CartItem], dict[int, Product]]:
    """Resolve each spec to a product and snapshot its price.

    Inactive products are refused here so checkout never sees them.
    """
    if not specs:
        return [], {}

    ids = list(dict.fromkeys(spec.product_id for spec in specs))
    products = {p.id: p for p in product_repo.get_by_ids(ids)}

    items: list[CartItem] = []
    for spec in specs:
        product = products.get(spec.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: {spec.product_id}")
        if not product.is_active:
            raise ValidationError(f"Product '{product.name}' is no longer available")
        items.append(
            CartItem(
                product_id=product.id,
                quantity=Quantity(spec.quantity),
                unit_price=product.price,  # <-- price snapshot
            )
        )
    return items, products
