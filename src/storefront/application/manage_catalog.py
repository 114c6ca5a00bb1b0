"""Application services: suppliers and products.

IDs are assigned as max(existing) + 1, the same way for every catalog
entity; catalog administration is single-user so this does not race.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.supplier import Supplier
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddSupplierHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str) -> Supplier:
        if not name or not name.strip():
            raise ValidationError("Supplier name is required")

        with self._uow:
            existing = self._uow.suppliers.list_all()
            if any(s.name.lower() == name.strip().lower() for s in existing):
                raise ValidationError(f"Supplier '{name}' already exists")
            next_id = max((s.id for s in existing), default=0) + 1
            supplier = Supplier(id=next_id, name=name.strip())
            self._uow.suppliers.save(supplier)
        return supplier


class DeactivateSupplierHandler:
    """Soft delete: the row stays so past orders keep their reference."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, supplier_id: int) -> Supplier:
        with self._uow:
            supplier = self._uow.suppliers.get_by_id(supplier_id)
            if supplier is None:
                raise EntityNotFoundError(f"Supplier {supplier_id} not found")
            supplier.deactivate()
            self._uow.suppliers.save(supplier)
        logger.info("Supplier %s (%s) deactivated", supplier.id, supplier.name)
        return supplier


class ActivateSupplierHandler:
    """Bring a deactivated supplier back into checkout."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, supplier_id: int) -> Supplier:
        with self._uow:
            supplier = self._uow.suppliers.get_by_id(supplier_id)
            if supplier is None:
                raise EntityNotFoundError(f"Supplier {supplier_id} not found")
            supplier.activate()
            self._uow.suppliers.save(supplier)
        logger.info("Supplier %s (%s) reactivated", supplier.id, supplier.name)
        return supplier


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, price: str, supplier_id: int | None = None) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        with self._uow:
            if supplier_id is not None and self._uow.suppliers.get_by_id(supplier_id) is None:
                raise EntityNotFoundError(f"Supplier {supplier_id} not found")

            existing = self._uow.products.list_all()
            if any(p.name.lower() == name.strip().lower() for p in existing):
                raise ValidationError(f"Product '{name}' already exists")
            next_id = max((p.id for p in existing), default=0) + 1

            product = Product(
                id=next_id,
                name=name.strip(),
                price=Money.of(price),
                supplier_id=supplier_id,
            )
            self._uow.products.save(product)
        return product


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        new_price: str | None = None,
        supplier_id: int | None = None,
    ) -> Product:
        """Change a product's price and/or supplier.

        Existing orders are unaffected; open carts regroup at their
        next checkout.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            if new_price is not None:
                product.update_price(Money.of(new_price))
            if supplier_id is not None:
                if self._uow.suppliers.get_by_id(supplier_id) is None:
                    raise EntityNotFoundError(f"Supplier {supplier_id} not found")
                product.assign_supplier(supplier_id)

            self._uow.products.save(product)
        return product
