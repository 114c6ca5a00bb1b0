"""Application services: the shipping catalog and per-supplier configuration.

A supplier may legitimately end up with nothing enabled; that is not
prevented here and shows up as a checkout error instead.
"""

from __future__ import annotations

import logging

from storefront.application.dto import SupplierShippingLineDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.shipping import (
    ApplicableShippingMethod,
    ShippingMethod,
    SupplierShippingMethod,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddShippingMethodHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, base_price: str, estimated_days: str | None = None) -> ShippingMethod:
        if not name or not name.strip():
            raise ValidationError("Shipping method name is required")

        with self._uow:
            existing = self._uow.shipping.list_methods()
            next_id = max((m.id for m in existing), default=0) + 1
            method = ShippingMethod(
                id=next_id,
                name=name.strip(),
                base_price=Money.of(base_price),
                estimated_days=estimated_days,
            )
            self._uow.shipping.save_method(method)
        return method


class AssignShippingMethodHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        supplier_id: int,
        method_id: int,
        custom_price: str | None = None,
        is_default: bool = False,
    ) -> SupplierShippingMethod:
        with self._uow:
            self._require_pair(supplier_id, method_id)
            if self._uow.shipping.get_link(supplier_id, method_id) is not None:
                raise ValidationError(
                    f"Shipping method {method_id} is already assigned to supplier {supplier_id}"
                )

            if is_default:
                self._uow.shipping.clear_defaults(supplier_id)
            link = SupplierShippingMethod(
                supplier_id=supplier_id,
                method_id=method_id,
                is_default=is_default,
                custom_price=Money.of(custom_price) if custom_price is not None else None,
            )
            self._uow.shipping.save_link(link)
        return link

    def _require_pair(self, supplier_id: int, method_id: int) -> None:
        if self._uow.suppliers.get_by_id(supplier_id) is None:
            raise EntityNotFoundError(f"Supplier {supplier_id} not found")
        if self._uow.shipping.get_method(method_id) is None:
            raise EntityNotFoundError(f"Shipping method {method_id} not found")


class UpdateSupplierShippingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        supplier_id: int,
        method_id: int,
        is_enabled: bool | None = None,
        custom_price: str | None = None,
        clear_custom_price: bool = False,
    ) -> SupplierShippingMethod:
        with self._uow:
            link = _require_link(self._uow, supplier_id, method_id)
            link.update(
                is_enabled=is_enabled,
                custom_price=Money.of(custom_price) if custom_price is not None else None,
                clear_custom_price=clear_custom_price,
            )
            self._uow.shipping.save_link(link)
        return link


class SetDefaultShippingMethodHandler:
    """Make one link the supplier's default.

    Clears every default for the supplier, then sets the chosen one,
    inside a single transaction; that is what keeps "at most one default"
    true without a database constraint.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, supplier_id: int, method_id: int) -> SupplierShippingMethod:
        with self._uow:
            link = _require_link(self._uow, supplier_id, method_id)
            if not link.is_enabled:
                raise ValidationError(
                    f"Shipping method {method_id} is disabled for supplier {supplier_id}"
                )
            self._uow.shipping.clear_defaults(supplier_id)
            link.is_default = True
            self._uow.shipping.save_link(link)
        logger.info("Supplier %s default shipping method set to %s", supplier_id, method_id)
        return link


class RemoveSupplierShippingHandler:
    """Stop offering a method for one supplier.

    Removing the default leaves the supplier without one; checkout then
    falls back to the first applicable method.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, supplier_id: int, method_id: int) -> SupplierShippingMethod:
        with self._uow:
            link = _require_link(self._uow, supplier_id, method_id)
            self._uow.shipping.remove_link(supplier_id, method_id)
        logger.info("Shipping method %s removed from supplier %s", method_id, supplier_id)
        return link


class DeactivateShippingMethodHandler:
    """Withdraw a method store-wide; every supplier link to it stops applying."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, method_id: int) -> ShippingMethod:
        with self._uow:
            method = self._uow.shipping.get_method(method_id)
            if method is None:
                raise EntityNotFoundError(f"Shipping method {method_id} not found")
            method.deactivate()
            self._uow.shipping.save_method(method)
        logger.info("Shipping method %s (%s) deactivated", method.id, method.name)
        return method


class ListSupplierShippingHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, supplier_id: int) -> list[SupplierShippingLineDTO]:
        with self._uow:
            if self._uow.suppliers.get_by_id(supplier_id) is None:
                raise EntityNotFoundError(f"Supplier {supplier_id} not found")
            rows = self._uow.shipping.get_supplier_methods(supplier_id)

        lines: list[SupplierShippingLineDTO] = []
        for link, method in rows:
            priced = ApplicableShippingMethod(method, link.is_default, link.custom_price)
            lines.append(
                SupplierShippingLineDTO(
                    method_id=method.id,
                    method_name=method.name,
                    base_price=str(method.base_price),
                    effective_price=str(priced.effective_price),
                    is_enabled=link.is_enabled,
                    is_default=link.is_default,
                    method_active=method.is_active,
                )
            )
        return lines


def _require_link(uow: UnitOfWork, supplier_id: int, method_id: int) -> SupplierShippingMethod:
    link = uow.shipping.get_link(supplier_id, method_id)
    if link is None:
        raise EntityNotFoundError(
            f"Shipping method {method_id} is not assigned to supplier {supplier_id}"
        )
    return link
