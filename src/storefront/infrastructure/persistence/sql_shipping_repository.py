"""SQLAlchemy-backed implementation of ShippingRepository."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from storefront.domain.model.shipping import ShippingMethod, SupplierShippingMethod
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.shipping_repository import ShippingRepository
from storefront.infrastructure.persistence.tables import (
    ShippingMethodRow,
    SupplierShippingMethodRow,
)


class SqlShippingRepository(ShippingRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- Global methods -------------------------------------------------------

    def get_method(self, method_id: int) -> ShippingMethod | None:
        row = self._session.get(ShippingMethodRow, method_id)
        return self._method_to_domain(row) if row else None

    def list_methods(self) -> list[ShippingMethod]:
        rows = self._session.scalars(select(ShippingMethodRow).order_by(ShippingMethodRow.id))
        return [self._method_to_domain(row) for row in rows]

    def save_method(self, method: ShippingMethod) -> None:
        self._session.merge(
            ShippingMethodRow(
                id=method.id,
                name=method.name,
                base_price=method.base_price.amount,
                is_active=method.is_active,
                estimated_days=method.estimated_days,
            )
        )
        self._session.flush()

    # --- Supplier links -------------------------------------------------------

    def get_supplier_methods(
        self, supplier_id: int
    ) -> list[tuple[SupplierShippingMethod, ShippingMethod]]:
        stmt = (
            select(SupplierShippingMethodRow, ShippingMethodRow)
            .join(ShippingMethodRow, SupplierShippingMethodRow.method_id == ShippingMethodRow.id)
            .where(SupplierShippingMethodRow.supplier_id == supplier_id)
            .order_by(ShippingMethodRow.id)
        )
        return [
            (self._link_to_domain(link), self._method_to_domain(method))
            for link, method in self._session.execute(stmt)
        ]

    def get_link(self, supplier_id: int, method_id: int) -> SupplierShippingMethod | None:
        row = self._session.get(SupplierShippingMethodRow, (supplier_id, method_id))
        return self._link_to_domain(row) if row else None

    def save_link(self, link: SupplierShippingMethod) -> None:
        self._session.merge(
            SupplierShippingMethodRow(
                supplier_id=link.supplier_id,
                method_id=link.method_id,
                custom_price=link.custom_price.amount if link.custom_price else None,
                is_enabled=link.is_enabled,
                is_default=link.is_default,
            )
        )
        self._session.flush()

    def remove_link(self, supplier_id: int, method_id: int) -> None:
        self._session.execute(
            delete(SupplierShippingMethodRow).where(
                SupplierShippingMethodRow.supplier_id == supplier_id,
                SupplierShippingMethodRow.method_id == method_id,
            )
        )

    def clear_defaults(self, supplier_id: int) -> None:
        self._session.execute(
            update(SupplierShippingMethodRow)
            .where(SupplierShippingMethodRow.supplier_id == supplier_id)
            .values(is_default=False)
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _method_to_domain(row: ShippingMethodRow) -> ShippingMethod:
        return ShippingMethod(
            id=row.id,
            name=row.name,
            base_price=Money(row.base_price),
            is_active=row.is_active,
            estimated_days=row.estimated_days,
        )

    @staticmethod
    def _link_to_domain(row: SupplierShippingMethodRow) -> SupplierShippingMethod:
        return SupplierShippingMethod(
            supplier_id=row.supplier_id,
            method_id=row.method_id,
            is_enabled=row.is_enabled,
            is_default=row.is_default,
            custom_price=Money(row.custom_price) if row.custom_price is not None else None,
        )
