"""SQLAlchemy-backed implementation of SupplierRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.supplier import Supplier
from storefront.domain.repository.supplier_repository import SupplierRepository
from storefront.infrastructure.persistence.tables import SupplierRow


class SqlSupplierRepository(SupplierRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, supplier_id: int) -> Supplier | None:
        row = self._session.get(SupplierRow, supplier_id)
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Supplier]:
        rows = self._session.scalars(select(SupplierRow).order_by(SupplierRow.id))
        return [self._to_domain(row) for row in rows]

    def save(self, supplier: Supplier) -> None:
        self._session.merge(
            SupplierRow(id=supplier.id, name=supplier.name, is_active=supplier.is_active)
        )
        self._session.flush()

    @staticmethod
    def _to_domain(row: SupplierRow) -> Supplier:
        return Supplier(id=row.id, name=row.name, is_active=row.is_active)
