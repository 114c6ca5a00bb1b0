"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row else None

    def get_by_ids(self, product_ids: list[int]) -> list[Product]:
        if not product_ids:
            return []
        rows = self._session.scalars(
            select(ProductRow).where(ProductRow.id.in_(product_ids))
        )
        return [self._to_domain(row) for row in rows]

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.id))
        return [self._to_domain(row) for row in rows]

    def save(self, product: Product) -> None:
        self._session.merge(self._to_row(product))
        self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(product: Product) -> ProductRow:
        return ProductRow(
            id=product.id,
            name=product.name,
            price=product.price.amount,
            supplier_id=product.supplier_id,
            is_active=product.is_active,
        )

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money(row.price),
            supplier_id=row.supplier_id,
            is_active=row.is_active,
        )
