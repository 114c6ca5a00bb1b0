"""SQLAlchemy implementation of UnitOfWork: one Session per transaction."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_credit_repository import SqlCreditRepository
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from storefront.infrastructure.persistence.sql_product_repository import SqlProductRepository
from storefront.infrastructure.persistence.sql_shipping_repository import SqlShippingRepository
from storefront.infrastructure.persistence.sql_supplier_repository import SqlSupplierRepository


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Not thread-safe; give each thread (or request) its own instance."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def _begin(self) -> None:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.suppliers = SqlSupplierRepository(self._session)
        self.shipping = SqlShippingRepository(self._session)
        self.credits = SqlCreditRepository(self._session)
        self.orders = SqlOrderRepository(self._session)

    def _commit(self) -> None:
        self._session.commit()  # type: ignore[union-attr]

    def _rollback(self) -> None:
        self._session.rollback()  # type: ignore[union-attr]

    def _end(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
