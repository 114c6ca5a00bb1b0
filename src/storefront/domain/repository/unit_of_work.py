"""Unit of Work: one transaction spanning several repositories.

Checkout has to create the order row and debit credit atomically, so
handlers work through a UnitOfWork rather than loose repositories.

Entering is re-entrant: a service that opens ``with uow:`` while a
handler already holds the transaction simply joins it, and only the
outermost block commits or rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.credit_repository import CreditRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.shipping_repository import ShippingRepository
from storefront.domain.repository.supplier_repository import SupplierRepository


class UnitOfWork(ABC):

    products: ProductRepository
    suppliers: SupplierRepository
    shipping: ShippingRepository
    credits: CreditRepository
    orders: OrderRepository

    _depth: int = 0

    def __enter__(self) -> UnitOfWork:
        if self._depth == 0:
            self._begin()
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._depth -= 1
        if self._depth > 0:
            return
        try:
            if exc_type is None:
                self._commit()
            else:
                self._rollback()
        finally:
            self._end()

    @abstractmethod
    def _begin(self) -> None:
        """Start a transaction and bind the repositories to it."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every change since ``_begin`` durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every change since ``_begin``."""

    def _end(self) -> None:
        """Release resources held for the transaction."""
