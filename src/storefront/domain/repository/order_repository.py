"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an ID to new ones."""
