"""Application services: order queries (single order and per-user history)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


class ListOrdersHandler:
    """A user's order history, newest first."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> list[OrderDTO]:
        with self._uow:
            orders = self._uow.orders.list_for_user(user_id)
        return [order_to_dto(order) for order in orders]
