"""Application service: Cancel Order use case.

Cancelling gives back any store credit the order consumed.  The status
change and the refund commit together or not at all.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import DuplicateRefundError, EntityNotFoundError
from storefront.domain.model.credit import CreditTransactionType
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.credit_ledger import CreditLedger, CreditOutcomeStatus

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.cancel()
            self._uow.orders.save(order)

            if self._credit_was_charged(order.user_id, order_id):
                outcome = CreditLedger(self._uow).refund_credit(
                    order.user_id, order_id, order.totals.credit_applied
                )
                if outcome.status == CreditOutcomeStatus.DUPLICATE_REFUND:
                    raise DuplicateRefundError(outcome.message)

        logger.info("Order #%s cancelled", order_id)
        return order_to_dto(order)

    def _credit_was_charged(self, user_id: int, order_id: int) -> bool:
        rows = self._uow.credits.list_order_transactions(user_id, order_id)
        return any(row.type == CreditTransactionType.USED for row in rows)
