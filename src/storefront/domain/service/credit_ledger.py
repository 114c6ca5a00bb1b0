"""Domain service: Credit Ledger.

Every change to a user's CreditBalance goes through here, and every
change appends a CreditTransaction.  Each operation is one
read-modify-write on the balance row, done inside the unit of work with
the row locked, so two checkouts spending the same credit cannot both
pass the availability check.

When called from a handler that already holds the unit of work, the
ledger joins that transaction; a later failure in the handler rolls the
credit movement back together with everything else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from storefront.domain.exceptions import InsufficientCreditError, ValidationError
from storefront.domain.model.credit import (
    CreditBalance,
    CreditTransaction,
    CreditTransactionType,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreditOutcomeStatus(Enum):
    APPLIED = "applied"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    DUPLICATE_REFUND = "duplicate_refund"


@dataclass(frozen=True)
class CreditOutcome:
    """Structured result of a ledger operation.

    ``amount`` is what actually moved (zero unless APPLIED) and
    ``available`` is the balance after the operation.
    """

    status: CreditOutcomeStatus
    amount: Money
    available: Money
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == CreditOutcomeStatus.APPLIED


@dataclass(frozen=True)
class CreditReconciliation:
    """Ledger replay next to the stored balance.

    ``ledger_total`` is a plain Decimal: a corrupted ledger can sum below
    zero, which Money cannot hold.
    """

    user_id: int
    ledger_total: Decimal
    available: Money

    @property
    def balanced(self) -> bool:
        return self.ledger_total == self.available.amount


class CreditLedger:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    # --- Queries --------------------------------------------------------------

    def get_balance(self, user_id: int) -> Money:
        """Spendable credit; a user with no balance row has zero."""
        with self._uow:
            balance = self._uow.credits.get_balance(user_id)
            return balance.available_credits if balance else Money.zero()

    def history(self, user_id: int) -> list[CreditTransaction]:
        """Ledger rows, newest first."""
        with self._uow:
            rows = self._uow.credits.list_transactions(user_id)
        return list(reversed(rows))

    def reconcile(self, user_id: int) -> CreditReconciliation:
        """Replay the ledger and compare it with the stored balance."""
        with self._uow:
            rows = self._uow.credits.list_transactions(user_id)
            balance = self._uow.credits.get_balance(user_id)

        total = Decimal("0.00")
        for row in rows:
            if row.type == CreditTransactionType.USED:
                total -= row.amount.amount
            else:
                total += row.amount.amount

        available = balance.available_credits if balance else Money.zero()
        reconciliation = CreditReconciliation(user_id, total, available)
        if not reconciliation.balanced:
            logger.warning(
                "Credit ledger for user %s sums to %s but %s is available",
                user_id, total, available,
            )
        return reconciliation

    # --- Mutations ------------------------------------------------------------

    def apply_credit(self, user_id: int, order_id: int, amount: Money) -> CreditOutcome:
        """Debit exactly *amount* for an order, or nothing at all."""
        with self._uow:
            balance = self._locked_balance(user_id)
            try:
                balance.debit(amount)
            except InsufficientCreditError as exc:
                logger.warning(
                    "Credit refused for user %s on order %s: %s requested, %s available",
                    user_id, order_id, amount, exc.available,
                )
                return CreditOutcome(
                    CreditOutcomeStatus.INSUFFICIENT_BALANCE,
                    amount=Money.zero(),
                    available=exc.available,
                    message=f"You only have {exc.available} available",
                )

            self._uow.credits.save_balance(balance)
            self._uow.credits.add_transaction(
                CreditTransaction(
                    id=None,
                    user_id=user_id,
                    order_id=order_id,
                    type=CreditTransactionType.USED,
                    amount=amount,
                    description=f"Credit applied to order #{order_id}",
                )
            )

        logger.info("Applied %s credit for user %s on order %s", amount, user_id, order_id)
        return CreditOutcome(
            CreditOutcomeStatus.APPLIED, amount=amount, available=balance.available_credits
        )

    def refund_credit(self, user_id: int, order_id: int, amount: Money) -> CreditOutcome:
        """Return credit spent on an order. A second refund is rejected."""
        with self._uow:
            balance = self._locked_balance(user_id)
            rows = self._uow.credits.list_order_transactions(user_id, order_id)

            if any(row.type == CreditTransactionType.REFUNDED for row in rows):
                logger.warning("Duplicate credit refund for user %s on order %s", user_id, order_id)
                return CreditOutcome(
                    CreditOutcomeStatus.DUPLICATE_REFUND,
                    amount=Money.zero(),
                    available=balance.available_credits,
                    message=f"Credit for order #{order_id} has already been refunded",
                )

            used = Money.zero()
            for row in rows:
                if row.type == CreditTransactionType.USED:
                    used = used + row.amount
            if amount > used:
                raise ValidationError(
                    f"Refund of {amount} exceeds {used} credit applied to order #{order_id}"
                )

            balance.restore(amount)
            self._uow.credits.save_balance(balance)
            self._uow.credits.add_transaction(
                CreditTransaction(
                    id=None,
                    user_id=user_id,
                    order_id=order_id,
                    type=CreditTransactionType.REFUNDED,
                    amount=amount,
                    description=f"Credit refunded for cancelled order #{order_id}",
                )
            )

        logger.info("Refunded %s credit for user %s on order %s", amount, user_id, order_id)
        return CreditOutcome(
            CreditOutcomeStatus.APPLIED, amount=amount, available=balance.available_credits
        )

    def earn_credit(self, user_id: int, amount: Money, description: str) -> CreditOutcome:
        with self._uow:
            balance = self._locked_balance(user_id)
            balance.earn(amount)
            self._uow.credits.save_balance(balance)
            self._uow.credits.add_transaction(
                CreditTransaction(
                    id=None,
                    user_id=user_id,
                    type=CreditTransactionType.EARNED,
                    amount=amount,
                    description=description,
                )
            )

        logger.info("User %s earned %s credit: %s", user_id, amount, description)
        return CreditOutcome(
            CreditOutcomeStatus.APPLIED, amount=amount, available=balance.available_credits
        )

    # --- Internal helpers -----------------------------------------------------

    def _locked_balance(self, user_id: int) -> CreditBalance:
        balance = self._uow.credits.get_balance_for_update(user_id)
        if balance is None:
            return CreditBalance(user_id=user_id)
        return balance
