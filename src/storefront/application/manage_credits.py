"""Application services: store credit administration and statements."""

from __future__ import annotations

from storefront.application.dto import CreditSummaryDTO, CreditTransactionDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.credit_ledger import CreditLedger


class AddCreditsHandler:
    """Admin credit adjustment, e.g. for an item the supplier could not deliver."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, amount: str, description: str | None = None) -> CreditSummaryDTO:
        credit = Money.of(amount)
        if credit.is_zero:
            raise ValidationError("Credit amount must be positive")
        CreditLedger(self._uow).earn_credit(
            user_id, credit, description or "Admin credit adjustment"
        )
        return ShowCreditsHandler(self._uow).handle(user_id)


class ShowCreditsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> CreditSummaryDTO:
        ledger = CreditLedger(self._uow)
        with self._uow:
            balance = self._uow.credits.get_balance(user_id)
            history = ledger.history(user_id)
            reconciliation = ledger.reconcile(user_id)

        total = balance.total_credits if balance else Money.zero()
        available = balance.available_credits if balance else Money.zero()
        return CreditSummaryDTO(
            user_id=user_id,
            total_credits=str(total),
            available_credits=str(available),
            transactions=[
                CreditTransactionDTO(
                    type=row.type.value,
                    amount=str(row.amount),
                    description=row.description,
                    order_id=row.order_id,
                    created_at=row.created_at.strftime("%Y-%m-%d %H:%M UTC"),
                )
                for row in history
            ],
            reconciled=reconciliation.balanced,
        )
