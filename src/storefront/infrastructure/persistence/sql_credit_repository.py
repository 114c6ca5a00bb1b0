"""SQLAlchemy-backed implementation of CreditRepository.

Balance rows are locked with ``SELECT ... FOR UPDATE`` and written with a
version check, so a writer holding an outdated copy fails loudly instead
of overwriting a newer balance.
"""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import ConcurrencyError
from storefront.domain.model.credit import (
    CreditBalance,
    CreditTransaction,
    CreditTransactionType,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.credit_repository import CreditRepository
from storefront.infrastructure.persistence.tables import (
    CreditBalanceRow,
    CreditTransactionRow,
)


class SqlCreditRepository(CreditRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- Balance --------------------------------------------------------------

    def get_balance(self, user_id: int) -> CreditBalance | None:
        stmt = (
            select(CreditBalanceRow)
            .where(CreditBalanceRow.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        row = self._session.scalars(stmt).one_or_none()
        return self._balance_to_domain(row) if row else None

    def get_balance_for_update(self, user_id: int) -> CreditBalance | None:
        stmt = (
            select(CreditBalanceRow)
            .where(CreditBalanceRow.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        row = self._session.scalars(stmt).one_or_none()
        return self._balance_to_domain(row) if row else None

    def save_balance(self, balance: CreditBalance) -> None:
        if balance.version == 0:
            self._insert_balance(balance)
        else:
            self._update_balance(balance)
        balance.version += 1

    def _insert_balance(self, balance: CreditBalance) -> None:
        self._session.add(
            CreditBalanceRow(
                user_id=balance.user_id,
                total_credits=balance.total_credits.amount,
                available_credits=balance.available_credits.amount,
                version=1,
            )
        )
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise ConcurrencyError(
                f"Credit balance for user {balance.user_id} was created concurrently"
            ) from exc

    def _update_balance(self, balance: CreditBalance) -> None:
        result = self._session.execute(
            update(CreditBalanceRow)
            .where(
                CreditBalanceRow.user_id == balance.user_id,
                CreditBalanceRow.version == balance.version,
            )
            .values(
                total_credits=balance.total_credits.amount,
                available_credits=balance.available_credits.amount,
                version=balance.version + 1,
            )
        )
        if result.rowcount != 1:
            raise ConcurrencyError(
                f"Credit balance for user {balance.user_id} changed during update"
            )

    # --- Ledger ---------------------------------------------------------------

    def add_transaction(self, transaction: CreditTransaction) -> None:
        row = CreditTransactionRow(
            user_id=transaction.user_id,
            order_id=transaction.order_id,
            type=transaction.type.value,
            amount=transaction.amount.amount,
            description=transaction.description,
            created_at=transaction.created_at,
        )
        self._session.add(row)
        self._session.flush()
        transaction.id = row.id

    def list_transactions(self, user_id: int) -> list[CreditTransaction]:
        rows = self._session.scalars(
            select(CreditTransactionRow)
            .where(CreditTransactionRow.user_id == user_id)
            .order_by(CreditTransactionRow.id)
        )
        return [self._transaction_to_domain(row) for row in rows]

    def list_order_transactions(self, user_id: int, order_id: int) -> list[CreditTransaction]:
        rows = self._session.scalars(
            select(CreditTransactionRow)
            .where(
                CreditTransactionRow.user_id == user_id,
                CreditTransactionRow.order_id == order_id,
            )
            .order_by(CreditTransactionRow.id)
        )
        return [self._transaction_to_domain(row) for row in rows]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _balance_to_domain(row: CreditBalanceRow) -> CreditBalance:
        return CreditBalance(
            user_id=row.user_id,
            total_credits=Money(row.total_credits),
            available_credits=Money(row.available_credits),
            version=row.version,
        )

    @staticmethod
    def _transaction_to_domain(row: CreditTransactionRow) -> CreditTransaction:
        created_at = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return CreditTransaction(
            id=row.id,
            user_id=row.user_id,
            order_id=row.order_id,
            type=CreditTransactionType(row.type),
            amount=Money(row.amount),
            description=row.description,
            created_at=created_at,
        )
