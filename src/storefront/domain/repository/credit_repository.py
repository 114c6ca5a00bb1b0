"""Abstract repository for CreditBalance and its transaction ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.credit import CreditBalance, CreditTransaction


class CreditRepository(ABC):

    @abstractmethod
    def get_balance(self, user_id: int) -> CreditBalance | None:
        """Return the balance row for a user, or None if there is none."""

    @abstractmethod
    def get_balance_for_update(self, user_id: int) -> CreditBalance | None:
        """Like ``get_balance`` but locks the row until the transaction ends."""

    @abstractmethod
    def save_balance(self, balance: CreditBalance) -> None:
        """Persist a balance and bump its version.

        Raises ConcurrencyError if the stored version no longer matches
        the one that was read.
        """

    @abstractmethod
    def add_transaction(self, transaction: CreditTransaction) -> None:
        """Append a ledger row and assign its ID."""

    @abstractmethod
    def list_transactions(self, user_id: int) -> list[CreditTransaction]:
        """Return a user's ledger rows, oldest first."""

    @abstractmethod
    def list_order_transactions(self, user_id: int, order_id: int) -> list[CreditTransaction]:
        """Return a user's ledger rows that reference one order."""
