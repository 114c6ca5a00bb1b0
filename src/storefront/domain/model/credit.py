"""Store credit: per-user balance aggregate and its append-only ledger.

Invariants:
- ``0 <= available_credits <= total_credits``
- earned - used + refunded over a user's transactions equals
  ``available_credits``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InsufficientCreditError, ValidationError
from storefront.domain.model.value_objects import Money, round2


class CreditTransactionType(Enum):
    EARNED = "earned"
    USED = "used"
    REFUNDED = "refunded"


@dataclass
class CreditBalance:
    """Aggregate root for one user's credit.

    ``version`` increments on every save so a concurrent writer that read
    an older row can be detected.
    """

    user_id: int
    total_credits: Money = field(default_factory=Money.zero)
    available_credits: Money = field(default_factory=Money.zero)
    version: int = 0

    def earn(self, amount: Money) -> None:
        self._assert_positive(amount)
        self.total_credits = self.total_credits + amount
        self.available_credits = self.available_credits + amount

    def debit(self, amount: Money) -> None:
        """Spend credit; never clamps to a partial amount."""
        self._assert_positive(amount)
        if amount > self.available_credits:
            raise InsufficientCreditError(self.available_credits, amount)
        self.available_credits = self.available_credits - amount

    def restore(self, amount: Money) -> None:
        """Give back credit previously debited (order cancellation)."""
        self._assert_positive(amount)
        restored = self.available_credits + amount
        if restored > self.total_credits:
            raise ValidationError(
                f"Refund of {amount} would raise available credit above "
                f"lifetime total {self.total_credits}"
            )
        self.available_credits = restored

    @staticmethod
    def _assert_positive(amount: Money) -> None:
        if amount.is_zero:
            raise ValidationError("Credit amount must be positive")
        if amount.amount != round2(amount.amount):
            raise ValidationError(
                f"Credit amount cannot include fractions of a cent, got {amount.amount}"
            )


@dataclass
class CreditTransaction:
    """A single ledger row. Never updated or deleted once written."""

    id: int | None
    user_id: int
    type: CreditTransactionType
    amount: Money
    description: str = ""
    order_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
