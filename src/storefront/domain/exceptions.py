"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientCreditError(DomainException):
    """A credit debit asked for more than the available balance."""

    def __init__(self, available, requested) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient credit: you only have {available} available "
            f"({requested} requested)"
        )


class DuplicateRefundError(DomainException):
    """Credit for this order has already been refunded."""


class CheckoutBlockedError(DomainException):
    """Checkout cannot proceed; carries every problem found, not just the first."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ConcurrencyError(DomainException):
    """A row changed underneath a read-modify-write."""
