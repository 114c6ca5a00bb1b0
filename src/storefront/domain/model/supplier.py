"""Supplier aggregate.

Suppliers are never deleted while products reference them; they are
deactivated instead so historical orders keep a valid reference.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass
class Supplier:

    id: int
    name: str
    is_active: bool = True

    def deactivate(self) -> None:
        if not self.is_active:
            raise ValidationError(f"Supplier {self.name} is already inactive")
        self.is_active = False

    def activate(self) -> None:
        if self.is_active:
            raise ValidationError(f"Supplier {self.name} is already active")
        self.is_active = True
