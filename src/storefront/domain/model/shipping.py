"""Shipping catalog: global methods and their per-supplier configuration.

A ShippingMethod is a carrier/speed offered store-wide.  Whether a
supplier can actually ship with it is decided by a SupplierShippingMethod
link, which may also override the price for that supplier.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class ShippingMethod:
    """A globally available shipping option.

    Inactive methods are unusable regardless of supplier linkage.
    """

    id: int
    name: str
    base_price: Money
    is_active: bool = True
    estimated_days: str | None = None

    def deactivate(self) -> None:
        if not self.is_active:
            raise ValidationError(f"Shipping method {self.name} is already inactive")
        self.is_active = False


@dataclass
class SupplierShippingMethod:
    """Link between one supplier and one shipping method.

    ``(supplier_id, method_id)`` is unique.  At most one link per supplier
    carries ``is_default``; the repository clears the others before setting
    a new default.
    """

    supplier_id: int
    method_id: int
    is_enabled: bool = True
    is_default: bool = False
    custom_price: Money | None = None

    def update(
        self,
        is_enabled: bool | None = None,
        custom_price: Money | None = None,
        clear_custom_price: bool = False,
    ) -> None:
        if custom_price is not None and clear_custom_price:
            raise ValidationError("Cannot both set and clear the custom price")
        if is_enabled is not None:
            self.is_enabled = is_enabled
        if custom_price is not None:
            self.custom_price = custom_price
        if clear_custom_price:
            self.custom_price = None


@dataclass(frozen=True)
class ApplicableShippingMethod:
    """A method a supplier can ship with right now, priced for that supplier."""

    method: ShippingMethod
    is_default: bool
    custom_price: Money | None = None

    @property
    def method_id(self) -> int:
        return self.method.id

    @property
    def effective_price(self) -> Money:
        if self.custom_price is not None:
            return self.custom_price
        return self.method.base_price
