"""Abstract repository for the shipping catalog.

Covers both the global ShippingMethod rows and the per-supplier
SupplierShippingMethod links.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.shipping import ShippingMethod, SupplierShippingMethod


class ShippingRepository(ABC):

    @abstractmethod
    def get_method(self, method_id: int) -> ShippingMethod | None:
        """Return a global shipping method, or None if it does not exist."""

    @abstractmethod
    def list_methods(self) -> list[ShippingMethod]:
        """Return every global shipping method."""

    @abstractmethod
    def save_method(self, method: ShippingMethod) -> None:
        """Persist a new or updated shipping method."""

    @abstractmethod
    def get_supplier_methods(
        self, supplier_id: int
    ) -> list[tuple[SupplierShippingMethod, ShippingMethod]]:
        """Return every link for a supplier joined to its method.

        Ordered by method ID; the order is what "first applicable"
        means at checkout.
        """

    @abstractmethod
    def get_link(self, supplier_id: int, method_id: int) -> SupplierShippingMethod | None:
        """Return the link for one (supplier, method) pair, or None."""

    @abstractmethod
    def save_link(self, link: SupplierShippingMethod) -> None:
        """Persist a new or updated link."""

    @abstractmethod
    def remove_link(self, supplier_id: int, method_id: int) -> None:
        """Delete the link for one (supplier, method) pair, if present."""

    @abstractmethod
    def clear_defaults(self, supplier_id: int) -> None:
        """Unset ``is_default`` on every link of a supplier."""
