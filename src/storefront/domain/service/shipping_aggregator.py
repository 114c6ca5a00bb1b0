"""Domain service: Shipping Aggregator.

For a cart that spans several suppliers, picks one shipping method per
supplier group and adds up one charge per group.  Shipping is charged
per shipment, so the number of items inside a group does not change
its cost.

Problems a customer can fix (a product without a supplier, a supplier
with nothing enabled, a selection that is not offered) are collected as
messages and returned next to the partial result, so checkout can show
all of them at once.  References to rows that do not exist at all are
programming or concurrency errors and raise EntityNotFoundError.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartItem
from storefront.domain.model.shipping import ApplicableShippingMethod
from storefront.domain.model.supplier import Supplier
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.shipping_repository import ShippingRepository
from storefront.domain.repository.supplier_repository import SupplierRepository
from storefront.domain.service.cart_partitioner import CartPartitioner


@dataclass(frozen=True)
class MethodSelection:
    """Outcome of choosing a method for one supplier group."""

    supplier_id: int
    method: ApplicableShippingMethod | None
    error: str | None = None

    @property
    def resolved(self) -> bool:
        return self.method is not None


@dataclass
class ShippingGroupResult:
    """One supplier's share of the cart. Built per checkout attempt."""

    supplier: Supplier
    items: list[CartItem]
    applicable_methods: list[ApplicableShippingMethod]
    selected: ApplicableShippingMethod | None = None

    @property
    def supplier_id(self) -> int:
        return self.supplier.id

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def cost(self) -> Money:
        if self.selected is None:
            return Money.zero()
        return self.selected.effective_price


@dataclass(frozen=True)
class ShippingBreakdownLine:
    supplier_id: int
    supplier_name: str
    method_id: int
    method_name: str
    cost: Money
    item_count: int


@dataclass
class ShippingAggregation:
    groups: list[ShippingGroupResult] = field(default_factory=list)
    breakdown: list[ShippingBreakdownLine] = field(default_factory=list)
    total_cost: Money = field(default_factory=Money.zero)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def selections(self) -> dict[int, int]:
        """Supplier ID -> method ID for every group that resolved."""
        return {line.supplier_id: line.method_id for line in self.breakdown}


@dataclass(frozen=True)
class SelectionValidation:
    valid: bool
    errors: list[str]


class ShippingAggregator:

    def __init__(
        self,
        partitioner: CartPartitioner,
        shipping_repo: ShippingRepository,
        supplier_repo: SupplierRepository,
    ) -> None:
        self._partitioner = partitioner
        self._shipping_repo = shipping_repo
        self._supplier_repo = supplier_repo

    def resolve_applicable_methods(self, supplier_id: int) -> list[ApplicableShippingMethod]:
        """Methods the supplier has enabled and that are active store-wide.

        Returned in repository order; "first applicable" means first here.
        """
        return [
            ApplicableShippingMethod(
                method=method,
                is_default=link.is_default,
                custom_price=link.custom_price,
            )
            for link, method in self._shipping_repo.get_supplier_methods(supplier_id)
            if link.is_enabled and method.is_active
        ]

    def select_method_for_group(
        self,
        supplier_id: int,
        explicit_method_id: int | None = None,
    ) -> MethodSelection:
        """Pick the method for one supplier.

        Explicit selection first, then the supplier's default, then the
        first applicable method.  No price-based tie-break is applied.
        """
        supplier = self._supplier_repo.get_by_id(supplier_id)
        if supplier is None:
            raise EntityNotFoundError(f"Supplier {supplier_id} not found")
        applicable = self.resolve_applicable_methods(supplier_id)
        return self._select(supplier, applicable, explicit_method_id)

    def aggregate(
        self,
        cart_items: list[CartItem],
        method_selections: Mapping[int, int] | None = None,
    ) -> ShippingAggregation:
        selections = method_selections or {}
        partition = self._partitioner.partition(cart_items)
        result = ShippingAggregation(errors=list(partition.errors))

        for supplier_id, items in partition.groups.items():
            supplier = partition.suppliers[supplier_id]
            applicable = self.resolve_applicable_methods(supplier_id)
            selection = self._select(supplier, applicable, selections.get(supplier_id))

            group = ShippingGroupResult(
                supplier=supplier,
                items=items,
                applicable_methods=applicable,
                selected=selection.method,
            )
            result.groups.append(group)

            if selection.error is not None:
                result.errors.append(selection.error)
                continue

            result.breakdown.append(
                ShippingBreakdownLine(
                    supplier_id=supplier_id,
                    supplier_name=supplier.name,
                    method_id=group.selected.method_id,
                    method_name=group.selected.method.name,
                    cost=group.cost,
                    item_count=group.item_count,
                )
            )
            result.total_cost = result.total_cost + group.cost

        return result

    def validate_selection(
        self,
        cart_items: list[CartItem],
        method_selections: Mapping[int, int],
    ) -> SelectionValidation:
        """Check that every supplier in the cart has an enabled selection.

        Computes no cost.  Used to gate checkout before anything is charged.
        """
        partition = self._partitioner.partition(cart_items)
        errors = list(partition.errors)

        for supplier_id in partition.supplier_ids:
            method_id = method_selections.get(supplier_id)
            if method_id is None:
                errors.append(f"No shipping method selected for supplier {supplier_id}")
                continue
            self._require_method(method_id)
            applicable_ids = {
                option.method_id for option in self.resolve_applicable_methods(supplier_id)
            }
            if method_id not in applicable_ids:
                errors.append(
                    f"Shipping method {method_id} not available for supplier {supplier_id}"
                )

        return SelectionValidation(valid=not errors, errors=errors)

    # --- Internal helpers -----------------------------------------------------

    def _select(
        self,
        supplier: Supplier,
        applicable: list[ApplicableShippingMethod],
        explicit_method_id: int | None,
    ) -> MethodSelection:
        if explicit_method_id is not None:
            self._require_method(explicit_method_id)
            for option in applicable:
                if option.method_id == explicit_method_id:
                    return MethodSelection(supplier.id, option)
            return MethodSelection(
                supplier.id,
                None,
                f"Shipping method {explicit_method_id} not available for supplier {supplier.id}",
            )

        if not applicable:
            return MethodSelection(
                supplier.id,
                None,
                f"Supplier {supplier.name} has no shipping methods configured",
            )

        for option in applicable:
            if option.is_default:
                return MethodSelection(supplier.id, option)
        return MethodSelection(supplier.id, applicable[0])

    def _require_method(self, method_id: int) -> None:
        if self._shipping_repo.get_method(method_id) is None:
            raise EntityNotFoundError(f"Shipping method {method_id} not found")
