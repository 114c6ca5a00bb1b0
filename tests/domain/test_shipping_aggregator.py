"""Unit tests for the ShippingAggregator domain service."""

import pytest

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.cart_partitioner import CartPartitioner
from storefront.domain.service.shipping_aggregator import ShippingAggregator
from tests.fakes import (
    FakeDatabase,
    FakeProductRepository,
    FakeShippingRepository,
    FakeSupplierRepository,
    add_link,
    add_method,
    add_product,
    add_supplier,
    two_supplier_catalog,
)


def _item(product_id: int, qty: int = 1, price: str = "100.00") -> CartItem:
    return CartItem(product_id=product_id, quantity=Quantity(qty), unit_price=Money.of(price))


def _aggregator(db: FakeDatabase) -> ShippingAggregator:
    suppliers = FakeSupplierRepository(db)
    return ShippingAggregator(
        CartPartitioner(FakeProductRepository(db), suppliers),
        FakeShippingRepository(db),
        suppliers,
    )


def _scenario_cart() -> list[CartItem]:
    return [_item(1), _item(2), _item(3, price="50.00")]


class TestResolveApplicableMethods:

    def test_only_enabled_links_to_active_methods(self):
        db = two_supplier_catalog()
        add_method(db, 3, "Overnight", "200.00")
        add_method(db, 4, "Retired", "10.00", is_active=False)
        add_link(db, 1, 3, is_enabled=False)
        add_link(db, 1, 4)

        options = _aggregator(db).resolve_applicable_methods(1)

        assert [o.method_id for o in options] == [1]

    def test_custom_price_overrides_base(self):
        db = two_supplier_catalog()
        add_link(db, 1, 2, custom_price="60.00")

        options = {o.method_id: o for o in _aggregator(db).resolve_applicable_methods(1)}

        assert options[1].effective_price == Money.of("85.00")
        assert options[2].effective_price == Money.of("60.00")

    def test_same_method_priced_per_supplier(self):
        db = two_supplier_catalog()
        add_link(db, 1, 2, custom_price="99.00")
        aggregator = _aggregator(db)

        a = {o.method_id: o for o in aggregator.resolve_applicable_methods(1)}
        b = {o.method_id: o for o in aggregator.resolve_applicable_methods(2)}

        assert a[2].effective_price == Money.of("99.00")
        assert b[2].effective_price == Money.of("120.00")


class TestSelectMethodForGroup:

    def test_default_wins_without_explicit_choice(self):
        db = two_supplier_catalog()
        add_link(db, 1, 2)
        db.links[(1, 1)].is_default = False
        db.links[(1, 2)].is_default = True

        selection = _aggregator(db).select_method_for_group(1)

        assert selection.method.method_id == 2

    def test_falls_back_to_first_applicable(self):
        db = two_supplier_catalog()
        add_method(db, 3, "Budget", "20.00")
        add_link(db, 1, 3)
        db.links[(1, 1)].is_default = False

        selection = _aggregator(db).select_method_for_group(1)

        # First in repository order, not the cheapest.
        assert selection.method.method_id == 1

    def test_disabled_default_is_skipped(self):
        db = two_supplier_catalog()
        add_link(db, 1, 2)
        db.links[(1, 1)].is_enabled = False

        selection = _aggregator(db).select_method_for_group(1)

        assert selection.method.method_id == 2

    def test_explicit_selection_must_be_applicable(self):
        selection = _aggregator(two_supplier_catalog()).select_method_for_group(1, 2)
        assert not selection.resolved
        assert selection.error == "Shipping method 2 not available for supplier 1"

    def test_no_methods_configured(self):
        db = two_supplier_catalog()
        db.links[(1, 1)].is_enabled = False

        selection = _aggregator(db).select_method_for_group(1)

        assert selection.error == "Supplier Supplier A has no shipping methods configured"

    def test_selection_is_idempotent(self):
        aggregator = _aggregator(two_supplier_catalog())
        assert aggregator.select_method_for_group(1) == aggregator.select_method_for_group(1)

    def test_unknown_supplier_is_fatal(self):
        with pytest.raises(EntityNotFoundError, match="Supplier 99 not found"):
            _aggregator(two_supplier_catalog()).select_method_for_group(99)

    def test_unknown_explicit_method_is_fatal(self):
        with pytest.raises(EntityNotFoundError, match="Shipping method 42 not found"):
            _aggregator(two_supplier_catalog()).select_method_for_group(1, 42)


class TestAggregate:

    def test_two_suppliers_with_defaults(self):
        result = _aggregator(two_supplier_catalog()).aggregate(_scenario_cart())

        assert result.is_valid
        assert len(result.groups) == 2
        assert result.total_cost == Money.of("205.00")
        assert [line.item_count for line in result.breakdown] == [2, 1]
        assert [line.cost for line in result.breakdown] == [Money.of("85.00"), Money.of("120.00")]

    def test_one_charge_per_group_regardless_of_quantity(self):
        aggregator = _aggregator(two_supplier_catalog())
        small = aggregator.aggregate([_item(1)])
        large = aggregator.aggregate([_item(1, qty=10), _item(2, qty=4)])
        assert small.total_cost == large.total_cost == Money.of("85.00")

    def test_total_is_sum_of_breakdown(self):
        db = two_supplier_catalog()
        add_link(db, 1, 2, custom_price="60.00")
        result = _aggregator(db).aggregate(_scenario_cart(), {1: 2})

        total = Money.zero()
        for line in result.breakdown:
            total = total + line.cost
        assert result.total_cost == total == Money.of("180.00")

    def test_explicit_selection_applied_per_supplier(self):
        db = two_supplier_catalog()
        add_link(db, 2, 1)
        result = _aggregator(db).aggregate(_scenario_cart(), {2: 1})

        assert result.selections == {1: 1, 2: 1}
        assert result.total_cost == Money.of("170.00")

    def test_empty_cart(self):
        result = _aggregator(two_supplier_catalog()).aggregate([])
        assert result.groups == []
        assert result.total_cost == Money.zero()
        assert result.errors == []

    def test_orphan_product_excluded_rest_still_priced(self):
        db = two_supplier_catalog()
        add_product(db, 9, "Orphan", "10.00", supplier_id=None)

        result = _aggregator(db).aggregate(_scenario_cart() + [_item(9)])

        assert "Product 9 has no supplier assigned" in result.errors
        assert result.total_cost == Money.of("205.00")
        assert all(
            item.product_id != 9 for group in result.groups for item in group.items
        )

    def test_supplier_without_methods_reported(self):
        db = two_supplier_catalog()
        add_supplier(db, 3, "Bare Shelf")
        add_product(db, 4, "Lamp", "40.00", 3)

        result = _aggregator(db).aggregate(_scenario_cart() + [_item(4)])

        assert result.errors == ["Supplier Bare Shelf has no shipping methods configured"]
        assert result.total_cost == Money.of("205.00")
        assert len(result.groups) == 3
        assert len(result.breakdown) == 2

    def test_invalid_explicit_selection_reported(self):
        result = _aggregator(two_supplier_catalog()).aggregate(_scenario_cart(), {1: 2})
        assert result.errors == ["Shipping method 2 not available for supplier 1"]
        assert result.total_cost == Money.of("120.00")


class TestValidateSelection:

    def test_complete_selection_is_valid(self):
        result = _aggregator(two_supplier_catalog()).validate_selection(
            _scenario_cart(), {1: 1, 2: 2}
        )
        assert result.valid
        assert result.errors == []

    def test_missing_and_unavailable_selections_all_reported(self):
        db = two_supplier_catalog()
        add_product(db, 9, "Orphan", "10.00", supplier_id=None)

        result = _aggregator(db).validate_selection(_scenario_cart() + [_item(9)], {1: 2})

        assert not result.valid
        assert result.errors == [
            "Product 9 has no supplier assigned",
            "Shipping method 2 not available for supplier 1",
            "No shipping method selected for supplier 2",
        ]

    def test_unknown_method_is_fatal(self):
        with pytest.raises(EntityNotFoundError):
            _aggregator(two_supplier_catalog()).validate_selection(_scenario_cart(), {1: 42, 2: 2})
