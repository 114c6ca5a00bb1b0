"""Integration tests for the PlaceOrder use case.

Runs against the in-memory fakes, no database.
"""

from decimal import Decimal

import pytest

from storefront.application.dto import CartItemSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import (
    CheckoutBlockedError,
    EntityNotFoundError,
    InsufficientCreditError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    FakeDatabase,
    FakeUnitOfWork,
    add_link,
    add_product,
    add_supplier,
    give_credit,
    two_supplier_catalog,
)

CART = [CartItemSpec(1, 1), CartItemSpec(2, 1), CartItemSpec(3, 1)]


def _setup(db: FakeDatabase | None = None) -> tuple[PlaceOrderHandler, FakeUnitOfWork]:
    uow = FakeUnitOfWork(db or two_supplier_catalog())
    return PlaceOrderHandler(uow, Decimal("15")), uow


class TestPlaceOrderHappyPath:

    def test_invoice_breakdown(self):
        handler, _ = _setup()
        dto = handler.handle(user_id=7, item_specs=CART)

        assert dto.status == "PLACED"
        assert dto.subtotal == "R250.00"
        assert dto.shipping_cost == "R205.00"
        assert dto.vat_rate == "15%"
        assert dto.vat_amount == "R68.25"
        assert dto.final_total == "R523.25"
        assert [(s.supplier_name, s.method_name, s.cost) for s in dto.shipments] == [
            ("Supplier A", "Standard", "R85.00"),
            ("Supplier B", "Express", "R120.00"),
        ]

    def test_persists_order(self):
        handler, uow = _setup()
        dto = handler.handle(7, CART)

        saved = uow.db.orders[dto.id]
        assert saved.user_id == 7
        assert saved.totals.shipping_cost == Money.of("205.00")
        assert uow.commits == 1

    def test_line_items_snapshot_price(self):
        handler, uow = _setup()
        dto = handler.handle(7, [CartItemSpec(1, 2)])

        uow.db.products[1].update_price(Money.of("999.00"))

        saved = uow.db.orders[dto.id]
        assert saved.items[0].unit_price == Money.of("100.00")
        assert saved.items[0].supplier_id == 1

    def test_explicit_shipping_selection(self):
        db = two_supplier_catalog()
        add_link(db, 2, 1, custom_price="40.00")
        handler, _ = _setup(db)

        dto = handler.handle(7, CART, method_selections={1: 1, 2: 1})

        assert dto.shipping_cost == "R125.00"

    def test_credit_applied_and_debited(self):
        db = two_supplier_catalog()
        give_credit(db, 7, "100.00")
        handler, uow = _setup(db)

        dto = handler.handle(7, CART, credit_requested="100")

        assert dto.credit_applied == "R100.00"
        assert dto.final_total == "R423.25"
        assert uow.db.balances[7].available_credits == Money.zero()
        assert uow.db.transactions[-1].order_id == dto.id

    def test_credit_capped_at_order_total(self):
        db = two_supplier_catalog()
        give_credit(db, 7, "1000.00")
        handler, uow = _setup(db)

        dto = handler.handle(7, [CartItemSpec(3, 1)], credit_requested="1000")

        # R50 + R120 shipping + 15% VAT
        assert dto.credit_applied == "R195.50"
        assert dto.final_total == "R0.00"
        assert uow.db.balances[7].available_credits == Money.of("804.50")


class TestPlaceOrderBlocked:

    def test_all_problems_reported_together(self):
        db = two_supplier_catalog()
        add_product(db, 9, "Orphan", "10.00", supplier_id=None)
        handler, uow = _setup(db)

        with pytest.raises(CheckoutBlockedError) as exc_info:
            handler.handle(7, CART + [CartItemSpec(9, 1)], method_selections={1: 2})

        assert exc_info.value.errors == [
            "Product 9 has no supplier assigned",
            "Shipping method 2 not available for supplier 1",
            "No shipping method selected for supplier 2",
        ]
        assert uow.db.orders == {}

    def test_supplier_without_methods_blocks_checkout(self):
        db = two_supplier_catalog()
        add_supplier(db, 3, "Bare Shelf")
        add_product(db, 4, "Lamp", "40.00", 3)
        handler, _ = _setup(db)

        with pytest.raises(CheckoutBlockedError, match="Bare Shelf has no shipping methods"):
            handler.handle(7, CART + [CartItemSpec(4, 1)])

    def test_unknown_product(self):
        handler, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found: 404"):
            handler.handle(7, [CartItemSpec(404, 1)])

    def test_inactive_product(self):
        db = two_supplier_catalog()
        db.products[1].is_active = False
        handler, _ = _setup(db)
        with pytest.raises(ValidationError, match="no longer available"):
            handler.handle(7, [CartItemSpec(1, 1)])

    def test_empty_cart(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle(7, [])


class TestPlaceOrderCreditFailure:

    def test_insufficient_credit_leaves_no_order(self):
        db = two_supplier_catalog()
        give_credit(db, 7, "25.00")
        handler, uow = _setup(db)

        with pytest.raises(InsufficientCreditError, match="R25.00"):
            handler.handle(7, CART, credit_requested="50")

        assert uow.db.orders == {}
        assert uow.db.balances[7].available_credits == Money.of("25.00")
        assert uow.rollbacks == 1

    def test_next_order_reuses_nothing_from_failed_attempt(self):
        db = two_supplier_catalog()
        give_credit(db, 7, "25.00")
        handler, _ = _setup(db)

        with pytest.raises(InsufficientCreditError):
            handler.handle(7, CART, credit_requested="50")
        dto = handler.handle(7, CART, credit_requested="25")

        assert dto.id == 1
        assert dto.credit_applied == "R25.00"
