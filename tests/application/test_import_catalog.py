"""Integration tests for catalog import and export."""

import pytest

from storefront.application.import_catalog import (
    Catalog,
    ExportCatalogHandler,
    ImportCatalogHandler,
)
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.shipping import ShippingMethod, SupplierShippingMethod
from storefront.domain.model.supplier import Supplier
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork, two_supplier_catalog


def _catalog(**overrides) -> Catalog:
    values = dict(
        suppliers=[Supplier(1, "Supplier A")],
        shipping_methods=[
            ShippingMethod(1, "Standard", Money.of("85.00")),
            ShippingMethod(2, "Express", Money.of("120.00")),
        ],
        supplier_shipping_methods=[
            SupplierShippingMethod(1, 1),
            SupplierShippingMethod(1, 2, is_default=True),
        ],
        products=[Product(1, "Kettle", Money.of("100.00"), supplier_id=1)],
    )
    values.update(overrides)
    return Catalog(**values)


class TestImportCatalog:

    def test_imports_everything(self):
        uow = FakeUnitOfWork()
        summary = ImportCatalogHandler(uow).handle(_catalog())

        assert (summary.suppliers, summary.shipping_methods) == (1, 2)
        assert (summary.supplier_shipping_methods, summary.products) == (2, 1)
        assert uow.db.links[(1, 2)].is_default
        assert uow.db.products[1].supplier_id == 1

    def test_two_defaults_for_one_supplier_rejected(self):
        links = [
            SupplierShippingMethod(1, 1, is_default=True),
            SupplierShippingMethod(1, 2, is_default=True),
        ]
        uow = FakeUnitOfWork()
        with pytest.raises(ValidationError, match="more than one default"):
            ImportCatalogHandler(uow).handle(_catalog(supplier_shipping_methods=links))
        assert uow.db.suppliers == {}

    def test_imported_default_replaces_existing(self):
        db = two_supplier_catalog()  # supplier 1 defaults to method 1
        uow = FakeUnitOfWork(db)

        ImportCatalogHandler(uow).handle(
            _catalog(supplier_shipping_methods=[SupplierShippingMethod(1, 2, is_default=True)])
        )

        assert not db.links[(1, 1)].is_default
        assert db.links[(1, 2)].is_default


class TestExportCatalog:

    def test_export_round_trips_through_import(self):
        source = FakeUnitOfWork(two_supplier_catalog())
        exported = ExportCatalogHandler(source).handle()

        target = FakeUnitOfWork()
        ImportCatalogHandler(target).handle(exported)

        assert target.db.suppliers == source.db.suppliers
        assert target.db.links == source.db.links
        assert target.db.products == source.db.products
