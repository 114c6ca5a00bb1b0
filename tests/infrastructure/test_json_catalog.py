"""Tests for reading and writing JSON catalog files."""

import json

import pytest

from storefront.application.import_catalog import ExportCatalogHandler
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_catalog import JsonCatalogFile
from tests.fakes import FakeUnitOfWork, two_supplier_catalog


def _write(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestReadCatalog:

    def test_reads_minimal_file_with_defaults(self, tmp_path):
        path = tmp_path / "catalog.json"
        _write(path, {
            "suppliers": [{"id": 1, "name": "Acme"}],
            "shipping_methods": [{"id": 1, "name": "Standard", "base_price": "85.00"}],
            "supplier_shipping_methods": [
                {"supplier_id": 1, "method_id": 1, "is_default": True, "custom_price": "70.00"}
            ],
            "products": [{"id": 1, "name": "Kettle", "price": "100.00", "supplier_id": 1}],
        })

        catalog = JsonCatalogFile(path).read()

        assert catalog.suppliers[0].is_active
        assert catalog.shipping_methods[0].base_price == Money.of("85.00")
        assert catalog.supplier_shipping_methods[0].is_enabled
        assert catalog.supplier_shipping_methods[0].custom_price == Money.of("70.00")
        assert catalog.products[0].supplier_id == 1

    def test_product_without_supplier_allowed(self, tmp_path):
        path = tmp_path / "catalog.json"
        _write(path, {"products": [{"id": 1, "name": "Orphan", "price": "5"}]})
        assert JsonCatalogFile(path).read().products[0].supplier_id is None

    def test_missing_field(self, tmp_path):
        path = tmp_path / "catalog.json"
        _write(path, {"suppliers": [{"id": 1}]})
        with pytest.raises(ValidationError, match="missing field 'name'"):
            JsonCatalogFile(path).read()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError, match="not valid JSON"):
            JsonCatalogFile(path).read()


class TestWriteCatalog:

    def test_written_file_reads_back(self, tmp_path):
        catalog = ExportCatalogHandler(FakeUnitOfWork(two_supplier_catalog())).handle()
        path = tmp_path / "out" / "catalog.json"

        JsonCatalogFile(path).write(catalog)
        reread = JsonCatalogFile(path).read()

        assert reread == catalog

    def test_prices_written_as_strings(self, tmp_path):
        catalog = ExportCatalogHandler(FakeUnitOfWork(two_supplier_catalog())).handle()
        path = tmp_path / "catalog.json"

        JsonCatalogFile(path).write(catalog)

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["products"][0]["price"] == "100.00"
        assert raw["supplier_shipping_methods"][0]["custom_price"] is None
