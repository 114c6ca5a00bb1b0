"""JSON catalog files: seed data in, snapshot out.

File layout::

    {
      "suppliers": [{"id": 1, "name": "Acme", "is_active": true}],
      "shipping_methods": [{"id": 1, "name": "Standard", "base_price": "85.00"}],
      "supplier_shipping_methods": [
        {"supplier_id": 1, "method_id": 1, "is_default": true, "custom_price": null}
      ],
      "products": [{"id": 1, "name": "Widget", "price": "100.00", "supplier_id": 1}]
    }

Prices are strings so they survive the round trip as exact decimals.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from storefront.application.import_catalog import Catalog
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.shipping import ShippingMethod, SupplierShippingMethod
from storefront.domain.model.supplier import Supplier
from storefront.domain.model.value_objects import Money


class JsonCatalogFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def read(self) -> Catalog:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{self._file_path} is not valid JSON: {exc}") from exc

        try:
            return Catalog(
                suppliers=[self._supplier(r) for r in raw.get("suppliers", [])],
                shipping_methods=[self._method(r) for r in raw.get("shipping_methods", [])],
                supplier_shipping_methods=[
                    self._link(r) for r in raw.get("supplier_shipping_methods", [])
                ],
                products=[self._product(r) for r in raw.get("products", [])],
            )
        except KeyError as exc:
            raise ValidationError(f"Catalog entry is missing field {exc}") from exc

    def write(self, catalog: Catalog) -> None:
        raw = {
            "suppliers": [
                {"id": s.id, "name": s.name, "is_active": s.is_active}
                for s in catalog.suppliers
            ],
            "shipping_methods": [
                {
                    "id": m.id,
                    "name": m.name,
                    "base_price": str(m.base_price.amount),
                    "is_active": m.is_active,
                    "estimated_days": m.estimated_days,
                }
                for m in catalog.shipping_methods
            ],
            "supplier_shipping_methods": [
                {
                    "supplier_id": link.supplier_id,
                    "method_id": link.method_id,
                    "is_enabled": link.is_enabled,
                    "is_default": link.is_default,
                    "custom_price": str(link.custom_price.amount) if link.custom_price else None,
                }
                for link in catalog.supplier_shipping_methods
            ],
            "products": [
                {
                    "id": p.id,
                    "name": p.name,
                    "price": str(p.price.amount),
                    "supplier_id": p.supplier_id,
                    "is_active": p.is_active,
                }
                for p in catalog.products
            ],
        }
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")

    # --- Deserialization ------------------------------------------------------

    @staticmethod
    def _supplier(raw: dict) -> Supplier:
        return Supplier(id=raw["id"], name=raw["name"], is_active=raw.get("is_active", True))

    @staticmethod
    def _method(raw: dict) -> ShippingMethod:
        return ShippingMethod(
            id=raw["id"],
            name=raw["name"],
            base_price=Money(Decimal(str(raw["base_price"]))),
            is_active=raw.get("is_active", True),
            estimated_days=raw.get("estimated_days"),
        )

    @staticmethod
    def _link(raw: dict) -> SupplierShippingMethod:
        custom = raw.get("custom_price")
        return SupplierShippingMethod(
            supplier_id=raw["supplier_id"],
            method_id=raw["method_id"],
            is_enabled=raw.get("is_enabled", True),
            is_default=raw.get("is_default", False),
            custom_price=Money(Decimal(str(custom))) if custom is not None else None,
        )

    @staticmethod
    def _product(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(str(raw["price"]))),
            supplier_id=raw.get("supplier_id"),
            is_active=raw.get("is_active", True),
        )
