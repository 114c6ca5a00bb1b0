"""Application service: Import Catalog use case.

Upserts a whole catalog snapshot (suppliers, shipping methods, their
links, products) in one transaction.  Links are written last so that
"clear then set" default handling sees every link of a supplier.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.shipping import ShippingMethod, SupplierShippingMethod
from storefront.domain.model.supplier import Supplier
from storefront.domain.repository.unit_of_work import UnitOfWork


@dataclass
class Catalog:
    suppliers: list[Supplier] = field(default_factory=list)
    shipping_methods: list[ShippingMethod] = field(default_factory=list)
    supplier_shipping_methods: list[SupplierShippingMethod] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)


@dataclass(frozen=True)
class ImportSummary:
    suppliers: int
    shipping_methods: int
    supplier_shipping_methods: int
    products: int


class ImportCatalogHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, catalog: Catalog) -> ImportSummary:
        self._check_single_default(catalog.supplier_shipping_methods)

        with self._uow:
            for supplier in catalog.suppliers:
                self._uow.suppliers.save(supplier)
            for method in catalog.shipping_methods:
                self._uow.shipping.save_method(method)
            for link in catalog.supplier_shipping_methods:
                if link.is_default:
                    self._uow.shipping.clear_defaults(link.supplier_id)
                self._uow.shipping.save_link(link)
            for product in catalog.products:
                self._uow.products.save(product)

        return ImportSummary(
            suppliers=len(catalog.suppliers),
            shipping_methods=len(catalog.shipping_methods),
            supplier_shipping_methods=len(catalog.supplier_shipping_methods),
            products=len(catalog.products),
        )

    @staticmethod
    def _check_single_default(links: list[SupplierShippingMethod]) -> None:
        seen: set[int] = set()
        for link in links:
            if not link.is_default:
                continue
            if link.supplier_id in seen:
                raise ValidationError(
                    f"Supplier {link.supplier_id} has more than one default shipping method"
                )
            seen.add(link.supplier_id)


class ExportCatalogHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> Catalog:
        with self._uow:
            suppliers = self._uow.suppliers.list_all()
            links = [
                link
                for supplier in suppliers
                for link, _ in self._uow.shipping.get_supplier_methods(supplier.id)
            ]
            return Catalog(
                suppliers=suppliers,
                shipping_methods=self._uow.shipping.list_methods(),
                supplier_shipping_methods=links,
                products=self._uow.products.list_all(),
            )
