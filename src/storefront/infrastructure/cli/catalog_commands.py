"""CLI commands for suppliers, products and catalog files."""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.import_catalog import ExportCatalogHandler, ImportCatalogHandler
from storefront.application.manage_catalog import (
    ActivateSupplierHandler,
    AddProductHandler,
    AddSupplierHandler,
    DeactivateSupplierHandler,
    UpdateProductHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work
from storefront.infrastructure.persistence.json_catalog import JsonCatalogFile


@click.command("import")
@click.option("--file", "file_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def catalog_import(file_path: Path) -> None:
    """Load suppliers, shipping methods and products from a JSON file."""
    try:
        catalog = JsonCatalogFile(file_path).read()
        summary = ImportCatalogHandler(unit_of_work()).handle(catalog)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Imported {summary.suppliers} supplier(s), {summary.shipping_methods} shipping "
        f"method(s), {summary.supplier_shipping_methods} link(s), {summary.products} product(s)"
    )


@click.command("export")
@click.option("--file", "file_path", required=True, type=click.Path(dir_okay=False, path_type=Path))
def catalog_export(file_path: Path) -> None:
    """Write the current catalog to a JSON file."""
    catalog = ExportCatalogHandler(unit_of_work()).handle()
    JsonCatalogFile(file_path).write(catalog)
    click.echo(f"Catalog written to {file_path}")


@click.command("add-supplier")
@click.option("--name", required=True, help="Supplier name.")
def supplier_add(name: str) -> None:
    """Add a supplier."""
    try:
        supplier = AddSupplierHandler(unit_of_work()).handle(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Supplier #{supplier.id} '{supplier.name}' added")


@click.command("deactivate-supplier")
@click.option("--id", "supplier_id", required=True, type=int, help="Supplier ID.")
def supplier_deactivate(supplier_id: int) -> None:
    """Deactivate a supplier (it is kept for order history)."""
    try:
        supplier = DeactivateSupplierHandler(unit_of_work()).handle(supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Supplier #{supplier.id} '{supplier.name}' deactivated")


@click.command("activate-supplier")
@click.option("--id", "supplier_id", required=True, type=int, help="Supplier ID.")
def supplier_activate(supplier_id: int) -> None:
    """Reactivate a previously deactivated supplier."""
    try:
        supplier = ActivateSupplierHandler(unit_of_work()).handle(supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Supplier #{supplier.id} '{supplier.name}' activated")


@click.command("add-product")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 100.00).")
@click.option("--supplier", "supplier_id", type=int, default=None, help="Supplier ID.")
def product_add(name: str, price: str, supplier_id: int | None) -> None:
    """Add a new product to the catalog."""
    try:
        product = AddProductHandler(unit_of_work()).handle(name, price, supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("update-product")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--supplier", "supplier_id", type=int, default=None, help="New supplier ID.")
def product_update(product_id: int, price: str | None, supplier_id: int | None) -> None:
    """Change a product's price and/or supplier."""
    if price is None and supplier_id is None:
        raise click.ClickException("Nothing to update: pass --price and/or --supplier")
    try:
        product = UpdateProductHandler(unit_of_work()).handle(product_id, price, supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Product #{product.id} now {product.price}, supplier {product.supplier_id}")


@click.command("list")
def catalog_list() -> None:
    """List all products with their suppliers."""
    catalog = ExportCatalogHandler(unit_of_work()).handle()
    if not catalog.products:
        click.echo("No products found.")
        return

    names = {s.id: s.name for s in catalog.suppliers}
    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10}  {'Supplier':<20}")
    click.echo("-" * 64)
    for p in catalog.products:
        supplier = names.get(p.supplier_id, "(none)") if p.supplier_id else "(none)"
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>10}  {supplier:<20}")
