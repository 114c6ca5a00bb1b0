"""CLI commands for the shipping method catalog and supplier links."""

from __future__ import annotations

import click

from storefront.application.manage_shipping import (
    AddShippingMethodHandler,
    AssignShippingMethodHandler,
    DeactivateShippingMethodHandler,
    ListSupplierShippingHandler,
    RemoveSupplierShippingHandler,
    SetDefaultShippingMethodHandler,
    UpdateSupplierShippingHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


@click.command("add-method")
@click.option("--name", required=True, help="Method name, e.g. 'Courier'.")
@click.option("--price", required=True, help="Base price (e.g. 85.00).")
@click.option("--days", default=None, help="Estimated delivery, e.g. '2-3 days'.")
def shipping_add_method(name: str, price: str, days: str | None) -> None:
    """Add a method to the global shipping catalog."""
    try:
        method = AddShippingMethodHandler(unit_of_work()).handle(name, price, days)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Shipping method #{method.id} '{method.name}' added at {method.base_price}")


@click.command("assign")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--method", "method_id", required=True, type=int, help="Shipping method ID.")
@click.option("--price", "custom_price", default=None, help="Supplier-specific price.")
@click.option("--default", "is_default", is_flag=True, help="Make this the supplier's default.")
def shipping_assign(supplier_id: int, method_id: int, custom_price: str | None, is_default: bool) -> None:
    """Offer a shipping method for a supplier."""
    try:
        AssignShippingMethodHandler(unit_of_work()).handle(
            supplier_id, method_id, custom_price=custom_price, is_default=is_default
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Shipping method {method_id} assigned to supplier {supplier_id}")


@click.command("update")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--method", "method_id", required=True, type=int, help="Shipping method ID.")
@click.option("--enable/--disable", "is_enabled", default=None, help="Enable or disable the link.")
@click.option("--price", "custom_price", default=None, help="New supplier-specific price.")
@click.option("--clear-price", is_flag=True, help="Fall back to the method's base price.")
def shipping_update(
    supplier_id: int,
    method_id: int,
    is_enabled: bool | None,
    custom_price: str | None,
    clear_price: bool,
) -> None:
    """Change a supplier's shipping link."""
    try:
        link = UpdateSupplierShippingHandler(unit_of_work()).handle(
            supplier_id,
            method_id,
            is_enabled=is_enabled,
            custom_price=custom_price,
            clear_custom_price=clear_price,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    price = link.custom_price if link.custom_price is not None else "(base price)"
    state = "enabled" if link.is_enabled else "disabled"
    click.echo(f"Supplier {supplier_id} method {method_id}: {state}, price {price}")


@click.command("set-default")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--method", "method_id", required=True, type=int, help="Shipping method ID.")
def shipping_set_default(supplier_id: int, method_id: int) -> None:
    """Make a method the supplier's default."""
    try:
        SetDefaultShippingMethodHandler(unit_of_work()).handle(supplier_id, method_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Supplier {supplier_id} now defaults to shipping method {method_id}")


@click.command("remove")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
@click.option("--method", "method_id", required=True, type=int, help="Shipping method ID.")
def shipping_remove(supplier_id: int, method_id: int) -> None:
    """Stop offering a shipping method for a supplier."""
    try:
        link = RemoveSupplierShippingHandler(unit_of_work()).handle(supplier_id, method_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Shipping method {method_id} removed from supplier {supplier_id}")
    if link.is_default:
        click.echo(f"Supplier {supplier_id} no longer has a default shipping method")


@click.command("deactivate-method")
@click.option("--method", "method_id", required=True, type=int, help="Shipping method ID.")
def shipping_deactivate_method(method_id: int) -> None:
    """Withdraw a method from the global catalog."""
    try:
        method = DeactivateShippingMethodHandler(unit_of_work()).handle(method_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Shipping method #{method.id} '{method.name}' deactivated")


@click.command("list")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID.")
def shipping_list(supplier_id: int) -> None:
    """Show the shipping methods configured for a supplier."""
    try:
        lines = ListSupplierShippingHandler(unit_of_work()).handle(supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo(f"Supplier {supplier_id} has no shipping methods configured.")
        return

    click.echo(f"{'ID':<5} {'Method':<20} {'Base':>10} {'Price':>10}  {'Flags'}")
    click.echo("-" * 62)
    for line in lines:
        flags = []
        if line.is_default:
            flags.append("default")
        if not line.is_enabled:
            flags.append("disabled")
        if not line.method_active:
            flags.append("method inactive")
        click.echo(
            f"{line.method_id:<5} {line.method_name:<20} {line.base_price:>10} "
            f"{line.effective_price:>10}  {', '.join(flags)}"
        )
