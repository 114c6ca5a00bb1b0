"""CLI commands for quoting shipping and placing orders."""

from __future__ import annotations

import click

from storefront.application.place_order import PlaceOrderHandler
from storefront.application.quote_shipping import QuoteShippingHandler
from storefront.domain.exceptions import CheckoutBlockedError, DomainException
from storefront.infrastructure.bootstrap import unit_of_work, vat_rate
from storefront.infrastructure.cli.order_display import display_order
from storefront.infrastructure.cli.parsing import parse_items, parse_selections

_ITEMS_HELP = "Items as 'ProductID:Qty,ProductID:Qty'."
_SHIP_HELP = "Shipping choices as 'SupplierID:MethodID,...'. Defaults apply otherwise."


@click.command("quote")
@click.option("--items", required=True, help=_ITEMS_HELP)
@click.option("--ship", default=None, help=_SHIP_HELP)
def checkout_quote(items: str, ship: str | None) -> None:
    """Show the shipping options and cost per supplier for a cart."""
    try:
        quote = QuoteShippingHandler(unit_of_work()).handle(parse_items(items), parse_selections(ship))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for group in quote.groups:
        click.echo(f"{group.supplier_name} (supplier {group.supplier_id}, {group.item_count} item(s))")
        for option in group.options:
            marker = "*" if option.method_id == group.selected_method_id else " "
            default = " [default]" if option.is_default else ""
            click.echo(f"  {marker} {option.method_id:<4} {option.method_name:<20} {option.price:>10}{default}")
    click.echo()
    for line in quote.breakdown:
        label = f"Shipping ({line.supplier_name} - {line.method_name})"
        click.echo(f"{label:<40} {line.cost:>10}")
    click.echo(f"{'Total shipping':<40} {quote.total_cost:>10}")
    for error in quote.errors:
        click.echo(f"! {error}", err=True)


@click.command("place")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--items", required=True, help=_ITEMS_HELP)
@click.option("--ship", default=None, help=_SHIP_HELP)
@click.option("--credit", default="0", help="Store credit to apply (e.g. 50.00).")
def checkout_place(user_id: int, items: str, ship: str | None, credit: str) -> None:
    """Place an order for a cart."""
    handler = PlaceOrderHandler(unit_of_work(), vat_rate())
    try:
        dto = handler.handle(
            user_id,
            parse_items(items),
            method_selections=parse_selections(ship) or None,
            credit_requested=credit,
        )
    except CheckoutBlockedError as exc:
        for error in exc.errors:
            click.echo(f"! {error}", err=True)
        raise click.ClickException("Checkout blocked")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)
