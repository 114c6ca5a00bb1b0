"""CLI commands for placed orders."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work
from storefront.infrastructure.cli.order_display import display_order


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_show(order_id: int) -> None:
    """Display an order and its invoice breakdown."""
    try:
        dto = ShowOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    display_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_cancel(order_id: int) -> None:
    """Cancel an order and refund any credit applied to it."""
    try:
        dto = CancelOrderHandler(unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} cancelled")
    if dto.credit_applied != "R0.00":
        click.echo(f"Refunded {dto.credit_applied} store credit to user {dto.user_id}")


@click.command("list")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
def order_list(user_id: int) -> None:
    """List a user's orders, newest first."""
    orders = ListOrdersHandler(unit_of_work()).handle(user_id)
    if not orders:
        click.echo(f"User {user_id} has no orders.")
        return

    click.echo(f"{'ID':<6} {'Placed':<21} {'Status':<11} {'Total':>12}")
    click.echo("-" * 53)
    for dto in orders:
        click.echo(f"{dto.id:<6} {dto.created_at:<21} {dto.status:<11} {dto.final_total:>12}")
