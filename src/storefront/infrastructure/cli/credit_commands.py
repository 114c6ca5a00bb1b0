"""CLI commands for store credit."""

from __future__ import annotations

import click

from storefront.application.dto import CreditSummaryDTO
from storefront.application.manage_credits import AddCreditsHandler, ShowCreditsHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


def _display_summary(dto: CreditSummaryDTO) -> None:
    click.echo(f"User {dto.user_id}: {dto.available_credits} available of {dto.total_credits} earned")
    if not dto.reconciled:
        click.echo("! Balance does not match the transaction history", err=True)
    if not dto.transactions:
        return
    click.echo()
    click.echo(f"  {'Date':<22} {'Type':<9} {'Amount':>10}  Description")
    click.echo(f"  {'-'*70}")
    for tx in dto.transactions:
        click.echo(f"  {tx.created_at:<22} {tx.type:<9} {tx.amount:>10}  {tx.description}")


@click.command("add")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--amount", required=True, help="Amount to credit (e.g. 100.00).")
@click.option("--description", default=None, help="Reason shown in the history.")
def credits_add(user_id: int, amount: str, description: str | None) -> None:
    """Grant store credit to a user."""
    try:
        dto = AddCreditsHandler(unit_of_work()).handle(user_id, amount, description)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_summary(dto)


@click.command("show")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
def credits_show(user_id: int) -> None:
    """Show a user's credit balance and history."""
    dto = ShowCreditsHandler(unit_of_work()).handle(user_id)
    _display_summary(dto)
