"""Shared invoice formatting for order commands."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO


def display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    for line in dto.shipments:
        label = f"Shipping ({line.supplier_name} - {line.method_name})"
        click.echo(f"  {label:<37} {line.cost:>10}")
    click.echo(f"  {'VAT (' + dto.vat_rate + ')':<27} {dto.vat_amount:>20}")
    if dto.credit_applied != "R0.00":
        click.echo(f"  {'Credit applied':<27} {'-' + dto.credit_applied:>20}")
    click.echo(f"  {'Total':<27} {dto.final_total:>20}")
