"""Parsers for the compact ``id:value,id:value`` CLI arguments."""

from __future__ import annotations

import click

from storefront.application.dto import CartItemSpec


def _parse_pairs(raw: str, what: str) -> list[tuple[int, int]]:
    pairs: list[tuple[int, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid {what} format '{pair}'. Expected 'ID:Number'."
            )
        left, right = pair.split(":", 1)
        try:
            pairs.append((int(left), int(right)))
        except ValueError:
            raise click.BadParameter(f"Invalid {what} '{pair}'; both parts must be integers.")
    return pairs


def parse_items(raw: str) -> list[CartItemSpec]:
    """Parse '1:2,5:1' (product ID : quantity) into CartItemSpec list."""
    return [CartItemSpec(product_id=pid, quantity=qty) for pid, qty in _parse_pairs(raw, "item")]


def parse_selections(raw: str | None) -> dict[int, int]:
    """Parse '1:3,2:1' (supplier ID : shipping method ID) into a dict."""
    if not raw:
        return {}
    return dict(_parse_pairs(raw, "shipping selection"))
