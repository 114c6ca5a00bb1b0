import click

from storefront.infrastructure.cli.catalog_commands import (
    catalog_export,
    catalog_import,
    catalog_list,
    product_add,
    product_update,
    supplier_activate,
    supplier_add,
    supplier_deactivate,
)
from storefront.infrastructure.cli.checkout_commands import checkout_place, checkout_quote
from storefront.infrastructure.cli.credit_commands import credits_add, credits_show
from storefront.infrastructure.cli.order_commands import order_cancel, order_list, order_show
from storefront.infrastructure.cli.shipping_commands import (
    shipping_add_method,
    shipping_assign,
    shipping_deactivate_method,
    shipping_list,
    shipping_remove,
    shipping_set_default,
    shipping_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_setup import setup_logging


@click.group()
def cli() -> None:
    """Storefront: multi-supplier checkout"""
    setup_logging(get_settings())


@cli.group()
def catalog() -> None:
    """Manage suppliers and products."""


@cli.group()
def shipping() -> None:
    """Manage shipping methods."""


@cli.group()
def checkout() -> None:
    """Quote shipping and place orders."""


@cli.group()
def order() -> None:
    """List, inspect and cancel orders."""


@cli.group()
def credits() -> None:
    """Manage store credit."""


# Register subcommands
catalog.add_command(catalog_import)
catalog.add_command(catalog_export)
catalog.add_command(catalog_list)
catalog.add_command(supplier_add)
catalog.add_command(supplier_deactivate)
catalog.add_command(supplier_activate)
catalog.add_command(product_add)
catalog.add_command(product_update)
shipping.add_command(shipping_add_method)
shipping.add_command(shipping_assign)
shipping.add_command(shipping_update)
shipping.add_command(shipping_set_default)
shipping.add_command(shipping_remove)
shipping.add_command(shipping_deactivate_method)
shipping.add_command(shipping_list)
checkout.add_command(checkout_quote)
checkout.add_command(checkout_place)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_cancel)
credits.add_command(credits_add)
credits.add_command(credits_show)
