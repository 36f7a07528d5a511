import click

from slotbid.infrastructure.cli.bidding_commands import bid_place, slot_create, winner_declare
from slotbid.infrastructure.cli.product_commands import (
    product_create,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from slotbid.infrastructure.cli.user_commands import user_add, user_list
from slotbid.infrastructure.config import get_settings
from slotbid.infrastructure.log_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override SLOTBID_LOG_LEVEL (e.g. INFO).")
def cli(log_level: str | None) -> None:
    """slotbid — slot auctions with a weighted winner draw"""
    configure_logging(log_level or get_settings().log_level)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def slot() -> None:
    """Split a product's price into slots."""


@cli.group()
def bid() -> None:
    """Bid on product slots."""


@cli.group()
def winner() -> None:
    """Draw product winners."""


@cli.group()
def user() -> None:
    """Manage users."""


# Register subcommands
product.add_command(product_create)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
slot.add_command(slot_create)
bid.add_command(bid_place)
winner.add_command(winner_declare)
user.add_command(user_add)
user.add_command(user_list)
