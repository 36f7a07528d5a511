"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from slotbid.application.create_product import CreateProductHandler
from slotbid.application.delete_product import DeleteProductHandler
from slotbid.application.dto import ProductDTO
from slotbid.application.list_products import ListProductsHandler
from slotbid.application.show_product import ShowProductHandler
from slotbid.application.update_product import UpdateProductHandler
from slotbid.domain.exceptions import DomainException
from slotbid.infrastructure.bootstrap import product_repository
from slotbid.infrastructure.config import get_settings


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Product category.")
@click.option("--image", required=True, help="Image URL (.jpeg, .jpg or .png).")
@click.option("--price", required=True, help="Total price to raise (e.g. 1000.00).")
def product_create(name: str, category: str, image: str, price: str) -> None:
    """Add a new product to the catalog."""
    handler = CreateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(name=name, category=category, image=image, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' created at {dto.price}  (status={dto.status})")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int, help="Page number.")
@click.option("--limit", default=None, type=int, help="Products per page.")
@click.option("--search", default="", help="Filter by name (case-insensitive).")
def product_list(page: int, limit: int | None, search: str) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        result = handler.handle(
            page=page,
            limit=limit or get_settings().default_page_size,
            search=search,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<14} {'Price':>12}  {'Status'}")
    click.echo("-" * 72)
    for p in result.products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.category:<14} {p.price:>12}  {p.status}")
    click.echo(f"({result.total_records} total)")


def _display_product(dto: ProductDTO) -> None:
    """Shared formatting for displaying a product."""
    click.echo(f"Product #{dto.id} '{dto.name}'  (status={dto.status})")
    click.echo(f"Category: {dto.category}")
    click.echo(f"Image:    {dto.image}")
    click.echo(f"Price:    {dto.price}")
    click.echo(f"Created:  {dto.created_at}")

    if dto.bid_slots:
        click.echo()
        click.echo(f"  {'Slot price':>12} {'Units':>7} {'Remaining':>10}")
        click.echo(f"  {'-'*31}")
        for slot in dto.bid_slots:
            click.echo(f"  {slot.slot_price:>12} {slot.slot_units:>7} {slot.remaining_units:>10}")
        click.echo(f"  Booked slots: {dto.booked_slots}/{len(dto.bid_slots)}")

    if dto.bid_users:
        click.echo()
        click.echo(f"  {'User':<10} {'Invested':>12}")
        click.echo(f"  {'-'*23}")
        for user in dto.bid_users:
            click.echo(f"  {user.user_id:<10} {user.invested_amount:>12}")

    if dto.bid_winner is not None:
        click.echo()
        click.echo(f"Winner: user {dto.bid_winner}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
def product_show(product_id: str) -> None:
    """Show details of a product, its slots and bidders."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--image", default=None, help="New image URL.")
@click.option("--price", default=None, help="New price (only before slots exist).")
def product_update(
    product_id: str,
    name: str | None,
    category: str | None,
    image: str | None,
    price: str | None,
) -> None:
    """Update a product's catalog details."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            product_id=product_id, name=name, category=category, image=image, price=price
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product (only before bidding completes)."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")
