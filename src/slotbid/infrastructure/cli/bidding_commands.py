"""CLI commands for slot allocation, bidding and the winner draw."""

from __future__ import annotations

import click

from slotbid.application.create_slot import CreateSlotHandler
from slotbid.application.declare_winner import DeclareWinnerHandler
from slotbid.application.place_bid import PlaceBidHandler
from slotbid.domain.exceptions import DomainException
from slotbid.infrastructure.bootstrap import product_repository, user_repository


@click.command("create")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="Price per unit (e.g. 100.00).")
@click.option("--units", required=True, type=int, help="Number of units at this price.")
def slot_create(product_id: str, price: str, units: int) -> None:
    """Create a slot, or add units to the slot with the same price."""
    handler = CreateSlotHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id=product_id, slot_price=price, slot_units=units)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"  {'Slot price':>12} {'Units':>7} {'Remaining':>10}")
    click.echo(f"  {'-'*31}")
    for slot in dto.bid_slots:
        click.echo(f"  {slot.slot_price:>12} {slot.slot_units:>7} {slot.remaining_units:>10}")
    click.echo(f"Remaining amount: {dto.remaining_amount} of {dto.product_price}")
    click.echo(f"Status: {dto.status}")


@click.command("place")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--user", "user_id", required=True, help="Bidding user ID.")
@click.option("--amount", required=True, help="Slot price to bid at.")
@click.option("--quantity", required=True, type=int, help="Units to buy.")
def bid_place(product_id: str, user_id: str, amount: str, quantity: int) -> None:
    """Buy units of a slot."""
    handler = PlaceBidHandler(
        product_repo=product_repository(),
        user_repo=user_repository(),
    )

    try:
        dto = handler.handle(
            product_id=product_id,
            user_id=user_id,
            bid_amount=amount,
            bid_quantity=quantity,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Bid placed on product #{dto.product_id}  "
        f"(status={dto.status}, booked slots={dto.booked_slots})"
    )
    click.echo(f"User {user_id} has invested {dto.invested_amount}")


@click.command("declare")
@click.option("--product", "product_id", required=True, help="Product ID.")
def winner_declare(product_id: str) -> None:
    """Draw the winner of a fully booked product."""
    handler = DeclareWinnerHandler(
        product_repo=product_repository(),
        user_repo=user_repository(),
    )

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} sold — winner: {dto.name} (user {dto.user_id})")
