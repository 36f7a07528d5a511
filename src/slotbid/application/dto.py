"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from slotbid.domain.model.product import Product


@dataclass(frozen=True)
class SlotDTO:
    slot_price: str  # formatted, e.g. "$100.00"
    slot_units: int
    remaining_units: int


@dataclass(frozen=True)
class BidUserDTO:
    user_id: str
    invested_amount: str


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    name: str
    category: str
    image: str
    price: str
    status: str
    booked_slots: int
    bid_slots: list[SlotDTO]
    bid_users: list[BidUserDTO]
    bid_winner: str | None
    created_at: str


@dataclass(frozen=True)
class ProductPageDTO:
    products: list[ProductDTO]
    total_records: int


@dataclass(frozen=True)
class SlotAllocationDTO:
    """Output of slot creation: the slots so far and what is left to allocate."""

    bid_slots: list[SlotDTO]
    remaining_amount: str
    product_price: str
    status: str


@dataclass(frozen=True)
class BidResultDTO:
    product_id: str
    status: str
    booked_slots: int
    invested_amount: str  # the bidder's running total on this product


@dataclass(frozen=True)
class WinnerDTO:
    user_id: str
    name: str


# --- Mapping ------------------------------------------------------------------


def slots_to_dto(product: Product) -> list[SlotDTO]:
    return [
        SlotDTO(
            slot_price=str(slot.slot_price),
            slot_units=slot.slot_units,
            remaining_units=slot.remaining_units,
        )
        for slot in product.bid_slots
    ]


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        category=product.category,
        image=product.image,
        price=str(product.price),
        status=product.status.value,
        booked_slots=product.booked_slots,
        bid_slots=slots_to_dto(product),
        bid_users=[
            BidUserDTO(user_id=user.user_id, invested_amount=str(user.invested_amount))
            for user in product.bid_users
        ],
        bid_winner=product.bid_winner,
        created_at=product.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
