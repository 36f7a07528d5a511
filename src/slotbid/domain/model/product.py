"""Product aggregate — the slot allocation engine.

A product's price is split by an admin into priced slots. Customers buy
units of a slot at exactly that slot's price, and every purchase is added
to the buyer's entry in the investment ledger. The product walks through
its statuses strictly forward:

    NOT_READY_TO_BID -> READY_TO_BID -> BID_COMPLETED -> SOLD

Slots and ledger entries are frozen values. Every mutation builds the new
tuples first and assigns them back in one step, so a rejected call leaves
the product exactly as it was.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from slotbid.domain.exceptions import (
    CapacityExceededError,
    EntityNotFoundError,
    InvalidStateError,
    ValidationError,
)
from slotbid.domain.model.value_objects import Money, Quantity


class ProductStatus(Enum):
    NOT_READY_TO_BID = "Not ready to bid"
    READY_TO_BID = "Ready to bid"
    BID_COMPLETED = "Bid completed"
    SOLD = "Sold"


_IMAGE_PATTERN = re.compile(r"\.(jpeg|jpg|png)$", re.IGNORECASE)


@dataclass(frozen=True)
class Slot:
    """A price tier: ``slot_units`` units offered at ``slot_price`` each."""

    slot_price: Money
    slot_units: int
    remaining_units: int

    @property
    def amount(self) -> Money:
        return self.slot_price * self.slot_units

    @property
    def is_booked(self) -> bool:
        return self.remaining_units == 0

    def extend(self, units: Quantity) -> Slot:
        # remaining_units is reset to the new total, not incremented.
        total = self.slot_units + units.value
        return replace(self, slot_units=total, remaining_units=total)

    def consume(self, quantity: Quantity) -> Slot:
        if quantity.value > self.remaining_units:
            raise CapacityExceededError(
                f"Bid quantity limit exceeded for slot {self.slot_price} "
                f"(asked {quantity.value}, {self.remaining_units} remaining)"
            )
        return replace(self, remaining_units=self.remaining_units - quantity.value)


@dataclass(frozen=True)
class UserInvestment:
    """One ledger line: the total a user has put into a product."""

    user_id: str
    invested_amount: Money

    def add(self, amount: Money) -> UserInvestment:
        return replace(self, invested_amount=self.invested_amount + amount)


@dataclass
class Product:
    """Aggregate root for a product sold in slots.

    Use ``Product.create()`` for new products — it validates the catalog
    fields. The plain ``__init__`` lets repositories reconstitute persisted
    products without re-validating them.

    Invariants:
    - the summed amount of all slots never exceeds ``price``
    - ``0 <= booked_slots <= len(bid_slots)``
    - ``bid_winner`` is set if and only if the status is ``SOLD``
    """

    id: str | None
    name: str
    category: str
    image: str
    price: Money
    status: ProductStatus = ProductStatus.NOT_READY_TO_BID
    bid_slots: tuple[Slot, ...] = ()
    bid_users: tuple[UserInvestment, ...] = ()
    booked_slots: int = 0
    bid_winner: str | None = None
    version: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(name: str, category: str, image: str, price: Money) -> Product:
        """Create a new product, enforcing all catalog rules."""
        name = _require_text(name, "Product name")
        category = _require_text(category, "Product category")
        image = _require_image(image)
        _require_positive_price(price)
        return Product(id=None, name=name, category=category, image=image, price=price)

    # --- Catalog maintenance --------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        category: str | None = None,
        image: str | None = None,
        price: Money | None = None,
    ) -> None:
        """Change catalog fields.

        The price can only change while the product is NOT_READY_TO_BID
        and no slot has been carved out of it yet.
        """
        new_name = _require_text(name, "Product name") if name is not None else self.name
        new_category = (
            _require_text(category, "Product category")
            if category is not None
            else self.category
        )
        new_image = _require_image(image) if image is not None else self.image

        if price is not None and price != self.price:
            _require_positive_price(price)
            if self.status != ProductStatus.NOT_READY_TO_BID:
                raise InvalidStateError(
                    f"Cannot change the price of a product in "
                    f"'{self.status.value}' status"
                )
            if self.bid_slots:
                raise InvalidStateError(
                    "Cannot change the price once slots have been created"
                )
            self.price = price

        self.name = new_name
        self.category = new_category
        self.image = new_image

    def ensure_deletable(self) -> None:
        if self.status in (ProductStatus.BID_COMPLETED, ProductStatus.SOLD):
            raise InvalidStateError(
                f"Cannot delete a product in '{self.status.value}' status"
            )

    # --- Slot allocation ------------------------------------------------------

    def create_or_extend_slot(self, slot_price: Money, slot_units: Quantity) -> Money:
        """Add ``slot_units`` units at ``slot_price`` and return the amount
        of the product price still unallocated.

        Re-submitting an existing price extends that slot. When the slots
        add up to the full price the product becomes READY_TO_BID.
        """
        if self.status != ProductStatus.NOT_READY_TO_BID:
            raise InvalidStateError(
                "Slot creation is only allowed before the product is ready to bid "
                f"(current status is '{self.status.value}')"
            )
        if not slot_price.is_positive:
            raise ValidationError("Slot price must be greater than zero")

        added = slot_price * slot_units.value
        allocated = self.allocated_amount + added
        if allocated > self.price:
            raise CapacityExceededError(
                f"Slot amount {added} exceeds the remaining product amount "
                f"{self.remaining_amount}"
            )

        existing = self.find_slot(slot_price)
        if existing is not None:
            slots = tuple(
                slot.extend(slot_units) if slot is existing else slot
                for slot in self.bid_slots
            )
        else:
            slots = self.bid_slots + (
                Slot(
                    slot_price=slot_price,
                    slot_units=slot_units.value,
                    remaining_units=slot_units.value,
                ),
            )

        self.bid_slots = slots
        if allocated == self.price:
            self.status = ProductStatus.READY_TO_BID
        return self.price - allocated

    # --- Bidding --------------------------------------------------------------

    def place_bid(self, user_id: str, bid_amount: Money, bid_quantity: Quantity) -> None:
        """Buy ``bid_quantity`` units of the slot priced ``bid_amount``.

        The bid either applies in full (slot, booked count, status and
        ledger together) or raises without touching the product.
        """
        if self.status != ProductStatus.READY_TO_BID:
            raise InvalidStateError(
                f"Cannot place a bid on a product in '{self.status.value}' status"
            )
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required to place a bid")

        slot = self.find_slot(bid_amount)
        if slot is None:
            raise EntityNotFoundError(f"No slot at price {bid_amount}")

        updated = slot.consume(bid_quantity)
        slots = tuple(updated if s is slot else s for s in self.bid_slots)

        booked = self.booked_slots + (1 if updated.is_booked else 0)
        status = self.status
        if booked == len(slots):
            status = ProductStatus.BID_COMPLETED

        users = self._credit_user(user_id, bid_amount * bid_quantity.value)

        self.bid_slots = slots
        self.booked_slots = booked
        self.bid_users = users
        self.status = status

    # --- Winner ---------------------------------------------------------------

    def assign_winner(self, user_id: str) -> None:
        """Transition BID_COMPLETED -> SOLD, recording the winner."""
        if self.status != ProductStatus.BID_COMPLETED:
            raise InvalidStateError(
                f"Cannot declare a winner for a product in '{self.status.value}' status"
            )
        if self.investment_of(user_id) is None:
            raise EntityNotFoundError(
                f"User '{user_id}' has not placed a bid on this product"
            )
        self.bid_winner = user_id
        self.status = ProductStatus.SOLD

    # --- Computed properties --------------------------------------------------

    @property
    def allocated_amount(self) -> Money:
        result = Money.zero()
        for slot in self.bid_slots:
            result = result + slot.amount
        return result

    @property
    def remaining_amount(self) -> Money:
        return self.price - self.allocated_amount

    @property
    def total_invested(self) -> Money:
        result = Money.zero()
        for user in self.bid_users:
            result = result + user.invested_amount
        return result

    # --- Lookups --------------------------------------------------------------

    def find_slot(self, slot_price: Money) -> Slot | None:
        for slot in self.bid_slots:
            if slot.slot_price == slot_price:
                return slot
        return None

    def investment_of(self, user_id: str) -> UserInvestment | None:
        for user in self.bid_users:
            if user.user_id == user_id:
                return user
        return None

    # --- Internal helpers -----------------------------------------------------

    def _credit_user(self, user_id: str, amount: Money) -> tuple[UserInvestment, ...]:
        existing = self.investment_of(user_id)
        if existing is None:
            return self.bid_users + (UserInvestment(user_id=user_id, invested_amount=amount),)
        return tuple(
            user.add(amount) if user is existing else user for user in self.bid_users
        )


def _require_text(value: str | None, label: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def _require_image(image: str | None) -> str:
    image = _require_text(image, "Product image")
    if not _IMAGE_PATTERN.search(image):
        raise ValidationError("Image must be a valid image URL (jpeg, jpg, png)")
    return image


def _require_positive_price(price: Money) -> None:
    if not price.is_positive:
        raise ValidationError("Product price must be greater than zero")
