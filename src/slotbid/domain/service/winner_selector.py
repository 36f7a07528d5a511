"""Domain service: Winner Selection.

Draws a single winner from a completed product's investment ledger with
probability proportional to each user's invested amount.

The ledger is laid out as consecutive ranges on the number line, in
first-bid order: with investments ``[A:100, B:50, C:200]`` user A owns
``1..100``, B owns ``101..150`` and C owns ``151..350``. A ticket ``r`` is
drawn from ``1..ceil(price)`` and the owner of the range holding ``r``
wins. Tickets past the last range go to the last bidder.

The random source is passed in so tests can pin the draw.
"""

from __future__ import annotations

import math
import random
from bisect import bisect_left
from decimal import Decimal
from itertools import accumulate
from typing import Protocol, Sequence

from slotbid.domain.exceptions import InvalidStateError
from slotbid.domain.model.product import Product, ProductStatus, UserInvestment
from slotbid.domain.model.value_objects import Money


class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float uniformly drawn from [0.0, 1.0)."""


def cumulative_investments(users: Sequence[UserInvestment]) -> list[Decimal]:
    """Prefix sums of invested amounts, in ledger order."""
    return list(accumulate(user.invested_amount.amount for user in users))


def find_winner_index(prefix_sums: Sequence[Decimal], ticket: int) -> int:
    """Index of the first prefix sum ``>= ticket`` (lower bound).

    Clamped to the last index when the ticket lies beyond the final sum.
    """
    if not prefix_sums:
        raise InvalidStateError("Cannot pick a winner from an empty ledger")
    return min(bisect_left(prefix_sums, ticket), len(prefix_sums) - 1)


class WinnerSelector:

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng = rng if rng is not None else random.SystemRandom()

    def draw_ticket(self, price: Money) -> int:
        """Draw an integer ticket in ``1..ceil(price)``."""
        fraction = Decimal(str(self._rng.random()))
        return max(1, math.ceil(fraction * price.amount))

    def select_winner(self, product: Product) -> UserInvestment:
        """Pick the winning ledger entry of a BID_COMPLETED product.

        Does not mutate the product; the caller records the result with
        ``Product.assign_winner``.
        """
        if product.status != ProductStatus.BID_COMPLETED:
            raise InvalidStateError(
                f"Cannot declare a winner for a product in '{product.status.value}' status"
            )
        prefix_sums = cumulative_investments(product.bid_users)
        ticket = self.draw_ticket(product.price)
        return product.bid_users[find_winner_index(prefix_sums, ticket)]
