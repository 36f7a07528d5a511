"""Application service: Place Bid use case."""

from __future__ import annotations

from loguru import logger

from slotbid.application.dto import BidResultDTO
from slotbid.application.locking import ProductLocks, default_product_locks
from slotbid.domain.exceptions import EntityNotFoundError
from slotbid.domain.model.product import ProductStatus
from slotbid.domain.model.value_objects import Money, Quantity
from slotbid.domain.repository.product_repository import ProductRepository
from slotbid.domain.repository.user_repository import UserRepository


class PlaceBidHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        user_repo: UserRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._user_repo = user_repo
        self._locks = locks or default_product_locks

    def handle(
        self,
        product_id: str,
        user_id: str,
        bid_amount: str,
        bid_quantity: int,
    ) -> BidResultDTO:
        """Buy ``bid_quantity`` units of the slot priced ``bid_amount``.

        Steps:
        1. Resolve the bidder in the user directory (fail if unknown).
        2. Under the product lock, load the product and apply the bid.
        3. Persist; a failed save leaves the stored product untouched.
        """
        amount = Money.of(bid_amount)
        quantity = Quantity(bid_quantity)

        if self._user_repo.get_by_id(user_id) is None:
            raise EntityNotFoundError(f"User '{user_id}' not found")

        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            product.place_bid(user_id, amount, quantity)
            self._product_repo.save(product)

        logger.info(
            f"Product {product_id}: user {user_id} bought {quantity} units at {amount}"
        )
        if product.status == ProductStatus.BID_COMPLETED:
            logger.info(f"Product {product_id}: all slots booked, bidding completed")

        investment = product.investment_of(user_id)
        return BidResultDTO(
            product_id=product_id,
            status=product.status.value,
            booked_slots=product.booked_slots,
            invested_amount=str(investment.invested_amount),  # type: ignore[union-attr]
        )
