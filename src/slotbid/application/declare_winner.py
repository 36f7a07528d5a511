"""Application service: Declare Winner use case.

Draws the winner with the WinnerSelector domain service, resolves the
winner's display name, and only then records the result on the product.
The name lookup happens before the product is touched so that a missing
user leaves the product in BID_COMPLETED.
"""

from __future__ import annotations

from loguru import logger

from slotbid.application.dto import WinnerDTO
from slotbid.application.locking import ProductLocks, default_product_locks
from slotbid.domain.exceptions import EntityNotFoundError
from slotbid.domain.repository.product_repository import ProductRepository
from slotbid.domain.repository.user_repository import UserRepository
from slotbid.domain.service.winner_selector import WinnerSelector


class DeclareWinnerHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        user_repo: UserRepository,
        selector: WinnerSelector | None = None,
        locks: ProductLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._user_repo = user_repo
        self._selector = selector or WinnerSelector()
        self._locks = locks or default_product_locks

    def handle(self, product_id: str) -> WinnerDTO:
        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            winner = self._selector.select_winner(product)
            name = self._user_repo.lookup_user_name(winner.user_id)

            product.assign_winner(winner.user_id)
            self._product_repo.save(product)

        logger.info(
            f"Product {product_id} sold: winner {winner.user_id} "
            f"({winner.invested_amount} of {product.price} invested)"
        )
        return WinnerDTO(user_id=winner.user_id, name=name)
