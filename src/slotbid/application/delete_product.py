"""Application service: Delete Product use case.

Products can be removed until bidding completes; after that the ledger
is the record of who paid what and must be kept.
"""

from __future__ import annotations

from loguru import logger

from slotbid.application.locking import ProductLocks, default_product_locks
from slotbid.domain.exceptions import EntityNotFoundError
from slotbid.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or default_product_locks

    def handle(self, product_id: str) -> None:
        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            product.ensure_deletable()
            self._product_repo.delete(product_id)

        self._locks.discard(product_id)
        logger.info(f"Product {product_id} deleted")
