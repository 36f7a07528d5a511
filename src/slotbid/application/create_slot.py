"""Application service: Create Slot use case.

Loads the product, lets the aggregate allocate (or extend) the slot,
and saves it back while holding the product's lock. If the save fails
the loaded copy is simply dropped, so the store never sees a partial
allocation.
"""

from __future__ import annotations

from loguru import logger

from slotbid.application.dto import SlotAllocationDTO, slots_to_dto
from slotbid.application.locking import ProductLocks, default_product_locks
from slotbid.domain.exceptions import EntityNotFoundError
from slotbid.domain.model.product import ProductStatus
from slotbid.domain.model.value_objects import Money, Quantity
from slotbid.domain.repository.product_repository import ProductRepository


class CreateSlotHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or default_product_locks

    def handle(self, product_id: str, slot_price: str, slot_units: int) -> SlotAllocationDTO:
        price = Money.of(slot_price)
        units = Quantity(slot_units)

        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            remaining = product.create_or_extend_slot(price, units)
            self._product_repo.save(product)

        logger.info(
            f"Product {product_id}: {units} units at {price} allocated, "
            f"{remaining} remaining"
        )
        if product.status == ProductStatus.READY_TO_BID:
            logger.info(f"Product {product_id} is ready to bid")

        return SlotAllocationDTO(
            bid_slots=slots_to_dto(product),
            remaining_amount=str(remaining),
            product_price=str(product.price),
            status=product.status.value,
        )
