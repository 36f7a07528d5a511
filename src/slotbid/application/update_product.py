"""Application service: Update Product use case."""

from __future__ import annotations

from loguru import logger

from slotbid.application.dto import ProductDTO, product_to_dto
from slotbid.application.locking import ProductLocks, default_product_locks
from slotbid.domain.exceptions import ConflictError, EntityNotFoundError
from slotbid.domain.model.value_objects import Money
from slotbid.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        locks: ProductLocks | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._locks = locks or default_product_locks

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        category: str | None = None,
        image: str | None = None,
        price: str | None = None,
    ) -> ProductDTO:
        """Update catalog fields of a product.

        The price is only editable before any slot has been created.
        """
        with self._locks.hold(product_id):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

            product.update_details(
                name=name,
                category=category,
                image=image,
                price=Money.of(price) if price is not None else None,
            )

            clash = self._product_repo.get_by_name_and_category(
                product.name, product.category
            )
            if clash is not None and clash.id != product.id:
                raise ConflictError(
                    f"Product '{product.name}' already exists in category "
                    f"'{product.category}'"
                )

            self._product_repo.save(product)

        logger.info(f"Product {product_id} updated")
        return product_to_dto(product)
