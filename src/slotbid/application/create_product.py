"""Application service: Create Product use case."""

from __future__ import annotations

from loguru import logger

from slotbid.application.dto import ProductDTO, product_to_dto
from slotbid.domain.exceptions import ConflictError
from slotbid.domain.model.product import Product
from slotbid.domain.model.value_objects import Money
from slotbid.domain.repository.product_repository import ProductRepository


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, category: str, image: str, price: str) -> ProductDTO:
        """Add a new product to the catalog in NOT_READY_TO_BID status."""
        product = Product.create(
            name=name, category=category, image=image, price=Money.of(price)
        )

        existing = self._product_repo.get_by_name_and_category(
            product.name, product.category
        )
        if existing is not None:
            raise ConflictError(
                f"Product '{product.name}' already exists in category "
                f"'{product.category}'"
            )

        self._product_repo.save(product)
        logger.info(f"Product {product.id} '{product.name}' created at {product.price}")
        return product_to_dto(product)
