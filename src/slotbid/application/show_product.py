"""Application service: Show Product use case (query)."""

from __future__ import annotations

from slotbid.application.dto import ProductDTO, product_to_dto
from slotbid.domain.exceptions import EntityNotFoundError
from slotbid.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product_to_dto(product)
