"""Application service: List Products use case (query)."""

from __future__ import annotations

from slotbid.application.dto import ProductPageDTO, product_to_dto
from slotbid.domain.exceptions import ValidationError
from slotbid.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, page: int = 1, limit: int = 10, search: str = "") -> ProductPageDTO:
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater")

        products, total = self._product_repo.search(page, limit, search.strip())
        return ProductPageDTO(
            products=[product_to_dto(p) for p in products],
            total_records=total,
        )
