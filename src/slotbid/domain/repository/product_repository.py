"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere.

``save`` is the commit point of every mutating use case: it either
stores the whole product or raises, in which case the caller discards
its in-memory copy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from slotbid.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name_and_category(self, name: str, category: str) -> Product | None:
        """Return the product with this exact name and category, or None."""

    @abstractmethod
    def search(self, page: int, limit: int, search: str = "") -> tuple[list[Product], int]:
        """Return one page of products whose name contains *search*
        (case-insensitive) together with the total number of matches."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        Assigns ``id`` on first save and bumps ``version``. Raises
        ConflictError if the stored version moved on since the product
        was loaded.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Unknown IDs are ignored."""
