"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from slotbid.infrastructure.config import get_settings
from slotbid.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from slotbid.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def user_repository() -> JsonUserRepository:
    return JsonUserRepository(get_settings().data_dir / "users.json")
