"""JSON-file-backed implementation of ProductRepository.

Each save re-reads the file, checks the product's ``version`` against the
stored one, and writes the whole file through a temporary file that is
then moved into place, so a reader never sees a half-written file and a
stale writer gets a ConflictError instead of overwriting newer state.

Read, check and write happen under an exclusive lock on a sibling
``.lock`` file, which other processes using the same store also take.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock
from loguru import logger

from slotbid.domain.exceptions import ConflictError
from slotbid.domain.model.product import (
    Product,
    ProductStatus,
    Slot,
    UserInvestment,
)
from slotbid.domain.model.value_objects import Money
from slotbid.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_lock = FileLock(f"{file_path}.lock")
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name_and_category(self, name: str, category: str) -> Product | None:
        for raw in self._load_raw():
            if raw["name"] == name and raw["category"] == category:
                return self._to_domain(raw)
        return None

    def search(self, page: int, limit: int, search: str = "") -> tuple[list[Product], int]:
        needle = search.lower()
        matches = [raw for raw in self._load_raw() if needle in raw["name"].lower()]
        start = (page - 1) * limit
        return [self._to_domain(raw) for raw in matches[start:start + limit]], len(matches)

    def save(self, product: Product) -> None:
        with self._file_lock:
            records = self._load_raw()

            if product.id is None:
                product_id = self._next_id(records)
            else:
                product_id = product.id

            # Upsert: replace if exists, otherwise append
            new_version = product.version + 1
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    if raw.get("version", 0) != product.version:
                        raise ConflictError(
                            f"Product '{product_id}' was modified concurrently "
                            f"(stored version {raw.get('version', 0)}, "
                            f"loaded version {product.version})"
                        )
                    records[i] = self._to_raw(product, product_id, new_version)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(product, product_id, new_version))

            self._persist_raw(records)

        product.id = product_id
        product.version = new_version
        logger.debug(f"Saved product {product_id} at version {new_version}")

    def delete(self, product_id: str) -> None:
        with self._file_lock:
            records = self._load_raw()
            remaining = [raw for raw in records if raw["id"] != product_id]
            if len(remaining) == len(records):
                return
            self._persist_raw(remaining)
        logger.debug(f"Deleted product {product_id}")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product, product_id: str, version: int) -> dict:
        return {
            "id": product_id,
            "name": product.name,
            "category": product.category,
            "image": product.image,
            "price": str(product.price.amount),
            "status": product.status.value,
            "booked_slots": product.booked_slots,
            "bid_winner": product.bid_winner,
            "version": version,
            "created_at": product.created_at.isoformat(),
            "bid_slots": [
                {
                    "slot_price": str(slot.slot_price.amount),
                    "slot_units": slot.slot_units,
                    "remaining_units": slot.remaining_units,
                }
                for slot in product.bid_slots
            ],
            "bid_users": [
                {
                    "user_id": user.user_id,
                    "invested_amount": str(user.invested_amount.amount),
                }
                for user in product.bid_users
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw["category"],
            image=raw["image"],
            price=Money(Decimal(raw["price"])),
            status=ProductStatus(raw["status"]),
            bid_slots=tuple(
                Slot(
                    slot_price=Money(Decimal(s["slot_price"])),
                    slot_units=s["slot_units"],
                    remaining_units=s["remaining_units"],
                )
                for s in raw.get("bid_slots", [])
            ),
            bid_users=tuple(
                UserInvestment(
                    user_id=u["user_id"],
                    invested_amount=Money(Decimal(u["invested_amount"])),
                )
                for u in raw.get("bid_users", [])
            ),
            booked_slots=raw.get("booked_slots", 0),
            bid_winner=raw.get("bid_winner"),
            version=raw.get("version", 0),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _next_id(records: list[dict]) -> str:
        if not records:
            return "1"
        return str(max(int(raw["id"]) for raw in records) + 1)

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
