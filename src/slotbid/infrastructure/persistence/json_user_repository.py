"""JSON-file-backed implementation of UserRepository.

Writes go through a temporary file moved into place, under the same kind
of sibling ``.lock`` file the product store uses.
"""

from __future__ import annotations

import json
from pathlib import Path

from filelock import FileLock

from slotbid.domain.model.user import User, UserRole
from slotbid.domain.repository.user_repository import UserRepository


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_lock = FileLock(f"{file_path}.lock")
        self._ensure_file()

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        for raw in self._load_raw():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> User | None:
        for raw in self._load_raw():
            if raw["email"].lower() == email.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, user: User) -> None:
        with self._file_lock:
            records = self._load_raw()

            if user.id is None:
                user.id = str(max((int(raw["id"]) for raw in records), default=0) + 1)

            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == user.id:
                    records[i] = self._to_raw(user)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(user))
            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            name=raw["name"],
            email=raw["email"],
            role=UserRole(raw.get("role", UserRole.CUSTOMER.value)),
        )

    # --- File helpers ---------------------------------------------------------

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
