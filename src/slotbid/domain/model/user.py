"""User directory entry.

Users are bidders (customers) or admins. The engine only ever needs their
identifier and display name; credentials live outside this package.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from slotbid.domain.exceptions import ValidationError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRole(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass
class User:

    id: str | None
    name: str
    email: str
    role: UserRole = UserRole.CUSTOMER

    @staticmethod
    def create(name: str, email: str, role: UserRole = UserRole.CUSTOMER) -> User:
        if not name or not name.strip():
            raise ValidationError("User name is required")
        email = (email or "").strip().lower()
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid e-mail address: {email!r}")
        return User(id=None, name=name.strip(), email=email, role=role)
