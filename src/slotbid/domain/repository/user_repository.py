"""Abstract repository for the user directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from slotbid.domain.exceptions import EntityNotFoundError
from slotbid.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by e-mail (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user in the directory."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user, assigning ``id`` on first save."""

    def lookup_user_name(self, user_id: str) -> str:
        user = self.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User '{user_id}' not found")
        return user.name
