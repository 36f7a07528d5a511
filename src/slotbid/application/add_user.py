"""Application service: Add User use case."""

from __future__ import annotations

from loguru import logger

from slotbid.domain.exceptions import ConflictError
from slotbid.domain.model.user import User, UserRole
from slotbid.domain.repository.user_repository import UserRepository


class AddUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, name: str, email: str, admin: bool = False) -> User:
        """Register a user in the directory. E-mail addresses are unique."""
        role = UserRole.ADMIN if admin else UserRole.CUSTOMER
        user = User.create(name=name, email=email, role=role)

        if self._user_repo.get_by_email(user.email) is not None:
            raise ConflictError(f"A user with e-mail '{user.email}' already exists")

        self._user_repo.save(user)
        logger.info(f"User {user.id} '{user.name}' registered as {role.value}")
        return user
