"""Unit tests for the User directory entry."""

import pytest

from slotbid.domain.exceptions import ValidationError
from slotbid.domain.model.user import User, UserRole


class TestUserCreate:

    def test_defaults_to_customer(self):
        user = User.create("Alice", "alice@example.com")
        assert user.role == UserRole.CUSTOMER
        assert user.id is None

    def test_email_normalised(self):
        user = User.create("Alice", "  Alice@Example.COM ")
        assert user.email == "alice@example.com"

    def test_bad_email_rejected(self):
        with pytest.raises(ValidationError, match="Invalid e-mail"):
            User.create("Alice", "alice-at-example")

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            User.create(" ", "alice@example.com")
