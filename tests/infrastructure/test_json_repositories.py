"""Tests for the JSON-file repositories, against a temporary directory."""

import json
import threading

import pytest

from slotbid.domain.exceptions import ConflictError
from slotbid.domain.model.product import Product, ProductStatus
from slotbid.domain.model.user import User, UserRole
from slotbid.domain.model.value_objects import Money, Quantity
from slotbid.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from slotbid.infrastructure.persistence.json_user_repository import JsonUserRepository


def _product(name: str = "Watch", category: str = "Luxury") -> Product:
    return Product.create(name, category, "watch.png", Money.of("1000"))


class TestJsonProductRepository:

    def test_creates_file_on_first_use(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_round_trips_full_product(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = _product()
        product.create_or_extend_slot(Money.of("100.50"), Quantity(4))
        product.create_or_extend_slot(Money.of("598"), Quantity(1))
        product.place_bid("7", Money.of("100.50"), Quantity(4))
        repo.save(product)

        loaded = repo.get_by_id(product.id)

        assert loaded.bid_slots == product.bid_slots
        assert loaded.bid_users == product.bid_users
        assert loaded.booked_slots == 1
        assert loaded.status == ProductStatus.READY_TO_BID
        assert loaded.created_at == product.created_at

    def test_assigns_ids_and_versions(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        first, second = _product("Watch"), _product("Ring")
        repo.save(first)
        repo.save(second)

        assert (first.id, second.id) == ("1", "2")
        assert first.version == 1

        first.update_details(name="Gold Watch")
        repo.save(first)
        assert repo.get_by_id("1").version == 2

    def test_status_stored_as_display_string(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        repo.save(_product())
        assert json.loads(path.read_text())[0]["status"] == "Not ready to bid"

    def test_stale_save_rejected(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product())
        a = repo.get_by_id("1")
        b = repo.get_by_id("1")

        a.create_or_extend_slot(Money.of("100"), Quantity(1))
        repo.save(a)
        b.create_or_extend_slot(Money.of("200"), Quantity(1))

        with pytest.raises(ConflictError, match="modified concurrently"):
            repo.save(b)
        assert [s.slot_price for s in repo.get_by_id("1").bid_slots] == [Money.of("100")]

    def test_lookup_by_name_and_category(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product("Watch", "Luxury"))

        assert repo.get_by_name_and_category("Watch", "Luxury") is not None
        assert repo.get_by_name_and_category("Watch", "Vintage") is None

    def test_search_pages(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        for name in ["Watch", "Stopwatch", "Ring", "Pocket Watch"]:
            repo.save(_product(name))

        products, total = repo.search(page=2, limit=1, search="watch")

        assert [p.name for p in products] == ["Stopwatch"]
        assert total == 3

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product())
        repo.delete("1")
        repo.delete("1")
        assert repo.get_by_id("1") is None

    def test_no_temp_file_left_behind(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(_product())
        assert not any(p.suffix == ".tmp" for p in tmp_path.iterdir())
        assert repo.get_by_id("1").name == "Watch"


class TestJsonProductRepositoryLocking:
    """Two repositories on one file stand in for two CLI processes."""

    def _ready_product(self, path):
        product = _product()
        product.create_or_extend_slot(Money.of("1000"), Quantity(1))
        JsonProductRepository(path).save(product)

    def test_second_writer_waits_and_conflicts(self, tmp_path, monkeypatch):
        path = tmp_path / "products.json"
        self._ready_product(path)
        first_repo, second_repo = JsonProductRepository(path), JsonProductRepository(path)
        first, second = first_repo.get_by_id("1"), second_repo.get_by_id("1")
        first.place_bid("7", Money.of("1000"), Quantity(1))
        second.place_bid("8", Money.of("1000"), Quantity(1))

        writing = threading.Event()
        release = threading.Event()
        persist = first_repo._persist_raw

        def slow_persist(records):
            writing.set()
            release.wait(timeout=5)
            persist(records)

        monkeypatch.setattr(first_repo, "_persist_raw", slow_persist)
        outcomes = {}

        def save(name, repo, product):
            try:
                repo.save(product)
                outcomes[name] = "saved"
            except ConflictError:
                outcomes[name] = "conflict"

        first_thread = threading.Thread(target=save, args=("first", first_repo, first))
        second_thread = threading.Thread(target=save, args=("second", second_repo, second))
        first_thread.start()
        assert writing.wait(timeout=5)
        second_thread.start()
        second_thread.join(timeout=0.2)
        assert second_thread.is_alive()

        release.set()
        first_thread.join(timeout=5)
        second_thread.join(timeout=5)

        assert outcomes == {"first": "saved", "second": "conflict"}
        stored = JsonProductRepository(path).get_by_id("1")
        assert [u.user_id for u in stored.bid_users] == ["7"]
        assert stored.status == ProductStatus.BID_COMPLETED

    def test_delete_waits_for_writer(self, tmp_path, monkeypatch):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(_product())
        writer, deleter = JsonProductRepository(path), JsonProductRepository(path)
        product = writer.get_by_id("1")
        product.update_details(name="Gold Watch")

        writing = threading.Event()
        release = threading.Event()
        persist = writer._persist_raw

        def slow_persist(records):
            writing.set()
            release.wait(timeout=5)
            persist(records)

        monkeypatch.setattr(writer, "_persist_raw", slow_persist)
        save_thread = threading.Thread(target=writer.save, args=(product,))
        delete_thread = threading.Thread(target=deleter.delete, args=("1",))
        save_thread.start()
        assert writing.wait(timeout=5)
        delete_thread.start()
        delete_thread.join(timeout=0.2)
        assert delete_thread.is_alive()

        release.set()
        save_thread.join(timeout=5)
        delete_thread.join(timeout=5)

        assert json.loads(path.read_text()) == []


class TestJsonUserRepository:

    def test_save_and_lookup(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        user = User.create("Alice", "alice@example.com", UserRole.ADMIN)
        repo.save(user)

        assert user.id == "1"
        assert repo.get_by_id("1").role == UserRole.ADMIN
        assert repo.get_by_email("ALICE@example.com").name == "Alice"
        assert repo.lookup_user_name("1") == "Alice"

    def test_list_all(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(User.create("Alice", "alice@example.com"))
        repo.save(User.create("Bob", "bob@example.com"))
        assert [u.id for u in repo.list_all()] == ["1", "2"]

    def test_save_replaces_file_atomically(self, tmp_path):
        path = tmp_path / "users.json"
        repo = JsonUserRepository(path)
        repo.save(User.create("Alice", "alice@example.com"))
        user = repo.get_by_id("1")
        user.name = "Alice B"
        repo.save(user)

        assert not any(p.suffix == ".tmp" for p in tmp_path.iterdir())
        assert json.loads(path.read_text()) == [
            {"id": "1", "name": "Alice B", "email": "alice@example.com", "role": "customer"},
        ]
