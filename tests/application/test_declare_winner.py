"""Integration tests for the DeclareWinner use case, end to end through
slot creation and bidding."""

import pytest

from slotbid.application.create_slot import CreateSlotHandler
from slotbid.application.declare_winner import DeclareWinnerHandler
from slotbid.application.place_bid import PlaceBidHandler
from slotbid.domain.exceptions import EntityNotFoundError, InvalidStateError
from slotbid.domain.model.product import Product, ProductStatus, UserInvestment
from slotbid.domain.model.user import User
from slotbid.domain.model.value_objects import Money
from slotbid.domain.service.winner_selector import WinnerSelector
from tests.fakes import FakeProductRepository, FakeUserRepository, FixedRandom, SaveFailed


def _setup():
    product_repo = FakeProductRepository([
        Product(id=None, name="Watch", category="Luxury", image="watch.png",
                price=Money.of("1000")),
    ])
    user_repo = FakeUserRepository([
        User(id=None, name="Alice", email="alice@example.com"),
        User(id=None, name="Bob", email="bob@example.com"),
    ])
    return product_repo, user_repo


def _run_auction(product_repo, user_repo) -> None:
    """Slots 5 x 100 and 2 x 250; Alice books the first, Bob the second."""
    slots = CreateSlotHandler(product_repo)
    slots.handle("1", slot_price="100", slot_units=5)
    slots.handle("1", slot_price="250", slot_units=2)

    bids = PlaceBidHandler(product_repo, user_repo)
    bids.handle("1", "1", "100", 5)
    bids.handle("1", "2", "250", 2)


def _winner_handler(product_repo, user_repo, *fractions: float) -> DeclareWinnerHandler:
    return DeclareWinnerHandler(
        product_repo, user_repo, selector=WinnerSelector(FixedRandom(*fractions))
    )


class TestFullScenario:

    def test_slots_bids_and_winner(self):
        product_repo, user_repo = _setup()
        slots = CreateSlotHandler(product_repo)
        first = slots.handle("1", slot_price="100", slot_units=5)
        second = slots.handle("1", slot_price="250", slot_units=2)
        assert first.remaining_amount == "$500.00"
        assert second.remaining_amount == "$0.00"
        assert second.status == "Ready to bid"

        bids = PlaceBidHandler(product_repo, user_repo)
        assert bids.handle("1", "1", "100", 5).booked_slots == 1
        completed = bids.handle("1", "2", "250", 2)
        assert completed.booked_slots == 2
        assert completed.status == "Bid completed"

        # ticket 450 falls inside Alice's range 1..500
        dto = _winner_handler(product_repo, user_repo, 0.45).handle("1")

        assert dto.user_id == "1"
        assert dto.name == "Alice"
        stored = product_repo.get_by_id("1")
        assert stored.bid_winner == "1"
        assert stored.status == ProductStatus.SOLD

    def test_ticket_past_first_range_picks_second_bidder(self):
        product_repo, user_repo = _setup()
        _run_auction(product_repo, user_repo)

        dto = _winner_handler(product_repo, user_repo, 0.501).handle("1")

        assert dto.name == "Bob"


class TestDeclareWinnerRules:

    def test_second_declaration_rejected(self):
        product_repo, user_repo = _setup()
        _run_auction(product_repo, user_repo)
        handler = _winner_handler(product_repo, user_repo, 0.1, 0.9)
        handler.handle("1")

        with pytest.raises(InvalidStateError, match="Sold"):
            handler.handle("1")
        assert product_repo.get_by_id("1").bid_winner == "1"

    def test_not_before_completion(self):
        product_repo, user_repo = _setup()
        CreateSlotHandler(product_repo).handle("1", slot_price="1000", slot_units=1)

        with pytest.raises(InvalidStateError, match="Ready to bid"):
            _winner_handler(product_repo, user_repo, 0.5).handle("1")

    def test_missing_product(self):
        product_repo, user_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            _winner_handler(product_repo, user_repo, 0.5).handle("7")

    def test_unknown_winner_leaves_product_completed(self):
        product_repo = FakeProductRepository([
            Product(
                id=None, name="Watch", category="Luxury", image="watch.png",
                price=Money.of("100"), status=ProductStatus.BID_COMPLETED,
                bid_users=(UserInvestment("gone", Money.of("100")),),
            ),
        ])
        user_repo = FakeUserRepository()

        with pytest.raises(EntityNotFoundError, match="User 'gone' not found"):
            _winner_handler(product_repo, user_repo, 0.5).handle("1")
        assert product_repo.get_by_id("1").status == ProductStatus.BID_COMPLETED

    def test_failed_save_leaves_product_completed(self):
        product_repo, user_repo = _setup()
        _run_auction(product_repo, user_repo)
        product_repo.fail_next_save = True

        with pytest.raises(SaveFailed):
            _winner_handler(product_repo, user_repo, 0.5).handle("1")

        stored = product_repo.get_by_id("1")
        assert stored.status == ProductStatus.BID_COMPLETED
        assert stored.bid_winner is None
