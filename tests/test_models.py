"""Unit tests for Pydantic models and outcome values."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from marketline import (
    PAYLOAD_REGISTRY,
    BuyItem,
    ErrorKind,
    ItemListing,
    Login,
    Outcome,
    PostItem,
    Search,
    SendMessage,
    Verb,
)
from marketline.models.messages import to_price

# --- Verbs ---


class TestVerb:
    def test_all_verbs_exist(self):
        expected = {"LOGIN", "CREATE_USER", "POST_ITEM", "BUY_ITEM", "SEND_MSG", "SEARCH"}
        assert {v.value for v in Verb} == expected

    def test_every_verb_has_a_payload_model(self):
        assert set(PAYLOAD_REGISTRY) == set(Verb)


# --- Prices ---


class TestToPrice:
    def test_whole_number(self):
        assert to_price(50) == Decimal("50.00")

    def test_float_rounds_half_up(self):
        assert to_price(0.125) == Decimal("0.13")
        assert to_price(2.675) == Decimal("2.68")

    def test_string(self):
        assert to_price("10.5") == Decimal("10.50")

    def test_exactly_two_places(self):
        assert to_price(Decimal("3")).as_tuple().exponent == -2

    def test_large_magnitude_keeps_every_digit(self):
        assert to_price(1e30) == Decimal("1" + "0" * 30 + ".00")
        assert to_price("123456789012345678901234567890.555") == Decimal(
            "123456789012345678901234567890.56"
        )

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            to_price(float("nan"))

    def test_infinity_rejected(self):
        with pytest.raises(ValueError):
            to_price("Infinity")

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            to_price("fifty")


# --- Payload models ---


class TestPayloads:
    def test_login_valid(self):
        login = Login(username="alice", password="secret")
        assert login.username == "alice"

    def test_login_empty_username(self):
        with pytest.raises(ValidationError):
            Login(username="", password="secret")

    def test_post_item_price_is_fixed_point(self):
        item = PostItem(title="Bike", description="Good bike", price=50.0, seller="alice")
        assert item.price == Decimal("50.00")

    def test_post_item_bad_price(self):
        with pytest.raises(ValidationError):
            PostItem(title="Bike", description="Good bike", price="cheap", seller="alice")

    def test_post_item_field_order_is_wire_order(self):
        assert list(PostItem.model_fields) == ["title", "description", "price", "seller"]

    def test_buy_item_field_order_is_wire_order(self):
        assert list(BuyItem.model_fields) == ["item_id", "buyer"]

    def test_send_message_allows_empty_body(self):
        msg = SendMessage(sender="alice", receiver="bob", item_id="1", body="")
        assert msg.body == ""

    def test_search_requires_keyword(self):
        with pytest.raises(ValidationError):
            Search(keyword="")


# --- Listings ---


class TestItemListing:
    def test_valid(self):
        listing = ItemListing(
            item_id="1", title="Bike", description="Good", price="50", seller="alice"
        )
        assert listing.price == Decimal("50.00")
        assert listing.sold is False

    def test_is_frozen(self):
        listing = ItemListing(
            item_id="1", title="Bike", description="Good", price=50, seller="alice"
        )
        with pytest.raises(ValidationError):
            listing.sold = True  # type: ignore[misc]

    def test_equality_by_value(self):
        a = ItemListing(item_id="1", title="Bike", description="Good", price=50, seller="alice")
        b = ItemListing(item_id="1", title="Bike", description="Good", price="50.00", seller="alice")
        assert a == b


# --- Outcomes ---


class TestOutcome:
    def test_success_is_truthy(self):
        outcome = Outcome.success(["SUCCESS"])
        assert outcome
        assert outcome.ok
        assert outcome.error is None
        assert outcome.line == "SUCCESS"

    def test_failure_is_falsy(self):
        outcome = Outcome.failure(ErrorKind.PROTOCOL_MISMATCH, "nope", ["ERROR"])
        assert not outcome
        assert outcome.error == ErrorKind.PROTOCOL_MISMATCH
        assert outcome.line == "ERROR"

    def test_line_is_none_without_lines(self):
        assert Outcome.success().line is None

    def test_lines_are_copied(self):
        lines = ["a"]
        outcome = Outcome.success(lines)
        lines.append("b")
        assert outcome.lines == ["a"]
