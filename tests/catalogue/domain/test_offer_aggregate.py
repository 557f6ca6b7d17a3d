"""Tests for the Offer aggregate."""

from datetime import UTC, datetime

import pytest
from catalogue.offer.events import OfferCreated, OfferDeactivated, OfferRevised, OfferWithdrawn
from catalogue.offer.offer import DiscountType, Offer
from protean.exceptions import ValidationError


def _make_offer(**overrides):
    defaults = {
        "title": "January Cheese Fest",
        "discount_type": DiscountType.PERCENTAGE.value,
        "discount_value": 10,
        "start_date": datetime(2024, 1, 1, tzinfo=UTC),
        "end_date": datetime(2024, 1, 31, tzinfo=UTC),
        "product_ids": ["prod-1", "prod-2"],
    }
    defaults.update(overrides)
    return Offer.create(**defaults)


class TestOfferCreation:
    def test_create_offer(self):
        offer = _make_offer(max_qty_per_order=5)
        assert offer.title == "January Cheese Fest"
        assert offer.is_active is True
        assert offer.applicable_product_ids == ["prod-1", "prod-2"]
        assert offer.max_qty_per_order == 5

    def test_create_raises_offer_created(self):
        offer = _make_offer()
        event = offer._events[0]
        assert isinstance(event, OfferCreated)
        assert event.offer_id == offer.id
        assert event.product_ids == '["prod-1", "prod-2"]'

    def test_product_ids_accept_json_text(self):
        offer = _make_offer(product_ids='["prod-7"]')
        assert offer.applicable_product_ids == ["prod-7"]

    def test_defaults_to_no_products(self):
        offer = _make_offer(product_ids=None)
        assert offer.applicable_product_ids == []


class TestOfferInvariants:
    def test_unknown_discount_type_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_offer(discount_type="bogof")
        assert "discount_type" in exc.value.messages

    def test_negative_discount_value_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_offer(discount_value=-5)

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_offer(start_date=datetime(2024, 2, 1, tzinfo=UTC), end_date=datetime(2024, 1, 1, tzinfo=UTC))
        assert "end_date" in exc.value.messages

    def test_percentage_above_hundred_is_not_enforced(self):
        offer = _make_offer(discount_value=120)
        assert offer.discount_value == 120


class TestOfferLiveness:
    def test_live_inside_window(self):
        offer = _make_offer()
        assert offer.is_live(datetime(2024, 1, 15, tzinfo=UTC)) is True

    def test_not_live_after_window(self):
        offer = _make_offer()
        assert offer.is_live(datetime(2024, 2, 1, tzinfo=UTC)) is False

    def test_applies_to_listed_products_only(self):
        offer = _make_offer()
        now = datetime(2024, 1, 15, tzinfo=UTC)
        assert offer.applies_to("prod-1", now) is True
        assert offer.applies_to("prod-9", now) is False

    def test_deactivated_offer_is_not_live(self):
        offer = _make_offer()
        offer.deactivate()
        assert offer.is_live(datetime(2024, 1, 15, tzinfo=UTC)) is False
        assert isinstance(offer._events[-1], OfferDeactivated)


class TestOfferRevision:
    def test_revise_moves_window_atomically(self):
        offer = _make_offer()
        offer.revise(start_date=datetime(2024, 3, 1, tzinfo=UTC), end_date=datetime(2024, 3, 31, tzinfo=UTC))
        assert offer.is_live(datetime(2024, 3, 15, tzinfo=UTC)) is True
        assert isinstance(offer._events[-1], OfferRevised)

    def test_revise_into_inverted_window_is_rejected(self):
        offer = _make_offer()
        with pytest.raises(ValidationError):
            offer.revise(end_date=datetime(2023, 12, 1, tzinfo=UTC))

    def test_revise_product_ids(self):
        offer = _make_offer()
        offer.revise(product_ids=["prod-3"])
        assert offer.applicable_product_ids == ["prod-3"]

    def test_activate_active_offer_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_offer().activate()

    def test_withdraw(self):
        offer = _make_offer()
        offer.withdraw()
        assert isinstance(offer._events[-1], OfferWithdrawn)
