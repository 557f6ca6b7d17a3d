"""Tests for offer resolution and discount application."""

from datetime import UTC, datetime, timedelta

import pytest
from catalogue.offer.resolver import (
    apply_discount,
    as_utc,
    effective_price,
    is_live,
    live_offers,
    product_ids_of,
    resolve_best_offer,
    round_half_up,
)

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


def _offer(offer_id="off-1", discount_type="percentage", discount_value=10, product_ids=("prod-1",), **overrides):
    offer = {
        "id": offer_id,
        "title": f"Offer {offer_id}",
        "discount_type": discount_type,
        "discount_value": discount_value,
        "start_date": datetime(2024, 1, 1, tzinfo=UTC),
        "end_date": datetime(2024, 1, 31, tzinfo=UTC),
        "product_ids": list(product_ids),
        "is_active": True,
    }
    offer.update(overrides)
    return offer


class TestResolveBestOffer:
    def test_no_offers_resolves_to_none(self):
        assert resolve_best_offer("prod-1", [], NOW) is None

    def test_single_applicable_offer(self):
        offer = _offer()
        assert resolve_best_offer("prod-1", [offer], NOW) is offer

    def test_largest_discount_value_wins(self):
        small = _offer("small", discount_value=5)
        large = _offer("large", discount_value=25)
        assert resolve_best_offer("prod-1", [small, large], NOW) is large
        assert resolve_best_offer("prod-1", [large, small], NOW) is large

    def test_tie_goes_to_first_offer(self):
        first = _offer("first", discount_value=10)
        second = _offer("second", discount_value=10)
        assert resolve_best_offer("prod-1", [first, second], NOW) is first

    def test_percentage_and_fixed_values_compared_as_raw_numbers(self):
        # 10% of 1000 saves 100, ₹50 off saves 50, yet the fixed offer ranks higher
        percent = _offer("pct", discount_type="percentage", discount_value=10)
        fixed = _offer("flat", discount_type="fixed", discount_value=50)
        best = resolve_best_offer("prod-1", [percent, fixed], NOW)
        assert best is fixed
        assert apply_discount(1000, best) == 950
        assert apply_discount(1000, percent) == 900

    def test_offer_not_started_is_excluded(self):
        offer = _offer(start_date=NOW + timedelta(days=1))
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_ended_offer_is_excluded(self):
        offer = _offer(start_date=datetime(2024, 1, 1, tzinfo=UTC), end_date=datetime(2024, 1, 31, tzinfo=UTC))
        assert resolve_best_offer("prod-1", [offer], datetime(2024, 2, 1, tzinfo=UTC)) is None

    def test_inactive_offer_is_excluded(self):
        offer = _offer(is_active=False)
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_offer_for_other_products_is_excluded(self):
        offer = _offer(product_ids=["prod-2", "prod-3"])
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_window_bounds_are_inclusive(self):
        offer = _offer()
        assert resolve_best_offer("prod-1", [offer], datetime(2024, 1, 1, tzinfo=UTC)) is offer
        assert resolve_best_offer("prod-1", [offer], datetime(2024, 1, 31, tzinfo=UTC)) is offer

    def test_excluded_offer_does_not_shadow_applicable_one(self):
        inactive_big = _offer("big", discount_value=90, is_active=False)
        live_small = _offer("small", discount_value=5)
        assert resolve_best_offer("prod-1", [inactive_big, live_small], NOW) is live_small

    def test_product_ids_stored_as_json(self):
        offer = _offer(product_ids=[])
        offer["product_ids"] = '["prod-1", "prod-9"]'
        assert resolve_best_offer("prod-1", [offer], NOW) is offer

    def test_naive_dates_are_treated_as_utc(self):
        offer = _offer(start_date=datetime(2024, 1, 1), end_date=datetime(2024, 1, 31))
        assert resolve_best_offer("prod-1", [offer], NOW) is offer

    def test_iso_string_dates(self):
        offer = _offer(start_date="2024-01-01T00:00:00Z", end_date="2024-01-31T23:59:59Z")
        assert resolve_best_offer("prod-1", [offer], NOW) is offer


class TestMalformedOffers:
    def test_unknown_discount_type_is_not_applicable(self):
        offer = _offer(discount_type="bogof")
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_unparsable_product_ids(self):
        offer = _offer()
        offer["product_ids"] = "not json"
        assert product_ids_of(offer) == []
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_missing_dates(self):
        offer = _offer(start_date=None)
        assert is_live(offer, NOW) is False

    @pytest.mark.parametrize("flag", ["false", "no", 1, None])
    def test_is_active_must_be_a_real_boolean(self, flag):
        offer = _offer(is_active=flag)
        assert is_live(offer, NOW) is False
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_non_numeric_discount_value(self):
        offer = _offer(discount_value="ten")
        assert resolve_best_offer("prod-1", [offer], NOW) is None

    def test_apply_discount_with_unknown_type_returns_base_price(self):
        assert apply_discount(100, _offer(discount_type="bogof")) == 100


class TestApplyDiscount:
    def test_percentage(self):
        assert apply_discount(100, _offer(discount_type="percentage", discount_value=20)) == 80

    def test_fixed(self):
        assert apply_discount(100, _offer(discount_type="fixed", discount_value=20)) == 80

    def test_fixed_never_goes_negative(self):
        assert apply_discount(10, _offer(discount_type="fixed", discount_value=20)) == 0

    def test_percentage_over_hundred_clamps_to_zero(self):
        assert apply_discount(100, _offer(discount_type="percentage", discount_value=150)) == 0

    def test_no_offer_keeps_base_price(self):
        assert apply_discount(275, None) == 275

    @pytest.mark.parametrize(
        "base_price, percent, expected",
        [
            (25, 10, 23),  # 22.5 rounds half up
            (45, 10, 41),  # 40.5 rounds half up
            (99, 33, 66),  # 66.33
            (199, 15, 169),  # 169.15
        ],
    )
    def test_percentage_rounds_half_up(self, base_price, percent, expected):
        assert apply_discount(base_price, _offer(discount_value=percent)) == expected

    def test_fractional_fixed_discount_rounds_half_up(self):
        assert apply_discount(100, _offer(discount_type="fixed", discount_value=10.5)) == 90


class TestRoundHalfUp:
    def test_halves_round_away_from_zero(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_below_half_rounds_down(self):
        assert round_half_up(2.49) == 2


class TestLiveOffers:
    def test_filters_to_live_window(self):
        live = _offer("live")
        expired = _offer("expired", end_date=datetime(2024, 1, 10, tzinfo=UTC))
        paused = _offer("paused", is_active=False)
        assert live_offers([live, expired, paused], NOW) == [live]

    def test_ignores_product_membership(self):
        offer = _offer(product_ids=[])
        assert live_offers([offer], NOW) == [offer]


class TestEffectivePrice:
    def test_discounted_price_and_offer(self):
        offer = _offer(discount_value=20)
        price, applied = effective_price({"id": "prod-1", "price": 250}, [offer], NOW)
        assert price == 200
        assert applied is offer

    def test_base_price_without_offer(self):
        price, applied = effective_price({"id": "prod-1", "price": 250}, [], NOW)
        assert price == 250
        assert applied is None

    def test_reads_product_id_from_listing_rows(self):
        offer = _offer(discount_type="fixed", discount_value=30)
        price, _ = effective_price({"product_id": "prod-1", "price": 250}, [offer], NOW)
        assert price == 220


class TestAsUtc:
    def test_aware_datetime_passes_through(self):
        assert as_utc(NOW) == NOW

    def test_garbage_is_none(self):
        assert as_utc("yesterday") is None
        assert as_utc(42) is None
