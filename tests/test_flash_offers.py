from datetime import datetime, timedelta

import pytest

from leisure_pricing.domain import OfferSummary, Promotion, RecurringPromotion
from leisure_pricing.services.promotion_service.flash_offers import (
    base_price_from_options,
    build_flash_offers,
)

# Wednesday
NOW = datetime(2025, 6, 18, 19, 0)


def _offer(offer_id="OFFER_1", options=()):
    return OfferSummary(
        id=offer_id,
        business_user_id="BIZ_1",
        title=f"Offer {offer_id}",
        pricing_options=tuple(options),
    )


def _recurring(offer_id="OFFER_1", discount=20.0, **overrides):
    values = dict(
        id=f"R_{offer_id}_{discount}",
        offer_id=offer_id,
        days_of_week=(3,),
        start_time="18:00",
        end_time="21:30",
        discount_percentage=discount,
    )
    values.update(overrides)
    return RecurringPromotion(**values)


def _fixed(offer_id="OFFER_1", discount=10.0, end=NOW + timedelta(days=1)):
    return Promotion(
        id=f"P_{offer_id}_{discount}",
        offer_id=offer_id,
        discount_type="percentage",
        discount_value=discount,
        start_date=NOW - timedelta(days=1),
        end_date=end,
        original_price=50.0,
        promotional_price=50.0 * (1 - discount / 100),
    )


def test_base_price_from_options():
    assert base_price_from_options([
        {"option_name": "1 partie", "price": 9.0},
        {"option_name": "3 parties", "price": 24.0, "is_default": True},
    ]) == 24.0
    assert base_price_from_options([
        {"option_name": "a", "price": 12},
        {"option_name": "b", "price": 7.5},
        {"option_name": "c", "price": "free"},
    ]) == 7.5
    assert base_price_from_options([]) == 0.0


def test_recurring_promotion_active_now_is_listed():
    offer = _offer(options=[{"option_name": "1 partie", "price": 10.0, "is_default": True}])

    feed = build_flash_offers([offer], [_recurring()], [], NOW)

    assert len(feed) == 1
    entry = feed[0]
    assert entry.promotion_type == "recurring"
    assert entry.original_price == 10.0
    assert entry.promotional_price == 8.0
    assert entry.end_date == datetime(2025, 6, 18, 21, 30)


def test_recurring_promotion_outside_window_is_not_listed():
    feed = build_flash_offers([_offer()], [_recurring(days_of_week=(1,))], [], NOW)

    assert feed == []


def test_expired_fixed_promotions_are_not_listed():
    feed = build_flash_offers([_offer()], [], [_fixed(end=NOW - timedelta(minutes=1))], NOW)

    assert feed == []


def test_best_discount_per_offer_is_kept():
    feed = build_flash_offers(
        [_offer("OFFER_1"), _offer("OFFER_2")],
        [_recurring("OFFER_1", discount=20.0)],
        [_fixed("OFFER_1", discount=35.0), _fixed("OFFER_2", discount=5.0)],
        NOW,
    )

    by_offer = {f.offer_id: f for f in feed}
    assert set(by_offer) == {"OFFER_1", "OFFER_2"}
    assert by_offer["OFFER_1"].discount_percentage == 35.0
    assert by_offer["OFFER_1"].promotion_type == "regular"
    assert by_offer["OFFER_2"].promotional_price == pytest.approx(47.5)


def test_equal_discount_keeps_first_candidate():
    feed = build_flash_offers(
        [_offer()], [_recurring(discount=20.0)], [_fixed(discount=20.0)], NOW
    )

    assert feed[0].promotion_type == "recurring"


def test_promotions_for_unknown_offers_are_skipped():
    assert build_flash_offers([], [_recurring()], [_fixed()], NOW) == []
