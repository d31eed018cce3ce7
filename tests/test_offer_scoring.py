from datetime import datetime, timedelta

import pytest

from leisure_pricing.domain import InteractionCounts, OfferSummary, UserBooking
from leisure_pricing.services.offer_scoring import (
    MAX_SCORE,
    habit_score,
    popularity_score,
    proximity_score,
    score_offers,
)
from leisure_pricing.utils.geo import haversine_km

NOW = datetime(2025, 6, 18, 12, 0)
PARIS = (48.8566, 2.3522)
LYON = (45.7640, 4.8357)


def _offer(offer_id="OFFER_1", business="BIZ_1", position=PARIS):
    lat, lng = position if position else (None, None)
    return OfferSummary(
        id=offer_id, business_user_id=business, title=offer_id, latitude=lat, longitude=lng
    )


def test_haversine_paris_lyon():
    assert haversine_km(*PARIS, *LYON) == pytest.approx(392, abs=2)


@pytest.mark.parametrize(
    "days_ago,expected", [(5, 4.0), (30, 4.0), (60, 3.0), (120, 2.0), (400, 1.0)]
)
def test_habit_score_by_recency(days_ago, expected):
    bookings = [UserBooking(business_user_id="BIZ_1", created_at=NOW - timedelta(days=days_ago))]

    assert habit_score(bookings, NOW) == expected


def test_habit_score_without_bookings():
    assert habit_score([], NOW) == 0.0


def test_proximity_score():
    assert proximity_score(PARIS, _offer()) == 3.5
    assert proximity_score(LYON, _offer()) == 0.5
    assert proximity_score(None, _offer()) == 1.5
    assert proximity_score(PARIS, _offer(position=None)) == 1.5


@pytest.mark.parametrize(
    "counts,expected",
    [
        (InteractionCounts(), 0.5),
        (InteractionCounts(views=5), 1.0),
        (InteractionCounts(flames=10), 1.5),
        (InteractionCounts(bookings=17), 2.0),
        (InteractionCounts(flames=20, views=30, bookings=10), 2.5),
    ],
)
def test_popularity_score(counts, expected):
    assert popularity_score(counts) == expected


def test_scores_are_capped_and_sorted():
    offers = [_offer("QUIET", business="BIZ_2", position=LYON), _offer("STAR")]
    bookings = [UserBooking(business_user_id="BIZ_1", created_at=NOW - timedelta(days=2))]
    interactions = {"STAR": InteractionCounts(flames=100)}

    ranked = score_offers(offers, bookings, interactions, {"STAR"}, NOW, user_position=PARIS)

    assert [s.offer_id for s in ranked] == ["STAR", "QUIET"]
    # 4 + 3.5 + 2.5 + 2 = 12, capped
    assert ranked[0].score == MAX_SCORE
    assert ranked[0].details.promotion_bonus == 2.0
    assert ranked[1].score == pytest.approx(0.0 + 0.5 + 0.5)
