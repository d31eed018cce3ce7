from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from leisure_pricing.domain.models import InteractionCounts, OfferSummary, UserBooking
from leisure_pricing.schemas.scoring import OfferScore, ScoreDetails
from leisure_pricing.utils.geo import haversine_km

MAX_SCORE = 10.0
PROMOTION_BONUS = 2.0
NO_LOCATION_PROXIMITY_SCORE = 1.5


def habit_score(bookings_with_business: List[UserBooking], now: datetime) -> float:
    """0-4 points, the more recent the last booking with this business the higher."""
    if not bookings_with_business:
        return 0.0
    last_booking = max(b.created_at for b in bookings_with_business)
    days_since = (now - last_booking).total_seconds() / 86400

    if days_since <= 30:
        return 4.0
    if days_since <= 90:
        return 3.0
    if days_since <= 180:
        return 2.0
    return 1.0


def proximity_score(
    user_position: Optional[Tuple[float, float]],
    offer: OfferSummary,
) -> float:
    """0.5-3.5 points by distance; 1.5 when either position is unknown."""
    if user_position is None or offer.latitude is None or offer.longitude is None:
        return NO_LOCATION_PROXIMITY_SCORE

    distance = haversine_km(user_position[0], user_position[1], offer.latitude, offer.longitude)
    if distance <= 1:
        return 3.5
    if distance <= 5:
        return 3.0
    if distance <= 10:
        return 2.0
    if distance <= 25:
        return 1.0
    return 0.5


def popularity_score(counts: Optional[InteractionCounts]) -> float:
    """0.5-2.5 points; a flame weighs 2 views, a booking 3."""
    counts = counts or InteractionCounts()
    interactions = counts.flames * 2 + counts.views + counts.bookings * 3

    if interactions >= 100:
        return 2.5
    if interactions >= 50:
        return 2.0
    if interactions >= 20:
        return 1.5
    if interactions >= 5:
        return 1.0
    return 0.5


def score_offers(
    offers: Iterable[OfferSummary],
    user_bookings: Iterable[UserBooking],
    interactions: Dict[str, InteractionCounts],
    promoted_offer_ids: Set[str],
    now: datetime,
    user_position: Optional[Tuple[float, float]] = None,
) -> List[OfferScore]:
    """Score every offer (capped at 10) and return them best first."""
    bookings = list(user_bookings)
    scored: List[OfferScore] = []

    for offer in offers:
        habit = habit_score(
            [b for b in bookings if b.business_user_id == offer.business_user_id], now
        )
        proximity = proximity_score(user_position, offer)
        popularity = popularity_score(interactions.get(offer.id))
        bonus = PROMOTION_BONUS if offer.id in promoted_offer_ids else 0.0

        scored.append(
            OfferScore(
                offer_id=offer.id,
                score=min(MAX_SCORE, habit + proximity + popularity + bonus),
                details=ScoreDetails(
                    habit_score=habit,
                    proximity_score=proximity,
                    popularity_score=popularity,
                    promotion_bonus=bonus,
                ),
            )
        )

    return sorted(scored, key=lambda s: s.score, reverse=True)
