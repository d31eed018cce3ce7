import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from leisure_pricing.domain.models import Promotion, RecurringPromotion
from leisure_pricing.enums.promotion_types import DiscountType, PromotionKind
from leisure_pricing.schemas.price_calculation import PromotionEligibility
from leisure_pricing.utils.money import round_money
from leisure_pricing.utils.schedule import (
    describe_days,
    sunday_based_weekday,
    time_to_minutes,
)

logger = logging.getLogger(__name__)


# ===================== SHARED WINDOW PREDICATE =====================


def is_within_weekly_window(
    days_of_week: Iterable[int],
    start_time: str,
    end_time: str,
    weekday: int,
    minutes: int,
) -> bool:
    """
    True when ``weekday`` (Sunday=0) is one of the promotion days and
    ``minutes`` since midnight lies in [start_time, end_time], both inclusive.
    """
    if weekday not in [int(d) for d in days_of_week]:
        return False
    return time_to_minutes(start_time) <= minutes <= time_to_minutes(end_time)


def _recurring_matches(promo: RecurringPromotion, weekday: int, minutes: int) -> bool:
    try:
        return is_within_weekly_window(
            promo.days_of_week, promo.start_time, promo.end_time, weekday, minutes
        )
    except (TypeError, ValueError):
        logger.warning(
            "Skipping recurring promotion %s with malformed window %r-%r",
            promo.id,
            promo.start_time,
            promo.end_time,
        )
        return False


def apply_discount(price: float, discount_percentage: float) -> float:
    """price=20, discount_percentage=25 -> 15; never below 0."""
    return max(price - (price * float(discount_percentage)) / 100.0, 0.0)


# ===================== PER-BOOKING RESOLUTION =====================


def resolve_promotion_eligibility(
    offer_id: Optional[str],
    booking_date: Optional[date],
    booking_time: Optional[str],
    recurring_promotions: Iterable[RecurringPromotion],
    promotions: Iterable[Promotion],
    base_price: Optional[float] = None,
) -> PromotionEligibility:
    """
    Checkout-time promotion lookup for one booking instant.

    Recurring promotions are checked first and the first match wins;
    fixed promotions are only considered when no recurring one matches.
    Fixed promotions of a type other than ``percentage`` report a 0%
    discount.
    """
    if not offer_id or booking_date is None or not booking_time:
        return PromotionEligibility(is_eligible=False)

    if isinstance(booking_date, datetime):
        booking_date = booking_date.date()

    try:
        booking_minutes = time_to_minutes(booking_time)
    except ValueError:
        logger.warning("Invalid booking time %r for offer %s", booking_time, offer_id)
        return PromotionEligibility(is_eligible=False)

    weekday = sunday_based_weekday(booking_date)

    # ---- 1) Recurring promotions ----
    for promo in recurring_promotions:
        if not promo.is_active or promo.offer_id != offer_id:
            continue
        if not _recurring_matches(promo, weekday, booking_minutes):
            continue

        discount = float(promo.discount_percentage)
        return PromotionEligibility(
            is_eligible=True,
            promotion_id=promo.id,
            discount_percentage=discount,
            promotion_type=PromotionKind.recurring.value,
            schedule_info=(
                f"Valid on {describe_days(list(promo.days_of_week))} "
                f"from {promo.start_time[:5]} to {promo.end_time[:5]}"
            ),
            discounted_price=_discounted(base_price, discount),
        )

    # ---- 2) Fixed date-range promotions ----
    for promo in promotions:
        if not promo.is_active or promo.offer_id != offer_id:
            continue
        if not (promo.start_date.date() <= booking_date <= promo.end_date.date()):
            continue

        discount = (
            float(promo.discount_value)
            if promo.discount_type == DiscountType.percentage.value
            else 0.0
        )
        return PromotionEligibility(
            is_eligible=True,
            promotion_id=promo.id,
            discount_percentage=discount,
            promotion_type=PromotionKind.regular.value,
            schedule_info=f"Valid until {promo.end_date:%Y-%m-%d}",
            discounted_price=_discounted(base_price, discount),
        )

    return PromotionEligibility(is_eligible=False)


def _discounted(base_price: Optional[float], discount: float) -> Optional[float]:
    if base_price is None:
        return None
    return round_money(apply_discount(base_price, discount))


# ===================== BROWSE-TIME VARIANT =====================


def active_recurring_promotions(
    promotions: Iterable[RecurringPromotion],
    now: datetime,
) -> List[RecurringPromotion]:
    """Recurring promotions whose weekly window contains ``now``."""
    weekday = sunday_based_weekday(now)
    minutes = now.hour * 60 + now.minute
    return [
        p for p in promotions if p.is_active and _recurring_matches(p, weekday, minutes)
    ]
