import logging
from typing import Any, Dict, Optional

from leisure_pricing.core.config import settings
from leisure_pricing.domain.models import BookingContext, PricingRule
from leisure_pricing.enums.rule_types import RuleType
from leisure_pricing.utils.schedule import normalize_time, sunday_based_weekday

logger = logging.getLogger(__name__)


# ===================== RULE MATCHER =====================


def matches(rule: PricingRule, context: BookingContext) -> bool:
    """
    Decide whether a pricing rule applies to the booking context.

    Unknown rule types and malformed conditions never match.
    """
    try:
        rule_type = RuleType(rule.rule_type)
    except ValueError:
        logger.warning(
            "Ignoring pricing rule %s with unknown rule_type %r",
            rule.id,
            rule.rule_type,
        )
        return False

    conditions = rule.conditions if isinstance(rule.conditions, dict) else {}

    try:
        if rule_type is RuleType.participant_tiers:
            return _matches_participant_tiers(conditions, context.participant_count)
        if rule_type is RuleType.time_slots:
            return _matches_time_slot(conditions, context.booking_time)
        if rule_type is RuleType.day_of_week:
            return _matches_day_of_week(conditions, context)
        if rule_type is RuleType.duration_multiplier:
            return False
        if rule_type is RuleType.seasonal:
            return False
    except (TypeError, ValueError):
        logger.warning("Pricing rule %s has malformed conditions: %r", rule.id, conditions)
        return False

    # new RuleType members must get their own branch above
    logger.warning("No matcher for rule_type %s (rule %s)", rule_type.value, rule.id)
    return False


# ===================== PER-TYPE PREDICATES =====================


def _matches_participant_tiers(conditions: Dict[str, Any], participant_count: int) -> bool:
    # zero/absent bounds fall back to the open defaults
    min_participants = int(conditions.get("min_participants") or 0)
    max_participants = int(
        conditions.get("max_participants") or settings.MAX_PARTICIPANTS_DEFAULT
    )
    return min_participants <= participant_count <= max_participants


def _matches_time_slot(conditions: Dict[str, Any], booking_time: Optional[str]) -> bool:
    if not booking_time:
        return False
    start_time = normalize_time(conditions.get("start_time") or "00:00:00")
    end_time = normalize_time(conditions.get("end_time") or "23:59:59")
    return start_time <= normalize_time(booking_time) <= end_time


def _matches_day_of_week(conditions: Dict[str, Any], context: BookingContext) -> bool:
    if context.booking_date is None:
        return False
    allowed_days = conditions.get("days") or []
    if not isinstance(allowed_days, (list, tuple)):
        return False
    return sunday_based_weekday(context.booking_date) in [int(d) for d in allowed_days]
