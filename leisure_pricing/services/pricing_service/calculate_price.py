import logging
from datetime import date
from typing import Optional, Tuple, Union

from leisure_pricing.domain.errors import DomainError, InvalidBookingContextError
from leisure_pricing.domain.models import BookingContext
from leisure_pricing.enums.pricing_types import PricingType
from leisure_pricing.schemas.price_calculation import (
    AppliedRule,
    BreakdownLine,
    PriceCalculation,
    SimplePriceCalculation,
)
from leisure_pricing.services.pricing_service.price_accumulator import (
    apply_rules,
    sort_rules_by_priority,
)
from leisure_pricing.services.pricing_service.rule_matcher import matches
from leisure_pricing.stores.interfaces import PricingRepository
from leisure_pricing.utils.money import round_money, to_minor_units
from leisure_pricing.utils.schedule import normalize_time, parse_booking_date

logger = logging.getLogger(__name__)


# ===================== BASE PRICE RESOLUTION =====================


def resolve_base_price(
    repository: PricingRepository,
    offer_id: str,
    business_user_id: str,
) -> Tuple[float, bool]:
    """
    Return ``(base_price, found)``.

    Resolution order, first hit wins:
    1. business default pricing (lowest display_order)
    2. offer base_price (0 / unset falls through)
    3. offer default pricing option
    4. 0, with found=False
    """
    business_pricing = repository.get_business_default_pricing(business_user_id)
    if business_pricing is not None:
        return float(business_pricing.price_amount), True

    offer_base_price = repository.get_offer_base_price(offer_id)
    if offer_base_price:
        return float(offer_base_price), True

    option = repository.get_offer_default_pricing_option(offer_id)
    if option is not None:
        return float(option.price), True

    return 0.0, False


def build_booking_context(
    participant_count: int,
    booking_date: Union[str, date, None],
    booking_time: Optional[str],
) -> BookingContext:
    """Parse booking date/time; InvalidBookingContextError when malformed."""
    try:
        parsed_date = parse_booking_date(booking_date)
        parsed_time = normalize_time(booking_time) if booking_time else None
    except ValueError as e:
        raise InvalidBookingContextError(str(e)) from e
    return BookingContext(
        participant_count=participant_count,
        booking_date=parsed_date,
        booking_time=parsed_time,
    )


# ===================== DYNAMIC (RULE BASED) PRICING =====================


def calculate_dynamic_price(
    repository: PricingRepository,
    offer_id: str,
    business_user_id: str,
    participant_count: int,
    booking_date: Union[str, date, None] = None,
    booking_time: Optional[str] = None,
) -> Optional[PriceCalculation]:
    """
    Rule-based price for a booking, or None when it cannot be calculated.

    None means "price unavailable": missing identifiers, a non-positive
    participant count, or a data/lookup failure (logged).
    """
    if not offer_id or not business_user_id or participant_count <= 0:
        return None

    try:
        context = build_booking_context(participant_count, booking_date, booking_time)
    except InvalidBookingContextError as e:
        logger.warning("Invalid booking context for offer %s: %s", offer_id, e.message)
        return None

    try:
        base_price, found = resolve_base_price(repository, offer_id, business_user_id)

        rules = sort_rules_by_priority(
            repository.get_active_rules(business_user_id, offer_id)
        )
    except DomainError:
        logger.exception(
            "Price calculation failed for offer %s (business %s)",
            offer_id,
            business_user_id,
        )
        return None

    if not found:
        logger.warning("No pricing source configured for offer %s", offer_id)

    matched = [rule for rule in rules if matches(rule, context)]
    result = apply_rules(base_price, participant_count, matched)

    final_price = round_money(result["final_price"])
    return PriceCalculation(
        base_price=round_money(base_price),
        final_price=final_price,
        applied_rules=[
            AppliedRule(
                rule_name=r["rule_name"],
                modifier=r["modifier"],
                is_percentage=r["is_percentage"],
                savings=round_money(r["savings"]) if r["savings"] is not None else None,
            )
            for r in result["applied_rules"]
        ],
        total_savings=round_money(result["total_savings"]),
        breakdown=[
            BreakdownLine(description=line["description"], amount=round_money(line["amount"]))
            for line in result["breakdown"]
        ],
        amount_minor_units=to_minor_units(final_price),
        requires_configuration=not found,
    )


# ===================== SIMPLE (UNIT BASED) PRICING =====================

_PRICING_TYPE_ALIASES = {
    "per_partie": PricingType.per_game,
    "per_heure": PricingType.per_hour,
}


def infer_pricing_type(option_name: str) -> PricingType:
    """
    "2 parties" -> per_game, "1 heure" -> per_hour, "Session VR" -> per_session,
    anything else -> per_person.
    """
    name = (option_name or "").lower()
    if "partie" in name or "game" in name:
        return PricingType.per_game
    if "heure" in name or "hour" in name:
        return PricingType.per_hour
    if "session" in name:
        return PricingType.per_session
    return PricingType.per_person


def _coerce_pricing_type(value: Optional[str]) -> PricingType:
    if value in _PRICING_TYPE_ALIASES:
        return _PRICING_TYPE_ALIASES[value]
    try:
        return PricingType(value)
    except ValueError:
        return PricingType.per_person


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def calculate_simple_price(
    repository: PricingRepository,
    offer_id: str,
    business_user_id: str,
    participant_count: int,
    units: int = 1,
) -> Optional[SimplePriceCalculation]:
    """
    Unit-based price (games, hours, sessions or people).

    The offer's default pricing option is used first, its type inferred
    from the option name; otherwise the business default pricing and its
    declared price_type.
    """
    if not offer_id or not business_user_id or participant_count <= 0 or units <= 0:
        return None

    try:
        base_price = 0.0
        pricing_type = PricingType.per_person

        option = repository.get_offer_default_pricing_option(offer_id)
        if option is not None:
            base_price = float(option.price)
            pricing_type = infer_pricing_type(option.option_name)
        else:
            business_pricing = repository.get_business_default_pricing(business_user_id)
            if business_pricing is not None:
                base_price = float(business_pricing.price_amount)
                pricing_type = _coerce_pricing_type(business_pricing.price_type)
    except DomainError:
        logger.exception("Simple price calculation failed for offer %s", offer_id)
        return None

    if pricing_type is PricingType.per_game:
        final_price = base_price * units * participant_count
        description = f"{_plural(units, 'game')} × {_plural(participant_count, 'participant')}"
    elif pricing_type is PricingType.per_hour:
        # flat price for the whole group
        final_price = base_price * units
        description = f"{_plural(units, 'hour')} (up to {participant_count} players)"
    elif pricing_type is PricingType.per_session:
        final_price = base_price * participant_count
        description = f"Session for {_plural(participant_count, 'participant')}"
    else:
        final_price = base_price * participant_count * units
        description = f"{_plural(participant_count, 'participant')} × {_plural(units, 'unit')}"

    final_price = round_money(final_price)
    return SimplePriceCalculation(
        base_price=round_money(base_price),
        final_price=final_price,
        price_per_unit=round_money(base_price),
        total_units=units,
        pricing_type=pricing_type.value,
        breakdown=[BreakdownLine(description=description, amount=final_price)],
        amount_minor_units=to_minor_units(final_price),
    )
