import pytest

from leisure_pricing.domain import BusinessPricing, OfferSummary, PricingOption
from leisure_pricing.enums.pricing_types import PricingType
from leisure_pricing.services.pricing_service.calculate_price import (
    calculate_simple_price,
    infer_pricing_type,
)

BIZ = "BIZ_1"
OFFER = "OFFER_1"


def _store_with_option(store, name, price):
    store.add_offer(
        OfferSummary(id=OFFER, business_user_id=BIZ, title="Laser game"),
        options=[PricingOption(option_name=name, price=price, is_default=True)],
    )
    return store


@pytest.mark.parametrize(
    "name,expected",
    [
        ("1 partie", PricingType.per_game),
        ("Single game", PricingType.per_game),
        ("1 heure", PricingType.per_hour),
        ("Two hours", PricingType.per_hour),
        ("Session VR", PricingType.per_session),
        ("Entrée adulte", PricingType.per_person),
    ],
)
def test_infer_pricing_type_from_option_name(name, expected):
    assert infer_pricing_type(name) is expected


def test_per_game_multiplies_games_and_participants(store):
    result = calculate_simple_price(_store_with_option(store, "1 partie", 8.0), OFFER, BIZ, 4, units=2)

    assert result.final_price == 64.0
    assert result.pricing_type == "per_game"
    assert result.breakdown[0].description == "2 games × 4 participants"


def test_per_hour_is_flat_for_the_group(store):
    result = calculate_simple_price(_store_with_option(store, "1 heure", 30.0), OFFER, BIZ, 6, units=2)

    assert result.final_price == 60.0
    assert result.breakdown[0].description == "2 hours (up to 6 players)"


def test_per_session_ignores_units(store):
    result = calculate_simple_price(_store_with_option(store, "Session VR", 12.5), OFFER, BIZ, 3, units=5)

    assert result.final_price == 37.5
    assert result.breakdown[0].description == "Session for 3 participants"


def test_per_person_default(store):
    result = calculate_simple_price(_store_with_option(store, "Entrée", 10.0), OFFER, BIZ, 1)

    assert result.final_price == 10.0
    assert result.amount_minor_units == 1000
    assert result.breakdown[0].description == "1 participant × 1 unit"


def test_business_pricing_used_without_default_option(store):
    store.add_offer(OfferSummary(id=OFFER, business_user_id=BIZ, title="Bowling"))
    store.add_business_pricing(BIZ, BusinessPricing(price_amount=6.0, price_type="per_partie"))

    result = calculate_simple_price(store, OFFER, BIZ, 3, units=2)

    assert result.pricing_type == "per_game"
    assert result.final_price == 36.0
    assert result.price_per_unit == 6.0
    assert result.total_units == 2


def test_nothing_configured_prices_at_zero(store):
    store.add_offer(OfferSummary(id=OFFER, business_user_id=BIZ, title="Bowling"))

    result = calculate_simple_price(store, OFFER, BIZ, 2)

    assert result.final_price == 0.0
    assert result.pricing_type == "per_person"


def test_invalid_units_returns_none(store):
    assert calculate_simple_price(_store_with_option(store, "1 partie", 8.0), OFFER, BIZ, 2, units=0) is None
