from datetime import date

import pytest

from conftest import make_rule
from leisure_pricing.domain import (
    BusinessPricing,
    OfferSummary,
    PricingOption,
)
from leisure_pricing.domain.errors import PricingDataUnavailableError
from leisure_pricing.services.pricing_service.calculate_price import (
    calculate_dynamic_price,
    resolve_base_price,
)

BIZ = "BIZ_1"
OFFER = "OFFER_1"


def _offer(offer_id=OFFER):
    return OfferSummary(id=offer_id, business_user_id=BIZ, title="Escape room")


def test_group_discount_scenario(store):
    store.add_offer(_offer(), base_price=20.0)
    store.rules.append(
        make_rule(
            rule_name="Group 3-10",
            priority=1,
            conditions={"min_participants": 3, "max_participants": 10},
        )
    )

    result = calculate_dynamic_price(store, OFFER, BIZ, participant_count=4)

    assert result.base_price == 20.0
    assert result.final_price == 72.0
    assert result.total_savings == 8.0
    assert result.amount_minor_units == 7200
    assert not result.requires_configuration
    assert [(b.description, b.amount) for b in result.breakdown] == [
        ("Base price (4 participants)", 80.0),
        ("Group 3-10", -8.0),
    ]
    assert result.applied_rules[0].rule_name == "Group 3-10"


def test_business_default_pricing_wins_over_offer_base_price(store):
    store.add_offer(_offer(), base_price=30.0)
    store.add_business_pricing(BIZ, BusinessPricing(price_amount=18.0), display_order=1)
    store.add_business_pricing(BIZ, BusinessPricing(price_amount=15.0), display_order=0)

    assert resolve_base_price(store, OFFER, BIZ) == (15.0, True)
    assert calculate_dynamic_price(store, OFFER, BIZ, 2).final_price == 30.0


def test_zero_offer_base_price_falls_through_to_default_option(store):
    store.add_offer(
        _offer(),
        base_price=0.0,
        options=[
            PricingOption(option_name="1 heure", price=40.0),
            PricingOption(option_name="1 partie", price=9.0, is_default=True),
        ],
    )

    assert resolve_base_price(store, OFFER, BIZ) == (9.0, True)


def test_unconfigured_offer_prices_at_zero_and_is_flagged(store, caplog):
    store.add_offer(_offer())

    result = calculate_dynamic_price(store, OFFER, BIZ, 3)

    assert result.base_price == 0.0
    assert result.final_price == 0.0
    assert result.requires_configuration
    assert "No pricing source" in caplog.text


def test_rules_for_other_offers_and_inactive_rules_are_ignored(store):
    store.add_offer(_offer(), base_price=10.0)
    store.rules.extend(
        [
            make_rule(rule_id="other", offer_id="OFFER_2", price_modifier=-50.0),
            make_rule(rule_id="off", is_active=False, price_modifier=-50.0),
            make_rule(rule_id="mine", offer_id=OFFER, price_modifier=10.0),
        ]
    )

    result = calculate_dynamic_price(store, OFFER, BIZ, 1)

    assert result.final_price == 11.0
    assert [r.rule_name for r in result.applied_rules] == ["mine"]


def test_booking_date_and_time_drive_rule_matching(store):
    store.add_offer(_offer(), base_price=10.0)
    store.rules.extend(
        [
            make_rule(
                rule_id="evening",
                rule_type="time_slots",
                price_modifier=20.0,
                conditions={"start_time": "18:00", "end_time": "23:00"},
            ),
            make_rule(
                rule_id="weekend",
                rule_type="day_of_week",
                price_modifier=2.0,
                is_percentage=False,
                conditions={"days": [0, 6]},
            ),
        ]
    )

    # Saturday evening: +20% then +2
    saturday = calculate_dynamic_price(
        store, OFFER, BIZ, 1, booking_date=date(2025, 6, 21), booking_time="19:30"
    )
    assert saturday.final_price == 14.0

    weekday_morning = calculate_dynamic_price(
        store, OFFER, BIZ, 1, booking_date="2025-06-18", booking_time="10:00"
    )
    assert weekday_morning.final_price == 10.0


def test_amounts_are_rounded_to_cents(store):
    store.add_offer(_offer(), base_price=9.99)
    store.rules.append(make_rule(price_modifier=-33.0))

    result = calculate_dynamic_price(store, OFFER, BIZ, 3)

    # 29.97 * 0.67 = 20.0799
    assert result.final_price == 20.08
    assert result.amount_minor_units == 2008


@pytest.mark.parametrize(
    "offer_id,business_user_id,participants",
    [("", BIZ, 2), (OFFER, "", 2), (OFFER, BIZ, 0), (OFFER, BIZ, -1)],
)
def test_invalid_input_returns_none(store, offer_id, business_user_id, participants):
    store.add_offer(_offer(), base_price=10.0)

    assert calculate_dynamic_price(store, offer_id, business_user_id, participants) is None


def test_invalid_booking_date_returns_none(store):
    store.add_offer(_offer(), base_price=10.0)

    assert calculate_dynamic_price(store, OFFER, BIZ, 2, booking_date="next friday") is None
    assert calculate_dynamic_price(store, OFFER, BIZ, 2, booking_time="25:00") is None


def test_unknown_offer_returns_none(store):
    assert calculate_dynamic_price(store, "MISSING", BIZ, 2) is None


def test_repository_failure_returns_none(store, caplog):
    class FailingStore(type(store)):
        def get_active_rules(self, business_user_id, offer_id):
            raise PricingDataUnavailableError("rules table unreachable")

    failing = FailingStore()
    failing.add_offer(_offer(), base_price=10.0)

    assert calculate_dynamic_price(failing, OFFER, BIZ, 2) is None
    assert "Price calculation failed" in caplog.text
