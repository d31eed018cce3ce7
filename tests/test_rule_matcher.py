from datetime import date

from conftest import make_rule
from leisure_pricing.domain import BookingContext
from leisure_pricing.services.pricing_service.rule_matcher import matches

# 2025-06-18 is a Wednesday (Sunday-based weekday 3)
WEDNESDAY = date(2025, 6, 18)


def _ctx(participants=4, booking_date=None, booking_time=None):
    return BookingContext(
        participant_count=participants,
        booking_date=booking_date,
        booking_time=booking_time,
    )


def test_participant_tiers_bounds_are_inclusive():
    rule = make_rule(conditions={"min_participants": 3, "max_participants": 10})

    assert matches(rule, _ctx(participants=3))
    assert matches(rule, _ctx(participants=10))
    assert not matches(rule, _ctx(participants=2))
    assert not matches(rule, _ctx(participants=11))


def test_participant_tiers_missing_bounds_default_open():
    rule = make_rule(conditions={})

    assert matches(rule, _ctx(participants=1))
    assert matches(rule, _ctx(participants=999))
    assert not matches(rule, _ctx(participants=1000))


def test_time_slot_requires_booking_time():
    rule = make_rule(
        rule_type="time_slots",
        conditions={"start_time": "18:00", "end_time": "22:00"},
    )

    assert not matches(rule, _ctx())
    assert matches(rule, _ctx(booking_time="18:00"))
    assert matches(rule, _ctx(booking_time="22:00:00"))
    assert not matches(rule, _ctx(booking_time="22:01"))


def test_time_slot_compares_unpadded_hours_correctly():
    rule = make_rule(
        rule_type="time_slots",
        conditions={"start_time": "9:00", "end_time": "12:00"},
    )

    assert matches(rule, _ctx(booking_time="10:30"))
    assert not matches(rule, _ctx(booking_time="8:59"))


def test_day_of_week_uses_sunday_based_numbering():
    rule = make_rule(rule_type="day_of_week", conditions={"days": [0, 3]})

    assert matches(rule, _ctx(booking_date=WEDNESDAY))
    assert matches(rule, _ctx(booking_date=date(2025, 6, 22)))  # Sunday
    assert not matches(rule, _ctx(booking_date=date(2025, 6, 17)))  # Tuesday


def test_day_of_week_without_date_does_not_match():
    rule = make_rule(rule_type="day_of_week", conditions={"days": [3]})

    assert not matches(rule, _ctx())


def test_reserved_rule_types_never_match():
    for rule_type in ("duration_multiplier", "seasonal"):
        assert not matches(make_rule(rule_type=rule_type), _ctx(booking_date=WEDNESDAY))


def test_unknown_rule_type_does_not_match(caplog):
    rule = make_rule(rule_type="loyalty_points")

    assert not matches(rule, _ctx())
    assert "unknown rule_type" in caplog.text


def test_malformed_conditions_do_not_match():
    assert not matches(
        make_rule(conditions={"min_participants": "lots"}), _ctx()
    )
    assert not matches(
        make_rule(rule_type="time_slots", conditions={"start_time": "noon"}),
        _ctx(booking_time="12:00"),
    )
    assert not matches(
        make_rule(rule_type="day_of_week", conditions={"days": "wednesday"}),
        _ctx(booking_date=WEDNESDAY),
    )
    assert not matches(
        make_rule(rule_type="day_of_week", conditions={"days": ["x"]}),
        _ctx(booking_date=WEDNESDAY),
    )
