import pytest

from conftest import make_rule
from leisure_pricing.services.pricing_service.price_accumulator import (
    apply_rules,
    sort_rules_by_priority,
)


@pytest.mark.parametrize("participants", [1, 2, 7])
def test_no_rules_is_base_times_participants(participants):
    result = apply_rules(12.5, participants, [])

    assert result["final_price"] == pytest.approx(12.5 * participants)
    assert result["applied_rules"] == []
    assert result["total_savings"] == 0
    assert len(result["breakdown"]) == 1


def test_single_percentage_rule_records_savings():
    result = apply_rules(50.0, 2, [make_rule(price_modifier=-15.0)])

    assert result["final_price"] == pytest.approx(85.0)
    assert result["applied_rules"][0]["savings"] == pytest.approx(15.0)
    assert result["breakdown"][1]["amount"] == pytest.approx(-15.0)


def test_single_absolute_rule_is_additive():
    result = apply_rules(30.0, 1, [make_rule(price_modifier=5.0, is_percentage=False)])

    assert result["final_price"] == pytest.approx(35.0)
    assert result["applied_rules"][0]["savings"] is None
    assert result["total_savings"] == 0


def test_absolute_rule_never_goes_below_zero():
    result = apply_rules(10.0, 1, [make_rule(price_modifier=-50.0, is_percentage=False)])

    assert result["final_price"] == 0.0


def test_higher_priority_rule_is_applied_first():
    a = make_rule(rule_id="A", priority=1, price_modifier=-10.0)
    b = make_rule(rule_id="B", priority=5, price_modifier=-2.0, is_percentage=False)

    for given in ([a, b], [b, a]):
        ordered = sort_rules_by_priority(given)
        assert [r.id for r in ordered] == ["B", "A"]
        result = apply_rules(100.0, 1, ordered)
        # (100 - 2) * 0.9
        assert result["final_price"] == pytest.approx(88.2)


def test_priority_ties_keep_fetch_order():
    rules = [
        make_rule(rule_id="first", priority=3),
        make_rule(rule_id="second", priority=3),
        make_rule(rule_id="top", priority=9),
    ]

    assert [r.id for r in sort_rules_by_priority(rules)] == ["top", "first", "second"]


def test_total_savings_ignores_later_increase():
    rules = [
        make_rule(rule_id="discount", priority=2, price_modifier=-20.0),
        make_rule(rule_id="surcharge", priority=1, price_modifier=50.0),
    ]

    result = apply_rules(100.0, 1, rules)

    assert result["final_price"] == pytest.approx(120.0)
    assert result["total_savings"] == pytest.approx(20.0)
    assert [r["savings"] for r in result["applied_rules"]] == [pytest.approx(20.0), None]


def test_group_discount_scenario():
    rule = make_rule(
        rule_name="Group discount",
        priority=1,
        conditions={"min_participants": 3, "max_participants": 10},
    )

    result = apply_rules(20.0, 4, [rule])

    assert result["final_price"] == pytest.approx(72.0)
    assert result["total_savings"] == pytest.approx(8.0)
    assert [(l["description"], l["amount"]) for l in result["breakdown"]] == [
        ("Base price (4 participants)", pytest.approx(80.0)),
        ("Group discount", pytest.approx(-8.0)),
    ]
