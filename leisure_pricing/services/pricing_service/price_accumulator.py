from typing import Any, Dict, Iterable, List

from leisure_pricing.domain.models import PricingRule


def sort_rules_by_priority(rules: Iterable[PricingRule]) -> List[PricingRule]:
    """Highest priority first; ties keep fetch order (sorted() is stable)."""
    return sorted(rules, key=lambda r: r.priority or 0, reverse=True)


def apply_rules(
    base_price: float,
    participant_count: int,
    rules: Iterable[PricingRule],
) -> Dict[str, Any]:
    """
    Fold matched rules over ``base_price * participant_count``.

    Rules are applied in the order given:
    - percentage: price=80, modifier=-10 -> delta=-8, price=72
    - absolute:   price=80, modifier=-5  -> delta=-5, price=75

    ``total_savings`` is the sum of per-rule reductions, so a later
    increase does not cancel an earlier saving. Amounts are not rounded here.
    """
    final_price = float(base_price) * participant_count
    applied_rules: List[Dict[str, Any]] = []
    breakdown: List[Dict[str, Any]] = [
        {
            "description": f"Base price ({participant_count} participants)",
            "amount": final_price,
        }
    ]

    for rule in rules:
        modifier = float(rule.price_modifier or 0.0)
        previous_price = final_price

        if rule.is_percentage:
            delta = final_price * (modifier / 100.0)
            final_price = final_price * (1.0 + modifier / 100.0)
        else:
            delta = modifier
            final_price = final_price + modifier

        savings = previous_price - final_price

        applied_rules.append(
            {
                "rule_name": rule.rule_name,
                "modifier": modifier,
                "is_percentage": bool(rule.is_percentage),
                "savings": savings if savings > 0 else None,
            }
        )
        breakdown.append({"description": rule.rule_name, "amount": delta})

    final_price = max(final_price, 0.0)

    total_savings = sum(r["savings"] for r in applied_rules if r["savings"])

    return {
        "final_price": final_price,
        "applied_rules": applied_rules,
        "breakdown": breakdown,
        "total_savings": total_savings,
    }
