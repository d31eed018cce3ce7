def round_money(amount: float, digits: int = 2) -> float:
    """Round a currency amount; ``+ 0.0`` turns ``-0.0`` into ``0.0``."""
    return round(float(amount), digits) + 0.0


def to_minor_units(amount: float) -> int:
    # 72.0 -> 7200 cents, the amount handed to payment-intent creation
    return int(round(float(amount) * 100))
