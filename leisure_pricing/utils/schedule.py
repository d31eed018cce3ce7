"""Wall-clock helpers shared by rule matching and promotion windows.

Weekdays follow the Sunday=0 ... Saturday=6 convention used by stored
``days`` / ``days_of_week`` columns.
"""

from datetime import date, datetime
from typing import Union

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def sunday_based_weekday(value: Union[date, datetime]) -> int:
    # date.weekday(): Monday=0
    return (value.weekday() + 1) % 7


def parse_time_parts(value: str) -> tuple[int, int, int]:
    """Split ``HH:MM`` or ``HH:MM:SS`` into validated integers.

    Raises ValueError for anything else.
    """
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time value: {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise ValueError(f"Invalid time value: {value!r}")
    return hour, minute, second


def normalize_time(value: str) -> str:
    """``"9:00"`` -> ``"09:00:00"`` so times compare correctly as strings."""
    hour, minute, second = parse_time_parts(value)
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def time_to_minutes(value: str) -> int:
    # seconds are ignored
    hour, minute, _ = parse_time_parts(value)
    return hour * 60 + minute


def parse_booking_date(value: Union[str, date, datetime, None]) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)).date()


def describe_days(days: list[int]) -> str:
    return ", ".join(DAY_NAMES[d] for d in days if 0 <= d <= 6)


def local_now() -> datetime:
    """Naive wall-clock time; promotion windows are stored in local time."""
    return datetime.now().replace(microsecond=0)
