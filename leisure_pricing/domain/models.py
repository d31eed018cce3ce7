"""Domain models consumed by the pricing engine.

These are plain read-only snapshots of persisted rows. SQLAlchemy models are
in leisure_pricing/models (persistence layer); repositories convert between
the two.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class PricingRule:
    """Conditional price modifier owned by a business."""

    id: str
    business_user_id: str
    rule_name: str
    rule_type: str
    price_modifier: float
    is_percentage: bool
    priority: int = 0
    is_active: bool = True
    offer_id: str | None = None
    conditions: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RecurringPromotion:
    """Weekly day/time window discount on an offer."""

    id: str
    offer_id: str
    days_of_week: tuple[int, ...]
    start_time: str
    end_time: str
    discount_percentage: float
    is_active: bool = True


@dataclass(frozen=True)
class Promotion:
    """Fixed date-range (flash) promotion on an offer."""

    id: str
    offer_id: str
    discount_type: str
    discount_value: float
    start_date: datetime
    end_date: datetime
    original_price: float = 0.0
    promotional_price: float = 0.0
    is_active: bool = True
    title: str | None = None
    max_participants: int | None = None


@dataclass(frozen=True)
class BusinessPricing:
    """Business-level default price entry."""

    price_amount: float
    price_type: str = "per_person"
    service_name: str | None = None


@dataclass(frozen=True)
class PricingOption:
    """Offer pricing option (e.g. "1 partie", "1 heure")."""

    option_name: str
    price: float
    is_default: bool = False


@dataclass(frozen=True)
class OfferSummary:
    """Offer fields needed by browse-time features (flash feed, ranking)."""

    id: str
    business_user_id: str
    title: str
    category: str | None = None
    pricing_options: tuple[dict[str, Any], ...] = ()
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class BookingContext:
    """Booking parameters a rule is evaluated against."""

    participant_count: int
    booking_date: date | None = None
    booking_time: str | None = None


@dataclass(frozen=True)
class InteractionCounts:
    """Engagement totals for one offer."""

    flames: int = 0
    views: int = 0
    bookings: int = 0


@dataclass(frozen=True)
class UserBooking:
    """Past booking of a user, as used by habit scoring."""

    business_user_id: str
    created_at: datetime
