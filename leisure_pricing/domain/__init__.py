from leisure_pricing.domain.models import (
    BookingContext,
    BusinessPricing,
    InteractionCounts,
    OfferSummary,
    PricingOption,
    PricingRule,
    Promotion,
    RecurringPromotion,
    UserBooking,
)

__all__ = [
    "BookingContext",
    "BusinessPricing",
    "InteractionCounts",
    "OfferSummary",
    "PricingOption",
    "PricingRule",
    "Promotion",
    "RecurringPromotion",
    "UserBooking",
]
