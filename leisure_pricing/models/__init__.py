from leisure_pricing.models.business_pricing import BusinessPricing
from leisure_pricing.models.interaction import OfferInteraction
from leisure_pricing.models.offer import Offer, OfferPricingOption
from leisure_pricing.models.pricing_rule import PricingRule
from leisure_pricing.models.promotion import Promotion, RecurringPromotion

__all__ = [
    "BusinessPricing",
    "Offer",
    "OfferInteraction",
    "OfferPricingOption",
    "PricingRule",
    "Promotion",
    "RecurringPromotion",
]
