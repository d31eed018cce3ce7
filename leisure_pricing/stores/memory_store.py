"""In-memory store used by tests and local tooling."""

from dataclasses import dataclass, field
from datetime import datetime

from leisure_pricing.domain import (
    BusinessPricing,
    InteractionCounts,
    OfferSummary,
    PricingOption,
    PricingRule,
    Promotion,
    RecurringPromotion,
    UserBooking,
)
from leisure_pricing.domain.errors import OfferNotFoundError
from leisure_pricing.stores.interfaces import CatalogStore, PricingRepository


@dataclass
class InMemoryPricingStore(PricingRepository, CatalogStore):
    """Holds domain objects in lists; list order is the "fetch order"."""

    business_pricing: dict[str, list[tuple[int, BusinessPricing]]] = field(default_factory=dict)
    offers: dict[str, OfferSummary] = field(default_factory=dict)
    offer_base_prices: dict[str, float | None] = field(default_factory=dict)
    pricing_options: dict[str, list[PricingOption]] = field(default_factory=dict)
    rules: list[PricingRule] = field(default_factory=list)
    promotions: list[Promotion] = field(default_factory=list)
    recurring_promotions: list[RecurringPromotion] = field(default_factory=list)
    bookings: dict[str, list[UserBooking]] = field(default_factory=dict)
    interactions: dict[str, InteractionCounts] = field(default_factory=dict)

    def add_offer(
        self,
        offer: OfferSummary,
        base_price: float | None = None,
        options: list[PricingOption] | None = None,
    ) -> None:
        self.offers[offer.id] = offer
        self.offer_base_prices[offer.id] = base_price
        self.pricing_options[offer.id] = list(options or [])

    def add_business_pricing(
        self, business_user_id: str, entry: BusinessPricing, display_order: int = 0
    ) -> None:
        self.business_pricing.setdefault(business_user_id, []).append((display_order, entry))

    # ---------- PricingRepository ----------

    def get_business_default_pricing(self, business_user_id: str) -> BusinessPricing | None:
        entries = self.business_pricing.get(business_user_id) or []
        if not entries:
            return None
        return min(entries, key=lambda e: e[0])[1]

    def get_offer_base_price(self, offer_id: str) -> float | None:
        if offer_id not in self.offers:
            raise OfferNotFoundError(offer_id)
        return self.offer_base_prices.get(offer_id)

    def get_offer_default_pricing_option(self, offer_id: str) -> PricingOption | None:
        for option in self.pricing_options.get(offer_id, []):
            if option.is_default:
                return option
        return None

    def get_active_rules(self, business_user_id: str, offer_id: str) -> list[PricingRule]:
        return [
            r
            for r in self.rules
            if r.is_active
            and r.business_user_id == business_user_id
            and (r.offer_id is None or r.offer_id == offer_id)
        ]

    def get_active_promotions(self, offer_id: str) -> list[Promotion]:
        return [p for p in self.promotions if p.is_active and p.offer_id == offer_id]

    def get_active_recurring_promotions(self, offer_id: str) -> list[RecurringPromotion]:
        return [
            p for p in self.recurring_promotions if p.is_active and p.offer_id == offer_id
        ]

    # ---------- CatalogStore ----------

    def list_active_offers(self) -> list[OfferSummary]:
        return list(self.offers.values())

    def list_recurring_promotions(self) -> list[RecurringPromotion]:
        return [p for p in self.recurring_promotions if p.is_active]

    def list_promotions_ending_after(self, moment: datetime) -> list[Promotion]:
        return [p for p in self.promotions if p.is_active and p.end_date >= moment]

    def list_user_bookings(self, user_id: str) -> list[UserBooking]:
        return list(self.bookings.get(user_id, []))

    def get_interaction_counts(self) -> dict[str, InteractionCounts]:
        return dict(self.interactions)
