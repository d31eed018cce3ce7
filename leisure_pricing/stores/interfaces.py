"""Store interfaces (repository pattern).

The pricing engine only reads through these interfaces, so stores must be
swappable and return domain models.
"""

from abc import ABC, abstractmethod
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


class PricingRepository(ABC):
    """Read-only access to everything a price calculation needs."""

    @abstractmethod
    def get_business_default_pricing(self, business_user_id: str) -> BusinessPricing | None:
        """Return the active business pricing entry with the lowest display_order."""
        ...

    @abstractmethod
    def get_offer_base_price(self, offer_id: str) -> float | None:
        """Return the offer's own base_price (None when unset).

        Raises:
            OfferNotFoundError: If the offer does not exist.
        """
        ...

    @abstractmethod
    def get_offer_default_pricing_option(self, offer_id: str) -> PricingOption | None:
        """Return the offer's pricing option flagged is_default, if any."""
        ...

    @abstractmethod
    def get_active_rules(self, business_user_id: str, offer_id: str) -> list[PricingRule]:
        """Return active rules of the business for this offer or for all offers."""
        ...

    @abstractmethod
    def get_active_promotions(self, offer_id: str) -> list[Promotion]:
        """Return active fixed-window promotions of the offer."""
        ...

    @abstractmethod
    def get_active_recurring_promotions(self, offer_id: str) -> list[RecurringPromotion]:
        """Return active recurring promotions of the offer."""
        ...


class CatalogStore(ABC):
    """Read-only access for browse-time features (flash feed, ranking)."""

    @abstractmethod
    def list_active_offers(self) -> list[OfferSummary]:
        ...

    @abstractmethod
    def list_recurring_promotions(self) -> list[RecurringPromotion]:
        """Return every active recurring promotion."""
        ...

    @abstractmethod
    def list_promotions_ending_after(self, moment: datetime) -> list[Promotion]:
        """Return active fixed promotions whose end_date is >= moment."""
        ...

    @abstractmethod
    def list_user_bookings(self, user_id: str) -> list[UserBooking]:
        ...

    @abstractmethod
    def get_interaction_counts(self) -> dict[str, InteractionCounts]:
        """Return engagement totals keyed by offer id."""
        ...
