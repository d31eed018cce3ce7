"""SQLAlchemy implementation of the pricing and catalog stores."""

from datetime import datetime
from functools import wraps

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leisure_pricing import domain
from leisure_pricing.domain.errors import OfferNotFoundError, PricingDataUnavailableError
from leisure_pricing.models.business_pricing import BusinessPricing
from leisure_pricing.models.interaction import OfferInteraction
from leisure_pricing.models.offer import Offer, OfferPricingOption
from leisure_pricing.models.pricing_rule import PricingRule
from leisure_pricing.models.promotion import Promotion, RecurringPromotion
from leisure_pricing.stores.interfaces import CatalogStore, PricingRepository


def _wrap_db_errors(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            raise PricingDataUnavailableError(f"{method.__name__} failed") from e

    return wrapper


# ---------- row -> domain conversion ----------

def _rule_to_domain(row: PricingRule) -> domain.PricingRule:
    return domain.PricingRule(
        id=row.id,
        business_user_id=row.business_user_id,
        offer_id=row.offer_id,
        rule_name=row.rule_name,
        rule_type=row.rule_type,
        conditions=dict(row.conditions or {}),
        price_modifier=float(row.price_modifier or 0.0),
        is_percentage=bool(row.is_percentage),
        is_active=bool(row.is_active),
        priority=int(row.priority or 0),
    )


def _recurring_to_domain(row: RecurringPromotion) -> domain.RecurringPromotion:
    return domain.RecurringPromotion(
        id=row.id,
        offer_id=row.offer_id,
        days_of_week=tuple(int(d) for d in (row.days_of_week or [])),
        start_time=row.start_time,
        end_time=row.end_time,
        discount_percentage=float(row.discount_percentage or 0.0),
        is_active=bool(row.is_active),
    )


def _promotion_to_domain(row: Promotion) -> domain.Promotion:
    return domain.Promotion(
        id=row.id,
        offer_id=row.offer_id,
        title=row.title,
        discount_type=row.discount_type,
        discount_value=float(row.discount_value or 0.0),
        original_price=float(row.original_price or 0.0),
        promotional_price=float(row.promotional_price or 0.0),
        start_date=row.start_date,
        end_date=row.end_date,
        is_active=bool(row.is_active),
        max_participants=row.max_participants,
    )


def _offer_to_domain(row: Offer) -> domain.OfferSummary:
    return domain.OfferSummary(
        id=row.id,
        business_user_id=row.business_user_id,
        title=row.title,
        category=row.category,
        pricing_options=tuple(row.pricing_options or []),
        latitude=row.latitude,
        longitude=row.longitude,
    )


class SqlAlchemyPricingStore(PricingRepository, CatalogStore):
    """Relational store backed by a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    # ---------- PricingRepository ----------

    @_wrap_db_errors
    def get_business_default_pricing(self, business_user_id: str) -> domain.BusinessPricing | None:
        row = (
            self._db.query(BusinessPricing)
            .filter(
                BusinessPricing.business_user_id == business_user_id,
                BusinessPricing.is_active.is_(True),
            )
            .order_by(BusinessPricing.display_order.asc())
            .first()
        )
        if row is None:
            return None
        return domain.BusinessPricing(
            price_amount=float(row.price_amount),
            price_type=row.price_type or "per_person",
            service_name=row.service_name,
        )

    @_wrap_db_errors
    def get_offer_base_price(self, offer_id: str) -> float | None:
        offer = self._db.query(Offer).filter(Offer.id == offer_id).first()
        if offer is None:
            raise OfferNotFoundError(offer_id)
        return float(offer.base_price) if offer.base_price is not None else None

    @_wrap_db_errors
    def get_offer_default_pricing_option(self, offer_id: str) -> domain.PricingOption | None:
        row = (
            self._db.query(OfferPricingOption)
            .filter(
                OfferPricingOption.offer_id == offer_id,
                OfferPricingOption.is_default.is_(True),
            )
            .order_by(OfferPricingOption.created_at.asc())
            .first()
        )
        if row is None:
            return None
        return domain.PricingOption(
            option_name=row.option_name,
            price=float(row.price),
            is_default=True,
        )

    @_wrap_db_errors
    def get_active_rules(self, business_user_id: str, offer_id: str) -> list[domain.PricingRule]:
        rows = (
            self._db.query(PricingRule)
            .filter(
                PricingRule.business_user_id == business_user_id,
                PricingRule.is_active.is_(True),
                or_(PricingRule.offer_id == offer_id, PricingRule.offer_id.is_(None)),
            )
            .order_by(PricingRule.priority.desc(), PricingRule.created_at.asc())
            .all()
        )
        return [_rule_to_domain(r) for r in rows]

    @_wrap_db_errors
    def get_active_promotions(self, offer_id: str) -> list[domain.Promotion]:
        rows = (
            self._db.query(Promotion)
            .filter(Promotion.offer_id == offer_id, Promotion.is_active.is_(True))
            .order_by(Promotion.start_date.asc())
            .all()
        )
        return [_promotion_to_domain(r) for r in rows]

    @_wrap_db_errors
    def get_active_recurring_promotions(self, offer_id: str) -> list[domain.RecurringPromotion]:
        rows = (
            self._db.query(RecurringPromotion)
            .filter(
                RecurringPromotion.offer_id == offer_id,
                RecurringPromotion.is_active.is_(True),
            )
            .order_by(RecurringPromotion.created_at.asc())
            .all()
        )
        return [_recurring_to_domain(r) for r in rows]

    # ---------- CatalogStore ----------

    @_wrap_db_errors
    def list_active_offers(self) -> list[domain.OfferSummary]:
        rows = self._db.query(Offer).filter(Offer.status == "active").all()
        return [_offer_to_domain(r) for r in rows]

    @_wrap_db_errors
    def list_recurring_promotions(self) -> list[domain.RecurringPromotion]:
        rows = (
            self._db.query(RecurringPromotion)
            .filter(RecurringPromotion.is_active.is_(True))
            .order_by(RecurringPromotion.created_at.asc())
            .all()
        )
        return [_recurring_to_domain(r) for r in rows]

    @_wrap_db_errors
    def list_promotions_ending_after(self, moment: datetime) -> list[domain.Promotion]:
        rows = (
            self._db.query(Promotion)
            .filter(Promotion.is_active.is_(True), Promotion.end_date >= moment)
            .order_by(Promotion.end_date.asc())
            .all()
        )
        return [_promotion_to_domain(r) for r in rows]

    @_wrap_db_errors
    def list_user_bookings(self, user_id: str) -> list[domain.UserBooking]:
        rows = (
            self._db.query(OfferInteraction)
            .filter(OfferInteraction.user_id == user_id, OfferInteraction.kind == "booking")
            .all()
        )
        return [
            domain.UserBooking(business_user_id=r.business_user_id, created_at=r.created_at)
            for r in rows
        ]

    @_wrap_db_errors
    def get_interaction_counts(self) -> dict[str, domain.InteractionCounts]:
        rows = (
            self._db.query(
                OfferInteraction.offer_id,
                OfferInteraction.kind,
                func.count(OfferInteraction.id),
            )
            .group_by(OfferInteraction.offer_id, OfferInteraction.kind)
            .all()
        )
        totals: dict[str, dict[str, int]] = {}
        for offer_id, kind, count in rows:
            totals.setdefault(offer_id, {})[kind] = int(count)
        return {
            offer_id: domain.InteractionCounts(
                flames=kinds.get("flame", 0),
                views=kinds.get("view", 0),
                bookings=kinds.get("booking", 0),
            )
            for offer_id, kinds in totals.items()
        }
