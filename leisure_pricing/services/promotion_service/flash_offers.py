from datetime import datetime
from typing import Any, Dict, Iterable, List, Sequence

from leisure_pricing.domain.models import OfferSummary, Promotion, RecurringPromotion
from leisure_pricing.enums.promotion_types import PromotionKind
from leisure_pricing.schemas.price_calculation import FlashOffer
from leisure_pricing.services.promotion_service.promotion_window import (
    active_recurring_promotions,
    apply_discount,
)
from leisure_pricing.utils.money import round_money
from leisure_pricing.utils.schedule import parse_time_parts


def base_price_from_options(options: Sequence[Dict[str, Any]]) -> float:
    """
    Pick a display price from an offer's ``pricing_options`` JSON:
    the default option, else the cheapest priced option, else 0.
    """
    priced = [
        o for o in options or []
        if isinstance(o, dict) and isinstance(o.get("price"), (int, float))
        and not isinstance(o.get("price"), bool)
    ]
    for option in priced:
        if option.get("is_default") is True:
            return float(option["price"])
    if priced:
        return float(min(o["price"] for o in priced))
    return 0.0


def build_flash_offers(
    offers: Iterable[OfferSummary],
    recurring_promotions: Iterable[RecurringPromotion],
    promotions: Iterable[Promotion],
    now: datetime,
) -> List[FlashOffer]:
    """
    Offers with a promotion running right now, one entry per offer.

    When an offer has several, the strictly greater discount wins.
    """
    offers_by_id = {o.id: o for o in offers}
    flash_by_offer_id: Dict[str, FlashOffer] = {}

    def _keep_best(candidate: FlashOffer) -> None:
        existing = flash_by_offer_id.get(candidate.offer_id)
        if existing is None or candidate.discount_percentage > existing.discount_percentage:
            flash_by_offer_id[candidate.offer_id] = candidate

    # ---- 1) Recurring promotions active at this instant ----
    for promo in active_recurring_promotions(recurring_promotions, now):
        offer = offers_by_id.get(promo.offer_id)
        if offer is None:
            continue
        base_price = base_price_from_options(offer.pricing_options)
        hour, minute, second = parse_time_parts(promo.end_time)
        _keep_best(
            _flash_offer(
                offer,
                discount=float(promo.discount_percentage),
                original_price=base_price,
                promotional_price=round_money(
                    apply_discount(base_price, promo.discount_percentage)
                ),
                kind=PromotionKind.recurring,
                end_date=now.replace(hour=hour, minute=minute, second=second, microsecond=0),
            )
        )

    # ---- 2) Fixed promotions not yet over ----
    for promo in promotions:
        if not promo.is_active or promo.end_date < now:
            continue
        offer = offers_by_id.get(promo.offer_id)
        if offer is None:
            continue
        _keep_best(
            _flash_offer(
                offer,
                discount=float(promo.discount_value or 0.0),
                original_price=float(promo.original_price or 0.0),
                promotional_price=float(promo.promotional_price or 0.0),
                kind=PromotionKind.regular,
                end_date=promo.end_date,
            )
        )

    return list(flash_by_offer_id.values())


def _flash_offer(
    offer: OfferSummary,
    discount: float,
    original_price: float,
    promotional_price: float,
    kind: PromotionKind,
    end_date: datetime,
) -> FlashOffer:
    return FlashOffer(
        offer_id=offer.id,
        business_user_id=offer.business_user_id,
        title=offer.title,
        category=offer.category,
        latitude=offer.latitude,
        longitude=offer.longitude,
        discount_percentage=discount,
        original_price=original_price,
        promotional_price=promotional_price,
        promotion_type=kind.value,
        end_date=end_date,
    )
