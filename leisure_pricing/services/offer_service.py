import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from leisure_pricing.models.business_pricing import BusinessPricing
from leisure_pricing.models.offer import Offer, OfferPricingOption
from leisure_pricing.schemas.offer import (
    BusinessPricingCreate,
    OfferCreate,
    PricingOptionCreate,
)

logger = logging.getLogger(__name__)


def _generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:10].upper()}"


# --------------------------
# CREATE OFFER
# --------------------------
def create_offer(db: Session, business_user_id: str, data: OfferCreate) -> Offer:
    values = data.model_dump()
    offer = Offer(id=_generate_id("OFFER"), business_user_id=business_user_id, **values)
    db.add(offer)
    db.flush()

    # option rows mirror the pricing_options JSON
    for item in data.pricing_options:
        db.add(
            OfferPricingOption(
                id=_generate_id("OPT"),
                offer_id=offer.id,
                option_name=item.option_name,
                price=item.price,
                is_default=item.is_default,
            )
        )

    db.commit()
    db.refresh(offer)
    logger.info("Created offer %s for business %s", offer.id, business_user_id)
    return offer


# --------------------------
# GET / LIST OFFERS
# --------------------------
def get_offer(db: Session, offer_id: str) -> Optional[Offer]:
    return db.query(Offer).filter(Offer.id == offer_id).first()


def list_offers(db: Session, business_user_id: Optional[str] = None) -> List[Offer]:
    query = db.query(Offer)
    if business_user_id:
        query = query.filter(Offer.business_user_id == business_user_id)
    return query.order_by(Offer.created_at.desc()).all()


# --------------------------
# UPDATE BASE PRICE
# --------------------------
def update_base_price(
    db: Session, business_user_id: str, offer_id: str, new_base_price: Optional[float]
) -> Optional[Offer]:
    offer = get_offer(db, offer_id)
    if not offer or offer.business_user_id != business_user_id:
        return None
    offer.base_price = new_base_price
    db.commit()
    db.refresh(offer)
    return offer


# --------------------------
# PRICING OPTIONS
# --------------------------
def add_pricing_option(
    db: Session, business_user_id: str, offer_id: str, data: PricingOptionCreate
) -> Optional[OfferPricingOption]:
    offer = get_offer(db, offer_id)
    if not offer or offer.business_user_id != business_user_id:
        return None

    options = list(offer.pricing_options or [])
    if data.is_default:
        # only one default option per offer
        for row in offer.options:
            row.is_default = False
        options = [{**o, "is_default": False} for o in options]

    option = OfferPricingOption(
        id=_generate_id("OPT"),
        offer_id=offer.id,
        option_name=data.option_name,
        price=data.price,
        is_default=data.is_default,
    )
    db.add(option)
    offer.pricing_options = options + [data.model_dump()]

    db.commit()
    db.refresh(option)
    return option


# --------------------------
# BUSINESS DEFAULT PRICING
# --------------------------
def add_business_pricing(
    db: Session, business_user_id: str, data: BusinessPricingCreate
) -> BusinessPricing:
    values = data.model_dump()
    values["price_type"] = data.price_type.value
    entry = BusinessPricing(id=_generate_id("BPRICE"), business_user_id=business_user_id, **values)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_business_pricing(db: Session, business_user_id: str) -> List[BusinessPricing]:
    return (
        db.query(BusinessPricing)
        .filter(BusinessPricing.business_user_id == business_user_id)
        .order_by(BusinessPricing.display_order.asc())
        .all()
    )
