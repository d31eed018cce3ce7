import logging
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from leisure_pricing.models.offer import Offer
from leisure_pricing.models.promotion import Promotion, RecurringPromotion
from leisure_pricing.schemas.promotion import PromotionCreate, RecurringPromotionCreate

logger = logging.getLogger(__name__)


def _generate_promotion_id() -> str:
    return f"PROMO_{uuid.uuid4().hex[:10].upper()}"


def _generate_recurring_id() -> str:
    return f"RPROMO_{uuid.uuid4().hex[:10].upper()}"


def _get_owned_offer(db: Session, business_user_id: str, offer_id: str) -> Offer:
    offer = db.query(Offer).filter(Offer.id == offer_id).first()
    if not offer:
        raise HTTPException(status_code=400, detail=f"Offer {offer_id} not found")
    if offer.business_user_id != business_user_id:
        raise HTTPException(status_code=403, detail="Offer belongs to another business")
    return offer


# ---------- FIXED (DATE RANGE) PROMOTIONS ----------

def create_promotion(db: Session, business_user_id: str, data: PromotionCreate) -> Promotion:
    offer = _get_owned_offer(db, business_user_id, data.offer_id)

    values = data.model_dump()
    values["discount_type"] = data.discount_type.value
    if not values["original_price"] and offer.base_price:
        values["original_price"] = float(offer.base_price)

    promotion = Promotion(id=_generate_promotion_id(), **values)
    db.add(promotion)
    db.commit()
    db.refresh(promotion)
    logger.info("Created promotion %s on offer %s", promotion.id, offer.id)
    return promotion


def list_promotions(
    db: Session,
    offer_id: Optional[str] = None,
    active_only: bool = True,
) -> List[Promotion]:
    query = db.query(Promotion)
    if offer_id:
        query = query.filter(Promotion.offer_id == offer_id)
    if active_only:
        query = query.filter(Promotion.is_active.is_(True))
    return query.order_by(Promotion.start_date.desc()).all()


def deactivate_promotion(db: Session, business_user_id: str, promotion_id: str) -> Optional[Promotion]:
    promotion = db.query(Promotion).filter(Promotion.id == promotion_id).first()
    if not promotion:
        return None
    _get_owned_offer(db, business_user_id, promotion.offer_id)
    promotion.is_active = False
    db.commit()
    db.refresh(promotion)
    return promotion


# ---------- RECURRING (WEEKLY WINDOW) PROMOTIONS ----------

def create_recurring_promotion(
    db: Session, business_user_id: str, data: RecurringPromotionCreate
) -> RecurringPromotion:
    _get_owned_offer(db, business_user_id, data.offer_id)

    promotion = RecurringPromotion(id=_generate_recurring_id(), **data.model_dump())
    db.add(promotion)
    db.commit()
    db.refresh(promotion)
    logger.info("Created recurring promotion %s on offer %s", promotion.id, data.offer_id)
    return promotion


def list_recurring_promotions(
    db: Session,
    offer_id: Optional[str] = None,
    active_only: bool = True,
) -> List[RecurringPromotion]:
    query = db.query(RecurringPromotion)
    if offer_id:
        query = query.filter(RecurringPromotion.offer_id == offer_id)
    if active_only:
        query = query.filter(RecurringPromotion.is_active.is_(True))
    return query.order_by(RecurringPromotion.created_at.asc()).all()


def deactivate_recurring_promotion(
    db: Session, business_user_id: str, promotion_id: str
) -> Optional[RecurringPromotion]:
    promotion = db.query(RecurringPromotion).filter(RecurringPromotion.id == promotion_id).first()
    if not promotion:
        return None
    _get_owned_offer(db, business_user_id, promotion.offer_id)
    promotion.is_active = False
    promotion.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(promotion)
    return promotion
