import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from leisure_pricing.core.config import settings
from leisure_pricing.database.connection import get_db
from leisure_pricing.dependencies.auth import get_current_business_user
from leisure_pricing.domain.errors import DomainError
from leisure_pricing.routes.errors import http_error
from leisure_pricing.schemas.price_calculation import FlashOffer
from leisure_pricing.schemas.promotion import (
    PromotionCreate,
    PromotionResponse,
    RecurringPromotionCreate,
    RecurringPromotionResponse,
)
from leisure_pricing.services.promotion_service.promotion_service import (
    create_promotion,
    create_recurring_promotion,
    deactivate_promotion,
    deactivate_recurring_promotion,
    list_promotions,
    list_recurring_promotions,
)
from leisure_pricing.services.scheduler_service import flash_offer_cache, load_flash_offers
from leisure_pricing.utils.schedule import local_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/promotions", tags=["Promotions"])


@router.get("/flash-offers", response_model=List[FlashOffer])
def flash_offers(db: Session = Depends(get_db)):
    """
    Offers with a promotion running right now, best discount per offer.
    Served from the background feed while it is fresh, rebuilt otherwise.
    """
    now = local_now()
    cached = flash_offer_cache.get(now, max_age_seconds=settings.FLASH_OFFER_REFRESH_SECONDS * 2)
    if cached is not None:
        return cached
    try:
        return load_flash_offers(db, now)
    except DomainError as e:
        logger.exception("Flash offer feed unavailable")
        raise http_error(e)


# ---------- recurring ----------

@router.post("/recurring", response_model=RecurringPromotionResponse, status_code=201)
def create_recurring(
    payload: RecurringPromotionCreate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return create_recurring_promotion(db, business_user_id, payload)


@router.get("/recurring", response_model=List[RecurringPromotionResponse])
def list_recurring(
    offer_id: Optional[str] = None,
    active_only: bool = True,
    db: Session = Depends(get_db),
):
    return list_recurring_promotions(db, offer_id=offer_id, active_only=active_only)


@router.post("/recurring/{promotion_id}/deactivate", response_model=RecurringPromotionResponse)
def deactivate_recurring(
    promotion_id: str,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    promotion = deactivate_recurring_promotion(db, business_user_id, promotion_id)
    if not promotion:
        raise HTTPException(status_code=404, detail="Promotion not found")
    return promotion


# ---------- fixed ----------

@router.post("/", response_model=PromotionResponse, status_code=201)
def create(
    payload: PromotionCreate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return create_promotion(db, business_user_id, payload)


@router.get("/", response_model=List[PromotionResponse])
def list_all(
    offer_id: Optional[str] = None,
    active_only: bool = True,
    db: Session = Depends(get_db),
):
    return list_promotions(db, offer_id=offer_id, active_only=active_only)


@router.post("/{promotion_id}/deactivate", response_model=PromotionResponse)
def deactivate(
    promotion_id: str,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    promotion = deactivate_promotion(db, business_user_id, promotion_id)
    if not promotion:
        raise HTTPException(status_code=404, detail="Promotion not found")
    return promotion
