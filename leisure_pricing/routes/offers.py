import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from leisure_pricing.database.connection import get_db
from leisure_pricing.dependencies.auth import get_current_business_user
from leisure_pricing.domain.errors import DomainError
from leisure_pricing.routes.errors import http_error
from leisure_pricing.schemas.offer import (
    BasePriceUpdate,
    BusinessPricingCreate,
    BusinessPricingResponse,
    OfferCreate,
    OfferResponse,
    PricingOptionCreate,
    PricingOptionResponse,
)
from leisure_pricing.schemas.scoring import RankedOffersResponse
from leisure_pricing.services.offer_scoring import score_offers
from leisure_pricing.services.offer_service import (
    add_business_pricing,
    add_pricing_option,
    create_offer,
    get_offer,
    list_business_pricing,
    list_offers,
    update_base_price,
)
from leisure_pricing.stores.sqlalchemy_store import SqlAlchemyPricingStore
from leisure_pricing.utils.schedule import local_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Offers"])


@router.post("/offers", response_model=OfferResponse, status_code=201)
def create(
    payload: OfferCreate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return create_offer(db, business_user_id, payload)


@router.get("/offers", response_model=List[OfferResponse])
def list_all(business_user_id: Optional[str] = None, db: Session = Depends(get_db)):
    return list_offers(db, business_user_id=business_user_id)


# declared before /offers/{offer_id} so "ranked" is not taken as an id
@router.get("/offers/ranked", response_model=RankedOffersResponse)
def ranked_offers(
    user_id: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    db: Session = Depends(get_db),
):
    """Active offers ranked for one user by habit, proximity, popularity and promotions."""
    now = local_now()
    store = SqlAlchemyPricingStore(db)
    try:
        offers = store.list_active_offers()
        bookings = store.list_user_bookings(user_id)
        interactions = store.get_interaction_counts()
        promoted = {p.offer_id for p in store.list_promotions_ending_after(now)}
    except DomainError as e:
        logger.exception("Offer ranking failed for user %s", user_id)
        raise http_error(e)

    position = None
    if latitude is not None and longitude is not None:
        position = (latitude, longitude)

    return RankedOffersResponse(
        user_id=user_id,
        offers=score_offers(offers, bookings, interactions, promoted, now, user_position=position),
    )


@router.get("/offers/{offer_id}", response_model=OfferResponse)
def get_one(offer_id: str, db: Session = Depends(get_db)):
    offer = get_offer(db, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")
    return offer


@router.put("/offers/{offer_id}/base-price", response_model=OfferResponse)
def set_base_price(
    offer_id: str,
    payload: BasePriceUpdate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    offer = update_base_price(db, business_user_id, offer_id, payload.base_price)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")
    return offer


@router.post("/offers/{offer_id}/pricing-options", response_model=PricingOptionResponse, status_code=201)
def add_option(
    offer_id: str,
    payload: PricingOptionCreate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    option = add_pricing_option(db, business_user_id, offer_id, payload)
    if not option:
        raise HTTPException(status_code=404, detail="Offer not found")
    return option


@router.post("/business-pricing", response_model=BusinessPricingResponse, status_code=201)
def add_default_pricing(
    payload: BusinessPricingCreate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return add_business_pricing(db, business_user_id, payload)


@router.get("/business-pricing", response_model=List[BusinessPricingResponse])
def list_default_pricing(
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return list_business_pricing(db, business_user_id)
