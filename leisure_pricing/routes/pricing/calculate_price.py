import logging
from datetime import date
from time import perf_counter
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from leisure_pricing.core.config import settings
from leisure_pricing.database.connection import get_db
from leisure_pricing.domain.errors import DomainError, InvalidBookingContextError
from leisure_pricing.middleware.metrics import increment_metric
from leisure_pricing.schemas.price_calculation import (
    PriceQuoteResponse,
    PromotionEligibility,
    SimplePriceQuoteResponse,
)
from leisure_pricing.routes.errors import http_error
from leisure_pricing.services.offer_service import get_offer
from leisure_pricing.services.pricing_service.calculate_price import (
    build_booking_context,
    calculate_dynamic_price,
    calculate_simple_price,
    resolve_base_price,
)
from leisure_pricing.services.pricing_service.quote_sequencer import quote_sequencer
from leisure_pricing.services.promotion_service.promotion_window import (
    resolve_promotion_eligibility,
)
from leisure_pricing.stores.sqlalchemy_store import SqlAlchemyPricingStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pricing & Calculation"])


def _owner_of(db: Session, offer_id: str, business_user_id: Optional[str]) -> str:
    offer = get_offer(db, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")
    if business_user_id and business_user_id != offer.business_user_id:
        raise HTTPException(status_code=400, detail="Offer belongs to another business")
    return offer.business_user_id


def _warn_if_slow(kind: str, offer_id: str, duration_ms: float) -> None:
    if duration_ms > settings.SLOW_CALCULATION_MS:
        logger.warning(
            "%s calculation for offer %s took %.2f ms", kind, offer_id, duration_ms
        )


@router.get("/offers/{offer_id}/calculate-price", response_model=PriceQuoteResponse)
def calculate_price(
    offer_id: str,
    request: Request,
    participants: int = 1,
    business_user_id: Optional[str] = None,
    booking_date: Optional[date] = None,
    booking_time: Optional[str] = None,
    quote_key: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Rule-based price of a booking.

    Pass the same ``quote_key`` for every recalculation of one booking form:
    a response whose ``superseded`` flag is set was overtaken by a newer
    request and must not be displayed.
    """
    if participants <= 0:
        raise HTTPException(status_code=400, detail="Participants must be positive")

    try:
        build_booking_context(participants, booking_date, booking_time)
    except InvalidBookingContextError as e:
        raise http_error(e)

    owner_id = _owner_of(db, offer_id, business_user_id)
    sequence = quote_sequencer.begin(quote_key) if quote_key else None

    # ---- measure calculation time ----
    start = perf_counter()
    calculation = calculate_dynamic_price(
        SqlAlchemyPricingStore(db),
        offer_id=offer_id,
        business_user_id=owner_id,
        participant_count=participants,
        booking_date=booking_date,
        booking_time=booking_time,
    )
    duration_ms = (perf_counter() - start) * 1000.0
    _warn_if_slow("Dynamic price", offer_id, duration_ms)
    increment_metric(request, "price_calculations")

    if calculation is None:
        increment_metric(request, "price_calculation_failures")
        if quote_key:
            quote_sequencer.complete(quote_key, sequence, None)
        raise HTTPException(status_code=503, detail="Price calculation unavailable")

    response = PriceQuoteResponse(
        offer_id=offer_id,
        participants=participants,
        booking_date=booking_date,
        booking_time=booking_time,
        currency=settings.CURRENCY,
        calculation=calculation,
        quote_key=quote_key,
        sequence=sequence,
        calculated_in_ms=duration_ms,
    )

    if quote_key and not quote_sequencer.complete(quote_key, sequence, response):
        increment_metric(request, "superseded_quotes")
        response = response.model_copy(update={"superseded": True})

    return response


@router.get("/price-quotes/{quote_key}", response_model=PriceQuoteResponse)
def latest_price_quote(quote_key: str):
    """Latest published quote for a booking form."""
    latest = quote_sequencer.latest(quote_key)
    if latest is None:
        raise HTTPException(status_code=404, detail="No quote for this key")
    _, quote = latest
    if quote is None:
        raise HTTPException(status_code=503, detail="Price calculation unavailable")
    return quote


@router.get("/offers/{offer_id}/simple-price", response_model=SimplePriceQuoteResponse)
def simple_price(
    offer_id: str,
    request: Request,
    participants: int = 1,
    units: int = 1,
    business_user_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Unit-based price (per game / hour / session / person)."""
    if participants <= 0 or units <= 0:
        raise HTTPException(status_code=400, detail="Participants and units must be positive")

    owner_id = _owner_of(db, offer_id, business_user_id)

    start = perf_counter()
    calculation = calculate_simple_price(
        SqlAlchemyPricingStore(db),
        offer_id=offer_id,
        business_user_id=owner_id,
        participant_count=participants,
        units=units,
    )
    duration_ms = (perf_counter() - start) * 1000.0
    _warn_if_slow("Simple price", offer_id, duration_ms)
    increment_metric(request, "price_calculations")

    if calculation is None:
        increment_metric(request, "price_calculation_failures")
        raise HTTPException(status_code=503, detail="Price calculation unavailable")

    return SimplePriceQuoteResponse(
        offer_id=offer_id,
        participants=participants,
        units=units,
        currency=settings.CURRENCY,
        calculation=calculation,
        calculated_in_ms=duration_ms,
    )


@router.get("/offers/{offer_id}/promotion-eligibility", response_model=PromotionEligibility)
def promotion_eligibility(
    offer_id: str,
    booking_date: date,
    booking_time: str,
    db: Session = Depends(get_db),
):
    """Promotion that applies to a booking instant, recurring ones first."""
    offer = get_offer(db, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")

    store = SqlAlchemyPricingStore(db)
    try:
        base_price, found = resolve_base_price(store, offer_id, offer.business_user_id)
        recurring = store.get_active_recurring_promotions(offer_id)
        promotions = store.get_active_promotions(offer_id)
    except DomainError as e:
        logger.exception("Promotion lookup failed for offer %s", offer_id)
        raise http_error(e)

    return resolve_promotion_eligibility(
        offer_id=offer_id,
        booking_date=booking_date,
        booking_time=booking_time,
        recurring_promotions=recurring,
        promotions=promotions,
        base_price=base_price if found else None,
    )
