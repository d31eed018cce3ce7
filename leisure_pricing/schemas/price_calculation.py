from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class AppliedRule(BaseModel):
    rule_name: str
    modifier: float
    is_percentage: bool
    savings: Optional[float] = None


class BreakdownLine(BaseModel):
    description: str
    amount: float


# ---------- Dynamic (rule based) pricing ----------

class PriceCalculation(BaseModel):
    base_price: float
    final_price: float
    applied_rules: List[AppliedRule] = []
    total_savings: float = 0.0
    breakdown: List[BreakdownLine] = []
    amount_minor_units: int = 0
    requires_configuration: bool = False

    class Config:
        frozen = True


# ---------- Simple (unit based) pricing ----------

class SimplePriceCalculation(BaseModel):
    base_price: float
    final_price: float
    price_per_unit: float
    total_units: int
    pricing_type: str
    breakdown: List[BreakdownLine] = []
    amount_minor_units: int = 0

    class Config:
        frozen = True


# ---------- Promotion eligibility ----------

class PromotionEligibility(BaseModel):
    is_eligible: bool
    promotion_id: Optional[str] = None
    discount_percentage: float = 0.0
    promotion_type: Optional[str] = None  # recurring / regular
    schedule_info: Optional[str] = None
    discounted_price: Optional[float] = None


class FlashOffer(BaseModel):
    offer_id: str
    business_user_id: str
    title: str
    category: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    discount_percentage: float
    original_price: float
    promotional_price: float
    promotion_type: str
    end_date: datetime


# ---------- Route responses ----------

class PriceQuoteResponse(BaseModel):
    offer_id: str
    participants: int
    booking_date: Optional[date] = None
    booking_time: Optional[str] = None
    currency: str
    calculation: PriceCalculation
    quote_key: Optional[str] = None
    sequence: Optional[int] = None
    superseded: bool = False
    calculated_in_ms: float


class SimplePriceQuoteResponse(BaseModel):
    offer_id: str
    participants: int
    units: int
    currency: str
    calculation: SimplePriceCalculation
    calculated_in_ms: float
