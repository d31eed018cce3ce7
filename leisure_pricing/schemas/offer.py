from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from leisure_pricing.enums.pricing_types import PricingType


class PricingOptionItem(BaseModel):
    option_name: str
    price: float = Field(ge=0)
    is_default: bool = False


class OfferBase(BaseModel):
    title: str
    category: Optional[str] = None
    status: str = "active"
    base_price: Optional[float] = Field(None, ge=0)
    pricing_options: List[PricingOptionItem] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class OfferCreate(OfferBase):
    pass


class OfferResponse(OfferBase):
    id: str
    business_user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PricingOptionCreate(PricingOptionItem):
    pass


class PricingOptionResponse(PricingOptionItem):
    id: str
    offer_id: str

    class Config:
        from_attributes = True


class BusinessPricingCreate(BaseModel):
    service_name: str
    price_amount: float = Field(ge=0)
    price_type: PricingType = PricingType.per_person
    display_order: int = 0
    is_active: bool = True


class BusinessPricingResponse(BusinessPricingCreate):
    id: str
    business_user_id: str
    price_type: str

    class Config:
        from_attributes = True


class BasePriceUpdate(BaseModel):
    base_price: Optional[float] = Field(None, ge=0)
