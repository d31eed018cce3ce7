from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from leisure_pricing.enums.promotion_types import DiscountType
from leisure_pricing.utils.schedule import parse_time_parts

TIME_PATTERN = r"^\d{1,2}:\d{2}(:\d{2})?$"


# ---------- Recurring (weekly window) promotions ----------

class RecurringPromotionBase(BaseModel):
    offer_id: str
    days_of_week: List[int]
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    discount_percentage: float = Field(gt=0, le=100)
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_range(cls, value: str) -> str:
        parse_time_parts(value)
        return value

    @model_validator(mode="after")
    def check_days(self):
        if not self.days_of_week:
            raise ValueError("days_of_week must not be empty")
        if any(d < 0 or d > 6 for d in self.days_of_week):
            raise ValueError("days_of_week must be between 0 (Sunday) and 6 (Saturday)")
        return self


class RecurringPromotionCreate(RecurringPromotionBase):
    pass


class RecurringPromotionResponse(RecurringPromotionBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Fixed (date range) promotions ----------

class PromotionBase(BaseModel):
    offer_id: str
    title: Optional[str] = None
    discount_type: DiscountType
    discount_value: float = Field(ge=0)
    original_price: float = Field(0.0, ge=0)
    promotional_price: float = Field(0.0, ge=0)
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    max_participants: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PromotionCreate(PromotionBase):
    pass


class PromotionResponse(PromotionBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
