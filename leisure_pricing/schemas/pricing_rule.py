from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from leisure_pricing.enums.rule_types import RuleType
from leisure_pricing.utils.schedule import parse_time_parts


class ParticipantTierConditions(BaseModel):
    min_participants: int = Field(0, ge=0)
    max_participants: int = Field(999, ge=0)


class TimeSlotConditions(BaseModel):
    start_time: str = Field("00:00:00", pattern=r"^\d{1,2}:\d{2}(:\d{2})?$")
    end_time: str = Field("23:59:59", pattern=r"^\d{1,2}:\d{2}(:\d{2})?$")

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_range(cls, value: str) -> str:
        parse_time_parts(value)
        return value


class DayOfWeekConditions(BaseModel):
    days: List[int] = []

    @model_validator(mode="after")
    def check_days(self):
        if any(d < 0 or d > 6 for d in self.days):
            raise ValueError("days must be between 0 (Sunday) and 6 (Saturday)")
        return self


_CONDITION_SCHEMAS = {
    RuleType.participant_tiers: ParticipantTierConditions,
    RuleType.time_slots: TimeSlotConditions,
    RuleType.day_of_week: DayOfWeekConditions,
}


def validate_conditions(rule_type: str, conditions: Dict[str, Any]) -> None:
    """Raise ValueError when conditions do not fit the rule type."""
    try:
        schema = _CONDITION_SCHEMAS.get(RuleType(rule_type))
    except ValueError:
        raise ValueError(f"Unknown rule type: {rule_type}")
    if schema is None:
        return
    try:
        schema(**conditions)
    except ValidationError as e:
        raise ValueError(f"Invalid conditions for {rule_type}: {e.errors()}") from e


class PricingRuleBase(BaseModel):
    rule_name: str
    rule_type: RuleType
    offer_id: Optional[str] = None
    conditions: Dict[str, Any] = {}
    price_modifier: float
    is_percentage: bool = True
    is_active: bool = True
    priority: int = 0

    @model_validator(mode="after")
    def check_conditions(self):
        validate_conditions(self.rule_type.value, self.conditions)
        return self


class PricingRuleCreate(PricingRuleBase):
    pass


class PricingRuleUpdate(BaseModel):
    rule_name: Optional[str] = None
    offer_id: Optional[str] = None
    conditions: Optional[Dict[str, Any]] = None
    price_modifier: Optional[float] = None
    is_percentage: Optional[bool] = None
    is_active: Optional[bool] = None
    priority: Optional[int] = None

    @model_validator(mode="after")
    def reject_nulls(self):
        # offer_id=None moves the rule back to business scope
        nulls = [
            name for name in self.model_fields_set
            if name != "offer_id" and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return self


class PricingRuleResponse(BaseModel):
    id: str
    business_user_id: str
    offer_id: Optional[str] = None
    rule_name: str
    rule_type: str
    conditions: Dict[str, Any] = {}
    price_modifier: float
    is_percentage: bool
    is_active: bool
    priority: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
