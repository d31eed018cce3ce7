from sqlalchemy import Column, Integer, String, Float, JSON, Boolean, DateTime
import datetime
from leisure_pricing.database.connection import Base


class PricingRule(Base):
    __tablename__ = "business_pricing_rules"

    id = Column(String, primary_key=True, index=True)
    business_user_id = Column(String, nullable=False, index=True)
    offer_id = Column(String, nullable=True, index=True)  # NULL = every offer of the business
    rule_type = Column(String, nullable=False)
    rule_name = Column(String, nullable=False)
    conditions = Column(JSON, default={})
    price_modifier = Column(Float, nullable=False, default=0.0)
    is_percentage = Column(Boolean, default=True)
    is_active = Column(Boolean, default=True, index=True)
    priority = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
