from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime

from leisure_pricing.database.connection import Base


class BusinessPricing(Base):
    __tablename__ = "business_pricing"

    id = Column(String, primary_key=True, index=True)
    business_user_id = Column(String, nullable=False, index=True)
    service_name = Column(String, nullable=False)
    price_amount = Column(Float, nullable=False)
    price_type = Column(String, default="per_person")  # per_person / per_game / per_hour / per_session
    is_active = Column(Boolean, default=True)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
