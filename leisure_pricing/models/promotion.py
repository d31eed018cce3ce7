from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    JSON,
)

from leisure_pricing.database.connection import Base


class RecurringPromotion(Base):
    __tablename__ = "recurring_promotions"

    id = Column(String, primary_key=True, index=True)
    offer_id = Column(String, nullable=False, index=True)
    days_of_week = Column(JSON, default=[])  # 0 = Sunday ... 6 = Saturday
    start_time = Column(String, nullable=False)  # HH:MM or HH:MM:SS
    end_time = Column(String, nullable=False)
    discount_percentage = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Promotion(Base):
    __tablename__ = "promotions"

    id = Column(String, primary_key=True, index=True)
    offer_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=True)
    discount_type = Column(String, nullable=False)  # percentage / fixed_amount / free_item / buy_x_get_y
    discount_value = Column(Float, nullable=False)
    original_price = Column(Float, nullable=False, default=0.0)
    promotional_price = Column(Float, nullable=False, default=0.0)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False, index=True)
    is_active = Column(Boolean, default=True, index=True)
    max_participants = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
