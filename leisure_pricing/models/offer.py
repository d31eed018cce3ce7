from datetime import datetime
from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from leisure_pricing.database.connection import Base


class Offer(Base):
    __tablename__ = "offers"

    id = Column(String, primary_key=True, index=True)
    business_user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=True)
    status = Column(String, default="active", index=True)  # active / inactive

    base_price = Column(Float, nullable=True)
    # e.g. [{"option_name": "1 partie", "price": 8.0, "is_default": true}]
    pricing_options = Column(JSON, default=[])

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    options = relationship(
        "OfferPricingOption",
        back_populates="offer",
        cascade="all, delete-orphan",
    )


class OfferPricingOption(Base):
    __tablename__ = "offer_pricing_options"

    id = Column(String, primary_key=True, index=True)
    offer_id = Column(String, ForeignKey("offers.id"), nullable=False, index=True)
    option_name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    is_default = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    offer = relationship("Offer", back_populates="options")
