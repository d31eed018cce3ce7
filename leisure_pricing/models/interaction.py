from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime

from leisure_pricing.database.connection import Base


class OfferInteraction(Base):
    __tablename__ = "offer_interactions"

    id = Column(Integer, primary_key=True, index=True)
    offer_id = Column(String, nullable=False, index=True)
    business_user_id = Column(String, nullable=False, index=True)
    user_id = Column(String, nullable=True, index=True)
    kind = Column(String, nullable=False, index=True)  # view / flame / booking
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
