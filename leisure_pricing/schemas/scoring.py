from typing import List

from pydantic import BaseModel


class ScoreDetails(BaseModel):
    habit_score: float
    proximity_score: float
    popularity_score: float
    promotion_bonus: float


class OfferScore(BaseModel):
    offer_id: str
    score: float
    details: ScoreDetails


class RankedOffersResponse(BaseModel):
    user_id: str
    offers: List[OfferScore]
