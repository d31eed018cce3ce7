from enum import Enum

class PricingType(str, Enum):
    per_person = "per_person"
    per_game = "per_game"
    per_hour = "per_hour"
    per_session = "per_session"
