from enum import Enum

class RuleType(str, Enum):
    participant_tiers = "participant_tiers"
    time_slots = "time_slots"
    duration_multiplier = "duration_multiplier"
    seasonal = "seasonal"
    day_of_week = "day_of_week"
