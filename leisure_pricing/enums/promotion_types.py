from enum import Enum

class DiscountType(str, Enum):
    percentage = "percentage"
    fixed_amount = "fixed_amount"
    free_item = "free_item"
    buy_x_get_y = "buy_x_get_y"


class PromotionKind(str, Enum):
    recurring = "recurring"
    regular = "regular"
