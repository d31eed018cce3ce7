"""Domain error codes for the pricing engine."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    OFFER_NOT_FOUND = "OFFER_NOT_FOUND"
    PRICING_DATA_UNAVAILABLE = "PRICING_DATA_UNAVAILABLE"
    INVALID_BOOKING_CONTEXT = "INVALID_BOOKING_CONTEXT"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class OfferNotFoundError(DomainError):
    """Raised when an offer does not exist."""

    def __init__(self, offer_id: str) -> None:
        super().__init__(
            code=ErrorCode.OFFER_NOT_FOUND,
            message="Offer not found",
        )
        self.offer_id = offer_id


class PricingDataUnavailableError(DomainError):
    """Raised when pricing data could not be read from the store."""

    def __init__(self, detail: str = "Pricing data unavailable") -> None:
        super().__init__(
            code=ErrorCode.PRICING_DATA_UNAVAILABLE,
            message=detail,
        )


class InvalidBookingContextError(DomainError):
    """Raised when booking parameters cannot be priced."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_CONTEXT,
            message=detail,
        )
