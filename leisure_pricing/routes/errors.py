from fastapi import HTTPException

from leisure_pricing.domain.errors import DomainError, ErrorCode

_STATUS_BY_CODE = {
    ErrorCode.OFFER_NOT_FOUND: 404,
    ErrorCode.INVALID_BOOKING_CONTEXT: 400,
    ErrorCode.PRICING_DATA_UNAVAILABLE: 503,
}


def http_error(error: DomainError) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_CODE.get(error.code, 500),
        detail={"code": error.code.value, "message": error.message},
    )
