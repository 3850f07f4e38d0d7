from fastapi import Request
from fastapi.responses import JSONResponse


class MarketplaceError(Exception):
    """
    Base class for request-level domain failures.

    Each subclass carries the HTTP status and a stable machine-readable code;
    the message is the human-readable part of the response.
    """

    status_code = 400
    code = "marketplace_error"
    default_message = "Request could not be processed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCoupon(MarketplaceError):
    code = "invalid_coupon"
    default_message = "Coupon code not found"


class CouponNotYetActive(MarketplaceError):
    code = "coupon_not_started"
    default_message = "Coupon is not active yet"


class CouponExpired(MarketplaceError):
    code = "coupon_expired"
    default_message = "Coupon has expired"


class CouponExhausted(MarketplaceError):
    code = "coupon_usage_exhausted"
    default_message = "Coupon usage limit reached"


class InvalidCommissionTransition(MarketplaceError):
    status_code = 409
    code = "invalid_commission_transition"
    default_message = "Commission cannot move to the requested status"


async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )
