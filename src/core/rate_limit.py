"""Rate limiting configuration using slowapi."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode


def client_address(request: Request) -> str:
    """Rate limit key: the peer address.

    With ``trust_forwarded_for`` set, the first ``X-Forwarded-For`` hop is used
    instead. The header is client-controlled unless a proxy rewrites it.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if settings.trust_forwarded_for and forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


limiter = Limiter(
    key_func=client_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": "Rate limit exceeded",
            "details": {"limit": str(detail)},
        },
    )
