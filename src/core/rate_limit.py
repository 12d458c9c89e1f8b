"""Rate limiting configuration using slowapi.

Reads are limited to 30/minute and writes to 10/minute per client address.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

READ_LIMIT = "30/minute"
WRITE_LIMIT = "10/minute"


def client_address(request: Request) -> str:
    """Key requests by client address, honoring the proxy's X-Forwarded-For when trusted."""
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


limiter = Limiter(
    key_func=client_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a 429 in the standard error envelope."""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return JSONResponse(
        status_code=429,
        content={
            "error": f"Rate limit exceeded: {detail}",
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "details": {"limit": str(detail)},
        },
        headers={"Retry-After": "60"},
    )
