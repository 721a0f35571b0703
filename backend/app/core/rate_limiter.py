"""
Rate Limiting for mock traffic
==============================
Implements rate limiting using slowapi.

Mock requests are keyed by API key when one is sent, otherwise by client IP.
Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at
redis:// to share counters between workers.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger
from app.core.security import mask_api_key


def get_client_identifier(request: Request) -> str:
    """
    Get rate limit key.

    Priority:
    1. API key header (per-consumer limits)
    2. IP address (anonymous callers)
    """
    api_key = request.headers.get(settings.MOCK_API_KEY_HEADER)
    if api_key:
        return f"apikey:{api_key[:16]}"

    return f"ip:{get_remote_address(request)}"


MOCK_RATE_LIMIT = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"


limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Handler for rate limit exceeded errors.

    Uses the same ``{error, message}`` shape as other mock failures.
    """
    identifier = get_client_identifier(request)
    if identifier.startswith("apikey:"):
        identifier = "apikey:" + mask_api_key(identifier[len("apikey:"):])

    logger.warning(f"[RateLimit] Exceeded for {identifier}: {exc.detail}")

    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitExceeded",
            "message": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
        },
        headers={
            "Retry-After": "60",
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )


def mock_rate_limit():
    """Rate limit decorator for the mock catch-all route"""
    return limiter.limit(MOCK_RATE_LIMIT, key_func=get_client_identifier)
