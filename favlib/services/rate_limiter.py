"""
Rate Limiting Service

slowapi limiter guarding the signup and login endpoints against
password guessing and signup spam. Limits are per client address and
kept in process memory.

The key is the socket peer address only. Forwarding headers are client
controlled; behind a reverse proxy, run uvicorn with --proxy-headers
and --forwarded-allow-ips so the peer address is the real client.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from favlib.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


limiter = Limiter(
    key_func=get_remote_address,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with a message body and a Retry-After header."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")

    response = JSONResponse(
        status_code=429,
        content={"message": "Too many requests. Please slow down."},
    )
    response.headers["Retry-After"] = str(60)
    return response
