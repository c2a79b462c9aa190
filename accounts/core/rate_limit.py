"""Per-client-IP request throttling (slowapi / limits)."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from accounts.core.config import settings
from accounts.core.errors import RateLimitedError

logger = logging.getLogger(__name__)

LOGIN_LIMIT_MESSAGE = (
    "Too many login attempts from this IP, please try again after a minute."
)

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
    storage_uri="memory://",
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a throttled request as 429 with the login-attempts message."""
    logger.info(
        "Rate limit exceeded",
        extra={"client": get_remote_address(request), "path": request.url.path},
    )
    error = RateLimitedError(LOGIN_LIMIT_MESSAGE)
    return JSONResponse(status_code=error.status_code, content={"error": error.message})
