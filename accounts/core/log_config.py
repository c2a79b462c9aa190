"""Logging setup: root handler plus the append-only access log sink."""

import logging
import time
from email.utils import formatdate

from fastapi import Request

from accounts.core.config import Settings

ACCESS_LOGGER_NAME = "accounts.access"

access_logger = logging.getLogger(ACCESS_LOGGER_NAME)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once and attach ACCESS_LOG_PATH to the access logger."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    access_logger.setLevel(logging.INFO)
    if settings.ACCESS_LOG_PATH and not any(
        isinstance(h, logging.FileHandler) for h in access_logger.handlers
    ):
        handler = logging.FileHandler(settings.ACCESS_LOG_PATH, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        access_logger.addHandler(handler)


async def access_log_middleware(request: Request, call_next):
    """One line per request: method, path, status, size, latency, timestamp."""
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        # Unhandled errors are turned into 500 by the outermost server middleware
        _log_access(request, 500, "-", start)
        raise
    _log_access(request, response.status_code, response.headers.get("content-length", "-"), start)
    return response


def _log_access(request: Request, status: int, size: str, start: float) -> None:
    elapsed_ms = (time.perf_counter() - start) * 1000
    access_logger.info(
        "%s %s %s %s - %.3f ms %s",
        request.method,
        request.url.path,
        status,
        size,
        elapsed_ms,
        formatdate(usegmt=True),
    )
