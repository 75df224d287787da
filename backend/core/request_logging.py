"""
Middleware logging API and realtime-channel traffic.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

LOGGED_PREFIXES = ("/api/", "/ws/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log ``METHOD path -> status`` for API requests."""

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(LOGGED_PREFIXES):
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms)"
        )
        return response
