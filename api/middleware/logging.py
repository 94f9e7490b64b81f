"""Request logging middleware."""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("pantrylog.api")

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = ("/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with a short request ID and its duration.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        label = f"[{request_id}] {request.method} {request.url.path}"
        quiet = request.url.path.startswith(QUIET_PATHS)

        start_time = time.perf_counter()
        logger.log(logging.DEBUG if quiet else logging.INFO, f"{label} - Started")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = (time.perf_counter() - start_time) * 1000
            logger.error(f"{label} - Error after {duration:.2f}ms: {e}")
            raise

        duration = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration:.2f}"

        if response.status_code >= 400:
            log_level = logging.WARNING
        elif quiet:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO
        logger.log(log_level, f"{label} - {response.status_code} in {duration:.2f}ms")

        return response
