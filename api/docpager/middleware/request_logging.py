"""Request logging middleware."""

import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log method, path, query, status and duration of document requests."""

    def __init__(self, app, path_prefix: str = "/v1/documents"):
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        """Log request details and call next middleware."""
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"{request.method} {request.url.path}"
            f"{'?' + request.url.query if request.url.query else ''}"
            f" -> {response.status_code} ({elapsed_ms:.1f} ms)",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 1)
            }
        )
        return response
