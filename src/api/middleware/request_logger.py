"""
Request logging middleware.
Writes one line per request to the service log.
"""
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code and duration of every request."""

    def __init__(self, app, logger=None):
        super().__init__(app)
        self._logger = logger

    def _get_logger(self):
        if self._logger is None:
            from utils.logger import get_logger
            self._logger = get_logger()
        return self._logger

    async def dispatch(self, request: Request, call_next):
        """Time the request and log the outcome."""
        # Skip health probes
        if request.url.path.startswith("/health"):
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        self._get_logger().log_request(
            request.method, request.url.path, response.status_code, duration_ms
        )
        return response
