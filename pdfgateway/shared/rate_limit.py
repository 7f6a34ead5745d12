"""
Fixed-window rate limiting for the /api/ routes.
"""

import time
from typing import Any, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .errors import RateLimitExceededError
from .logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    In-memory fixed-window limiter.

    Tracks identifier -> (count, window_start). A new window starts once the
    previous one is older than window_seconds.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 900,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self.requests: dict[str, tuple[int, float]] = {}

    def is_allowed(self, identifier: str) -> bool:
        now = self._clock()
        count, start_time = self.requests.get(identifier, (0, now))

        if now - start_time >= self.window_seconds:
            self.requests[identifier] = (1, now)
            return True

        if count >= self.max_requests:
            return False

        self.requests[identifier] = (count + 1, start_time)
        return True

    def cleanup(self) -> None:
        """Drop expired windows."""
        now = self._clock()
        expired = [k for k, (_, start) in self.requests.items() if now - start >= self.window_seconds]
        for key in expired:
            del self.requests[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests under path_prefix once a client exceeds its window."""

    def __init__(self, app: Any, limiter: RateLimiter, path_prefix: str = "/api/"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        if len(self.limiter.requests) > 10000:
            self.limiter.cleanup()

        if not self.limiter.is_allowed(client_ip):
            logger.warning(f"Rate limit exceeded for {client_ip}")
            err = RateLimitExceededError("Too many requests, try again later.")
            return JSONResponse(status_code=err.http_status, content=err.to_dict())

        return await call_next(request)
