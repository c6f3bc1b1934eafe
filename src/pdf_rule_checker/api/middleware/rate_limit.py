"""
Rate limiting -- prevents any single client from flooding /check.

Every accepted /check request fans out into one LLM call per rule, so an
unthrottled client burns provider quota fast. Uses an in-memory sliding
window per client IP. The window lives on app.state, so each app instance
(and each test) starts clean. For multiple replicas, replace with a shared
store.

Configuration via environment:
  RATE_LIMIT_PER_MINUTE=30  (0 disables the limit)
"""

import logging
import time
from collections import defaultdict

from fastapi import Request

from ...errors import PdfRuleCheckerError

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60.0


class RateLimitExceeded(PdfRuleCheckerError):
    status_code = 429


class SlidingWindowLimiter:
    """Counts requests per client over the last WINDOW_SECONDS."""

    def __init__(self, limit: int, window_seconds: float = WINDOW_SECONDS):
        self.limit = limit
        self.window_seconds = window_seconds
        self._request_log: dict[str, list[float]] = defaultdict(list)

    def _cleanup_old_entries(self, client_id: str, now: float) -> None:
        """Remove request timestamps older than the window."""
        cutoff = now - self.window_seconds
        self._request_log[client_id] = [
            ts for ts in self._request_log[client_id] if ts > cutoff
        ]

    def hit(self, client_id: str, now: float | None = None) -> bool:
        """Record a request. Returns False if the client is over the limit."""
        if self.limit <= 0:
            return True
        now = time.time() if now is None else now
        self._cleanup_old_entries(client_id, now)
        if len(self._request_log[client_id]) >= self.limit:
            return False
        self._request_log[client_id].append(now)
        return True


async def check_rate_limit(request: Request) -> None:
    """
    Route dependency. Raises RateLimitExceeded (HTTP 429) when the client
    has used up its requests for the current window.
    """
    limiter: SlidingWindowLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return

    client_ip = request.client.host if request.client else "unknown"
    if not limiter.hit(client_ip):
        logger.warning(f"[RateLimit] Client {client_ip} exceeded {limiter.limit}/min")
        raise RateLimitExceeded(
            f"Rate limit exceeded ({limiter.limit} requests per minute)"
        )
