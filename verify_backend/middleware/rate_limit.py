import time
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import HTTPException, Request, Response

from verify_backend.config import get_logger

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


@dataclass(frozen=True)
class RateLimitStatus:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int

    def headers(self) -> Dict[str, str]:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }


class FixedWindowRateLimiter:
    """
    Per-key fixed-window counter.

    Counts only for the current window are kept; the table is cleared when
    the window rolls over, so memory is bounded by the number of distinct
    clients seen in one window.
    """

    def __init__(self, limit: int, window_sec: int = 60):
        self.limit = limit
        self.window_sec = window_sec
        self._bucket: Optional[int] = None
        self._counts: Dict[str, int] = {}

    def hit(self, key: str, now: Optional[float] = None) -> RateLimitStatus:
        if now is None:
            now = time.time()
        bucket = int(now) // self.window_sec
        if bucket != self._bucket:
            self._bucket = bucket
            self._counts = {}

        count = self._counts.get(key, 0) + 1
        self._counts[key] = count

        reset_after = (bucket + 1) * self.window_sec - int(now)
        return RateLimitStatus(
            allowed=count <= self.limit,
            limit=self.limit,
            remaining=max(0, self.limit - count),
            reset_after=reset_after,
        )


async def api_rate_limiter(request: Request, response: Response) -> None:
    """
    FastAPI dependency enforcing the per-IP limit stored on app.state.
    """
    limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
    client_ip = request.client.host if request.client else "unknown"

    status = limiter.hit(client_ip)
    if not status.allowed:
        logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
        raise HTTPException(status_code=429, detail=RATE_LIMIT_MESSAGE, headers=status.headers())

    response.headers.update(status.headers())
