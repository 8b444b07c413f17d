"""Process-local fixed-window rate limiting"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import Request, Response

from .config import Settings
from .exceptions import RateLimitException

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

REGISTRATION = "registration"
VERIFICATION = "verification"
GENERAL = "general"

@dataclass
class WindowEntry:
    count: int
    reset_at: float

@dataclass
class RateLimitStatus:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after: int

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(math.ceil(self.reset_at)),
        }

class RateLimiter:
    """
    Fixed-window request counter keyed by client identifier

    Every request increments the counter for the current window once. A
    request that takes the count past ``calls`` is rejected; once a window
    is over its limit, further rejected requests do not bump the count.
    Expired windows are dropped on the next hit for that key and swept in
    bulk every ``purge_interval`` seconds.
    """

    def __init__(
        self,
        name: str,
        calls: int,
        period: float,
        clock: Optional[Clock] = None,
        purge_interval: float = 60,
        trust_forwarded_for: bool = False,
    ):
        self.name = name
        self.calls = calls
        self.period = period
        self.clock = clock or time.time
        self.purge_interval = purge_interval
        self.trust_forwarded_for = trust_forwarded_for
        self._entries: Dict[str, WindowEntry] = {}
        self._last_purge = self.clock()

    def identifier(self, request: Request) -> str:
        """Client IP, honouring X-Forwarded-For when configured"""
        if self.trust_forwarded_for:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                return forwarded.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"

    def hit(self, key: str) -> RateLimitStatus:
        now = self.clock()
        self._maybe_purge(now)

        entry = self._entries.get(key)
        if entry is None or now >= entry.reset_at:
            entry = WindowEntry(count=0, reset_at=now + self.period)
            self._entries[key] = entry

        if entry.count <= self.calls:
            entry.count += 1

        allowed = entry.count <= self.calls
        return RateLimitStatus(
            allowed=allowed,
            limit=self.calls,
            remaining=max(0, self.calls - entry.count),
            reset_at=entry.reset_at,
            retry_after=max(1, math.ceil(entry.reset_at - now)),
        )

    def purge(self, now: Optional[float] = None) -> int:
        """Drop expired windows; returns how many were removed"""
        now = self.clock() if now is None else now
        expired = [key for key, entry in self._entries.items() if now >= entry.reset_at]
        for key in expired:
            del self._entries[key]
        self._last_purge = now
        return len(expired)

    def _maybe_purge(self, now: float) -> None:
        if now - self._last_purge >= self.purge_interval:
            removed = self.purge(now)
            if removed:
                logger.debug(f"Rate limiter '{self.name}' purged {removed} expired windows")

    def __len__(self) -> int:
        return len(self._entries)

    def check(self, request: Request, response: Optional[Response] = None) -> RateLimitStatus:
        key = self.identifier(request)
        result = self.hit(key)

        if not result.allowed:
            logger.warning(
                f"Rate limit '{self.name}' exceeded for {key} "
                f"on {request.method} {request.url.path}"
            )
            headers = result.headers()
            raise RateLimitException(
                detail="Too many requests",
                retry_after=result.retry_after,
                headers=headers,
            )

        if response is not None:
            response.headers.update(result.headers())
        return result

def build_rate_limiters(settings: Settings, clock: Optional[Clock] = None) -> Dict[str, RateLimiter]:
    """Create the named limiters for each route class"""
    config = {
        REGISTRATION: (settings.RATE_LIMIT_REGISTRATION, settings.RATE_LIMIT_REGISTRATION_WINDOW),
        VERIFICATION: (settings.RATE_LIMIT_VERIFICATION, settings.RATE_LIMIT_VERIFICATION_WINDOW),
        GENERAL: (settings.RATE_LIMIT_GENERAL, settings.RATE_LIMIT_GENERAL_WINDOW),
    }
    return {
        name: RateLimiter(
            name,
            calls=calls,
            period=period,
            clock=clock,
            purge_interval=settings.RATE_LIMIT_PURGE_INTERVAL,
            trust_forwarded_for=settings.RATE_LIMIT_TRUST_FORWARDED_FOR,
        )
        for name, (calls, period) in config.items()
    }

def rate_limit(name: str):
    """FastAPI dependency applying the named limiter to a route"""
    async def dependency(request: Request, response: Response) -> None:
        if not request.app.state.settings.RATE_LIMIT_ENABLED:
            return
        limiter = request.app.state.rate_limiters[name]
        limiter.check(request, response)

    return dependency
