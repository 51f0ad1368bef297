"""In-memory fixed-window rate limiting keyed by client IP."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request

from shared.config import get_settings
from shared.exceptions import RateLimitExceeded


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> int:
        """Record a request for ``key`` and return how many remain in the window.

        Raises RateLimitExceeded once the window is exhausted.
        """
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or window.reset_at <= now:
                self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
                self._purge(now)
                return self.max_requests - 1
            if window.count >= self.max_requests:
                raise RateLimitExceeded()
            window.count += 1
            return self.max_requests - window.count

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _purge(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if window.reset_at <= now]
        for key in expired:
            del self._windows[key]


def client_ip(request: Request, trusted_proxies: tuple[str, ...] | None = None) -> str:
    """The peer address, or the forwarded client address when the peer is a trusted proxy."""
    peer = request.client.host if request.client else "unknown"
    if trusted_proxies is None:
        trusted_proxies = get_settings().trusted_proxies
    if peer not in trusted_proxies:
        return peer

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("x-real-ip") or peer


def rate_limited(limiter: RateLimiter):
    """FastAPI dependency enforcing ``limiter`` per client IP."""

    def dependency(request: Request) -> None:
        limiter.hit(client_ip(request))

    return dependency


_limiters: list[RateLimiter] = []


def register_limiter(max_requests: int, window_seconds: float) -> RateLimiter:
    limiter = RateLimiter(max_requests, window_seconds)
    _limiters.append(limiter)
    return limiter


def reset_limiters() -> None:
    for limiter in _limiters:
        limiter.reset()
