# script_scout/crawler/rate_limit.py
"""
Token bucket that throttles how fast new URLs are dispatched.
"""
from __future__ import annotations

import asyncio
import time


class RateLimiter:
    """Refills *rate* tokens per second up to *burst*; each dispatch costs one token."""

    def __init__(self, rate: float = 1.0, burst: int = 1) -> None:
        if rate <= 0:
            raise ValueError("rate must be > 0")
        if burst < 1:
            raise ValueError("burst must be >= 1")
        self.rate = float(rate)
        self.burst = burst
        self._tokens = float(burst)
        self._last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(self.burst, self._tokens + (now - self._last_refill) * self.rate)
        self._last_refill = now

    async def acquire(self) -> None:
        async with self._lock:
            self._refill()
            while self._tokens < 1:
                await asyncio.sleep((1 - self._tokens) / self.rate)
                self._refill()
            self._tokens -= 1
