"""Per-identity request throttling with a fixed-length window.

Each caller identity gets one window; the window restarts once it is W seconds
old. Denied requests still count, so a caller hammering past the limit stays
denied until its window rolls over.
"""
import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
DEFAULT_WINDOW_S = 60 * 60


@dataclass
class RateWindow:
    identity: str
    window_start: float
    count: int = 0


class RateLimiter:
    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        window_seconds: float = DEFAULT_WINDOW_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, RateWindow] = {}
        self._lock = threading.Lock()

    def admit(self, identity: str) -> bool:
        """Charge one request to identity and report whether it is within the limit."""
        with self._lock:
            now = self._clock()
            window = self._windows.get(identity)
            if window is None or now - window.window_start >= self.window_seconds:
                self._windows[identity] = RateWindow(identity, window_start=now, count=1)
                return True
            window.count += 1
            allowed = window.count <= self.limit

        if not allowed:
            logger.warning(f"Rate limit exceeded for {identity} ({window.count}/{self.limit})")
        return allowed

    def sweep(self) -> int:
        """Drop windows that have fully elapsed. Returns the number removed."""
        with self._lock:
            now = self._clock()
            expired = [
                identity for identity, window in self._windows.items()
                if now - window.window_start >= self.window_seconds
            ]
            for identity in expired:
                del self._windows[identity]
        if expired:
            logger.info(f"Rate limiter swept {len(expired)} expired window(s)")
        return len(expired)

    def stats(self) -> dict:
        with self._lock:
            return {
                "active_identities": len(self._windows),
                "total_requests": sum(w.count for w in self._windows.values()),
            }

    async def run_sweeper(self, interval: Optional[float] = None):
        """Background loop: reclaim expired windows every interval seconds."""
        interval = interval or self.window_seconds / 12
        logger.info(f"Rate limit sweeper started (every {interval:.0f}s)")
        while True:
            await asyncio.sleep(interval)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Rate limit sweeper error: {e}")
