"""Request pacing for the upstream site."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class FixedIntervalRateLimiter:
    """
    Blocking limiter that keeps at least ``min_interval`` seconds between requests.

    Safe to share between threads: callers queue on the same schedule, so fetches
    can fan out across dates/games while the site still sees one request per
    interval. ``defer`` pushes the schedule back for every caller; a 429
    ``Retry-After`` value goes through it.
    """

    def __init__(
        self,
        min_interval: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_interval < 0:
            raise ValueError(f"min_interval must be non-negative, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_allowed = None

    def acquire(self) -> float:
        """Block until a request may be sent. Returns the time waited."""
        with self._lock:
            now = self._clock()
            wait = 0.0
            if self._next_allowed is not None and self._next_allowed > now:
                wait = self._next_allowed - now
                logger.debug("Rate limiter waiting %.2fs", wait)
                self._sleep(wait)
                now = self._clock()
            self._next_allowed = now + self.min_interval
            return wait

    def defer(self, seconds: float) -> None:
        """Hold every subsequent request for at least ``seconds`` from now."""
        if seconds <= 0:
            return
        with self._lock:
            candidate = self._clock() + seconds
            if self._next_allowed is None or candidate > self._next_allowed:
                self._next_allowed = candidate
