"""Pacing strategies used between records to stay under API rate limits.

The runner calls :meth:`Pacer.wait` once after every record. Strategies
sleep cooperatively; none of them busy-waits.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from discogs_playlist.pipeline.models import MatchMode

logger = logging.getLogger(__name__)


class Pacer(Protocol):
    """Anything with a ``wait()`` method."""

    def wait(self) -> None: ...


class NoPacer:
    """Never waits."""

    def wait(self) -> None:
        return None


class FixedIntervalPacer:
    """Sleep a constant interval on every call.

    Args:
        interval: Seconds to sleep.
        sleep: Sleep function (replaceable in tests).
    """

    def __init__(self, interval: float, sleep: Callable[[float], None] = time.sleep) -> None:
        self.interval = max(interval, 0.0)
        self._sleep = sleep

    def wait(self) -> None:
        if self.interval > 0:
            self._sleep(self.interval)


class TokenBucketPacer:
    """Token bucket: allows bursts of *capacity*, refills at *rate* per second.

    Args:
        rate: Tokens added per second.
        capacity: Maximum stored tokens (burst size).
        clock: Monotonic clock.
        sleep: Sleep function.
    """

    def __init__(
        self,
        rate: float,
        capacity: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        self._rate = rate
        self._capacity = max(capacity, 1.0)
        self._tokens = self._capacity
        self._clock = clock
        self._sleep = sleep
        self._last = clock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._last
        self._last = now
        self._tokens = min(self._capacity, self._tokens + elapsed * self._rate)

    def wait(self) -> None:
        self._refill()
        if self._tokens < 1.0:
            delay = (1.0 - self._tokens) / self._rate
            logger.debug("Rate limiter: sleeping %.2fs", delay)
            self._sleep(delay)
            self._refill()
        self._tokens -= 1.0


def pacer_for_mode(mode: MatchMode, track_delay: float, album_delay: float) -> Pacer:
    """Fixed-interval pacer using the delay configured for *mode*.

    Album mode uses its own (normally longer) delay because every match
    costs an extra track-lookup call.
    """
    delay = album_delay if mode is MatchMode.ALBUM else track_delay
    if delay <= 0:
        return NoPacer()
    return FixedIntervalPacer(delay)
