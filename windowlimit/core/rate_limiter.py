"""Token bucket rate limiter with a hard cap per fixed interval window."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import timedelta

from windowlimit.core import clock
from windowlimit.core.models import Stat
from windowlimit.core.token_bucket import TokenBucket

logger = logging.getLogger(__name__)

StatCallback = Callable[[Stat], None]


class RateLimiter:
    """Admission control over a token bucket plus a per-interval ceiling.

    The bucket is sized to one interval's worth of tokens and starts full.
    On top of it, no more than ``tokens_per_interval`` tokens are granted
    within a single fixed window, so tokens saved up just before a window
    boundary cannot be spent as a double burst just after it.

    Windows advance lazily: the first call observed after a window's end
    rolls it over, snapshots its counters and hands the snapshot to
    *stat_callback*, if one was given.

    Not thread-safe. Callers sharing one instance across threads must
    serialise access to it.

    Parameters
    ----------
    tokens_per_interval:
        Maximum tokens that can be removed at any moment and over the
        course of one interval.
    interval:
        Unit name (``"second"``, ``"minute"``, ``"hour"``, ``"day"``),
        milliseconds, or a ``timedelta``.
    stat_callback:
        Called synchronously with a :class:`Stat` on every window rollover.
    """

    def __init__(
        self,
        tokens_per_interval: float,
        interval: str | float | timedelta = "second",
        stat_callback: StatCallback | None = None,
    ) -> None:
        self.token_bucket = TokenBucket(tokens_per_interval, tokens_per_interval, interval)
        # Start full
        self.token_bucket.content = tokens_per_interval

        self.cur_interval_start = clock.now_ms()
        self.last_call = self.cur_interval_start
        self.tokens_this_interval: float = 0
        self.incoming_this_interval = 0
        self.time_sum: float = 0
        self.accepted: float = 0
        self.incoming = 0
        self.average_time = 0
        self.stat_callback = stat_callback

    @property
    def interval(self) -> float:
        return self.token_bucket.interval

    @property
    def limit(self) -> float:
        return self.token_bucket.tokens_per_interval

    @limit.setter
    def limit(self, tokens_per_interval: float) -> None:
        self.set_limit(tokens_per_interval)

    def accept(self, count: float = 1) -> bool:
        """Remove *count* tokens if both the bucket and the window allow it."""
        now = clock.now_ms()
        previous_call, self.last_call = self.last_call, now
        self.incoming_this_interval += 1

        if count > self.token_bucket.bucket_size:
            return False

        if now - self.cur_interval_start >= self.token_bucket.interval:
            idle = now - previous_call > self.token_bucket.interval * 2
            self._roll_over(now, idle)

        if count > self.token_bucket.tokens_per_interval - self.tokens_this_interval:
            return False

        if not self.token_bucket.accept(count):
            return False
        self.tokens_this_interval += count
        return True

    def _roll_over(self, now: float, idle: bool) -> None:
        elapsed = now - self.cur_interval_start

        # No call for more than two intervals: report zeros, not stale counts
        if idle:
            self.accepted = 0
            self.incoming = 0
            self.average_time = 0
        else:
            self.accepted = self.tokens_this_interval
            self.incoming = self.incoming_this_interval
            self.average_time = (
                math.floor(self.time_sum / self.tokens_this_interval)
                if self.tokens_this_interval
                else 0
            )

        self.tokens_this_interval = 0
        self.incoming_this_interval = 0
        self.time_sum = 0
        self.cur_interval_start = now

        stat = self._snapshot()
        logger.debug(
            "Interval rolled over after %.0fms: accepted=%s incoming=%d limit=%s",
            elapsed,
            stat.accepted,
            stat.incoming,
            stat.limit,
        )
        if self.stat_callback is not None:
            self.stat_callback(stat)

    def _snapshot(self) -> Stat:
        return Stat(
            accepted=self.accepted,
            incoming=self.incoming,
            average_time=self.average_time,
            limit=self.token_bucket.tokens_per_interval,
        )

    def add_time(self, time_ms: float) -> None:
        """Add a latency sample used for the next window's average_time."""
        self.time_sum += time_ms

    def get_stat(self) -> Stat:
        """Stats for the previous interval.

        Returns zeros if the current window already expired without a call
        rolling it over.
        """
        if clock.now_ms() - self.cur_interval_start >= self.token_bucket.interval:
            return Stat.empty(self.token_bucket.tokens_per_interval)
        return self._snapshot()

    def set_limit(self, tokens_per_interval: float) -> None:
        """Change both the bucket size and the per-interval cap."""
        self.token_bucket.bucket_size = tokens_per_interval
        self.token_bucket.tokens_per_interval = tokens_per_interval

    def __repr__(self) -> str:
        return (
            f"RateLimiter(tokens_per_interval={self.limit!r}, "
            f"interval={self.interval!r})"
        )
