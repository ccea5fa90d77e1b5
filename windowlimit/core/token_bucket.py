"""Continuously refilling token bucket with lazy drip."""

from __future__ import annotations

from datetime import timedelta

from windowlimit.core import clock

# Interval lengths in milliseconds
INTERVALS: dict[str, int] = {
    "second": 1000,
    "minute": 60_000,
    "hour": 3_600_000,
    "day": 86_400_000,
}


class InvalidIntervalError(ValueError):
    """Raised when an interval is not a known unit or a positive duration."""


def resolve_interval(interval: str | float | timedelta) -> float:
    """Return *interval* in milliseconds.

    Accepts one of the unit names in ``INTERVALS``, a number of milliseconds,
    or a ``timedelta``.
    """
    if isinstance(interval, str):
        try:
            return INTERVALS[interval]
        except KeyError:
            raise InvalidIntervalError(
                f"Invalid interval {interval!r}, expected one of {sorted(INTERVALS)}"
            ) from None
    if isinstance(interval, timedelta):
        interval = interval.total_seconds() * 1000.0
    if interval <= 0:
        raise InvalidIntervalError(f"Interval must be positive, got {interval!r}")
    return interval


class TokenBucket:
    """Token bucket that refills lazily from elapsed time.

    Parameters
    ----------
    bucket_size:
        Maximum tokens the bucket can hold.
    tokens_per_interval:
        Tokens added per *interval*. May be changed at runtime.
    interval:
        Unit name (``"second"``, ``"minute"``, ``"hour"``, ``"day"``),
        milliseconds, or a ``timedelta``.
    """

    def __init__(
        self,
        bucket_size: float,
        tokens_per_interval: float,
        interval: str | float | timedelta = "second",
    ) -> None:
        self.bucket_size = bucket_size
        self.tokens_per_interval = tokens_per_interval
        self.interval = resolve_interval(interval)
        self.content: float = 0
        self.last_drip = clock.now_ms()

    def drip(self) -> None:
        """Add the tokens earned since the last drip, capped at bucket_size."""
        now = clock.now_ms()
        elapsed = max(0.0, now - self.last_drip)
        added = elapsed / self.interval * self.tokens_per_interval
        self.content = min(self.bucket_size, self.content + added)
        self.last_drip = now

    def accept(self, count: float = 1) -> bool:
        """Remove *count* tokens if available. Never blocks."""
        if count > self.bucket_size:
            return False

        self.drip()

        if count > self.content:
            return False
        self.content -= count
        return True

    def __repr__(self) -> str:
        return (
            f"TokenBucket(bucket_size={self.bucket_size!r}, "
            f"tokens_per_interval={self.tokens_per_interval!r}, "
            f"interval={self.interval!r}, content={self.content!r})"
        )
