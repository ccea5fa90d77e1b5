"""Decorator that drops calls beyond a token rate."""

from __future__ import annotations

import functools
import logging
from datetime import timedelta

from windowlimit.config import SETTINGS
from windowlimit.core.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def throttle(rate: float, interval: str | float | timedelta | None = None):
    """Decorator: run the wrapped callable at most *rate* times per *interval*.

    Calls over the limit are dropped and return ``None``. The limiter is
    available as ``wrapper.limiter``. *interval* defaults to
    ``SETTINGS.default_interval``.
    """

    def decorator(func):
        limiter = RateLimiter(
            rate, interval if interval is not None else SETTINGS.default_interval
        )

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not limiter.accept(1):
                logger.debug(
                    "Throttled call to %s dropped", getattr(func, "__qualname__", func)
                )
                return None
            return func(*args, **kwargs)

        wrapper.limiter = limiter
        return wrapper

    return decorator
