"""Spin through accept() calls and print the ones the limiter admits.

Usage:
    uv run python scripts/rate_limiter_demo.py
    uv run python scripts/rate_limiter_demo.py --rate 150 --interval hour
    uv run python scripts/rate_limiter_demo.py --rate 5 --interval 2000 --iterations 2000000
"""

from __future__ import annotations

import argparse
import logging
import time

from windowlimit.config import SETTINGS
from windowlimit.core.models import Stat
from windowlimit.core.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def _log_stat(stat: Stat) -> None:
    logger.info(
        "Interval closed: accepted=%s incoming=%d limit=%s",
        stat.accepted,
        stat.incoming,
        stat.limit,
    )


def _interval(value: str) -> str | float:
    return value if value.isalpha() else float(value)


def run(rate: float, interval: str | float, iterations: int) -> int:
    limiter = RateLimiter(rate, interval, stat_callback=_log_stat)
    start = time.monotonic()
    admitted = 0

    for i in range(iterations):
        if limiter.accept(1):
            admitted += 1
            print(f"{i} after {(time.monotonic() - start) * 1000:.0f} ms")

    print(f"\nDone: {admitted:,} of {iterations:,} calls admitted")
    return admitted


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Hammer a rate limiter and show which calls get through."
    )
    parser.add_argument(
        "--rate",
        type=float,
        default=1,
        help="Tokens per interval (default: 1)",
    )
    parser.add_argument(
        "--interval",
        type=_interval,
        default="second",
        help="second, minute, hour, day or milliseconds (default: second)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=10_000_000,
        help="Number of accept() calls to make (default: 10000000)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=SETTINGS.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run(rate=args.rate, interval=args.interval, iterations=args.iterations)


if __name__ == "__main__":
    main()
