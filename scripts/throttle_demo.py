"""Call a throttled print on a fixed tick and watch most calls get dropped.

Usage:
    uv run python scripts/throttle_demo.py
    uv run python scripts/throttle_demo.py --rate 10 --interval 10000 --tick 100
"""

from __future__ import annotations

import argparse
import logging
import time

from windowlimit.config import SETTINGS
from windowlimit.throttle import throttle

logger = logging.getLogger(__name__)


def _interval(value: str) -> str | float:
    return value if value.isalpha() else float(value)


def run(rate: float, interval: str | float, tick_ms: float, duration: float) -> None:
    log = throttle(rate, interval)(print)
    deadline = time.monotonic() + duration
    i = 0

    while time.monotonic() < deadline:
        i += 1
        log(i)
        time.sleep(tick_ms / 1000)

    stat = log.limiter.get_stat()
    logger.info(
        "Last interval: accepted=%s incoming=%d limit=%s",
        stat.accepted,
        stat.incoming,
        stat.limit,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Throttle a print function.")
    parser.add_argument(
        "--rate", type=float, default=10, help="Calls per interval (default: 10)"
    )
    parser.add_argument(
        "--interval",
        type=_interval,
        default=10_000,
        help="second, minute, hour, day or milliseconds (default: 10000)",
    )
    parser.add_argument(
        "--tick", type=float, default=100, help="Milliseconds between calls (default: 100)"
    )
    parser.add_argument(
        "--duration", type=float, default=30, help="Seconds to run (default: 30)"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=SETTINGS.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run(rate=args.rate, interval=args.interval, tick_ms=args.tick, duration=args.duration)


if __name__ == "__main__":
    main()
