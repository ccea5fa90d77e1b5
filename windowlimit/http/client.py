"""HTTP client that spends limiter tokens per request and records latency."""

from __future__ import annotations

import functools
import logging
import random
import threading
import time
from typing import Any

import httpx

from windowlimit.config import SETTINGS
from windowlimit.core import clock
from windowlimit.core.models import Stat
from windowlimit.core.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    """The limiter rejected a request before it was sent."""

    def __init__(self, stat: Stat) -> None:
        super().__init__(
            f"Rate limit of {stat.limit} per interval reached "
            f"(last interval: {stat.accepted} accepted of {stat.incoming} incoming)"
        )
        self.stat = stat


def _should_retry(exc: Exception) -> bool:
    if isinstance(exc, RateLimitExceeded):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


def retry(max_attempts: int = 3, base_delay: float = 1.0):
    """Decorator: exponential backoff with jitter on local rejection, 429 and 5xx."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except (RateLimitExceeded, httpx.HTTPStatusError) as exc:
                    if not _should_retry(exc) or attempt == max_attempts:
                        raise
                    delay = base_delay * (2 ** (attempt - 1)) + random.uniform(0, 0.5)
                    logger.warning(
                        "%s on attempt %d/%d, retrying in %.1fs",
                        exc,
                        attempt,
                        max_attempts,
                        delay,
                    )
                    time.sleep(delay)

        return wrapper

    return decorator


class LimitedClient:
    """httpx client gated by a :class:`RateLimiter`.

    Each request spends *cost* tokens. Rejected requests raise
    :class:`RateLimitExceeded` without touching the network. Round-trip
    times of sent requests are fed to ``limiter.add_time`` so the limiter's
    stats carry an average latency.

    The limiter itself is not thread-safe; this client serialises every
    call into it, so one client may be shared across worker threads.
    """

    def __init__(
        self,
        limiter: RateLimiter,
        base_url: str | None = None,
        timeout: float | None = None,
        cost: float = 1,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url if base_url is not None else SETTINGS.http_base_url,
            timeout=timeout if timeout is not None else SETTINGS.http_timeout,
            transport=transport,
        )
        self._limiter = limiter
        self._cost = cost
        self._lock = threading.Lock()

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    @property
    def stat(self) -> Stat:
        with self._lock:
            return self._limiter.get_stat()

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request if the limiter admits it. Raises on 4xx/5xx."""
        with self._lock:
            admitted = self._limiter.accept(self._cost)
            if not admitted:
                stat = self._limiter.get_stat()
        if not admitted:
            logger.warning("Rate limit reached, rejecting %s %s", method, path)
            raise RateLimitExceeded(stat)

        start = clock.now_ms()
        try:
            resp = self._http.request(method, path, **kwargs)
        finally:
            with self._lock:
                self._limiter.add_time(clock.now_ms() - start)
        resp.raise_for_status()
        return resp

    @retry()
    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Rate-limited GET returning the decoded JSON body."""
        return self.request("GET", path, params=params).json()
