"""Load .env and expose typed Settings singleton."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    default_interval: str | float = 1000
    http_base_url: str = ""
    http_timeout: float = 30.0
    log_level: str = "INFO"


def _load_settings() -> Settings:
    def _env(key: str, default: str) -> str:
        return os.environ.get(key, default).strip() or default

    def _float(key: str, default: str) -> float:
        raw = _env(key, default)
        try:
            return float(raw)
        except ValueError:
            raise RuntimeError(f"Invalid value for {key}: {raw!r} is not a number") from None

    # Unit names pass through; anything else must be milliseconds
    interval: str | float = _env("WINDOWLIMIT_DEFAULT_INTERVAL", "1000")
    if not interval.isalpha():
        interval = _float("WINDOWLIMIT_DEFAULT_INTERVAL", "1000")

    return Settings(
        default_interval=interval,
        http_base_url=_env("WINDOWLIMIT_HTTP_BASE_URL", ""),
        http_timeout=_float("WINDOWLIMIT_HTTP_TIMEOUT", "30.0"),
        log_level=_env("WINDOWLIMIT_LOG_LEVEL", "INFO").upper(),
    )


SETTINGS = _load_settings()
