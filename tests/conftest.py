"""Shared fixtures."""

from __future__ import annotations

import pytest

from windowlimit.core import clock as clock_module


class FakeClock:
    """Controllable replacement for ``clock.now_ms``."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(clock_module, "now_ms", fake)
    return fake
