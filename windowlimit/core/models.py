"""Pydantic v2 models for limiter statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Stat(BaseModel):
    """Counters for the most recently completed interval."""

    model_config = ConfigDict(frozen=True)

    accepted: int | float = 0
    incoming: int = 0
    average_time: int = 0
    limit: int | float

    @classmethod
    def empty(cls, limit: int | float) -> Stat:
        return cls(limit=limit)
