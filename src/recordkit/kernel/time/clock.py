"""Kernel time – millisecond clocks behind record audit fields."""
from __future__ import annotations

import time
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Port: source of Unix-millisecond timestamps for ``created_at`` / ``updated_at``."""

    def millis(self) -> int: ...


def to_millis(moment: datetime) -> int:
    """Convert a timezone-aware *moment* to integer Unix milliseconds."""
    if moment.tzinfo is None:
        raise ValueError("to_millis needs a timezone-aware datetime")
    return int(moment.timestamp() * 1000)


class SystemClock:
    """Wall clock."""

    def millis(self) -> int:
        return time.time_ns() // 1_000_000


class FrozenClock:
    """Clock that stays put until :meth:`advance` or :meth:`set` moves it."""

    def __init__(self, millis: int) -> None:
        self._millis = millis

    @classmethod
    def at(cls, moment: datetime) -> FrozenClock:
        return cls(to_millis(moment))

    def millis(self) -> int:
        return self._millis

    def advance(self, millis: int = 1) -> None:
        self._millis += millis

    def set(self, millis: int) -> None:
        self._millis = millis


__all__ = ["Clock", "FrozenClock", "SystemClock", "to_millis"]
