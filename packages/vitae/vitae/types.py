"""Shared types for the vitae tick driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    dt_ms: float
    elapsed: float
    request_stop: Callable[[], None]


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, malformed data)."""


System = Callable[[TickContext], None]
