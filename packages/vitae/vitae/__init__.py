"""vitae - Fixed-cadence tick driver for the progression engine."""

from vitae.clock import Clock
from vitae.engine import Engine
from vitae.types import SnapshotError, System, TickContext

__all__ = [
    "Engine",
    "Clock",
    "TickContext",
    "System",
    "SnapshotError",
]
