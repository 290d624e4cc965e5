"""Clock and TickContext for the fixed-cadence driver."""

from typing import Callable

from vitae.types import TickContext


class Clock:
    """Counts ticks and accumulates simulated time.

    The nominal step is ``1 / tps`` seconds, but a host may report the
    real elapsed time of a tick, so elapsed time is accumulated rather
    than derived from the tick number.
    """

    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0
        self._elapsed = 0.0
        self._last_dt = self._dt

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def dt_ms(self) -> float:
        return self._dt * 1000.0

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, elapsed_ms: float | None = None) -> int:
        if elapsed_ms is None:
            step = self._dt
        else:
            if elapsed_ms < 0:
                raise ValueError(f"elapsed_ms must be >= 0, got {elapsed_ms}")
            step = elapsed_ms / 1000.0
        self._tick_number += 1
        self._elapsed += step
        self._last_dt = step
        return self._tick_number

    def context(self, stop_fn: Callable[[], None]) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._last_dt,
            dt_ms=self._last_dt * 1000.0,
            elapsed=self._elapsed,
            request_stop=stop_fn,
        )

    def reset(self, tick_number: int = 0, elapsed: float = 0.0) -> None:
        self._tick_number = tick_number
        self._elapsed = elapsed
        self._last_dt = self._dt
