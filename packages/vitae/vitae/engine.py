"""Engine - tick loop, pacing, and lifecycle hooks."""

import time
from typing import Any, Callable

from vitae.clock import Clock
from vitae.types import SnapshotError, System, TickContext

_SNAPSHOT_VERSION = 1


class Engine:
    """Invokes registered systems at a fixed cadence.

    Systems are plain callables taking a ``TickContext``; game state is
    captured by the system factories, not owned by the engine.
    """

    def __init__(self, tps: int = 10) -> None:
        self._clock = Clock(tps)
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[TickContext], None]] = []
        self._stop_hooks: list[Callable[[TickContext], None]] = []
        self._stop_requested: bool = False

    @property
    def clock(self) -> Clock:
        return self._clock

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self, elapsed_ms: float | None = None) -> None:
        self._clock.advance(elapsed_ms)
        ctx = self._clock.context(self._request_stop)
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                break

    def _fire(self, hooks: list[Callable[[TickContext], None]]) -> None:
        ctx = self._clock.context(self._request_stop)
        for hook in hooks:
            hook(ctx)

    def step(self, elapsed_ms: float | None = None) -> None:
        """Run one tick. ``elapsed_ms`` overrides the nominal step."""
        self._stop_requested = False
        self._tick(elapsed_ms)

    def run(self, n: int) -> None:
        self._stop_requested = False
        self._fire(self._start_hooks)

        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break

        self._fire(self._stop_hooks)

    def run_forever(self) -> None:
        """Run in real time, reporting measured elapsed time to each tick."""
        self._stop_requested = False
        self._fire(self._start_hooks)

        dt = self._clock.dt
        last = time.monotonic()
        while not self._stop_requested:
            start = time.monotonic()
            self._tick((start - last) * 1000.0)
            last = start
            if self._stop_requested:
                break
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._fire(self._stop_hooks)

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "tick_number": self._clock.tick_number,
            "tps": self._clock.tps,
            "elapsed": self._clock.elapsed,
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )

        snap_tps = data.get("tps")
        if snap_tps != self._clock.tps:
            raise SnapshotError(
                f"TPS mismatch: snapshot has {snap_tps}, engine has {self._clock.tps}"
            )

        self._clock.reset(data["tick_number"], data.get("elapsed", 0.0))
