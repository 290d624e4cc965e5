"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for one game session.

    Attributes:
        tps: Ticks per second the host engine runs at.
        default_task_length_ms: Duration of a timed task with no usable length.
        cycle_ms: Length of one perpetual-task cycle.
        log_max_entries: Action log capacity (0 = unbounded).
        starting_full: Resources unlocked and filled for a new player.
        completion_log_every: Perpetual tasks log every N-th completion.
        xp_to_next_level: Experience a fresh player needs to level up.
    """

    tps: int = 10
    default_task_length_ms: float = 1000.0
    cycle_ms: float = 1000.0
    log_max_entries: int = 200
    starting_full: tuple[str, ...] = ("hp", "stamina")
    completion_log_every: int = 10
    xp_to_next_level: int = 100

    def __post_init__(self) -> None:
        if self.tps < 1:
            raise ValueError(f"tps must be >= 1, got {self.tps}")
        if self.default_task_length_ms <= 0:
            raise ValueError(
                f"default_task_length_ms must be > 0, got {self.default_task_length_ms}"
            )
        if self.cycle_ms <= 0:
            raise ValueError(f"cycle_ms must be > 0, got {self.cycle_ms}")
        if self.log_max_entries < 0:
            raise ValueError(f"log_max_entries must be >= 0, got {self.log_max_entries}")
