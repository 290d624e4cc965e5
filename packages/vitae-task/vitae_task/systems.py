"""System factory for running the current task."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from vitae_task.manager import TaskManager

if TYPE_CHECKING:
    from vitae import TickContext


def make_task_system(
    manager: TaskManager,
    on_change: Callable[[TickContext], None] | None = None,
) -> Callable[[TickContext], None]:
    """Return a system that advances the current task by the tick's elapsed ms.

    ``on_change`` fires after any tick that completed, paused, or finished
    the task, which is where callers hook persistence.
    """

    def task_system(ctx: TickContext) -> None:
        if manager.tick(ctx.dt_ms) and on_change is not None:
            on_change(ctx)

    return task_system
