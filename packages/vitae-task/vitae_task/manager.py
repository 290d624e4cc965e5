"""TaskManager - the task execution state machine for one player."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping

from vitae_task.catalog import TaskCatalog
from vitae_task.milestones import apply_milestone
from vitae_task.types import RunState, TaskDef, TaskParams, TaskState

if TYPE_CHECKING:
    from vitae_require import RequirementEvaluator
    from vitae_resource import Ledger

EventFn = Callable[[str, str], None]

# absorbs float drift from summing per-tick fractions
_EPSILON = 1e-9


def _cap(text: str) -> str:
    return text[:1].upper() + text[1:]


class TaskManager:
    """Runs at most one task at a time against a ledger.

    Immediate tasks (no length, not perpetual) resolve inside ``start``.
    Timed tasks advance by elapsed time and complete at progress 1.
    Perpetual tasks run fixed cycles: each cycle pays ``run``, grants
    ``effect`` and counts one completion, until their ``fill`` targets are
    all saturated. A run shortfall pauses the task.

    ``requirements`` is optional on the gating calls; without it ``require``
    is not checked.
    """

    def __init__(
        self,
        catalog: TaskCatalog,
        ledger: Ledger,
        *,
        default_length: float = 1000.0,
        cycle_ms: float = 1000.0,
        completion_log_every: int = 10,
        on_event: EventFn | None = None,
    ) -> None:
        if default_length <= 0:
            raise ValueError(f"default_length must be > 0, got {default_length}")
        if cycle_ms <= 0:
            raise ValueError(f"cycle_ms must be > 0, got {cycle_ms}")
        self._catalog = catalog
        self._ledger = ledger
        self._default_length = default_length
        self._cycle_ms = cycle_ms
        self._completion_log_every = completion_log_every
        self._on_event = on_event
        self._states: dict[str, TaskState] = {}
        self._previous: str | None = None

    # --- Player state ---

    def get_or_create(self, task_id: str) -> TaskState | None:
        """Fetch the player's record, copying the catalog params on first use."""
        defn = self._catalog.definition(task_id)
        if defn is None:
            return None
        state = self._states.get(task_id)
        if state is None:
            state = TaskState(task_id=task_id, params=defn.params.copy())
            self._states[task_id] = state
        return state

    def state(self, task_id: str) -> TaskState | None:
        return self._states.get(task_id)

    def states(self) -> dict[str, TaskState]:
        return dict(self._states)

    def task_params(self, task_id: str) -> TaskParams | None:
        """The player's params if the task was ever touched, else the catalog's."""
        state = self._states.get(task_id)
        if state is not None:
            return state.params
        defn = self._catalog.definition(task_id)
        return defn.params if defn is not None else None

    # --- Queries ---

    def current(self) -> TaskState | None:
        for state in self._states.values():
            if state.run_state is not RunState.IDLE:
                return state
        return None

    def current_id(self) -> str | None:
        state = self.current()
        return state.task_id if state is not None else None

    def is_paused(self) -> bool:
        state = self.current()
        return state is not None and state.run_state is RunState.PAUSED

    def progress(self) -> float:
        state = self.current()
        if state is None:
            return 0.0
        return min(state.progress, 1.0)

    def duration(self) -> float:
        """Milliseconds per completion of the current task (0 when idle)."""
        state = self.current()
        if state is None:
            return 0.0
        return self._duration(self._catalog.get(state.task_id), state)

    def previous(self) -> str | None:
        return self._previous

    def completions(self, task_id: str) -> int:
        state = self._states.get(task_id)
        return state.completions if state is not None else 0

    # --- Gating ---

    def can_start(
        self, task_id: str, requirements: RequirementEvaluator | None = None,
    ) -> bool:
        defn = self._catalog.definition(task_id)
        if defn is None:
            return False
        params = self.task_params(task_id)
        if params is None:
            return False
        return self._can_start(defn, params, requirements)

    def _can_start(
        self,
        defn: TaskDef,
        params: TaskParams,
        requirements: RequirementEvaluator | None,
    ) -> bool:
        if defn.fill and self._ledger.all_full(defn.fill):
            return False
        if not self._ledger.can_afford(params.cost):
            return False
        if requirements is not None and not requirements.check(defn.require):
            return False
        return True

    # --- Commands ---

    def start(
        self, task_id: str, requirements: RequirementEvaluator | None = None,
    ) -> bool:
        """Start (or, for immediate tasks, execute) a task. Returns True on success."""
        defn = self._catalog.definition(task_id)
        if defn is None:
            return False
        state = self.get_or_create(task_id)
        if state is None:
            return False
        if not self._can_start(defn, state.params, requirements):
            return False

        if not defn.perpetual and not state.params.length:
            self._ledger.pay(state.params.cost)
            self._ledger.grant(state.params.result)
            self._complete(defn, state)
            self._emit("task_completed", f"Completed {_cap(state.params.name)}.")
            return True

        current = self.current()
        if current is not None:
            self._stop(current)

        self._ledger.pay(state.params.cost)
        state.run_state = RunState.RUNNING
        state.progress = 0.0
        state.cycle_ms = 0.0
        state.interrupted = False
        self._emit("task_started", f"Started {_cap(state.params.label)}.")
        return True

    def stop(self) -> bool:
        """Interrupt the current task, keeping its progress. False when idle."""
        state = self.current()
        if state is None:
            return False
        self._stop(state)
        return True

    def pause(self, reason: str | None = None) -> bool:
        """Freeze the current task in place. False when idle or already paused."""
        state = self.current()
        if state is None or state.run_state is RunState.PAUSED:
            return False
        state.run_state = RunState.PAUSED
        state.interrupted = True
        suffix = f" ({reason})" if reason else ""
        self._emit("task_paused", f"Paused {_cap(state.params.label)}{suffix}.")
        return True

    def resume(
        self, task_id: str, requirements: RequirementEvaluator | None = None,
    ) -> bool:
        """Continue a paused or stopped task from its saved progress."""
        defn = self._catalog.definition(task_id)
        state = self._states.get(task_id)
        if defn is None or state is None:
            return False
        if state.run_state is RunState.RUNNING or not state.interrupted:
            return False
        if not self._can_start(defn, state.params, requirements):
            return False

        current = self.current()
        if current is not None and current is not state:
            self._stop(current)

        state.run_state = RunState.RUNNING
        state.interrupted = False
        self._emit("task_resumed", f"Resumed {_cap(state.params.label)}.")
        return True

    def tick(self, elapsed_ms: float) -> bool:
        """Advance the current task. Returns True if a completion, pause, or
        finish changed persisted state."""
        state = self.current()
        if state is None or state.run_state is not RunState.RUNNING:
            return False
        defn = self._catalog.get(state.task_id)
        if defn.perpetual:
            return self._tick_perpetual(defn, state, elapsed_ms)

        state.progress += elapsed_ms / self._duration(defn, state)
        if state.progress < 1.0 - _EPSILON:
            return False

        self._ledger.grant(state.params.result)
        self._complete(defn, state)
        self._reset(state)
        self._emit("task_completed", f"Completed {_cap(state.params.label)}.")
        return True

    # --- Internal helpers ---

    def _duration(self, defn: TaskDef, state: TaskState) -> float:
        if defn.perpetual:
            return self._cycle_ms
        length = state.params.length
        return length if length and length > 0 else self._default_length

    def _tick_perpetual(self, defn: TaskDef, state: TaskState, elapsed_ms: float) -> bool:
        changed = False
        state.cycle_ms += elapsed_ms
        while state.cycle_ms >= self._cycle_ms:
            if state.params.run and not self._ledger.pay(state.params.run):
                state.progress = 1.0
                self.pause("insufficient resources")
                return True
            state.cycle_ms -= self._cycle_ms
            self._ledger.grant(state.params.effect)
            self._complete(defn, state)
            changed = True
            every = self._completion_log_every
            if every > 0 and state.completions % every == 0:
                self._emit(
                    "task_cycle",
                    f"{_cap(state.params.label)} ({state.completions} completions).",
                )
            if self._filled(defn):
                self._finish(state)
                return True

        state.progress = state.cycle_ms / self._cycle_ms
        if self._filled(defn):
            self._finish(state)
            return True
        return changed

    def _filled(self, defn: TaskDef) -> bool:
        return bool(defn.fill) and self._ledger.all_full(defn.fill)

    def _complete(self, defn: TaskDef, state: TaskState) -> None:
        state.completions += 1
        n = state.completions
        due = [edits for count, edits in defn.at.items() if n == count]
        due += [edits for count, edits in defn.every.items() if n % count == 0]
        for edits in due:
            for m in edits:
                apply_milestone(state.params, m)
            self._emit(
                "milestone", f"{_cap(state.params.name)} improved at {n} completions!",
            )

    def _reset(self, state: TaskState) -> None:
        state.run_state = RunState.IDLE
        state.progress = 0.0
        state.cycle_ms = 0.0
        state.interrupted = False
        self._previous = state.task_id

    def _finish(self, state: TaskState) -> None:
        self._reset(state)
        self._emit("task_finished", f"Finished {_cap(state.params.label)}.")

    def _stop(self, state: TaskState) -> None:
        state.run_state = RunState.IDLE
        state.interrupted = True
        self._previous = state.task_id
        self._emit("task_stopped", f"Stopped {_cap(state.params.label)}.")

    def _emit(self, kind: str, message: str) -> None:
        if self._on_event is not None:
            self._on_event(kind, message)

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        """Serialize per-player task records (not definitions)."""
        return {
            "tasks": {
                tid: {
                    "completions": s.completions,
                    "progress": s.progress,
                    "run_state": s.run_state.value,
                    "cycle_ms": s.cycle_ms,
                    "interrupted": s.interrupted,
                    "params": s.params.to_dict(),
                }
                for tid, s in self._states.items()
            },
            "previous": self._previous,
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Restore task records. Definitions must be in the catalog first;
        unknown task ids are skipped.

        Older saves stored a flat ``{task_id: task}`` map with the task's
        fields inline; those are read as idle records.
        """
        self._states.clear()
        active_seen = False
        legacy = "tasks" not in data
        records = data if legacy else data["tasks"]
        for tid, fields in records.items():
            defn = self._catalog.definition(tid)
            if defn is None or not isinstance(fields, Mapping):
                continue
            if legacy:
                progress = float(fields.get("progress") or 0.0)
                self._states[tid] = TaskState(
                    task_id=tid,
                    params=TaskParams.from_dict(fields, defn.params),
                    completions=int(fields.get("completions") or 0),
                    progress=progress,
                    interrupted=progress > 0,
                )
                continue
            run_state = RunState(fields.get("run_state", RunState.IDLE.value))
            interrupted = bool(fields.get("interrupted", False))
            if run_state is not RunState.IDLE:
                if active_seen:
                    run_state, interrupted = RunState.IDLE, True
                active_seen = True
            self._states[tid] = TaskState(
                task_id=tid,
                params=TaskParams.from_dict(fields.get("params", {}), defn.params),
                completions=int(fields.get("completions", 0)),
                progress=float(fields.get("progress", 0.0)),
                run_state=run_state,
                cycle_ms=float(fields.get("cycle_ms", 0.0)),
                interrupted=interrupted,
            )
        self._previous = None if legacy else data.get("previous")
