"""TaskCatalog - the session-wide store of task definitions."""
from __future__ import annotations

from vitae_task.types import TaskDef


class TaskCatalog:
    """Stores task definitions in insertion order.

    Definitions are shared by the session; per-player copies live in the
    ``TaskManager``. Upgrades flip ``locked`` here.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, TaskDef] = {}

    def define(self, task: TaskDef) -> None:
        """Register a task definition. Overwrites if the id exists."""
        self._definitions[task.id] = task

    def definition(self, task_id: str) -> TaskDef | None:
        return self._definitions.get(task_id)

    def get(self, task_id: str) -> TaskDef:
        """Look up a definition. Raises KeyError if not defined."""
        if task_id not in self._definitions:
            raise KeyError(task_id)
        return self._definitions[task_id]

    def has(self, task_id: str) -> bool:
        return task_id in self._definitions

    def definitions(self) -> list[TaskDef]:
        return list(self._definitions.values())

    def available(self) -> list[TaskDef]:
        """Definitions that are not locked."""
        return [t for t in self._definitions.values() if not t.locked]

    def unlock(self, task_id: str) -> bool:
        """Unlock a task. Returns True if the definition exists."""
        task = self._definitions.get(task_id)
        if task is None:
            return False
        task.locked = False
        return True

    def __len__(self) -> int:
        return len(self._definitions)
