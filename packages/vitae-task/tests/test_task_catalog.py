"""Tests for TaskCatalog."""
from __future__ import annotations

import pytest
from vitae_task import TaskCatalog, TaskDef, TaskParams


def _task(task_id: str, locked: bool = True) -> TaskDef:
    return TaskDef(id=task_id, params=TaskParams(name=task_id), locked=locked)


class TestTaskCatalog:
    def test_define_and_get(self) -> None:
        catalog = TaskCatalog()
        catalog.define(_task("chop"))
        assert catalog.has("chop")
        assert catalog.get("chop").id == "chop"
        assert len(catalog) == 1

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(KeyError):
            TaskCatalog().get("chop")

    def test_definition_unknown_is_none(self) -> None:
        assert TaskCatalog().definition("chop") is None

    def test_insertion_order(self) -> None:
        catalog = TaskCatalog()
        for tid in ("rest", "chop", "mine"):
            catalog.define(_task(tid))
        assert [t.id for t in catalog.definitions()] == ["rest", "chop", "mine"]

    def test_available_skips_locked(self) -> None:
        catalog = TaskCatalog()
        catalog.define(_task("rest", locked=False))
        catalog.define(_task("chop"))
        assert [t.id for t in catalog.available()] == ["rest"]

    def test_unlock(self) -> None:
        catalog = TaskCatalog()
        catalog.define(_task("chop"))
        assert catalog.unlock("chop") is True
        assert catalog.get("chop").locked is False
        assert catalog.unlock("ghost") is False
