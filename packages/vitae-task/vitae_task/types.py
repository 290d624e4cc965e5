"""Core data types for tasks."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from vitae_require import ALWAYS, Requirement, parse_requirement
from vitae_resource import ResourceRef, parse_ref

from vitae_task.milestones import Milestone, parse_milestone_table


_SPEND_KEYS = frozenset({"cost", "run"})


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


def _amounts(
    raw: Mapping[str, Any] | None, where: str, *, spend: bool = False,
) -> dict[str, float]:
    """Normalise a resource map; effect entries may be ``{"value": n}``.

    Maps that are paid out of the ledger (*spend*) must not hold negative
    amounts.
    """
    if not raw:
        return {}
    out: dict[str, float] = {}
    for resource_id, amount in raw.items():
        if isinstance(amount, Mapping):
            amount = amount.get("value")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ValueError(f"{where}.{resource_id}: expected a number, got {amount!r}")
        if spend and amount < 0:
            raise ValueError(f"{where}.{resource_id}: must be >= 0, got {amount}")
        out[resource_id] = float(amount)
    return out


@dataclass
class TaskParams:
    """The per-player editable parameters of a task."""

    name: str
    verb: str = ""
    desc: str = ""
    length: float = 0.0  # ms; 0 means no fixed duration
    cost: dict[str, float] = field(default_factory=dict)
    result: dict[str, float] = field(default_factory=dict)
    effect: dict[str, float] = field(default_factory=dict)
    run: dict[str, float] = field(default_factory=dict)

    @property
    def label(self) -> str:
        """Verb if present, else name."""
        return self.verb or self.name

    def copy(self) -> TaskParams:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "verb": self.verb,
            "desc": self.desc,
            "length": self.length,
            "cost": dict(self.cost),
            "result": dict(self.result),
            "effect": dict(self.effect),
            "run": dict(self.run),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: TaskParams) -> TaskParams:
        """Rebuild from snapshot data; missing fields fall back to *base*."""
        merged = base.copy()
        for key in ("name", "verb", "desc"):
            if data.get(key) is not None:
                setattr(merged, key, str(data[key]))
        if "length" in data:
            merged.length = float(data["length"] or 0.0)
        for key in ("cost", "result", "effect", "run"):
            if key in data:
                setattr(merged, key, _amounts(data[key], key, spend=key in _SPEND_KEYS))
        return merged


@dataclass
class TaskDef:
    """Catalog definition of a task. Shared by the session; only ``locked``
    ever changes after load."""

    id: str
    params: TaskParams
    group: str = "misc"
    perpetual: bool = False
    fill: tuple[ResourceRef, ...] = ()
    require: Requirement = ALWAYS
    at: dict[int, tuple[Milestone, ...]] = field(default_factory=dict)
    every: dict[int, tuple[Milestone, ...]] = field(default_factory=dict)
    locked: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("TaskDef id must be non-empty")
        if self.params.length < 0:
            raise ValueError(f"length must be >= 0, got {self.params.length}")

    @property
    def name(self) -> str:
        return self.params.name

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> TaskDef:
        """Build from a plain catalog record. Raises ValueError subclasses."""
        task_id = record.get("id") or ""
        name = record.get("name") or task_id
        fill = record.get("fill") or ()
        if isinstance(fill, str):
            fill = [fill]
        length = record.get("length") or 0
        if isinstance(length, bool) or not isinstance(length, (int, float)):
            raise ValueError(f"length: expected a number, got {length!r}")
        params = TaskParams(
            name=name,
            verb=record.get("verb") or "",
            desc=record.get("desc") or "",
            length=float(length),
            cost=_amounts(record.get("cost"), "cost", spend=True),
            result=_amounts(record.get("result"), "result"),
            effect=_amounts(record.get("effect"), "effect"),
            run=_amounts(record.get("run"), "run", spend=True),
        )
        return cls(
            id=task_id,
            params=params,
            group=record.get("group") or "misc",
            perpetual=bool(record.get("perpetual", False)),
            fill=tuple(parse_ref(ref) for ref in fill),
            require=parse_requirement(record.get("require")),
            at=parse_milestone_table(record.get("at")),
            every=parse_milestone_table(record.get("every")),
            locked=record.get("locked") is not False,
        )


@dataclass
class TaskState:
    """Runtime record of one task for one player. Mutable, serializable.

    ``run_state`` is authoritative: the current task is whichever record
    is not IDLE. ``interrupted`` marks a record stopped or paused with
    saved progress, which is what ``resume`` accepts.
    """

    task_id: str
    params: TaskParams
    completions: int = 0
    progress: float = 0.0
    run_state: RunState = RunState.IDLE
    cycle_ms: float = 0.0
    interrupted: bool = False
