"""Core data types for upgrades."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from vitae_require import ALWAYS, Requirement, parse_requirement


class ModProperty(Enum):
    MAX = "max"
    RATE = "rate"


@dataclass(frozen=True)
class ResourceMod:
    """A permanent shift of one resource property per purchase."""

    resource_id: str
    prop: ModProperty
    delta: float


def parse_mods(table: Mapping[str, Any] | None) -> tuple[ResourceMod, ...]:
    """Parse ``{"gold.max": 10, "wood.rate": 0.5}`` into typed mods."""
    if not table:
        return ()
    mods = []
    for path, delta in table.items():
        resource_id, sep, prop = path.partition(".")
        if not sep or not resource_id:
            raise ValueError(f"mod {path!r}: expected '<resource>.max' or '<resource>.rate'")
        try:
            mod_prop = ModProperty(prop)
        except ValueError:
            raise ValueError(f"mod {path!r}: unknown property {prop!r}") from None
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            raise ValueError(f"mod {path!r}: expected a number, got {delta!r}")
        mods.append(ResourceMod(resource_id, mod_prop, float(delta)))
    return tuple(mods)


def _ids(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(raw)


@dataclass(frozen=True)
class UpgradeDef:
    """Catalog definition of a purchasable upgrade.

    Attributes:
        id: Unique identifier.
        name: Display name; defaults to id.
        cost: Resources paid per purchase.
        max: Purchase limit, None for unlimited.
        require: Parsed requirement predicate.
        mod: Resource property shifts applied per purchase.
        unlock: Resource ids unlocked on purchase.
        unlock_task: Task ids unlocked on purchase.
    """

    id: str
    name: str = ""
    group: str = "misc"
    desc: str = ""
    cost: dict[str, float] = field(default_factory=dict)
    max: int | None = None
    require: Requirement = ALWAYS
    mod: tuple[ResourceMod, ...] = ()
    unlock: tuple[str, ...] = ()
    unlock_task: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("UpgradeDef id must be non-empty")
        if self.max is not None and self.max < 1:
            raise ValueError(f"max must be >= 1 or None, got {self.max}")
        if not self.name:
            object.__setattr__(self, "name", self.id)
        object.__setattr__(self, "cost", dict(self.cost))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> UpgradeDef:
        """Build from a plain catalog record. A ``max`` of 0 means unlimited."""
        cost = record.get("cost") or {}
        for resource_id, amount in cost.items():
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                raise ValueError(f"cost.{resource_id}: expected a number, got {amount!r}")
            if amount < 0:
                raise ValueError(f"cost.{resource_id}: must be >= 0, got {amount}")
        limit = record.get("max") or None
        return cls(
            id=record.get("id") or "",
            name=record.get("name") or "",
            group=record.get("group") or "misc",
            desc=record.get("desc") or "",
            cost={k: float(v) for k, v in cost.items()},
            max=int(limit) if limit is not None else None,
            require=parse_requirement(record.get("require")),
            mod=parse_mods(record.get("mod")),
            unlock=_ids(record.get("unlock")),
            unlock_task=_ids(record.get("unlockTask", record.get("unlock_task"))),
        )
