"""Catalog loading - turns plain records into typed, validated definitions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, TypeVar

from vitae_resource import ResourceDef
from vitae_task import TaskCatalog, TaskDef
from vitae_upgrade import UpgradeCatalog, UpgradeDef

T = TypeVar("T")


class CatalogError(ValueError):
    """Raised when a catalog record cannot be loaded."""

    def __init__(self, section: str, record_id: str, reason: str) -> None:
        super().__init__(f"{section}[{record_id!r}]: {reason}")
        self.section = section
        self.record_id = record_id


@dataclass
class Catalog:
    """Everything a session shares between players.

    ``resources`` are templates copied into each player's ledger.
    ``tasks`` is shared and mutable: upgrades unlock tasks in it.
    """

    resources: tuple[ResourceDef, ...] = ()
    tasks: TaskCatalog = field(default_factory=TaskCatalog)
    upgrades: UpgradeCatalog = field(default_factory=UpgradeCatalog)

    def resource(self, resource_id: str) -> ResourceDef | None:
        for r in self.resources:
            if r.id == resource_id:
                return r
        return None


def _load(
    section: str,
    records: Iterable[Mapping[str, Any]],
    build: Callable[[Mapping[str, Any]], T],
) -> list[T]:
    loaded: list[T] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise CatalogError(section, f"#{index}", "record must be a mapping")
        record_id = str(record.get("id") or f"#{index}")
        if record_id in seen:
            raise CatalogError(section, record_id, "duplicate id")
        seen.add(record_id)
        try:
            loaded.append(build(record))
        except ValueError as exc:
            raise CatalogError(section, record_id, str(exc)) from exc
    return loaded


def load_catalog(
    resources: Iterable[Mapping[str, Any]] = (),
    tasks: Iterable[Mapping[str, Any]] = (),
    upgrades: Iterable[Mapping[str, Any]] = (),
) -> Catalog:
    """Parse raw records. Any malformed record rejects the whole catalog."""
    catalog = Catalog(resources=tuple(_load("resources", resources, ResourceDef.from_record)))
    for task in _load("tasks", tasks, TaskDef.from_record):
        catalog.tasks.define(task)
    for upgrade in _load("upgrades", upgrades, UpgradeDef.from_record):
        catalog.upgrades.define(upgrade)
    return catalog
