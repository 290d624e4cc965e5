"""Ledger - the per-player resource store with bounded arithmetic."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from vitae_resource.types import (
    STAT_SORT_ORDER,
    ById,
    ByTag,
    Resource,
    ResourceDef,
    ResourceRef,
)


def _sorted(resources: Iterable[Resource]) -> list[Resource]:
    return sorted(resources, key=lambda r: r.sort_order)


class Ledger:
    """Maps resource id -> mutable ``Resource``.

    ``credit`` clamps at capacity and never fails for insufficiency;
    ``debit`` is all-or-nothing and is the gate used for every cost.
    Locked or absent resources refuse both.
    """

    def __init__(self) -> None:
        self._resources: dict[str, Resource] = {}

    # --- Setup ---

    def initialize(self, definition: ResourceDef) -> Resource:
        """Create the entry for *definition* unless it already exists."""
        existing = self._resources.get(definition.id)
        if existing is not None:
            return existing
        resource = Resource(
            id=definition.id,
            name=definition.name,
            value=definition.value,
            max=definition.max,
            rate=0,
            locked=definition.locked,
            desc=definition.desc,
            group=definition.group,
            tags=list(definition.tags),
            sort_order=definition.sort_order,
        )
        if resource.max > 0 and resource.value > resource.max:
            resource.value = resource.max
        self._resources[definition.id] = resource
        return resource

    # --- Arithmetic ---

    def credit(self, resource_id: str, amount: float) -> bool:
        """Add *amount*, clamped to max. Returns False if nothing changed hands."""
        resource = self._resources.get(resource_id)
        if resource is None or resource.locked:
            return False
        new_value = resource.value + amount
        if new_value < 0:
            return False
        resource.value = min(new_value, resource.max) if resource.max > 0 else new_value
        return True

    def debit(self, resource_id: str, amount: float) -> bool:
        """Subtract *amount*. Returns False when absent, locked, short, or
        when *amount* is negative."""
        if amount < 0:
            return False
        resource = self._resources.get(resource_id)
        if resource is None or resource.locked or resource.value < amount:
            return False
        resource.value -= amount
        return True

    def can_afford(self, costs: Mapping[str, float]) -> bool:
        """Check every entry of *costs* without mutating anything."""
        for resource_id, amount in costs.items():
            if amount < 0:
                return False
            resource = self._resources.get(resource_id)
            if resource is None or resource.locked or resource.value < amount:
                return False
        return True

    def pay(self, costs: Mapping[str, float]) -> bool:
        """Debit all of *costs* or none of them."""
        if not self.can_afford(costs):
            return False
        for resource_id, amount in costs.items():
            self.debit(resource_id, amount)
        return True

    def grant(self, amounts: Mapping[str, float]) -> None:
        """Credit each entry; locked or absent entries are skipped."""
        for resource_id, amount in amounts.items():
            self.credit(resource_id, amount)

    def apply_rates(self, seconds: float) -> None:
        """Apply each unlocked resource's passive rate for *seconds*."""
        if seconds <= 0:
            return
        for resource in self._resources.values():
            if resource.locked or resource.rate == 0:
                continue
            delta = resource.rate * seconds
            if delta < 0:
                # drains stop at zero
                delta = max(delta, -resource.value)
            self.credit(resource.id, delta)

    def add_max(self, resource_id: str, delta: float) -> bool:
        """Shift capacity by *delta*; the value is re-clamped if it shrank.

        Works on locked resources too, since upgrades raise a locked
        resource's capacity before unlocking it.
        """
        resource = self._resources.get(resource_id)
        if resource is None:
            return False
        resource.max = max(resource.max + delta, 0)
        if resource.max > 0 and resource.value > resource.max:
            resource.value = resource.max
        return True

    def add_rate(self, resource_id: str, delta: float) -> bool:
        resource = self._resources.get(resource_id)
        if resource is None:
            return False
        resource.rate += delta
        return True

    # --- Capacity checks ---

    def is_full(self, resource_id: str) -> bool:
        resource = self._resources.get(resource_id)
        if resource is None or resource.locked or resource.max <= 0:
            return False
        return resource.value >= resource.max

    def _all_full(self, members: list[Resource]) -> bool:
        if not members:
            return False
        return all(self.is_full(r.id) for r in members)

    def is_group_full(self, group: str) -> bool:
        """True only if every resource in *group* is full."""
        return self._all_full([r for r in self._resources.values() if r.group == group])

    def is_tag_full(self, tag: str) -> bool:
        """True only if every resource carrying *tag* is full."""
        return self._all_full([r for r in self._resources.values() if tag in r.tags])

    def is_ref_full(self, ref: ResourceRef) -> bool:
        if isinstance(ref, ByTag):
            return self.is_tag_full(ref.tag)
        return self.is_full(ref.resource_id)

    def all_full(self, refs: Iterable[ResourceRef]) -> bool:
        """Fill check: every ref saturated at once. Empty is never full."""
        refs = list(refs)
        if not refs:
            return False
        return all(self.is_ref_full(ref) for ref in refs)

    # --- Locking ---

    def unlock(self, resource_id: str) -> bool:
        """Unlock a resource. Returns True only if it was locked."""
        resource = self._resources.get(resource_id)
        if resource is None or not resource.locked:
            return False
        resource.locked = False
        return True

    def lock(self, resource_id: str) -> bool:
        resource = self._resources.get(resource_id)
        if resource is None or resource.locked:
            return False
        resource.locked = True
        return True

    # --- Queries ---

    def get(self, resource_id: str) -> Resource:
        """Look up a resource record. Raises KeyError if absent."""
        if resource_id not in self._resources:
            raise KeyError(resource_id)
        return self._resources[resource_id]

    def has(self, resource_id: str) -> bool:
        return resource_id in self._resources

    def value(self, resource_id: str) -> float:
        """Gameplay-visible amount: 0 for absent or locked resources."""
        resource = self._resources.get(resource_id)
        if resource is None or resource.locked:
            return 0
        return resource.value

    def resources(self) -> list[Resource]:
        return list(self._resources.values())

    def unlocked(self) -> list[Resource]:
        return _sorted(r for r in self._resources.values() if not r.locked)

    def by_group(self, group: str) -> list[Resource]:
        return _sorted(r for r in self._resources.values() if r.group == group)

    def by_tag(self, tag: str) -> list[Resource]:
        return _sorted(r for r in self._resources.values() if tag in r.tags)

    def primary(self) -> list[Resource]:
        """Unlocked resources below the stat threshold."""
        return [r for r in self.unlocked() if r.sort_order < STAT_SORT_ORDER]

    def stats(self) -> list[Resource]:
        return _sorted(r for r in self._resources.values() if r.sort_order >= STAT_SORT_ORDER)

    def unlocked_stats(self) -> list[Resource]:
        return [r for r in self.stats() if not r.locked]

    def __contains__(self, resource_id: object) -> bool:
        return resource_id in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        return {
            rid: {
                "id": r.id,
                "name": r.name,
                "value": r.value,
                "max": r.max,
                "rate": r.rate,
                "locked": r.locked,
                "desc": r.desc,
                "group": r.group,
                "tags": list(r.tags),
                "sort_order": r.sort_order,
            }
            for rid, r in self._resources.items()
        }

    def restore(self, data: Mapping[str, Any]) -> None:
        """Replace contents from snapshot data, backfilling missing fields."""
        self._resources.clear()
        for rid, fields in data.items():
            self._resources[rid] = Resource(
                id=fields.get("id", rid),
                name=fields.get("name") or rid,
                value=fields.get("value", 0),
                max=fields.get("max", 0),
                rate=fields.get("rate", 0),
                locked=fields.get("locked", True),
                desc=fields.get("desc", ""),
                group=fields.get("group", "misc"),
                tags=list(fields.get("tags", [])),
                sort_order=fields.get("sort_order", fields.get("sortOrder", 999)),
            )
