"""Core data types for the resource ledger."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

STAT_SORT_ORDER = 705
"""Resources at or above this sort order are stats (drawn as bars)."""

_TAG_PREFIX = "t_"


@dataclass(frozen=True)
class ResourceDef:
    """Immutable resource catalog record.

    Attributes:
        id: Unique identifier for this resource.
        name: Display name (defaults to the id).
        max: Capacity; 0 means unbounded.
        value: Starting amount for a fresh ledger entry.
        locked: Locked resources are invisible to gameplay until unlocked.
        desc: Free text description.
        group: UI grouping, inert to the simulation.
        tags: Tag set used by aggregate rules (tag fills, tag requirements).
        sort_order: Display order; also splits primary from stat resources.
    """

    id: str
    name: str = ""
    max: float = 0
    value: float = 0
    locked: bool = True
    desc: str = ""
    group: str = "misc"
    tags: tuple[str, ...] = ()
    sort_order: int = 999

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ResourceDef id must be non-empty")
        for attr in ("max", "value"):
            amount = getattr(self, attr)
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                raise ValueError(f"{attr} must be a number, got {amount!r}")
        if self.max < 0:
            raise ValueError(f"max must be >= 0, got {self.max}")
        if self.value < 0:
            raise ValueError(f"value must be >= 0, got {self.value}")
        if not self.name:
            object.__setattr__(self, "name", self.id)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ResourceDef:
        """Build a definition from a plain catalog record."""
        tags = record.get("tags") or ()
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",")]
        return cls(
            id=record.get("id", ""),
            name=record.get("name") or "",
            max=record.get("max") or 0,
            value=record.get("value") or 0,
            locked=record.get("locked") is not False,
            desc=record.get("desc") or "",
            group=record.get("group") or "misc",
            tags=tuple(t for t in tags if t),
            sort_order=record.get("sortOrder", record.get("sort_order")) or 999,
        )


@dataclass
class Resource:
    """Mutable per-player resource record."""

    id: str
    name: str
    value: float = 0
    max: float = 0
    rate: float = 0
    locked: bool = True
    desc: str = ""
    group: str = "misc"
    tags: list[str] = field(default_factory=list)
    sort_order: int = 999

    @property
    def is_stat(self) -> bool:
        return self.sort_order >= STAT_SORT_ORDER


@dataclass(frozen=True)
class ById:
    """Reference to a single resource."""

    resource_id: str


@dataclass(frozen=True)
class ByTag:
    """Reference to every resource carrying a tag."""

    tag: str


ResourceRef = Union[ById, ByTag]


def parse_ref(text: str) -> ResourceRef:
    """Convert a catalog reference string into a typed ref.

    ``"t_<tag>"`` names a tag family; anything else is a resource id.

    >>> parse_ref("t_prismatic")
    ByTag(tag='prismatic')
    """
    if not text:
        raise ValueError("resource reference must be non-empty")
    if text.startswith(_TAG_PREFIX) and len(text) > len(_TAG_PREFIX):
        return ByTag(text[len(_TAG_PREFIX):])
    return ById(text)
