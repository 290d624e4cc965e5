"""Requirement AST nodes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class RequirementError(ValueError):
    """Raised when a requirement string does not match the grammar."""


@dataclass(frozen=True)
class Always:
    """No requirement."""


@dataclass(frozen=True)
class ResourceAtLeast:
    resource_id: str
    amount: float


@dataclass(frozen=True)
class UpgradeOwned:
    upgrade_id: str


@dataclass(frozen=True)
class SkillAtLeast:
    skill_id: str
    level: float


@dataclass(frozen=True)
class TagUnlocked:
    """At least one unlocked resource carries ``tag``."""

    tag: str


Requirement = Union[Always, ResourceAtLeast, UpgradeOwned, SkillAtLeast, TagUnlocked]

ALWAYS = Always()
