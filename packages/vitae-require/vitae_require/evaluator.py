"""RequirementEvaluator - checks parsed requirements against player state."""
from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from vitae_require.parser import parse_requirement
from vitae_require.types import (
    Always,
    Requirement,
    ResourceAtLeast,
    SkillAtLeast,
    TagUnlocked,
    UpgradeOwned,
)

if TYPE_CHECKING:
    from vitae_resource import Ledger


class RequirementEvaluator:
    """Read-only view over the ledger, upgrade counts, and skill levels.

    The mappings are held by reference, so later purchases and skill
    gains are visible without rebuilding the evaluator. A missing skill
    ledger fails every skill requirement.
    """

    def __init__(
        self,
        ledger: Ledger,
        upgrades: Mapping[str, int],
        skills: Mapping[str, float] | None = None,
    ) -> None:
        self._ledger = ledger
        self._upgrades = upgrades
        self._skills = skills

    def check(self, req: Requirement) -> bool:
        if isinstance(req, Always):
            return True
        if isinstance(req, ResourceAtLeast):
            if not self._ledger.has(req.resource_id):
                return False
            resource = self._ledger.get(req.resource_id)
            return not resource.locked and resource.value >= req.amount
        if isinstance(req, UpgradeOwned):
            return self._upgrades.get(req.upgrade_id, 0) > 0
        if isinstance(req, SkillAtLeast):
            if self._skills is None or req.skill_id not in self._skills:
                return False
            return self._skills[req.skill_id] >= req.level
        if isinstance(req, TagUnlocked):
            return any(not r.locked for r in self._ledger.by_tag(req.tag))
        raise TypeError(f"Unknown requirement node {req!r}")

    def check_text(self, text: str | None) -> bool:
        """Parse and check in one step. Raises RequirementError on bad grammar."""
        return self.check(parse_requirement(text))
