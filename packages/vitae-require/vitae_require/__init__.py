"""vitae-require - Requirement predicates for tasks and upgrades."""
from vitae_require.evaluator import RequirementEvaluator
from vitae_require.parser import parse_requirement
from vitae_require.types import (
    ALWAYS,
    Always,
    Requirement,
    RequirementError,
    ResourceAtLeast,
    SkillAtLeast,
    TagUnlocked,
    UpgradeOwned,
)

__all__ = [
    "ALWAYS",
    "Always",
    "Requirement",
    "RequirementError",
    "RequirementEvaluator",
    "ResourceAtLeast",
    "SkillAtLeast",
    "TagUnlocked",
    "UpgradeOwned",
    "parse_requirement",
]
