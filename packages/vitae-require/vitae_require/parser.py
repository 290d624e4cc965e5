"""Parse requirement strings into typed nodes at catalog-load time."""
from __future__ import annotations

import re

from vitae_require.types import (
    ALWAYS,
    Requirement,
    RequirementError,
    ResourceAtLeast,
    SkillAtLeast,
    TagUnlocked,
    UpgradeOwned,
)

_IDENT = r"[A-Za-z_][A-Za-z0-9_\-]*"
_NUMBER = r"-?\d+(?:\.\d+)?"

_RESOURCE = re.compile(rf"^resources\.({_IDENT})\s*>=\s*({_NUMBER})$")
_SKILL = re.compile(rf"^skills\.({_IDENT})\s*>=\s*({_NUMBER})$")
_UPGRADE = re.compile(rf"^upgrades\.({_IDENT})$")
_TAG = re.compile(rf"^({_IDENT})$")


def parse_requirement(text: str | None) -> Requirement:
    """Parse one predicate.

    Accepted forms, tried in order::

        resources.<id>>=<N>
        upgrades.<id>
        skills.<id>>=<N>
        <tag>

    ``None`` or blank text means no requirement. Anything else raises
    ``RequirementError``.
    """
    if text is None:
        return ALWAYS
    if not isinstance(text, str):
        raise RequirementError(f"requirement must be a string, got {type(text).__name__}")
    text = text.strip()
    if not text:
        return ALWAYS

    m = _RESOURCE.match(text)
    if m:
        return ResourceAtLeast(m.group(1), float(m.group(2)))

    m = _UPGRADE.match(text)
    if m:
        return UpgradeOwned(m.group(1))

    m = _SKILL.match(text)
    if m:
        return SkillAtLeast(m.group(1), float(m.group(2)))

    if text.split(".", 1)[0] in ("resources", "upgrades", "skills"):
        raise RequirementError(f"malformed requirement {text!r}")

    m = _TAG.match(text)
    if m:
        return TagUnlocked(m.group(1))

    raise RequirementError(f"unrecognized requirement {text!r}")

