"""Milestones - completion-count triggered edits of a task's parameters.

Every editable parameter is a member of ``MilestoneField``; catalog paths
such as ``"result.wood"`` are resolved to a field plus a resource key when
the catalog loads, so unknown fields are rejected up front instead of
being created on first use.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from vitae_task.types import TaskParams


class MilestoneError(ValueError):
    """Raised when a milestone table cannot be parsed."""


class MilestoneField(Enum):
    NAME = "name"
    VERB = "verb"
    DESC = "desc"
    LENGTH = "length"
    COST = "cost"
    RESULT = "result"
    EFFECT = "effect"
    RUN = "run"


class MilestoneOp(Enum):
    ADD = "add"
    SET = "set"
    CLAMP_ADD = "clamp_add"


_TEXT_FIELDS = frozenset({MilestoneField.NAME, MilestoneField.VERB, MilestoneField.DESC})
_MAP_FIELDS = frozenset({
    MilestoneField.COST, MilestoneField.RESULT, MilestoneField.EFFECT, MilestoneField.RUN,
})
_SPEND_FIELDS = frozenset({MilestoneField.COST, MilestoneField.RUN})


@dataclass(frozen=True)
class Milestone:
    """One parameter edit.

    Attributes:
        field: Which parameter is edited.
        key: Resource id inside a map field, None for scalar fields.
        op: ADD, SET, or CLAMP_ADD.
        value: Amount (numeric fields) or replacement text.
        limit: CLAMP_ADD bound; None means unbounded.
    """

    field: MilestoneField
    key: str | None
    op: MilestoneOp
    value: float | str
    limit: float | None = None


def _number(raw: Any, where: str) -> float:
    if isinstance(raw, bool):
        raise MilestoneError(f"{where}: expected a number, got {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise MilestoneError(f"{where}: expected a number, got {raw!r}") from None


def parse_milestone(path: str, raw: Any) -> Milestone:
    """Parse one ``path -> value`` entry.

    Value grammar: a bare number adds; a string replaces (numeric strings
    become numbers on numeric fields); ``"amount:limit"`` adds but clamps
    the result at ``limit``.
    """
    parts = path.split(".")
    try:
        fld = MilestoneField(parts[0])
    except ValueError:
        raise MilestoneError(f"unknown milestone field {path!r}") from None

    key: str | None = None
    if fld in _MAP_FIELDS:
        # "effect.<id>.value" addresses the same number as "effect.<id>"
        if fld is MilestoneField.EFFECT and len(parts) == 3 and parts[2] == "value":
            parts = parts[:2]
        if len(parts) != 2 or not parts[1]:
            raise MilestoneError(f"{path!r}: expected '{fld.value}.<resource>'")
        key = parts[1]
    elif len(parts) != 1:
        raise MilestoneError(f"{path!r}: field {fld.value!r} has no sub-keys")

    if fld in _TEXT_FIELDS:
        if not isinstance(raw, str):
            raise MilestoneError(f"{path!r}: text field needs a string, got {raw!r}")
        return Milestone(fld, key, MilestoneOp.SET, raw)

    if isinstance(raw, str):
        if ":" in raw:
            amount_text, _, limit_text = raw.partition(":")
            amount = _number(amount_text, path)
            limit = _number(limit_text, path) if limit_text.strip() else None
            return Milestone(fld, key, MilestoneOp.CLAMP_ADD, amount, limit)
        return Milestone(fld, key, MilestoneOp.SET, _number(raw, path))

    return Milestone(fld, key, MilestoneOp.ADD, _number(raw, path))


def parse_milestone_table(
    table: Mapping[Any, Mapping[str, Any]] | None,
) -> dict[int, tuple[Milestone, ...]]:
    """Parse an ``at``/``every`` table keyed by completion count."""
    if not table:
        return {}
    parsed: dict[int, tuple[Milestone, ...]] = {}
    for count_key, edits in table.items():
        try:
            count = int(count_key)
        except (TypeError, ValueError):
            raise MilestoneError(f"milestone count must be an integer, got {count_key!r}") from None
        if count <= 0:
            raise MilestoneError(f"milestone count must be > 0, got {count}")
        if not isinstance(edits, Mapping):
            raise MilestoneError(f"milestone {count}: expected a mapping of edits")
        parsed[count] = tuple(parse_milestone(path, raw) for path, raw in edits.items())
    return parsed


def _edit_number(current: float, m: Milestone) -> float:
    amount = float(m.value)
    if m.op is MilestoneOp.SET:
        return amount
    if m.op is MilestoneOp.ADD or m.limit is None:
        return current + amount
    # CLAMP_ADD: the limit is a ceiling when growing, a floor when shrinking
    if amount >= 0:
        if current >= m.limit:
            return current
        return min(current + amount, m.limit)
    if current <= m.limit:
        return current
    return max(current + amount, m.limit)


def apply_milestone(params: TaskParams, m: Milestone) -> None:
    """Apply *m* to *params* in place. Missing map keys count as 0."""
    if m.field in _TEXT_FIELDS:
        setattr(params, m.field.value, str(m.value))
    elif m.field is MilestoneField.LENGTH:
        params.length = _edit_number(params.length or 0.0, m)
    else:
        target: dict[str, float] = getattr(params, m.field.value)
        assert m.key is not None
        amount = _edit_number(target.get(m.key, 0.0), m)
        # cost and run are paid from the ledger, which refuses negatives
        if m.field in _SPEND_FIELDS:
            amount = max(amount, 0.0)
        target[m.key] = amount
