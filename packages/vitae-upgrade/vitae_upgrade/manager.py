"""UpgradeManager - per-player purchase counts and their effects."""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping

from vitae_upgrade.catalog import UpgradeCatalog
from vitae_upgrade.types import ModProperty, UpgradeDef

if TYPE_CHECKING:
    from vitae_require import RequirementEvaluator
    from vitae_resource import Ledger
    from vitae_task import TaskCatalog

EventFn = Callable[[str, str], None]


def _cap(text: str) -> str:
    return text[:1].upper() + text[1:]


class UpgradeManager:
    """Tracks how many times each upgrade was bought and applies purchases.

    Purchases are atomic: every gate is checked before the ledger is
    touched. ``tasks`` is the shared task catalog whose locks
    ``unlock_task`` flips; without it task unlocks are skipped.
    """

    def __init__(
        self,
        catalog: UpgradeCatalog,
        ledger: Ledger,
        tasks: TaskCatalog | None = None,
        on_event: EventFn | None = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._tasks = tasks
        self._on_event = on_event
        self._counts: dict[str, int] = {}

    # --- Queries ---

    def level(self, upgrade_id: str) -> int:
        return self._counts.get(upgrade_id, 0)

    def owned(self) -> Mapping[str, int]:
        """Live read-only view of purchase counts, for requirement checks."""
        return MappingProxyType(self._counts)

    def _at_max(self, upgrade: UpgradeDef) -> bool:
        return upgrade.max is not None and self.level(upgrade.id) >= upgrade.max

    def available(self, requirements: RequirementEvaluator | None = None) -> list[UpgradeDef]:
        """Upgrades below their limit whose requirement holds (cost not checked)."""
        return [
            u for u in self._catalog.definitions()
            if not self._at_max(u)
            and (requirements is None or requirements.check(u.require))
        ]

    def can_purchase(
        self, upgrade_id: str, requirements: RequirementEvaluator | None = None,
    ) -> bool:
        upgrade = self._catalog.definition(upgrade_id)
        if upgrade is None or self._at_max(upgrade):
            return False
        if requirements is not None and not requirements.check(upgrade.require):
            return False
        return self._ledger.can_afford(upgrade.cost)

    # --- Commands ---

    def purchase(
        self, upgrade_id: str, requirements: RequirementEvaluator | None = None,
    ) -> bool:
        """Buy one level. Returns False, with nothing changed, if any gate fails."""
        if not self.can_purchase(upgrade_id, requirements):
            return False
        upgrade = self._catalog.get(upgrade_id)
        if not self._ledger.pay(upgrade.cost):
            return False
        self._counts[upgrade_id] = self.level(upgrade_id) + 1
        self._apply(upgrade)
        self._emit("upgrade_purchased", f"Purchased {_cap(upgrade.name)}.")
        return True

    def _apply(self, upgrade: UpgradeDef) -> None:
        for mod in upgrade.mod:
            if not self._ledger.has(mod.resource_id):
                continue
            if mod.prop is ModProperty.MAX:
                self._ledger.add_max(mod.resource_id, mod.delta)
                self._unlock_resource(mod.resource_id)
            else:
                self._ledger.add_rate(mod.resource_id, mod.delta)

        for resource_id in upgrade.unlock:
            self._unlock_resource(resource_id)

        if self._tasks is None:
            return
        for task_id in upgrade.unlock_task:
            if self._tasks.unlock(task_id):
                name = self._tasks.get(task_id).name
                self._emit("task_unlocked", f"Unlocked Task: {_cap(name)}.")

    def _unlock_resource(self, resource_id: str) -> None:
        if self._ledger.unlock(resource_id):
            name = self._ledger.get(resource_id).name
            self._emit("resource_unlocked", f"Unlocked {_cap(name)}.")

    def _emit(self, kind: str, message: str) -> None:
        if self._on_event is not None:
            self._on_event(kind, message)

    # --- Serialization ---

    def snapshot(self) -> dict[str, int]:
        return dict(self._counts)

    def restore(self, data: Mapping[str, Any]) -> None:
        """Restore counts. Unknown ids are kept so a later catalog can use them.

        Task locks live in the shared catalog rather than the snapshot, so
        tasks unlocked by owned upgrades are re-opened here, silently.
        """
        self._counts.clear()
        for upgrade_id, count in data.items():
            if int(count) > 0:
                self._counts[upgrade_id] = int(count)
        if self._tasks is None:
            return
        for upgrade_id in self._counts:
            upgrade = self._catalog.definition(upgrade_id)
            if upgrade is None:
                continue
            for task_id in upgrade.unlock_task:
                self._tasks.unlock(task_id)
