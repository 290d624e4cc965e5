"""UpgradeCatalog - the session-wide store of upgrade definitions."""
from __future__ import annotations

from vitae_upgrade.types import UpgradeDef


class UpgradeCatalog:
    """Stores upgrade definitions in insertion order."""

    def __init__(self) -> None:
        self._definitions: dict[str, UpgradeDef] = {}

    def define(self, upgrade: UpgradeDef) -> None:
        self._definitions[upgrade.id] = upgrade

    def definition(self, upgrade_id: str) -> UpgradeDef | None:
        return self._definitions.get(upgrade_id)

    def get(self, upgrade_id: str) -> UpgradeDef:
        """Look up a definition. Raises KeyError if not defined."""
        if upgrade_id not in self._definitions:
            raise KeyError(upgrade_id)
        return self._definitions[upgrade_id]

    def has(self, upgrade_id: str) -> bool:
        return upgrade_id in self._definitions

    def definitions(self) -> list[UpgradeDef]:
        return list(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)
