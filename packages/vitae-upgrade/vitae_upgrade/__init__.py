"""vitae-upgrade - Purchasable permanent upgrades."""
from vitae_upgrade.catalog import UpgradeCatalog
from vitae_upgrade.manager import UpgradeManager
from vitae_upgrade.types import ModProperty, ResourceMod, UpgradeDef, parse_mods

__all__ = [
    "ModProperty",
    "ResourceMod",
    "UpgradeCatalog",
    "UpgradeDef",
    "UpgradeManager",
    "parse_mods",
]
