"""vitae-game - Player aggregate, catalog loading and the Game facade."""
from __future__ import annotations

# Framework objects
from vitae_game.catalog import Catalog, CatalogError, load_catalog
from vitae_game.config import GameConfig
from vitae_game.events import ActionLog, Event
from vitae_game.game import Game
from vitae_game.player import SNAPSHOT_VERSION, Player

# System factories
from vitae_game.systems import make_game_system

# Re-export the building blocks for game users
from vitae import Engine, SnapshotError, TickContext
from vitae_require import RequirementError, RequirementEvaluator
from vitae_resource import ById, ByTag, Ledger, Resource, ResourceDef
from vitae_task import MilestoneError, RunState, TaskDef, TaskManager
from vitae_upgrade import UpgradeDef, UpgradeManager

__all__ = [
    "ActionLog",
    "ById",
    "ByTag",
    "Catalog",
    "CatalogError",
    "Engine",
    "Event",
    "Game",
    "GameConfig",
    "Ledger",
    "MilestoneError",
    "Player",
    "RequirementError",
    "RequirementEvaluator",
    "Resource",
    "ResourceDef",
    "RunState",
    "SNAPSHOT_VERSION",
    "SnapshotError",
    "TaskDef",
    "TaskManager",
    "TickContext",
    "UpgradeDef",
    "UpgradeManager",
    "load_catalog",
    "make_game_system",
]
