"""Player - the aggregate of one character's ledger, tasks and upgrades."""
from __future__ import annotations

import time
from typing import Any, Callable, Mapping

from vitae import SnapshotError
from vitae_require import RequirementEvaluator
from vitae_resource import Ledger
from vitae_task import RunState, TaskManager
from vitae_upgrade import UpgradeManager

from vitae_game.catalog import Catalog
from vitae_game.config import GameConfig

SNAPSHOT_VERSION = 1


def now_ms() -> int:
    return int(time.time() * 1000)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First truthy value among *keys*; older saves used camelCase names."""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return default


class Player:
    """One character. Owns a ledger, a task manager and an upgrade manager.

    Managers report through ``on_event``, which the ``Game`` points at its
    action log. Requirement checks see live upgrade counts and skills.
    """

    def __init__(
        self,
        catalog: Catalog,
        config: GameConfig | None = None,
        *,
        id: str | None = None,
        name: str = "Unnamed",
        player_class: str = "waif",
        level: int = 0,
        experience: float = 0,
        xp_to_next_level: int | None = None,
        created: int | None = None,
        last_played: int | None = None,
        offline_time: int = 0,
        skills: Mapping[str, float] | None = None,
        on_event: Callable[[str, str], None] | None = None,
    ) -> None:
        config = config or GameConfig()
        stamp = now_ms()
        self.catalog = catalog
        self.id = id or f"char_{stamp}"
        self.name = name or "Unnamed"
        self.player_class = (player_class or "waif").lower()
        self.level = level
        self.experience = experience
        self.xp_to_next_level = xp_to_next_level or config.xp_to_next_level
        self.created = created or stamp
        self.last_played = last_played or stamp
        self.offline_time = offline_time
        self.skills: dict[str, float] = dict(skills or {})
        self.on_event = on_event

        self.ledger = Ledger()
        self.tasks = TaskManager(
            catalog.tasks,
            self.ledger,
            default_length=config.default_task_length_ms,
            cycle_ms=config.cycle_ms,
            completion_log_every=config.completion_log_every,
            on_event=self._emit,
        )
        self.upgrades = UpgradeManager(
            catalog.upgrades, self.ledger, catalog.tasks, on_event=self._emit,
        )
        self.requirements = RequirementEvaluator(
            self.ledger, self.upgrades.owned(), self.skills,
        )
        self.sync_resources()

    def _emit(self, kind: str, message: str) -> None:
        if self.on_event is not None:
            self.on_event(kind, message)

    def sync_resources(self) -> None:
        """Add any catalog resource the ledger lacks; existing ones are kept."""
        for definition in self.catalog.resources:
            self.ledger.initialize(definition)

    # --- Construction ---

    @classmethod
    def create(
        cls,
        catalog: Catalog,
        name: str = "Unnamed",
        player_class: str = "waif",
        config: GameConfig | None = None,
    ) -> Player:
        """A fresh character with the starting resources unlocked and full."""
        config = config or GameConfig()
        player = cls(catalog, config, name=name, player_class=player_class)
        for resource_id in config.starting_full:
            if not player.ledger.has(resource_id):
                continue
            player.ledger.unlock(resource_id)
            resource = player.ledger.get(resource_id)
            if resource.max > 0:
                player.ledger.credit(resource_id, resource.max - resource.value)
        return player

    @classmethod
    def from_snapshot(
        cls,
        catalog: Catalog,
        data: Mapping[str, Any],
        config: GameConfig | None = None,
    ) -> Player:
        """Rebuild a character from ``snapshot()`` output or an older save.

        Missing fields are backfilled with defaults. Catalog resources added
        since the save appear with their initial values.
        """
        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported player snapshot version: {version} "
                f"(expected {SNAPSHOT_VERSION})"
            )
        player = cls(
            catalog,
            config,
            id=data.get("id"),
            name=data.get("name") or "Unnamed",
            player_class=_pick(data, "class", "player_class", default="waif"),
            level=data.get("level") or 0,
            experience=data.get("experience") or 0,
            xp_to_next_level=_pick(data, "xp_to_next_level", "expToNextLevel"),
            created=data.get("created"),
            last_played=_pick(data, "last_played", "lastPlayed"),
            offline_time=_pick(data, "offline_time", "offlineTime", default=0),
            skills=data.get("skills"),
        )
        player.ledger.restore(data.get("resources") or {})
        player.sync_resources()
        player.upgrades.restore(data.get("upgrades") or {})
        player.tasks.restore(data.get("tasks") or {})

        # older saves held the whole task object here, not its id
        legacy = _pick(data, "current_action", "currentAction")
        if isinstance(legacy, Mapping):
            legacy = legacy.get("id")
        if isinstance(legacy, str) and legacy and player.tasks.current() is None:
            state = player.tasks.get_or_create(legacy)
            if state is not None:
                state.run_state = RunState.RUNNING
                state.interrupted = False
                state.progress = float(
                    _pick(data, "current_action_progress", "currentActionProgress", default=0.0)
                )
        return player

    # --- Derived view ---

    @property
    def current_action(self) -> str | None:
        return self.tasks.current_id()

    @property
    def current_action_progress(self) -> float:
        return self.tasks.progress()

    @property
    def current_action_duration(self) -> float:
        return self.tasks.duration()

    @property
    def previous_action(self) -> str | None:
        return self.tasks.previous()

    # --- Serialization ---

    def snapshot(self) -> dict[str, Any]:
        """JSON-compatible state, including the derived current-action view."""
        return {
            "version": SNAPSHOT_VERSION,
            "id": self.id,
            "name": self.name,
            "class": self.player_class,
            "level": self.level,
            "experience": self.experience,
            "xp_to_next_level": self.xp_to_next_level,
            "created": self.created,
            "last_played": self.last_played,
            "offline_time": self.offline_time,
            "skills": dict(self.skills),
            "resources": self.ledger.snapshot(),
            "tasks": self.tasks.snapshot(),
            "upgrades": self.upgrades.snapshot(),
            "current_action": self.current_action,
            "current_action_progress": self.current_action_progress,
            "current_action_duration": self.current_action_duration,
            "previous_action": self.previous_action,
        }
