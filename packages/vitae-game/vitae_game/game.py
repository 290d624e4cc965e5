"""Game - the host-facing facade over one player and the shared catalog."""
from __future__ import annotations

from typing import Any, Callable, Mapping

from vitae_resource import Resource
from vitae_task import TaskDef
from vitae_upgrade import UpgradeDef

from vitae_game.catalog import Catalog
from vitae_game.config import GameConfig
from vitae_game.events import ActionLog
from vitae_game.player import Player, now_ms


class Game:
    """Routes host commands to the player's managers.

    Every command returns a bool and never raises for gameplay reasons.
    After each state-changing operation the player snapshot is handed to
    ``on_save``; each log message is handed to ``on_log``.
    """

    def __init__(
        self,
        catalog: Catalog,
        player: Player | None = None,
        config: GameConfig | None = None,
        on_log: Callable[[str], None] | None = None,
        on_save: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or GameConfig()
        self.player = player or Player.create(catalog, config=self.config)
        self.log = ActionLog(self.config.log_max_entries)
        self._on_log = on_log
        self._on_save = on_save
        self._tick = 0
        self.player.on_event = self._record

    @classmethod
    def load(
        cls,
        catalog: Catalog,
        data: Mapping[str, Any],
        config: GameConfig | None = None,
        on_log: Callable[[str], None] | None = None,
        on_save: Callable[[dict[str, Any]], None] | None = None,
    ) -> Game:
        """Resume a saved player. Raises SnapshotError on an unknown version."""
        player = Player.from_snapshot(catalog, data, config)
        return cls(catalog, player, config, on_log, on_save)

    @property
    def tick_number(self) -> int:
        return self._tick

    def _record(self, kind: str, message: str) -> None:
        self.log.emit(self._tick, kind, message)
        if self._on_log is not None:
            self._on_log(message)

    # --- Commands ---

    def start_task(self, task_id: str) -> bool:
        return self._saved(self.player.tasks.start(task_id, self.player.requirements))

    def stop_task(self) -> bool:
        return self._saved(self.player.tasks.stop())

    def pause_task(self) -> bool:
        return self._saved(self.player.tasks.pause())

    def resume_task(self, task_id: str) -> bool:
        return self._saved(self.player.tasks.resume(task_id, self.player.requirements))

    def purchase_upgrade(self, upgrade_id: str) -> bool:
        return self._saved(
            self.player.upgrades.purchase(upgrade_id, self.player.requirements)
        )

    def process_tick(self, elapsed_ms: float, tick_number: int | None = None) -> bool:
        """Advance passive rates then the current task by *elapsed_ms*."""
        self._tick = tick_number if tick_number is not None else self._tick + 1
        if elapsed_ms <= 0:
            return False
        self.player.ledger.apply_rates(elapsed_ms / 1000.0)
        return self._saved(self.player.tasks.tick(elapsed_ms))

    # --- Persistence ---

    def _saved(self, changed: bool) -> bool:
        if changed:
            self.save()
        return changed

    def save(self) -> dict[str, Any]:
        """Snapshot the player and hand it to ``on_save``."""
        self.player.last_played = now_ms()
        data = self.player.snapshot()
        if self._on_save is not None:
            self._on_save(data)
        return data

    # --- Readers ---

    def unlocked_resources(self) -> list[Resource]:
        """Unlocked non-stat resources, in display order."""
        return self.player.ledger.primary()

    def resources_by_group(self, group: str) -> list[Resource]:
        return self.player.ledger.by_group(group)

    def resources_by_tag(self, tag: str) -> list[Resource]:
        return self.player.ledger.by_tag(tag)

    def stat_resources(self) -> list[Resource]:
        return self.player.ledger.unlocked_stats()

    def available_tasks(self) -> list[TaskDef]:
        return self.catalog.tasks.available()

    def tasks_by_group(self) -> dict[str, list[TaskDef]]:
        grouped: dict[str, list[TaskDef]] = {}
        for task in self.available_tasks():
            grouped.setdefault(task.group or "misc", []).append(task)
        return grouped

    def can_start_task(self, task_id: str) -> bool:
        return self.player.tasks.can_start(task_id, self.player.requirements)

    def available_upgrades(self) -> list[UpgradeDef]:
        return self.player.upgrades.available(self.player.requirements)

    def current_task(self) -> TaskDef | None:
        task_id = self.player.current_action
        return self.catalog.tasks.definition(task_id) if task_id else None

    def current_progress(self) -> float:
        return self.player.current_action_progress
