"""Builds the demo Game, its Engine and file persistence."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from vitae_game import Engine, Game, GameConfig, load_catalog, make_game_system

from game.data import RESOURCES, TASKS, UPGRADES

TPS = 10


class GameState:
    """Holds the game, the engine driving it, and the save location."""

    def __init__(
        self,
        save_path: Path | None = None,
        name: str = "Woodcutter",
        on_log: Callable[[str], None] | None = None,
    ) -> None:
        self.save_path = save_path
        self.config = GameConfig(tps=TPS)
        self.catalog = load_catalog(RESOURCES, TASKS, UPGRADES)
        on_save = self._write if save_path is not None else None

        data = self._read()
        if data is not None:
            self.game = Game.load(self.catalog, data, self.config, on_log, on_save)
        else:
            self.game = Game(self.catalog, config=self.config, on_log=on_log, on_save=on_save)
            self.game.player.name = name

        self.engine = Engine(tps=TPS)
        self.engine.add_system(make_game_system(self.game))

    def _read(self) -> dict[str, Any] | None:
        if self.save_path is None or not self.save_path.exists():
            return None
        try:
            return json.loads(self.save_path.read_text())
        except (OSError, ValueError) as exc:
            print(f"Ignoring unreadable save {self.save_path}: {exc}")
            return None

    def _write(self, data: dict[str, Any]) -> None:
        assert self.save_path is not None
        self.save_path.write_text(json.dumps(data, indent=2))

