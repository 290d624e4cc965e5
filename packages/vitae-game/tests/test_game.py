"""Tests for vitae_game.game - the Game facade."""

import pytest
from vitae_game import Game, GameConfig, Player


def _game(catalog, **kwargs):
    logs = []
    saves = []
    game = Game(catalog, on_log=logs.append, on_save=saves.append, **kwargs)
    return game, logs, saves


class TestCommands:
    def test_chop_three_times(self, catalog):
        game, logs, saves = _game(catalog)
        for _ in range(3):
            assert game.start_task("chop") is True
        ledger = game.player.ledger
        assert ledger.value("wood") == 15
        assert ledger.value("stamina") == 4
        assert game.player.tasks.completions("chop") == 3
        assert logs == ["Completed Chop."] * 3
        assert len(saves) == 3

    def test_rejected_command_does_not_save(self, catalog):
        game, logs, saves = _game(catalog)
        for _ in range(5):
            game.start_task("chop")
        saves.clear()
        assert game.start_task("chop") is False
        assert game.player.ledger.value("stamina") == 0
        assert saves == []

    def test_requirement_gates_start(self, catalog):
        game, _, _ = _game(catalog)
        game.start_task("chop")
        game.start_task("chop")
        # gold is locked, so resources.gold>=0 does not hold
        assert game.can_start_task("sell") is False
        assert game.start_task("sell") is False

    def test_purchase_unlocks_content(self, catalog):
        game, logs, saves = _game(catalog)
        assert [u.id for u in game.available_upgrades()] == ["purse"]
        assert "sell" not in [t.id for t in game.available_tasks()]

        game.start_task("chop")
        game.start_task("chop")
        assert game.purchase_upgrade("purse") is True
        assert logs[-3:] == ["Unlocked Gold.", "Unlocked Task: Sell.", "Purchased Purse."]
        assert saves[-1]["upgrades"] == {"purse": 1}
        assert "sell" in [t.id for t in game.available_tasks()]
        assert [u.id for u in game.available_upgrades()] == ["grove"]

        game.start_task("chop")
        game.start_task("chop")
        assert game.start_task("sell") is True
        assert game.player.ledger.value("gold") == 3

    def test_purchase_at_max_rejected(self, catalog):
        game, _, _ = _game(catalog)
        for _ in range(4):
            game.start_task("chop")
        assert game.purchase_upgrade("purse") is True
        before = game.player.ledger.snapshot()
        assert game.purchase_upgrade("purse") is False
        assert game.player.ledger.snapshot() == before

    def test_stop_pause_resume(self, catalog):
        game, logs, _ = _game(catalog)
        assert game.start_task("haul") is True
        game.process_tick(500)
        assert game.pause_task() is True
        assert game.current_progress() == pytest.approx(0.25)
        assert game.resume_task("haul") is True
        assert game.stop_task() is True
        assert game.current_task() is None
        assert game.stop_task() is False
        assert logs == ["Started Haul.", "Paused Haul.", "Resumed Haul.", "Stopped Haul."]


class TestProcessTick:
    def test_completes_timed_task_and_saves(self, catalog):
        game, logs, saves = _game(catalog)
        game.start_task("haul")
        assert game.current_task().id == "haul"
        saves.clear()
        assert game.process_tick(1000) is False
        assert saves == []
        assert game.process_tick(1000) is True
        assert game.player.ledger.value("wood") == 8
        assert len(saves) == 1
        assert logs[-1] == "Completed Haul."

    def test_applies_rates(self, catalog):
        game, _, _ = _game(catalog)
        game.player.ledger.add_rate("wood", 2)
        game.process_tick(500)
        assert game.player.ledger.value("wood") == pytest.approx(1)

    def test_non_positive_elapsed_is_ignored(self, catalog):
        game, _, _ = _game(catalog)
        game.start_task("haul")
        assert game.process_tick(0) is False
        assert game.current_progress() == 0

    def test_log_records_tick(self, catalog):
        game, _, _ = _game(catalog)
        game.start_task("haul")
        game.process_tick(1000, tick_number=7)
        game.process_tick(1000, tick_number=8)
        assert game.log.last("task_completed").tick == 8
        assert game.tick_number == 8

    def test_repeated_commands_share_a_log_line(self, catalog):
        game, logs, _ = _game(catalog)
        game.process_tick(100, tick_number=4)
        game.start_task("chop")
        game.start_task("chop")
        assert logs == ["Completed Chop."] * 2
        assert game.log.lines() == ["[4] Completed Chop. (x2)"]


class TestReaders:
    def test_resource_views(self, catalog):
        game, _, _ = _game(catalog)
        assert [r.id for r in game.unlocked_resources()] == ["wood"]
        assert [r.id for r in game.stat_resources()] == ["hp", "stamina"]
        assert [r.id for r in game.resources_by_group("vitals")] == ["hp", "stamina"]
        assert [r.id for r in game.resources_by_tag("lumber")] == ["wood"]

    def test_tasks_by_group(self, catalog):
        game, _, _ = _game(catalog)
        grouped = game.tasks_by_group()
        assert {k: [t.id for t in v] for k, v in grouped.items()} == {
            "labor": ["chop", "haul"],
            "misc": ["rest"],
        }

    def test_idle_views(self, catalog):
        game, _, _ = _game(catalog)
        assert game.current_task() is None
        assert game.current_progress() == 0


class TestConstruction:
    def test_uses_given_player(self, catalog):
        player = Player.create(catalog, name="Ada")
        game = Game(catalog, player)
        assert game.player is player
        game.start_task("chop")
        assert game.log.messages() == ["Completed Chop."]

    def test_config_shapes_new_player(self, catalog):
        game = Game(catalog, config=GameConfig(starting_full=(), log_max_entries=1))
        assert game.player.ledger.get("hp").locked is True
        game.start_task("haul")
        game.stop_task()
        assert len(game.log) == 1

    def test_load(self, catalog):
        game, _, saves = _game(catalog)
        game.start_task("chop")
        loaded = Game.load(catalog, saves[-1])
        assert loaded.player.ledger.value("wood") == 5
        assert loaded.player.id == game.player.id

    def test_save_stamps_last_played(self, catalog):
        game, _, _ = _game(catalog)
        game.player.last_played = 0
        data = game.save()
        assert data["last_played"] > 0
