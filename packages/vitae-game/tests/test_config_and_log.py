"""Tests for vitae_game.config and vitae_game.events."""

import pytest
from vitae_game import ActionLog, GameConfig


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.tps == 10
        assert config.default_task_length_ms == 1000
        assert config.cycle_ms == 1000
        assert config.log_max_entries == 200
        assert config.starting_full == ("hp", "stamina")
        assert config.completion_log_every == 10
        assert config.xp_to_next_level == 100

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GameConfig().tps = 20

    @pytest.mark.parametrize("kwargs", [
        {"tps": 0},
        {"default_task_length_ms": 0},
        {"cycle_ms": -5},
        {"log_max_entries": -1},
    ])
    def test_rejects_bad_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


class TestActionLog:
    def test_emit_and_query(self):
        log = ActionLog()
        log.emit(1, "task_started", "Started Chop.")
        log.emit(3, "task_completed", "Completed Chop.")
        log.emit(5, "task_started", "Started Rest.")
        assert len(log) == 3
        assert [e.message for e in log.query(kind="task_started")] == [
            "Started Chop.", "Started Rest.",
        ]
        assert [e.tick for e in log.query(after=1, before=5)] == [3]

    def test_last(self):
        log = ActionLog()
        assert log.last() is None
        log.emit(1, "a", "first")
        log.emit(2, "b", "second")
        assert log.last().message == "second"
        assert log.last("a").message == "first"
        assert log.last("zzz") is None

    def test_bounded(self):
        log = ActionLog(max_entries=2)
        for i in range(5):
            log.emit(i, "tick", f"m{i}")
        assert log.messages() == ["m3", "m4"]

    def test_snapshot_restore(self):
        log = ActionLog()
        log.emit(7, "upgrade_purchased", "Purchased Axe.")
        other = ActionLog()
        other.restore(log.snapshot())
        assert other.query()[0].tick == 7
        assert other.messages() == ["Purchased Axe."]

    def test_repeats_fold_into_newest_entry(self):
        log = ActionLog()
        for tick in (1, 2, 4):
            log.emit(tick, "task_completed", "Completed Chop.")
        log.emit(5, "task_started", "Started Haul.")
        log.emit(6, "task_completed", "Completed Chop.")
        assert len(log) == 3
        chop = log.query(kind="task_completed")[0]
        assert chop.repeats == 3
        assert chop.tick == 4
        assert chop.text == "Completed Chop. (x3)"
        assert log.last().repeats == 1

    def test_same_message_other_kind_is_separate(self):
        log = ActionLog()
        log.emit(1, "a", "same")
        log.emit(2, "b", "same")
        assert len(log) == 2

    def test_lines(self):
        log = ActionLog()
        log.emit(3, "task_completed", "Completed Chop.")
        log.emit(9, "task_completed", "Completed Chop.")
        log.emit(12, "upgrade_purchased", "Purchased Axe.")
        assert log.lines() == ["[9] Completed Chop. (x2)", "[12] Purchased Axe."]
        assert log.lines(1) == ["[12] Purchased Axe."]
        assert log.lines(0) == []

    def test_snapshot_keeps_repeats(self):
        log = ActionLog()
        log.emit(1, "task_completed", "Completed Chop.")
        log.emit(2, "task_completed", "Completed Chop.")
        other = ActionLog()
        other.restore(log.snapshot())
        assert other.lines() == ["[2] Completed Chop. (x2)"]
        other.restore([{"tick": 1, "kind": "a", "message": "old entry"}])
        assert other.last().repeats == 1
