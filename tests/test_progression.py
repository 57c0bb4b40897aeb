"""Tests for the progression engine."""

import math
from fractions import Fraction

import pytest

from games.BubblePop.progression import ProgressionEngine, target_for_level
from models.bubblepop import (
    BubbleKind,
    BubblePopped,
    EngineState,
    GameEnded,
    InputRejected,
    LevelAdvanced,
    LevelCompleted,
)


class TestTargets:
    """Level target table and its extension."""

    def test_first_ten_levels(self):
        """Levels 1-10 follow the fixed table."""
        expected = [5, 10, 20, 35, 55, 80, 110, 145, 185, 230]
        assert [target_for_level(level) for level in range(1, 11)] == expected

    @pytest.mark.parametrize("level, target", [(11, 280), (12, 330), (15, 480), (20, 730)])
    def test_beyond_table_adds_fifty_per_level(self, level, target):
        assert target_for_level(level) == target

    def test_current_target_follows_level(self, engine):
        engine.level = 4
        assert engine.current_target() == 35

    def test_next_target(self, engine):
        assert engine.next_target() == 10
        engine.level = 10
        assert engine.next_target() == 280

    def test_corrupted_level_falls_back_to_level_one(self, engine):
        """A non-numeric or sub-1 level is treated as level 1."""
        engine.level = "three"
        assert engine.current_target() == 5
        engine.level = 0
        assert engine.current_target() == 5
        assert engine.spawn_interval_ms() == 800


class TestCurves:
    """Spawn interval and fall speed."""

    def test_spawn_interval_shrinks_per_level(self, engine):
        intervals = []
        for _ in range(7):
            intervals.append(engine.spawn_interval_ms())
            engine.level_up()
        assert intervals == [800, 700, 600, 500, 400, 300, 200]

    @pytest.mark.parametrize("level", [7, 8, 50, 1000])
    def test_spawn_interval_floor(self, engine, level):
        engine.level = level
        assert engine.spawn_interval_ms() == 200

    def test_fall_speed(self, engine):
        assert engine.fall_speed() == 1
        engine.level = 5
        assert engine.fall_speed() == 3
        engine.level = 11
        assert engine.fall_speed() == 6


class TestAddScore:
    """Scoring and input validation."""

    def test_accumulates_score_and_level_score(self, engine):
        for points in (1, 1, 5, 1):
            assert engine.add_score(points) is True
        assert engine.score == 8
        assert engine.level_score == 8
        assert engine.popped_count == 4

    def test_score_is_sum_of_points(self, engine):
        points = [1, 5, 1, 1, 5, 5, 1]
        running_total = 0
        for p in points:
            before = engine.score
            engine.add_score(p)
            running_total += p
            assert engine.score >= before
        assert engine.score == sum(points) == running_total

    def test_explicit_special_flag_counts_gold(self, engine):
        engine.add_score(5, is_special=True)
        engine.add_score(5)
        engine.add_score(1, is_special=True)
        assert engine.gold_popped_count == 2
        assert engine.popped_count == 3

    def test_overshoot_is_not_clamped(self, engine):
        """A gold bubble can push level score past the target."""
        for _ in range(4):
            engine.add_score(1)
        assert engine.level_score == 4
        engine.add_score(5, is_special=True)
        assert engine.level_score == 9
        assert engine.has_reached_target() is True

    @pytest.mark.parametrize("bad", [-3, 0, float('nan'), float('inf'), -0.5, 2.5, "5", None, True, [1], Fraction(3, 2)])
    def test_invalid_points_are_ignored(self, engine, bad):
        engine.add_score(1)
        before = (engine.score, engine.level_score, engine.popped_count, engine.gold_popped_count)

        assert engine.add_score(bad) is False

        after = (engine.score, engine.level_score, engine.popped_count, engine.gold_popped_count)
        assert after == before

    def test_invalid_points_are_reported(self, engine, received):
        engine.add_score(-3)
        rejected = [e for e in received if isinstance(e, InputRejected)]
        assert len(rejected) == 1
        assert rejected[0].operation == 'add_score'
        assert rejected[0].reason == "not positive"

    def test_nan_rejection_does_not_raise(self, engine, received):
        engine.add_score(math.nan)
        assert isinstance(received[-1], InputRejected)
        assert received[-1].reason == "not finite"

    def test_fractional_points_rejected(self, engine, received):
        """Non-float fractions are not truncated into a score."""
        assert engine.add_score(Fraction(3, 2)) is False
        assert engine.score == 0
        assert received[-1].reason == "not a whole number"

    def test_whole_fraction_accepted(self, engine):
        assert engine.add_score(Fraction(10, 2)) is True
        assert engine.score == 5

    def test_whole_float_points_accepted(self, engine):
        assert engine.add_score(5.0) is True
        assert engine.score == 5
        assert isinstance(engine.score, int)


class TestNotifications:
    """Events published after state changes."""

    def test_pop_event_carries_kind(self, engine, received):
        engine.add_score(1)
        engine.add_score(5, is_special=True)
        pops = [e for e in received if isinstance(e, BubblePopped)]
        assert [(e.kind, e.points) for e in pops] == [
            (BubbleKind.REGULAR, 1),
            (BubbleKind.SPECIAL, 5),
        ]

    def test_level_completed_published_once_per_level(self, engine, received):
        for _ in range(7):
            engine.add_score(1)
        completed = [e for e in received if isinstance(e, LevelCompleted)]
        assert len(completed) == 1
        assert completed[0].level == 1
        assert completed[0].target == 5

    def test_level_completed_again_after_level_up(self, engine, received):
        engine.add_score(5)
        engine.level_up()
        engine.add_score(5)
        engine.add_score(5)
        completed = [e for e in received if isinstance(e, LevelCompleted)]
        assert [e.level for e in completed] == [1, 2]

    def test_level_advanced(self, engine, received):
        engine.level_up()
        advanced = [e for e in received if isinstance(e, LevelAdvanced)]
        assert advanced[-1].level == 2
        assert advanced[-1].target == 10

    def test_listener_failure_does_not_affect_state(self, engine, event_bus):
        def broken(event):
            raise RuntimeError("speaker unplugged")

        event_bus.subscribe(broken)
        engine.add_score(1)
        assert engine.score == 1
        assert engine.popped_count == 1


class TestLevelUp:
    """level_up() resets."""

    @pytest.mark.parametrize("level, level_score, time_remaining", [
        (1, 4, 3),
        (1, 9, 0),
        (7, 150, 17),
        (30, 0, 30),
    ])
    def test_resets_regardless_of_prior_values(self, engine, level, level_score, time_remaining):
        engine.level = level
        engine.level_score = level_score
        engine.time_remaining = time_remaining

        engine.level_up()

        assert engine.level == level + 1
        assert engine.level_score == 0
        assert engine.time_remaining == 30

    def test_keeps_cumulative_score(self, engine):
        engine.add_score(5)
        engine.level_up()
        assert engine.score == 5

    def test_no_upper_bound(self, engine):
        for _ in range(60):
            engine.level_up()
        assert engine.level == 61


class TestTimer:
    """Countdown behavior."""

    def test_tick_decrements(self, engine):
        engine.tick()
        assert engine.time_remaining == 29

    def test_tick_floors_at_zero(self, engine):
        for _ in range(40):
            engine.tick()
        assert engine.time_remaining == 0
        assert engine.is_time_up()

    def test_tick_does_not_end_run(self, engine):
        """Reaching zero leaves the run to the driver."""
        for _ in range(30):
            engine.tick()
        assert engine.running is True
        assert engine.state == EngineState.RUNNING

    def test_tick_repairs_negative_time(self, engine):
        engine.time_remaining = -4
        engine.tick()
        assert engine.time_remaining == 0


class TestLifecycle:
    """IDLE -> RUNNING -> ENDED."""

    def test_new_engine_is_idle(self):
        eng = ProgressionEngine()
        assert eng.state == EngineState.IDLE
        assert eng.running is False
        assert eng.score == 0
        assert eng.level == 1
        assert eng.time_remaining == 30

    def test_start_resets_previous_run(self, engine):
        engine.add_score(5)
        engine.level_up()
        engine.record_spawn()
        engine.tick()
        engine.end()

        engine.start()

        assert engine.state == EngineState.RUNNING
        assert engine.running is True
        assert (engine.score, engine.level, engine.level_score) == (0, 1, 0)
        assert engine.time_remaining == 30
        assert (engine.spawned_count, engine.popped_count, engine.gold_popped_count) == (0, 0, 0)

    def test_start_captures_timestamp(self):
        eng = ProgressionEngine(clock=lambda: 1000.0)
        eng.start()
        assert eng.started_at == 1000.0

    def test_end_stops_run(self, engine, received):
        engine.end()
        assert engine.running is False
        assert engine.state == EngineState.ENDED
        assert isinstance(received[-1], GameEnded)

    def test_end_is_idempotent(self, engine, received):
        engine.end()
        engine.end()
        assert len([e for e in received if isinstance(e, GameEnded)]) == 1
        assert engine.state == EngineState.ENDED

    def test_end_when_idle_is_noop(self, received):
        eng = ProgressionEngine()
        eng.end()
        assert eng.state == EngineState.IDLE

    def test_reset_returns_to_idle(self, engine):
        engine.add_score(1)
        engine.reset()
        assert engine.state == EngineState.IDLE
        assert engine.running is False
        assert engine.score == 0


class TestStatistics:
    """Accuracy and run summaries."""

    def test_accuracy_without_spawns_is_zero(self, engine):
        assert engine.accuracy() == 0
        engine.add_score(1)
        assert engine.accuracy() == 0

    def test_accuracy(self, engine):
        for _ in range(4):
            engine.record_spawn()
        engine.add_score(1)
        assert engine.accuracy() == 25.0

    def test_accuracy_capped_at_hundred(self, engine):
        engine.record_spawn()
        engine.add_score(1)
        engine.add_score(1)
        assert engine.accuracy() == 100.0

    def test_statistics_snapshot(self):
        now = [100.0]
        eng = ProgressionEngine(clock=lambda: now[0])
        eng.start()
        for _ in range(3):
            eng.record_spawn()
        eng.add_score(5, is_special=True)
        eng.add_score(1)
        now[0] = 112.5

        stats = eng.statistics()

        assert stats.score == 6
        assert stats.level == 1
        assert stats.popped == 2
        assert stats.gold_popped == 1
        assert stats.spawned == 3
        assert stats.accuracy == pytest.approx(66.666, rel=1e-3)
        assert stats.time_elapsed == 12.5

    def test_game_ended_carries_statistics(self, engine, received):
        engine.add_score(1)
        engine.end()
        assert received[-1].statistics.score == 1

    def test_validate_state(self, engine):
        assert engine.validate_state() is True
        engine.time_remaining = -1
        assert engine.validate_state() is False
        engine.time_remaining = 10
        engine.level = 0
        assert engine.validate_state() is False


class TestScenario:
    """A full level from start to level-up."""

    def test_first_level(self):
        eng = ProgressionEngine()
        eng.start()

        for _ in range(4):
            eng.add_score(1)
        assert eng.level == 1
        assert eng.level_score == 4
        assert eng.current_target() == 5
        assert eng.has_reached_target() is False

        eng.add_score(1)
        assert eng.level_score == 5
        assert eng.has_reached_target() is True

        eng.level_up()
        assert eng.level == 2
        assert eng.level_score == 0
        assert eng.current_target() == 10
        assert eng.time_remaining == 30
