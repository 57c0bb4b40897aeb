"""
Bubble Pop - Progression engine.

Single source of truth for score, level, the countdown and the difficulty
curve. Pure state plus pure queries: no rendering, no timers, no randomness.
The game mode drives it (spawns, clicks, one tick per real second) and
decides when to call level_up() and end().
"""
import math
import numbers
import time
from typing import Any, Callable, Optional

from games.BubblePop.config import (
    LEVEL_TARGETS,
    EXTRA_LEVEL_TARGET_STEP,
    LEVEL_TIME_SECONDS,
    BASE_SPAWN_INTERVAL_MS,
    SPAWN_INTERVAL_STEP_MS,
    MIN_SPAWN_INTERVAL_MS,
    BASE_FALL_SPEED,
    FALL_SPEED_STEP,
)
from models.bubblepop import (
    BubbleKind,
    BubblePopped,
    EngineState,
    GameEnded,
    InputRejected,
    LevelAdvanced,
    LevelCompleted,
    RunStatistics,
)
from popcore.events import EventBus, GameEvent
from popcore.logging import emit_record, get_logger

log = get_logger('progression')


def target_for_level(level: int) -> int:
    """
    Level score needed to complete a level.

    The first ten levels follow a hand-tuned table; after that every level
    asks for 50 more points than the previous one.
    """
    if level <= len(LEVEL_TARGETS):
        return LEVEL_TARGETS[level - 1]
    extra_levels = level - len(LEVEL_TARGETS)
    return LEVEL_TARGETS[-1] + extra_levels * EXTRA_LEVEL_TARGET_STEP


def _points_problem(points: Any) -> Optional[str]:
    """Return why `points` is not a valid score increment, or None."""
    if isinstance(points, bool) or not isinstance(points, numbers.Real):
        return "not a number"
    if isinstance(points, float) and not math.isfinite(points):
        return "not finite"
    if points <= 0:
        return "not positive"
    if points != int(points):
        return "not a whole number"
    return None


class ProgressionEngine:
    """
    Score, level and countdown for one run at a time.

    States: IDLE -> RUNNING (start) -> ENDED (end). start() from any state
    begins a fresh run. Commands are accepted in every state; the driver
    only issues them while running.

    Attributes are public so presentation can read them after every call:
        score: Cumulative points this run
        level: Current level, starting at 1
        level_score: Points since the last level-up
        time_remaining: Countdown seconds for the current level
        running: True between start() and end()
        spawned_count / popped_count / gold_popped_count: Run counters
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            event_bus: Where notifications go (a private bus if None)
            clock: Wall-clock source for start/elapsed timestamps
        """
        self._bus = event_bus if event_bus is not None else EventBus()
        self._clock = clock
        self._state = EngineState.IDLE
        self._reset_fields()

    def _reset_fields(self) -> None:
        self.score = 0
        self.level = 1
        self.level_score = 0
        self.time_remaining = LEVEL_TIME_SECONDS
        self.running = False
        self.started_at: Optional[float] = None
        self.spawned_count = 0
        self.popped_count = 0
        self.gold_popped_count = 0
        self._completion_announced = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    def reset(self) -> None:
        """Discard the current run and return to IDLE."""
        self._reset_fields()
        self._state = EngineState.IDLE
        log.debug("Run state reset")

    def start(self) -> None:
        """Begin a fresh run."""
        self._reset_fields()
        self.running = True
        self.started_at = self._clock()
        self._state = EngineState.RUNNING
        log.info("Run started: level %d, target %d, %ds on the clock",
                 self.level, self.current_target(), self.time_remaining)

    def end(self) -> None:
        """Finish the run. Does nothing unless running."""
        if not self.running:
            log.debug("end() ignored: run is %s", self._state.value)
            return

        self.running = False
        self._state = EngineState.ENDED

        stats = self.statistics()
        log.info("Run ended. Score %d, level %d, %.1fs played",
                 stats.score, stats.level, stats.time_elapsed)
        log.info("Popped %d (%d gold) of %d spawned, accuracy %.1f%%",
                 stats.popped, stats.gold_popped, stats.spawned, stats.accuracy)

        emit_record('session', {'type': 'run_summary', **stats.model_dump()})
        self._publish(GameEnded(statistics=stats))

    # =========================================================================
    # Difficulty curve
    # =========================================================================

    def _effective_level(self) -> int:
        """Current level for curve queries, falling back to 1 if corrupted."""
        level = self.level
        if isinstance(level, bool) or not isinstance(level, numbers.Integral) or level < 1:
            log.warning("Invalid level %r, treating as level 1", level)
            return 1
        return int(level)

    def current_target(self) -> int:
        """Level score needed to complete the current level."""
        return target_for_level(self._effective_level())

    def next_target(self) -> int:
        """Target of the level after this one."""
        return target_for_level(self._effective_level() + 1)

    def has_reached_target(self) -> bool:
        return self.level_score >= self.current_target()

    def spawn_interval_ms(self) -> int:
        """Milliseconds between bubble spawns at the current level."""
        reduction = (self._effective_level() - 1) * SPAWN_INTERVAL_STEP_MS
        return max(BASE_SPAWN_INTERVAL_MS - reduction, MIN_SPAWN_INTERVAL_MS)

    def fall_speed(self) -> float:
        """Base fall speed (pixels per tick) for bubbles spawned now."""
        return BASE_FALL_SPEED + (self._effective_level() - 1) * FALL_SPEED_STEP

    # =========================================================================
    # Commands
    # =========================================================================

    def add_score(self, points: Any, is_special: bool = False) -> bool:
        """
        Credit a popped bubble.

        Invalid points (negative, zero, NaN, fractional, non-numeric) are
        reported and ignored; no counter changes.

        Args:
            points: Points the bubble was worth
            is_special: True for a gold bubble

        Returns:
            True if the score was applied
        """
        problem = _points_problem(points)
        if problem is not None:
            log.warning("Invalid points value %r (%s), ignoring", points, problem)
            self._publish(InputRejected(operation='add_score', value=points, reason=problem))
            return False

        points = int(points)
        self.score += points
        self.level_score += points
        self.popped_count += 1
        if is_special:
            self.gold_popped_count += 1

        log.debug("Added %d points. Total: %d, level progress: %d/%d",
                  points, self.score, self.level_score, self.current_target())

        kind = BubbleKind.SPECIAL if is_special else BubbleKind.REGULAR
        self._publish(BubblePopped(kind=kind, points=points))

        if not self._completion_announced and self.has_reached_target():
            self._completion_announced = True
            log.info("Level %d complete", self.level)
            self._publish(LevelCompleted(level=self._effective_level(),
                                         target=self.current_target()))
        return True

    def record_spawn(self) -> None:
        """Count a bubble the driver just spawned."""
        self.spawned_count += 1

    def level_up(self) -> None:
        """Advance one level, clearing level progress and refilling the clock."""
        previous = self.level
        self.level = self._effective_level() + 1
        self.level_score = 0
        self.time_remaining = LEVEL_TIME_SECONDS
        self._completion_announced = False

        log.info("Level up! %s -> %d", previous, self.level)
        log.debug("Target %d, spawn interval %dms, fall speed %.1fpx/tick",
                  self.current_target(), self.spawn_interval_ms(), self.fall_speed())
        self._publish(LevelAdvanced(level=self.level, target=self.current_target()))

    def tick(self) -> None:
        """One second of countdown. Stops at zero; the driver decides when to end()."""
        self.time_remaining = max(self.time_remaining - 1, 0)

    def is_time_up(self) -> bool:
        return self.time_remaining <= 0

    # =========================================================================
    # Statistics
    # =========================================================================

    def accuracy(self) -> float:
        """Popped bubbles as a percentage of spawned bubbles (0 before any spawn)."""
        if self.spawned_count <= 0:
            return 0.0
        return min(max(self.popped_count / self.spawned_count * 100, 0.0), 100.0)

    def time_elapsed(self) -> float:
        """Seconds since start(), 0 if never started."""
        if self.started_at is None:
            return 0.0
        return max(self._clock() - self.started_at, 0.0)

    def statistics(self) -> RunStatistics:
        return RunStatistics(
            score=max(self.score, 0),
            level=self._effective_level(),
            popped=max(self.popped_count, 0),
            gold_popped=max(self.gold_popped_count, 0),
            spawned=max(self.spawned_count, 0),
            accuracy=self.accuracy(),
            time_elapsed=self.time_elapsed(),
        )

    def validate_state(self) -> bool:
        """Check counters are in range. Logs and returns False if not."""
        valid = (
            self.score >= 0
            and self.level_score >= 0
            and self.time_remaining >= 0
            and isinstance(self.level, numbers.Integral)
            and self.level >= 1
        )
        if not valid:
            log.error("Invalid run state: score=%r level=%r level_score=%r time_remaining=%r",
                      self.score, self.level, self.level_score, self.time_remaining)
        return valid

    def _publish(self, event: GameEvent) -> None:
        self._bus.publish(event)
