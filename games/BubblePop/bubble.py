"""
Bubble entity for Bubble Pop.

Bubbles fall from above the playfield at a speed fixed when they spawn.
Players must pop them before they drop off the bottom. A bubble knows its
geometry and how to hit-test itself; scoring belongs to the progression
engine.
"""

import itertools
import math
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from games.BubblePop.config import (
    BUBBLE_MIN_RADIUS,
    BUBBLE_MAX_RADIUS,
    MIN_FALL_SPEED,
    FALL_SPEED_JITTER,
    REGULAR_POINTS,
    SPECIAL_POINTS,
    LETTERS,
    SPAWN_MARGIN,
    SPAWN_Y,
    GOLD_CHANCE,
)
from models.bubblepop import BubbleColor, BubbleKind, REGULAR_COLORS
from popcore.logging import get_logger

log = get_logger('bubble')

_ids = itertools.count(1)


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass
class BubbleData:
    """Mutable bubble state. Only `y` changes after creation."""
    x: float
    y: float
    radius: float
    fall_speed: float
    is_special: bool
    color: BubbleColor
    letter: str
    created_at: float = field(default_factory=time.time)
    id: str = field(default_factory=lambda: f"bubble_{next(_ids)}")

    @property
    def point_value(self) -> int:
        return SPECIAL_POINTS if self.is_special else REGULAR_POINTS


class BubbleEntity:
    """
    A falling bubble that can be popped.

    Point value follows the kind: 5 for a special (gold) bubble, 1 otherwise.
    """

    def __init__(
        self,
        x: float,
        y: float,
        fall_speed: float,
        is_special: bool = False,
        color: Optional[BubbleColor] = None,
        radius: Optional[float] = None,
        letter: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Create a bubble.

        Args:
            x: Spawn x (playfield pixels)
            y: Spawn y (playfield pixels)
            fall_speed: Pixels per tick, read from the engine at spawn time
            is_special: Gold bubble worth 5 points
            color: Presentation color (random regular color, or GOLD if special)
            radius: Radius in pixels (uniform in [20, 40] if None)
            letter: Label drawn on the bubble (random A-Z if None)
            rng: Random source (module random if None)
        """
        rng = rng or random

        if not (_is_finite_number(x) and _is_finite_number(y)):
            log.warning("Invalid spawn position (%r, %r), using (100, 100)", x, y)
            x, y = 100.0, 100.0
        if not _is_finite_number(fall_speed):
            log.warning("Invalid fall speed %r, using 1", fall_speed)
            fall_speed = 1.0
        if radius is None:
            radius = rng.uniform(BUBBLE_MIN_RADIUS, BUBBLE_MAX_RADIUS)
        elif not _is_finite_number(radius) or radius <= 0:
            log.warning("Invalid radius %r, using %s", radius, BUBBLE_MIN_RADIUS)
            radius = BUBBLE_MIN_RADIUS
        elif not BUBBLE_MIN_RADIUS <= radius <= BUBBLE_MAX_RADIUS:
            clamped = min(max(radius, BUBBLE_MIN_RADIUS), BUBBLE_MAX_RADIUS)
            log.warning("Radius %r out of range, using %s", radius, clamped)
            radius = clamped

        is_special = bool(is_special)
        if is_special:
            color = BubbleColor.GOLD
        elif color is None or color == BubbleColor.GOLD:
            color = rng.choice(REGULAR_COLORS)

        self._data = BubbleData(
            x=float(x),
            y=float(y),
            radius=float(radius),
            fall_speed=max(float(fall_speed), MIN_FALL_SPEED),
            is_special=is_special,
            color=color,
            letter=letter or rng.choice(LETTERS),
        )

    @property
    def data(self) -> BubbleData:
        return self._data

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def x(self) -> float:
        return self._data.x

    @property
    def y(self) -> float:
        return self._data.y

    @property
    def radius(self) -> float:
        return self._data.radius

    @property
    def fall_speed(self) -> float:
        return self._data.fall_speed

    @property
    def point_value(self) -> int:
        return self._data.point_value

    @property
    def is_special(self) -> bool:
        return self._data.is_special

    @property
    def kind(self) -> BubbleKind:
        return BubbleKind.SPECIAL if self._data.is_special else BubbleKind.REGULAR

    @property
    def color(self) -> BubbleColor:
        return self._data.color

    @property
    def letter(self) -> str:
        return self._data.letter

    @property
    def created_at(self) -> float:
        return self._data.created_at

    def advance(self, delta_frames: float = 1.0) -> None:
        """
        Move down by one tick's worth of fall speed per frame.

        Args:
            delta_frames: Simulation ticks elapsed (fractions allowed)
        """
        if not _is_finite_number(delta_frames) or delta_frames <= 0:
            return
        self._data.y += self._data.fall_speed * delta_frames

    def contains_point(self, px: float, py: float) -> bool:
        """
        Check if a point is inside the bubble. The rim counts as inside.

        Args:
            px: X coordinate
            py: Y coordinate
        """
        if not (_is_finite_number(px) and _is_finite_number(py)):
            return False
        dx = px - self._data.x
        dy = py - self._data.y
        return math.sqrt(dx * dx + dy * dy) <= self._data.radius

    def is_off_screen(self, playfield_height: float) -> bool:
        """True once the whole bubble is below the bottom edge."""
        return self._data.y - self._data.radius > playfield_height

    def is_within_bounds(self, width: float, height: float) -> bool:
        """True if the whole bubble is inside a width x height playfield."""
        r = self._data.radius
        return (
            self._data.x - r >= 0
            and self._data.x + r <= width
            and self._data.y - r >= 0
            and self._data.y + r <= height
        )

    def age(self, now: Optional[float] = None) -> float:
        """Seconds since the bubble was created."""
        now = time.time() if now is None else now
        return max(now - self._data.created_at, 0.0)

    def render_info(self) -> Dict[str, Any]:
        """Everything presentation needs to draw this bubble."""
        return {
            'x': self._data.x,
            'y': self._data.y,
            'radius': self._data.radius,
            'point_value': self.point_value,
            'is_special': self._data.is_special,
            'color': self._data.color,
            'letter': self._data.letter,
        }

    def debug_info(self) -> Dict[str, Any]:
        return {
            'id': self._data.id,
            'position': {'x': self._data.x, 'y': self._data.y},
            'radius': self._data.radius,
            'color': self._data.color.value,
            'letter': self._data.letter,
            'is_special': self._data.is_special,
            'fall_speed': self._data.fall_speed,
            'points': self.point_value,
            'age': self.age(),
        }

    def __repr__(self) -> str:
        return (f"BubbleEntity({self._data.id}, x={self._data.x:.1f}, y={self._data.y:.1f}, "
                f"r={self._data.radius:.1f}, {self.kind.value})")


def jittered_fall_speed(base: float, rng: Optional[random.Random] = None) -> float:
    """Per-bubble fall speed: base +/- 0.25, never below 0.5."""
    rng = rng or random
    return max(base + rng.uniform(-FALL_SPEED_JITTER, FALL_SPEED_JITTER), MIN_FALL_SPEED)


def spawn_bubble(
    playfield_width: float,
    fall_speed: float,
    rng: Optional[random.Random] = None,
    gold_chance: float = GOLD_CHANCE,
) -> BubbleEntity:
    """
    Create a bubble just above the playfield at a random column.

    Args:
        playfield_width: Width of the playfield in pixels
        fall_speed: Base fall speed from the engine; jitter is applied here
        rng: Random source (module random if None)
        gold_chance: Probability the bubble is special
    """
    rng = rng or random
    low = SPAWN_MARGIN
    high = max(playfield_width - SPAWN_MARGIN, low)
    x = rng.uniform(low, high)
    is_special = rng.random() < gold_chance

    bubble = BubbleEntity(
        x=x,
        y=SPAWN_Y,
        fall_speed=jittered_fall_speed(fall_speed, rng),
        is_special=is_special,
        rng=rng,
    )
    log.trace("Spawned %r", bubble)
    return bubble
