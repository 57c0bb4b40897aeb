"""
Bubble Pop enumerations.
"""

from enum import Enum


class EngineState(str, Enum):
    """Lifecycle of a run inside the progression engine.

    Attributes:
        IDLE: Created or reset, not started
        RUNNING: Between start() and end()
        ENDED: end() was called; start() begins a fresh run
    """
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class BubbleKind(str, Enum):
    """Scoring kind of a bubble."""
    REGULAR = "regular"
    SPECIAL = "special"


class BubbleColor(str, Enum):
    """Presentation key for a bubble. GOLD is reserved for special bubbles."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"
    PINK = "pink"
    GOLD = "gold"


# Colors a regular bubble can spawn with
REGULAR_COLORS = [c for c in BubbleColor if c != BubbleColor.GOLD]
