"""
Bubble Pop models.
"""

from models.bubblepop.enums import (
    EngineState,
    BubbleKind,
    BubbleColor,
    REGULAR_COLORS,
)
from models.bubblepop.models import (
    RunStatistics,
    BubbleStyle,
    BubblePopped,
    LevelCompleted,
    LevelAdvanced,
    GameEnded,
    InputRejected,
)

__all__ = [
    "EngineState",
    "BubbleKind",
    "BubbleColor",
    "REGULAR_COLORS",
    "RunStatistics",
    "BubbleStyle",
    "BubblePopped",
    "LevelCompleted",
    "LevelAdvanced",
    "GameEnded",
    "InputRejected",
]
