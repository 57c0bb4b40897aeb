"""
Bubble Pop data models.

RunStatistics is the end-of-run summary. The event classes are the
notifications the progression engine publishes after each state change.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.primitives import Color
from models.bubblepop.enums import BubbleKind
from popcore.events import GameEvent


class RunStatistics(BaseModel):
    """Snapshot of a run's counters."""
    score: int = Field(..., ge=0)
    level: int = Field(..., ge=1)
    popped: int = Field(default=0, ge=0)
    gold_popped: int = Field(default=0, ge=0)
    spawned: int = Field(default=0, ge=0)
    accuracy: float = Field(default=0.0, ge=0, le=100, description="Popped / spawned, percent")
    time_elapsed: float = Field(default=0.0, ge=0, description="Seconds since start()")

    model_config = ConfigDict(frozen=True)


class BubbleStyle(BaseModel):
    """Three-tone fill for one bubble color (highlight, body, rim)."""
    light: Color
    main: Color
    dark: Color
    label: Color = Color(r=0, g=0, b=0)

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Notifications
# =============================================================================

class BubblePopped(GameEvent):
    """A bubble was hit and scored."""
    name: str = "bubble_popped"
    kind: BubbleKind
    points: int = Field(..., gt=0)


class LevelCompleted(GameEvent):
    """Level score reached the target. Level-up follows after the driver's delay."""
    name: str = "level_completed"
    level: int = Field(..., ge=1)
    target: int = Field(..., gt=0)


class LevelAdvanced(GameEvent):
    """level_up() ran; `level` is the new level."""
    name: str = "level_advanced"
    level: int = Field(..., ge=1)
    target: int = Field(..., gt=0)


class GameEnded(GameEvent):
    """The run is over."""
    name: str = "game_ended"
    statistics: RunStatistics


class InputRejected(GameEvent):
    """An operation received an invalid argument and did nothing."""
    name: str = "input_rejected"
    operation: str
    value: Optional[Any] = None
    reason: str = ""
