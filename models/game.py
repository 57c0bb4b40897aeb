"""
Generic game models shared by every game.
"""

from enum import Enum


class EventType(str, Enum):
    """Types of input events.

    Attributes:
        HIT: A click/impact aimed at the playfield
        MISS: An impact the input source already knows hit nothing
    """
    HIT = "hit"
    MISS = "miss"
