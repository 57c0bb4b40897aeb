"""Common GameState enum for all games.

All games must use this standard GameState enum so the entry points can
react to them without knowing game internals.

Games can have additional internal states, but must map them to these
standard states via the `state` property.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states.

    States:
        PLAYING: Active gameplay in progress
        PAUSED: Not running yet, or temporarily halted
        GAME_OVER: Game ended (time ran out, player failed)
        WON: Game ended in success/victory
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"
