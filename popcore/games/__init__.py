"""
Game Framework.

Provides:
- base_game: BaseGame class that all games should inherit from
- game_state: Standard GameState enum
- input: Common input event handling
"""

from popcore.games.game_state import GameState
from popcore.games.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
]
