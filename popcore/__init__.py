"""
Bubble Pop core framework.

Shared pieces used by every game in this repository:
- logging: per-module loggers and structured record sinks
- events: fire-and-forget game notifications
- games: BaseGame, GameState and the input layer
"""

from popcore.logging import get_logger

__all__ = ['get_logger']
