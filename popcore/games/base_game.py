"""Base class for all games.

All games should inherit from BaseGame to ensure a consistent interface
with the standalone entry points.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes, so entry points can build their argument
parsers without instantiating the game.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from popcore.games.game_state import GameState
from popcore.logging import get_logger

log = get_logger('base_game')


class BaseGame(ABC):
    """Abstract base class for all games.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - _get_internal_state() -> GameState: Map internal state to standard state
        - get_score() -> int: Return current score
        - handle_input(events): Process input events
        - update(dt): Update game logic
        - render(screen): Draw the game

    Optional overrides:
        - reset(): Reset game to initial state
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, choices (optional), action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    # Always available to every game; subclasses can shadow by name
    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--log-level',
            'type': str,
            'default': None,
            'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'OFF'],
            'help': 'Default log level for all modules'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Game-specific arguments come first. Duplicates by name are removed
        (game-specific takes precedence).
        """
        seen_names = set()
        result = []

        for arg in list(cls.ARGUMENTS) + list(cls._BASE_ARGUMENTS):
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)

        return result

    @property
    def state(self) -> GameState:
        """Current game state (standard interface).

        Games should not override this - override _get_internal_state instead.
        """
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        """Map internal game state to standard GameState."""
        pass

    @abstractmethod
    def get_score(self) -> int:
        """Get current score."""
        pass

    @abstractmethod
    def handle_input(self, events: List) -> None:
        """Process input events.

        Args:
            events: List of InputEvent objects
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update game logic.

        Args:
            dt: Delta time in seconds since last frame
        """
        pass

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        """Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        pass

    def reset(self) -> None:
        """Reset game to initial state.

        Override this to implement game-specific reset logic.
        """
        log.debug("%s reset", self.NAME)
