"""
Input Manager - Collects input from the active source.
"""
from typing import List, Optional

from popcore.games.input.input_event import InputEvent
from popcore.games.input.sources.base import InputSource


class InputManager:
    """Manages input sources and collects events.

    Games can switch input sources at runtime without changing game logic.
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source = source

    def set_source(self, source: InputSource) -> None:
        """Set the input source."""
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        """Get the currently active input source."""
        return self._source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        """Update the active input source.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Get collected events since last update."""
        if self._source is None:
            return []
        return self._source.poll_events()

    def clear_events(self) -> None:
        """Drop any pending events from the active source."""
        if self._source is not None:
            self._source.poll_events()
