"""
Mouse Input Source - Left-click input.
"""
import time
from typing import List

import pygame

from models import Vector2D, EventType
from popcore.games.input.input_event import InputEvent
from popcore.games.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Converts pygame left-button clicks into InputEvents.

    Non-mouse events are re-posted to the pygame event queue for the main loop.
    """

    def __init__(self):
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Process pygame events and collect mouse clicks."""
        deferred = []
        for event in pygame.event.get():
            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # Left mouse button only
                    pos_x, pos_y = event.pos
                    self._event_queue.append(InputEvent(
                        position=Vector2D(x=float(pos_x), y=float(pos_y)),
                        timestamp=time.monotonic(),
                        event_type=EventType.HIT,
                    ))
            elif event.type not in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
                deferred.append(event)

        # Re-post after draining so the main loop sees them
        for event in deferred:
            pygame.event.post(event)

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
