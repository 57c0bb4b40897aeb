"""
Game Event Notifications

Defines the base type for notifications a game emits after it mutates its
state (a target was popped, a level was completed, the run ended) and the
bus that delivers them to presentation listeners (sound, overlays, stats).

Delivery is one-way: publishers never wait for, or depend on, what a
listener does. A listener that raises is logged and skipped so that a
broken sound device can never stall the run.

Usage:
    from popcore.events import EventBus

    bus = EventBus()
    bus.subscribe(lambda event: print(event.name))
    bus.publish(SomeGameEvent(...))
"""

import time
from typing import Callable, List

from pydantic import BaseModel, ConfigDict, Field

from popcore.logging import get_logger

log = get_logger('events')


class GameEvent(BaseModel):
    """
    Base notification emitted by a game after a state change.

    Subclasses set a default for `name` and add their payload fields.
    """
    name: str = Field(..., description="Event identifier, e.g. 'bubble_popped'")
    timestamp: float = Field(default_factory=time.time, description="Seconds since epoch")

    model_config = ConfigDict(frozen=True)


EventListener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous fan-out of game events to subscribed listeners."""

    def __init__(self):
        self._listeners: List[EventListener] = []
        self._published = 0

    def subscribe(self, listener: EventListener) -> None:
        """Register a listener. Subscribing twice has no effect."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove a listener if registered."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def published_count(self) -> int:
        """Number of events published since creation."""
        return self._published

    def publish(self, event: GameEvent) -> None:
        """
        Deliver an event to every listener in subscription order.

        Args:
            event: The notification to deliver
        """
        self._published += 1
        log.trace("publish %s", event.name)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Listener %r failed on %s", listener, event.name)
