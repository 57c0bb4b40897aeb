"""Shared pytest fixtures."""
import copy
import os

# pygame must never open a real window or audio device during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from games.BubblePop.progression import ProgressionEngine
from popcore import logging as pop_logging
from popcore.events import EventBus


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def received(event_bus):
    """Events published on `event_bus`, in order."""
    events = []
    event_bus.subscribe(events.append)
    return events


@pytest.fixture
def engine(event_bus):
    """A started engine wired to `event_bus`."""
    eng = ProgressionEngine(event_bus=event_bus)
    eng.start()
    return eng


@pytest.fixture
def logging_config():
    """Restore logging configuration and sinks after the test."""
    saved = copy.deepcopy(pop_logging._config)
    yield pop_logging._config
    pop_logging.close_all_sinks()
    pop_logging._config.clear()
    pop_logging._config.update(saved)
