"""
Input abstraction layer.

Games receive InputEvents in playfield coordinates and never see raw
pygame events, so any pointer device can drive them.
"""

from popcore.games.input.input_event import InputEvent
from popcore.games.input.input_manager import InputManager

__all__ = ['InputEvent', 'InputManager']
