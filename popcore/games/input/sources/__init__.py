"""
Input source implementations.
"""

from popcore.games.input.sources.base import InputSource
from popcore.games.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'MouseInputSource']
