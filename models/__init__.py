"""
Unified models library.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric and color types (Point2D, Vector2D, Color)
- Game: Generic game models (EventType)
- BubblePop: Game-specific models for Bubble Pop

Usage:
    >>> from models import Point2D, Color
    >>> from models.bubblepop import BubbleKind, RunStatistics
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Point2D,
    Vector2D,  # Alias for Point2D
    Color,
)

# ============================================================================
# Generic game models
# ============================================================================
from .game import EventType

__all__ = [
    "Point2D",
    "Vector2D",
    "Color",
    "EventType",
]
