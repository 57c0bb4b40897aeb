"""
Shared primitive data types.

Basic geometric and color types used by the framework and the games.
"""

from pydantic import BaseModel, field_validator, computed_field, ConfigDict
from typing import Tuple


class Point2D(BaseModel):
    """Immutable 2D point/vector in playfield pixels.

    Examples:
        >>> Point2D(x=120.0, y=100.0).x
        120.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


# Input events speak in vectors, entities in points
Vector2D = Point2D


class Color(BaseModel):
    """Immutable RGBA color with validation.

    All components must be in the range [0, 255] inclusive.
    """
    r: int
    g: int
    b: int
    a: int = 255  # Default to fully opaque

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Build a color from '#RRGGBB'."""
        value = value.lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Expected #RRGGBB, got {value!r}")
        return cls(r=int(value[0:2], 16), g=int(value[2:4], 16), b=int(value[4:6], 16))

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """Return color as RGB tuple (without alpha)."""
        return (self.r, self.g, self.b)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"
