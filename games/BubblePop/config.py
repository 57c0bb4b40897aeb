"""
Bubble Pop - Configuration.

Display and pacing settings come from the .env file in the game directory
(real environment variables win). The difficulty curve is fixed: every
player sees the same targets, spawn intervals and fall speeds.
"""
import os
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv

from models import Color
from models.bubblepop import BubbleColor, BubbleStyle
from popcore.logging import get_logger

log = get_logger('config')

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        log.warning("Ignoring malformed %s=%r, using %s", key, os.getenv(key), default)
        return default


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        log.warning("Ignoring malformed %s=%r, using %s", key, os.getenv(key), default)
        return default


# Display
SCREEN_WIDTH: int = _get_int('SCREEN_WIDTH', 800)
SCREEN_HEIGHT: int = _get_int('SCREEN_HEIGHT', 600)
TARGET_FPS: int = _get_int('TARGET_FPS', 60)

# Simulation ticks per second; fall speeds are pixels per tick
PHYSICS_HZ: float = _get_float('PHYSICS_HZ', 60.0)

# Spawning
GOLD_CHANCE: float = _get_float('GOLD_CHANCE', 0.15)
SPAWN_MARGIN: float = 50.0   # Keep spawns away from the side walls
SPAWN_Y: float = -50.0       # Start above the playfield

# Seconds the level-complete overlay stays up before level_up()
LEVEL_UP_DELAY: float = _get_float('LEVEL_UP_DELAY', 2.0)

# =============================================================================
# Difficulty curve
# =============================================================================

LEVEL_TARGETS: List[int] = [5, 10, 20, 35, 55, 80, 110, 145, 185, 230]
EXTRA_LEVEL_TARGET_STEP: int = 50   # Added per level beyond the table

LEVEL_TIME_SECONDS: int = 30

BASE_SPAWN_INTERVAL_MS: int = 800
SPAWN_INTERVAL_STEP_MS: int = 100
MIN_SPAWN_INTERVAL_MS: int = 200

BASE_FALL_SPEED: float = 1.0
FALL_SPEED_STEP: float = 0.5
MIN_FALL_SPEED: float = 0.5
FALL_SPEED_JITTER: float = 0.25     # +/- per bubble

# =============================================================================
# Bubbles
# =============================================================================

BUBBLE_MIN_RADIUS: float = 20.0
BUBBLE_MAX_RADIUS: float = 40.0
REGULAR_POINTS: int = 1
SPECIAL_POINTS: int = 5

LETTERS: str = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

# Colors (not configurable via .env)
BACKGROUND_TOP = Color.from_hex('#87CEEB')
BACKGROUND_MIDDLE = Color.from_hex('#E0F6FF')
HUD_TEXT_COLOR = Color(r=30, g=30, b=60)


def _style(light: str, main: str, dark: str, label: str = '#000000') -> BubbleStyle:
    return BubbleStyle(
        light=Color.from_hex(light),
        main=Color.from_hex(main),
        dark=Color.from_hex(dark),
        label=Color.from_hex(label),
    )


BUBBLE_STYLES: Dict[BubbleColor, BubbleStyle] = {
    BubbleColor.RED: _style('#FFB3BA', '#FF6B6B', '#E53E3E'),
    BubbleColor.BLUE: _style('#AED6F1', '#3498DB', '#2980B9'),
    BubbleColor.GREEN: _style('#A9DFBF', '#52C41A', '#389E0D'),
    BubbleColor.PURPLE: _style('#D2B4DE', '#9B59B6', '#7D3C98'),
    BubbleColor.ORANGE: _style('#FADBD8', '#FF7F50', '#E55722'),
    BubbleColor.PINK: _style('#F8D7DA', '#FF69B4', '#C71585'),
    BubbleColor.GOLD: _style('#FFE55C', '#FFD700', '#FF8C00', label='#8B4513'),
}
