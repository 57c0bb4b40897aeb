"""
Bubble Pop game mode.

Bubbles fall from the top of the screen; click them before they drop out.
Gold bubbles are worth 5 points. Reach the level target to move up a level
with a fresh 30 second clock. The game ends when the clock runs out.
"""

import random
from typing import Dict, List, Optional, Tuple

import pygame

from games.BubblePop.bubble import BubbleEntity, spawn_bubble
from games.BubblePop.config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    PHYSICS_HZ,
    GOLD_CHANCE,
    LEVEL_UP_DELAY,
    BACKGROUND_TOP,
    BACKGROUND_MIDDLE,
    HUD_TEXT_COLOR,
    BUBBLE_STYLES,
)
from games.BubblePop.progression import ProgressionEngine
from models.bubblepop import (
    EngineState,
    GameEnded,
    LevelAdvanced,
    LevelCompleted,
    RunStatistics,
)
from popcore.events import EventBus, GameEvent
from popcore.games import BaseGame, GameState
from popcore.games.input import InputEvent
from popcore.logging import get_logger

log = get_logger('game_mode')


class PopEffect:
    """Expanding ring where a bubble was popped."""

    def __init__(self, x: float, y: float, color: Tuple[int, int, int], radius: float):
        self.x = x
        self.y = y
        self.color = color
        self.max_radius = radius * 1.5
        self.lifetime = 0.3  # seconds
        self.elapsed = 0.0

    def update(self, dt: float) -> bool:
        """Update effect. Returns False when effect is done."""
        self.elapsed += dt
        return self.elapsed < self.lifetime

    def render(self, screen: pygame.Surface) -> None:
        progress = min(self.elapsed / self.lifetime, 1.0)
        radius = max(int(self.max_radius * (0.5 + progress * 0.5)), 1)
        alpha = int(255 * (1 - progress))

        surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(surf, (*self.color, alpha), (radius, radius), radius, 3)
        screen.blit(surf, (int(self.x - radius), int(self.y - radius)))


class BubblePopMode(BaseGame):
    """
    Bubble Pop game mode.

    Owns the progression engine, the live bubbles and the two clocks that
    drive them: a physics tick every frame and a countdown tick every second.
    """

    # Game metadata
    NAME = "Bubble Pop"
    DESCRIPTION = "Pop the falling bubbles! Gold ones are worth 5."
    VERSION = "1.0.0"
    AUTHOR = "Bubble Pop Team"

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--gold-chance',
            'type': float,
            'default': None,
            'help': 'Probability a spawned bubble is gold (0-1)'
        },
        {
            'name': '--level-up-delay',
            'type': float,
            'default': None,
            'help': 'Seconds between reaching the target and the next level'
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible spawns'
        },
    ]

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        gold_chance: float = GOLD_CHANCE,
        level_up_delay: float = LEVEL_UP_DELAY,
        seed: Optional[int] = None,
        auto_start: bool = True,
        event_bus: Optional[EventBus] = None,
        **kwargs,
    ):
        """
        Initialize game mode.

        Args:
            width: Playfield width in pixels
            height: Playfield height in pixels
            gold_chance: Probability a spawned bubble is gold
            level_up_delay: Seconds the level-complete banner shows before level_up()
            seed: Random seed (None = nondeterministic)
            auto_start: Start the run immediately
            event_bus: Shared notification bus (a private one if None)
            **kwargs: Entry-point options this game ignores (log_level, etc.)
        """
        super().__init__()

        self._width = width
        self._height = height
        self._gold_chance = min(max(gold_chance, 0.0), 1.0)
        self._level_up_delay = max(level_up_delay, 0.0)
        self._rng = random.Random(seed)

        self._bus = event_bus if event_bus is not None else EventBus()
        self._bus.subscribe(self._on_event)
        self._engine = ProgressionEngine(event_bus=self._bus)

        self._bubbles: List[BubbleEntity] = []
        self._effects: List[PopEffect] = []
        self._spawn_elapsed_ms = 0.0
        self._countdown_elapsed = 0.0
        self._level_up_timer: Optional[float] = None
        self._missed = 0
        self.debug_mode = False

        # Presentation state fed by notifications
        self._banner: Optional[List[str]] = None
        self._final_stats: Optional[RunStatistics] = None

        # Fonts (initialized lazily)
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None
        self._background: Optional[pygame.Surface] = None

        if auto_start:
            self.start()

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def engine(self) -> ProgressionEngine:
        return self._engine

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def bubbles(self) -> List[BubbleEntity]:
        """Live bubbles, oldest first."""
        return self._bubbles

    @property
    def missed(self) -> int:
        """Bubbles that fell out this run."""
        return self._missed

    @property
    def level_up_pending(self) -> bool:
        return self._level_up_timer is not None

    @property
    def banner(self) -> Optional[List[str]]:
        return self._banner

    def set_debug_mode(self, enabled: bool) -> None:
        """Show or hide the live tuning overlay."""
        self.debug_mode = enabled
        log.info("Debug overlay %s", "ON" if enabled else "OFF")

    def debug_lines(self) -> List[str]:
        """Live bubble count and the current difficulty numbers."""
        engine = self._engine
        return [
            f"Bubbles: {len(self._bubbles)}",
            f"Spawn Rate: {engine.spawn_interval_ms()}ms",
            f"Fall Speed: {engine.fall_speed():.1f}px/f",
            f"Accuracy: {engine.accuracy():.1f}%",
        ]

    def get_score(self) -> int:
        return self._engine.score

    def _get_internal_state(self) -> GameState:
        if self._engine.state == EngineState.RUNNING:
            return GameState.PLAYING
        if self._engine.state == EngineState.ENDED:
            return GameState.GAME_OVER
        return GameState.PAUSED

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _clear_run(self) -> None:
        self._bubbles = []
        self._effects = []
        self._countdown_elapsed = 0.0
        self._level_up_timer = None
        self._missed = 0
        self._banner = None
        self._final_stats = None

    def start(self) -> None:
        """Start a new run, discarding any previous one."""
        self._clear_run()
        self._engine.start()
        # First bubble appears on the first frame
        self._spawn_elapsed_ms = float(self._engine.spawn_interval_ms())

    def reset(self) -> None:
        """Back to the waiting screen."""
        super().reset()
        self._clear_run()
        self._engine.reset()

    def _on_event(self, event: GameEvent) -> None:
        """Update overlays from engine notifications."""
        if isinstance(event, LevelCompleted):
            self._banner = [
                f"Level {event.level} Complete!",
                f"Moving to Level {event.level + 1}",
                f"Target: {event.target} -> {self._engine.next_target()} points",
            ]
        elif isinstance(event, LevelAdvanced):
            # Full first second for the refilled clock
            self._countdown_elapsed = 0.0
            self._banner = None
        elif isinstance(event, GameEnded):
            self._banner = None
            self._final_stats = event.statistics

    # =========================================================================
    # Update
    # =========================================================================

    def update(self, dt: float) -> None:
        """
        Update game logic.

        Args:
            dt: Delta time in seconds
        """
        self._effects = [e for e in self._effects if e.update(dt)]

        if not self._engine.running or dt <= 0:
            return

        self._update_spawning(dt)
        self._update_bubbles(dt)
        self._update_level_up(dt)
        self._update_countdown(dt)

    def _update_spawning(self, dt: float) -> None:
        self._spawn_elapsed_ms += dt * 1000.0
        if self._spawn_elapsed_ms >= self._engine.spawn_interval_ms():
            self._spawn_elapsed_ms = 0.0
            self._spawn()

    def _spawn(self) -> None:
        bubble = spawn_bubble(
            self._width,
            self._engine.fall_speed(),
            rng=self._rng,
            gold_chance=self._gold_chance,
        )
        self._bubbles.append(bubble)
        self._engine.record_spawn()

    def _update_bubbles(self, dt: float) -> None:
        frames = dt * PHYSICS_HZ
        remaining = []
        for bubble in self._bubbles:
            bubble.advance(frames)
            if bubble.is_off_screen(self._height):
                self._missed += 1
                log.trace("%s fell off screen", bubble.id)
                continue
            remaining.append(bubble)
        self._bubbles = remaining

    def _update_level_up(self, dt: float) -> None:
        if self._level_up_timer is None:
            return
        self._level_up_timer -= dt
        if self._level_up_timer <= 0:
            self._level_up_timer = None
            self._engine.level_up()

    def _update_countdown(self, dt: float) -> None:
        self._countdown_elapsed += dt
        while self._countdown_elapsed >= 1.0 and self._engine.running:
            self._countdown_elapsed -= 1.0
            self._engine.tick()
            if self._engine.is_time_up():
                log.info("Time's up")
                self._level_up_timer = None
                self._engine.end()

    # =========================================================================
    # Input
    # =========================================================================

    def handle_input(self, events: List[InputEvent]) -> None:
        """
        Pop at most one bubble per event, front-most (newest) first.

        Args:
            events: Input events in playfield coordinates
        """
        for event in events:
            if not self._engine.running:
                return
            self.pop_at(event.position.x, event.position.y)

    def pop_at(self, x: float, y: float) -> Optional[BubbleEntity]:
        """
        Hit-test a point against live bubbles and pop the first hit.

        Returns:
            The popped bubble, or None on a miss
        """
        for i in range(len(self._bubbles) - 1, -1, -1):
            bubble = self._bubbles[i]
            if bubble.contains_point(x, y):
                del self._bubbles[i]
                self._process_pop(bubble)
                return bubble
        return None

    def _process_pop(self, bubble: BubbleEntity) -> None:
        log.debug("Popped %s '%s' for %d", bubble.kind.value, bubble.letter, bubble.point_value)
        self._engine.add_score(bubble.point_value, is_special=bubble.is_special)

        style = BUBBLE_STYLES[bubble.color]
        self._effects.append(PopEffect(bubble.x, bubble.y, style.main.as_rgb_tuple, bubble.radius))

        if self._engine.has_reached_target() and self._level_up_timer is None:
            if self._level_up_delay <= 0:
                self._engine.level_up()
            else:
                self._level_up_timer = self._level_up_delay

    # =========================================================================
    # Rendering
    # =========================================================================

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 32)
        return self._font

    def _get_font_large(self) -> pygame.font.Font:
        if self._font_large is None:
            self._font_large = pygame.font.Font(None, 64)
        return self._font_large

    def _get_background(self, size: Tuple[int, int]) -> pygame.Surface:
        """Vertical sky gradient, cached per screen size."""
        if self._background is None or self._background.get_size() != size:
            width, height = size
            surface = pygame.Surface(size)
            top = BACKGROUND_TOP.as_rgb_tuple
            mid = BACKGROUND_MIDDLE.as_rgb_tuple
            for row in range(height):
                t = row / max(height - 1, 1)
                # top -> middle -> top
                mix = 1 - abs(t - 0.5) * 2
                color = tuple(int(a + (b - a) * mix) for a, b in zip(top, mid))
                pygame.draw.line(surface, color, (0, row), (width, row))
            self._background = surface
        return self._background

    def render(self, screen: pygame.Surface) -> None:
        """
        Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        screen.blit(self._get_background(screen.get_size()), (0, 0))

        for bubble in self._bubbles:
            self._render_bubble(screen, bubble.render_info())

        for effect in self._effects:
            effect.render(screen)

        self._render_ui(screen)
        if self.debug_mode:
            self._render_debug(screen)

        if self.state == GameState.GAME_OVER:
            self._render_game_over(screen)
        elif self.state == GameState.PAUSED:
            self._render_overlay(screen, ["BUBBLE POP", "Press SPACE to start"])
        elif self._banner:
            self._render_overlay(screen, self._banner)

    def _render_bubble(self, screen: pygame.Surface, info: Dict) -> None:
        style = BUBBLE_STYLES[info['color']]
        x, y, r = info['x'], info['y'], info['radius']
        ir = max(int(r), 1)

        # Shadow
        shadow = pygame.Surface((ir * 2, ir * 2), pygame.SRCALPHA)
        pygame.draw.circle(shadow, (0, 0, 0, 60), (ir, ir), ir)
        screen.blit(shadow, (int(x - ir + 3), int(y - ir + 3)))

        # Body: rim, body, then an offset highlight for the glossy look
        pygame.draw.circle(screen, style.dark.as_rgb_tuple, (int(x), int(y)), ir)
        pygame.draw.circle(screen, style.main.as_rgb_tuple, (int(x), int(y)), max(int(r * 0.85), 1))
        pygame.draw.circle(screen, style.light.as_rgb_tuple,
                           (int(x - r * 0.3), int(y - r * 0.3)), max(int(r * 0.3), 1))

        letter = self._get_font().render(info['letter'], True, style.label.as_rgb_tuple)
        screen.blit(letter, letter.get_rect(center=(int(x), int(y))))

    def _render_ui(self, screen: pygame.Surface) -> None:
        font = self._get_font()
        engine = self._engine
        color = HUD_TEXT_COLOR.as_rgb_tuple

        items = [
            f"Score: {engine.score}",
            f"Time: {engine.time_remaining}",
            f"Level: {engine.level}",
            f"Target: {engine.level_score}/{engine.current_target()}",
        ]
        x = 10
        for text in items:
            surf = font.render(text, True, color)
            screen.blit(surf, (x, 10))
            x += surf.get_width() + 30

    def _render_debug(self, screen: pygame.Surface) -> None:
        font = self._get_font()
        lines = [font.render(text, True, (255, 255, 255)) for text in self.debug_lines()]
        width = max(surf.get_width() for surf in lines) + 20
        height = sum(surf.get_height() + 4 for surf in lines) + 12

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 180))
        screen.blit(panel, (10, 45))

        y = 51
        for surf in lines:
            screen.blit(surf, (20, y))
            y += surf.get_height() + 4

    def _render_overlay(self, screen: pygame.Surface, lines: List[str]) -> None:
        width, height = screen.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        screen.blit(overlay, (0, 0))

        y = height // 2 - 60
        for i, line in enumerate(lines):
            font = self._get_font_large() if i == 0 else self._get_font()
            text = font.render(line, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=(width // 2, y)))
            y += text.get_height() + 12

    def _render_game_over(self, screen: pygame.Surface) -> None:
        stats = self._final_stats or self._engine.statistics()
        self._render_overlay(screen, [
            "Time's Up!",
            f"Final Score: {stats.score}",
            f"Level Reached: {stats.level}",
            f"Bubbles Popped: {stats.popped} ({stats.gold_popped} gold)",
            f"Accuracy: {stats.accuracy:.1f}%",
            "Press SPACE to play again",
        ])
