#!/usr/bin/env python3
"""
Bubble Pop - Standalone entry point.

Usage:
    python main.py
    python main.py --fullscreen
    python main.py --width 1024 --height 768 --gold-chance 0.3
"""

import argparse
import os
import sys

import pygame

# Support running from any directory - add project root to path
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.BubblePop.config import SCREEN_WIDTH, SCREEN_HEIGHT, TARGET_FPS
from games.BubblePop.game_info import get_game_mode
from games.BubblePop.game_mode import BubblePopMode
from popcore.games import GameState
from popcore.games.input.input_manager import InputManager
from popcore.games.input.sources.mouse import MouseInputSource
from popcore.logging import (
    close_all_sinks,
    configure_logging,
    create_sink_for_environment,
    get_logger,
    register_sink,
)

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    """Argument parser from the display options plus the game's ARGUMENTS."""
    parser = argparse.ArgumentParser(description=BubblePopMode.DESCRIPTION)
    parser.add_argument('--width', type=int, default=SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', help='Run fullscreen')

    for arg in BubblePopMode.get_arguments():
        spec = {k: v for k, v in arg.items() if k != 'name'}
        parser.add_argument(arg['name'], **spec)
    return parser


def main(argv=None):
    """Run Bubble Pop."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)
    register_sink('session', create_sink_for_environment('session'))

    pygame.init()

    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        width, height = screen.get_size()
    else:
        width, height = args.width, args.height
        screen = pygame.display.set_mode((width, height))

    pygame.display.set_caption(BubblePopMode.NAME)

    input_manager = InputManager(MouseInputSource())

    game = get_game_mode(
        width=width,
        height=height,
        gold_chance=args.gold_chance,
        level_up_delay=args.level_up_delay,
        seed=args.seed,
        auto_start=False,
    )

    log.info("Click bubbles to pop them. SPACE starts, R restarts, D toggles debug, ESC quits.")

    clock = pygame.time.Clock()
    running = True

    try:
        while running:
            dt = clock.tick(TARGET_FPS) / 1000.0

            input_manager.update(dt)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE and game.state != GameState.PLAYING:
                        game.start()
                    elif event.key == pygame.K_r:
                        game.start()
                        log.info("Restarted")
                    elif event.key == pygame.K_d:
                        game.set_debug_mode(not game.debug_mode)

            game.handle_input(input_manager.get_events())
            game.update(dt)

            game.render(screen)
            pygame.display.flip()
    finally:
        close_all_sinks()
        pygame.quit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
