# main.py
import argparse
import logging
from typing import List, Optional, Tuple

import pygame # type: ignore

from .config import Config
from .controls import KeyboardChannel
from .game import SnakeGame
from .loop import GameLoop
from .projection import BoardProjection
from .render import load_fonts, draw_frame, restart_hit

log = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="neon-snake", description="3D Neon Snake")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for food placement (random if omitted)")
    parser.add_argument("--flat", action="store_true",
                        help="draw the board top-down instead of tilted")
    parser.add_argument("--fps", type=int, default=60, help="redraw rate")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    cfg = Config(seed=args.seed, fps=args.fps)
    if args.flat:
        cfg.tilt_deg = 0.0
    return cfg


def sync_loop(game: SnakeGame, loop: GameLoop) -> None:
    # interval is None while paused or over, which stops the timer
    loop.update(game.tick, game.interval)


def handle_event(event: pygame.event.Event, game: SnakeGame, loop: GameLoop,
                 keyboard: KeyboardChannel, size: Tuple[int, int]) -> bool:
    """Process one event, then resync the tick timer. Return False to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == loop.event_type:
        loop.handle(event)
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_r:
            game.reset()
        else:
            keyboard.dispatch(event)
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        if restart_hit(event.pos, game.state, size):
            game.reset()
    sync_loop(game, loop)
    return True


def run(cfg: Config) -> None:
    screen = pygame.display.set_mode(cfg.window)
    pygame.display.set_caption("3D Neon Snake")
    fonts = load_fonts()
    clock = pygame.time.Clock()

    width, height = cfg.window
    proj = BoardProjection(
        center=(width / 2, height / 2 + 20),
        tilt_deg=cfg.tilt_deg,
        perspective=cfg.perspective_px,
    )
    game = SnakeGame(seed=cfg.seed)
    loop = GameLoop()
    keyboard = KeyboardChannel()

    with keyboard.subscribe(game.on_key):
        sync_loop(game, loop)
        running = True
        while running:
            # 1) input + timer events
            for event in pygame.event.get():
                if not handle_event(event, game, loop, keyboard, cfg.window):
                    running = False
                    break

            # 2) render
            draw_frame(screen, fonts, game.state, proj, pygame.time.get_ticks())
            pygame.display.flip()
            clock.tick(cfg.fps)

    loop.stop()
    log.info("Quit with score %d", game.state.score)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="[%(levelname)s] %(name)s: %(message)s")
    cfg = build_config(args)

    pygame.init()
    try:
        run(cfg)
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
