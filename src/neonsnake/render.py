# render.py
from dataclasses import dataclass
import math
from typing import Optional, Tuple

import pygame # type: ignore

from .config import (
    BG, GRID_LINE, BORDER,
    HEAD, HEAD_EDGE, BODY, BODY_EDGE, FOOD,
    TITLE, ACCENT, BUTTON, TEXT, HINT,
)
from .game import GameState, Point
from .projection import BoardProjection

SEGMENT_LIFT = 8.0   # px the snake and food float above the board
HINT_TEXT = "Use Arrow Keys or WASD to move. Press Space to pause/resume."

# ---------- Fonts & layout ----------
@dataclass
class Fonts:
    title: pygame.font.Font
    hud: pygame.font.Font
    big: pygame.font.Font
    small: pygame.font.Font

def load_fonts() -> Fonts:
    return Fonts(
        title=pygame.font.SysFont(None, 40, bold=True),
        hud=pygame.font.SysFont(None, 32),
        big=pygame.font.SysFont(None, 64, bold=True),
        small=pygame.font.SysFont(None, 22),
    )

def restart_rect(size: Tuple[int, int]) -> pygame.Rect:
    width, _ = size
    return pygame.Rect(width - 126, 14, 110, 40)

def play_again_rect(size: Tuple[int, int]) -> pygame.Rect:
    width, height = size
    return pygame.Rect(width // 2 - 90, height // 2 + 50, 180, 52)

def restart_hit(pos: Tuple[int, int], state: GameState, size: Tuple[int, int]) -> bool:
    """True if a click at `pos` lands on a button that restarts the game."""
    if restart_rect(size).collidepoint(pos):
        return True
    return state.is_game_over and play_again_rect(size).collidepoint(pos)

def _blit_text(screen, font, text, color, **anchor) -> pygame.Rect:
    surf = font.render(text, True, color)
    rect = surf.get_rect(**anchor)
    screen.blit(surf, rect)
    return rect

def _button(screen, font, rect: pygame.Rect, label: str) -> None:
    pygame.draw.rect(screen, BUTTON, rect, border_radius=6)
    _blit_text(screen, font, label, TEXT, center=rect.center)

# ---------- Board ----------
def draw_board(screen: pygame.Surface, proj: BoardProjection) -> None:
    for start, end in proj.grid_lines():
        pygame.draw.line(screen, GRID_LINE, start, end)
    pygame.draw.polygon(screen, BORDER, proj.board_quad(), width=2)

def draw_segment(screen: pygame.Surface, proj: BoardProjection, cell: Point, head: bool) -> None:
    fill, edge = (HEAD, HEAD_EDGE) if head else (BODY, BODY_EDGE)
    x, y = cell
    # darker footprint first so it peeks out under the raised top face
    pygame.draw.polygon(screen, edge, proj.cell_quad(x, y))
    pygame.draw.polygon(screen, fill, proj.cell_quad(x, y, SEGMENT_LIFT))

def draw_snake(screen: pygame.Surface, proj: BoardProjection, snake) -> None:
    # far rows first so nearer segments overlap them; head last within its row
    order = sorted(range(len(snake)), key=lambda i: (snake[i][1], i == 0))
    for i in order:
        draw_segment(screen, proj, snake[i], head=(i == 0))

def draw_food(screen: pygame.Surface, proj: BoardProjection, food: Optional[Point], now_ms: int) -> None:
    if food is None:
        return
    quad = proj.cell_quad(*food, SEGMENT_LIFT)
    half_width = math.dist(quad[0], quad[1]) / 2
    pulse = 0.5 + 0.5 * math.sin(now_ms / 250)
    radius = max(2, int(half_width * (0.75 + 0.25 * pulse)))
    pygame.draw.circle(screen, FOOD, proj.cell_center(*food, SEGMENT_LIFT), radius)

# ---------- HUD / overlays ----------
def draw_hud(screen: pygame.Surface, fonts: Fonts, state: GameState) -> None:
    width, height = screen.get_size()
    _blit_text(screen, fonts.title, "3D NEON SNAKE", TITLE, topleft=(16, 20))
    rect = restart_rect((width, height))
    score_rect = _blit_text(screen, fonts.hud, str(state.score), ACCENT,
                            midright=(rect.left - 24, rect.centery))
    _blit_text(screen, fonts.hud, "Score: ", TEXT, midright=score_rect.midleft)
    _button(screen, fonts.hud, rect, "Restart")
    _blit_text(screen, fonts.small, HINT_TEXT, HINT, midbottom=(width // 2, height - 16))
    if not state.is_running and not state.is_game_over:
        _blit_text(screen, fonts.hud, "PAUSED", TEXT, midtop=(width // 2, 70))

def draw_game_over(screen: pygame.Surface, fonts: Fonts, score: int) -> None:
    width, height = screen.get_size()
    # Dim with translucent overlay
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 178))  # RGBA
    screen.blit(overlay, (0, 0))

    box = pygame.Rect(0, 0, 420, 260)
    box.center = (width // 2, height // 2 + 10)
    pygame.draw.rect(screen, BUTTON, box, width=2, border_radius=12)

    _blit_text(screen, fonts.big, "GAME OVER", TEXT, center=(width // 2, height // 2 - 60))
    sco = _blit_text(screen, fonts.hud, "Final Score: ", TEXT, midright=(width // 2 + 20, height // 2))
    _blit_text(screen, fonts.hud, str(score), TITLE, midleft=sco.midright)
    _button(screen, fonts.hud, play_again_rect((width, height)), "Play Again")

def draw_frame(screen: pygame.Surface, fonts: Fonts, state: GameState,
               proj: BoardProjection, now_ms: int) -> None:
    screen.fill(BG)
    draw_board(screen, proj)
    draw_food(screen, proj, state.food, now_ms)
    draw_snake(screen, proj, state.snake)
    draw_hud(screen, fonts, state)
    if state.is_game_over:
        draw_game_over(screen, fonts, state.score)
