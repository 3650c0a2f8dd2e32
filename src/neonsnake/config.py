from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# ----- Grid -----
GRID_SIZE = 20
CELL_SIZE = 25

# ----- Window -----
WIDTH, HEIGHT = 800, 640

# ----- Timing & scoring -----
INITIAL_SPEED = 200    # ms between ticks at game start
SPEED_DECREMENT = 5    # ms shaved off per food
MIN_SPEED = 50
FOOD_SCORE = 10

# ----- Colors -----
BG        = (17, 24, 39)
GRID_LINE = (22, 58, 72)
BORDER    = (8, 145, 178)
HEAD      = (217, 70, 239)
HEAD_EDGE = (162, 28, 175)
BODY      = (34, 211, 238)
BODY_EDGE = (8, 145, 178)
FOOD      = (236, 72, 153)
TITLE     = (34, 211, 238)
ACCENT    = (232, 121, 249)
BUTTON    = (217, 70, 239)
TEXT      = (255, 255, 255)
HINT      = (156, 163, 175)


# ----- Directions (dx, dy), y grows downwards -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


INITIAL_DIRECTION = Direction.UP
INITIAL_SNAKE = [(10, 10), (10, 11), (10, 12)]


# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None
    fps: int = 60
    tilt_deg: float = 55.0        # rotateX applied to the board
    perspective_px: float = 1000.0
    window: Tuple[int, int] = (WIDTH, HEIGHT)
