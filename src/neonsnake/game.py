# game.py
from dataclasses import dataclass, field, replace
import logging
import random
from typing import Iterable, List, Optional, Tuple

from .config import (
    GRID_SIZE,
    INITIAL_SPEED, SPEED_DECREMENT, MIN_SPEED, FOOD_SCORE,
    INITIAL_DIRECTION, INITIAL_SNAKE,
    Direction,
)
from .controls import InputMapper

log = logging.getLogger(__name__)

Point = Tuple[int, int]


class BoardFullError(RuntimeError):
    """Raised when every grid cell is occupied and no food can be placed."""


# ---------- Helpers ----------
def spawn_food(occupied: Iterable[Point], rng=random) -> Point:
    """Sample a uniformly random free cell by rejection."""
    taken = set(occupied)
    if len(taken) >= GRID_SIZE * GRID_SIZE:
        raise BoardFullError(f"no free cell left on a {GRID_SIZE}x{GRID_SIZE} grid")
    while True:
        fx = rng.randrange(GRID_SIZE)
        fy = rng.randrange(GRID_SIZE)
        if (fx, fy) not in taken:
            return (fx, fy)

def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE

# ---------- State ----------
@dataclass
class GameState:
    snake: List[Point]             # head at index 0
    food: Optional[Point]
    direction: Direction = INITIAL_DIRECTION
    speed_ms: int = INITIAL_SPEED  # current tick interval
    score: int = 0
    is_game_over: bool = False
    is_running: bool = True

def new_game_state(rng=random) -> GameState:
    snake = list(INITIAL_SNAKE)
    return GameState(snake=snake, food=spawn_food(snake, rng))

def _game_over(state: GameState, **changes) -> GameState:
    return replace(state, is_game_over=True, is_running=False, **changes)

# ---------- Tick ----------
def step_game(state: GameState, pending: Direction, rng=random) -> GameState:
    """
    Advance the game by one tick and return the next state.
    The input state is never mutated; a fatal move leaves the snake where it was.
    """
    if state.is_game_over or not state.is_running:
        return state

    # Commit direction once per tick
    direction = pending
    hx, hy = state.snake[0]
    dx, dy = direction.value
    new_head = (hx + dx, hy + dy)

    # Wall collision
    if not in_bounds(*new_head):
        log.info("Hit the wall at %s, final score %d", new_head, state.score)
        return _game_over(state, direction=direction)

    # Self collision, checked against the body before it moves
    if new_head in state.snake:
        log.info("Ran into itself at %s, final score %d", new_head, state.score)
        return _game_over(state, direction=direction)

    snake = [new_head] + state.snake

    # Eat / move
    if new_head == state.food:
        score = state.score + FOOD_SCORE
        speed_ms = max(MIN_SPEED, state.speed_ms - SPEED_DECREMENT)
        log.debug("Ate food at %s: score=%d speed=%dms", new_head, score, speed_ms)
        try:
            food = spawn_food(snake, rng)
        except BoardFullError:
            log.info("Board is full, final score %d", score)
            return _game_over(
                state, snake=snake, food=None, direction=direction,
                score=score, speed_ms=speed_ms,
            )
        return replace(
            state, snake=snake, food=food, direction=direction,
            score=score, speed_ms=speed_ms,
        )

    snake.pop()
    return replace(state, snake=snake, direction=direction)

# ---------- Session ----------
@dataclass
class SnakeGame:
    """
    One playing session: the current state, the pending-direction slot fed by
    the keyboard, and the RNG used for food placement.
    """
    seed: Optional[int] = None
    rng: random.Random = field(init=False)
    mapper: InputMapper = field(init=False)
    state: GameState = field(init=False)

    def __post_init__(self):
        self.rng = random.Random(self.seed)
        self.mapper = InputMapper(on_pause=self.toggle_pause)
        self.reset()

    def reset(self) -> None:
        self.state = new_game_state(self.rng)
        self.mapper.reset(INITIAL_DIRECTION)
        log.info("New game started")

    def tick(self) -> GameState:
        self.state = step_game(self.state, self.mapper.pending, self.rng)
        return self.state

    def on_key(self, key: str) -> None:
        self.mapper.on_key(key)

    def toggle_pause(self) -> None:
        self.state = replace(self.state, is_running=not self.state.is_running)
        log.info("Resumed" if self.state.is_running else "Paused")

    @property
    def interval(self) -> Optional[int]:
        """Tick interval in ms, or None while paused or over."""
        if self.state.is_running and not self.state.is_game_over:
            return self.state.speed_ms
        return None
