from __future__ import annotations

import random
from dataclasses import replace

import pytest

from neonsnake.config import (
    GRID_SIZE, INITIAL_SPEED, MIN_SPEED, INITIAL_SNAKE, Direction,
)
from neonsnake.game import (
    BoardFullError, GameState, SnakeGame, new_game_state, spawn_food, step_game,
)


def make_state(snake, food=(0, 0), direction=Direction.UP, **kw) -> GameState:
    return GameState(snake=list(snake), food=food, direction=direction, **kw)


def serpentine():
    cells = []
    for y in range(GRID_SIZE):
        xs = range(GRID_SIZE) if y % 2 == 0 else reversed(range(GRID_SIZE))
        cells += [(x, y) for x in xs]
    return cells


# ---------- spawn_food ----------
def test_spawn_food_avoids_occupied_cells() -> None:
    rng = random.Random(7)
    snake = [(x, 0) for x in range(GRID_SIZE)]
    for _ in range(200):
        fx, fy = spawn_food(snake, rng)
        assert (fx, fy) not in snake
        assert 0 <= fx < GRID_SIZE and 0 <= fy < GRID_SIZE


def test_spawn_food_finds_last_free_cell() -> None:
    occupied = [c for c in serpentine() if c != (3, 7)]
    assert spawn_food(occupied, random.Random(1)) == (3, 7)


def test_spawn_food_raises_on_full_board() -> None:
    with pytest.raises(BoardFullError):
        spawn_food(serpentine(), random.Random(1))


# ---------- step_game ----------
def test_moves_up_one_cell() -> None:
    s = make_state([(10, 10), (10, 11), (10, 12)], food=(0, 0))
    s1 = step_game(s, Direction.UP)
    assert s1.snake == [(10, 9), (10, 10), (10, 11)]
    assert s1.score == 0
    assert s1.speed_ms == INITIAL_SPEED
    assert s1.is_game_over is False


def test_wall_collision_ends_game_without_moving() -> None:
    snake = [(0, 5), (1, 5), (2, 5)]
    s = make_state(snake, food=(9, 9), direction=Direction.LEFT)
    s1 = step_game(s, Direction.LEFT)
    assert s1.is_game_over is True
    assert s1.is_running is False
    assert s1.snake == snake


def test_eating_grows_scores_and_speeds_up() -> None:
    s = make_state([(5, 5), (5, 6), (5, 7)], food=(5, 4))
    s1 = step_game(s, Direction.UP, random.Random(3))
    assert s1.snake == [(5, 4), (5, 5), (5, 6), (5, 7)]
    assert s1.score == 10
    assert s1.speed_ms == INITIAL_SPEED - 5
    assert s1.food is not None
    assert s1.food not in s1.snake


def test_speed_is_floored() -> None:
    s = make_state([(5, 5), (5, 6)], food=(5, 4), speed_ms=MIN_SPEED + 2)
    s1 = step_game(s, Direction.UP, random.Random(3))
    assert s1.speed_ms == MIN_SPEED
    s2 = step_game(replace(s1, food=(5, 3)), Direction.UP, random.Random(3))
    assert s2.speed_ms == MIN_SPEED


def test_self_collision_ends_game() -> None:
    snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    s = make_state(snake, food=(0, 0), direction=Direction.LEFT)
    s1 = step_game(s, Direction.DOWN)
    assert s1.is_game_over is True
    assert s1.is_running is False
    assert s1.snake == snake


def test_moving_into_the_tail_cell_is_fatal() -> None:
    # the tail would have moved away, but the check uses the body before the move
    snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
    s1 = step_game(make_state(snake, food=(0, 0), direction=Direction.LEFT), Direction.DOWN)
    assert s1.is_game_over is True


def test_pending_direction_is_committed() -> None:
    s = make_state([(10, 10), (10, 11)], food=(0, 0))
    s1 = step_game(s, Direction.RIGHT)
    assert s1.direction is Direction.RIGHT
    assert s1.snake[0] == (11, 10)


@pytest.mark.parametrize("flags", [{"is_game_over": True}, {"is_running": False}])
def test_tick_is_noop_when_stopped(flags) -> None:
    s = make_state([(10, 10), (10, 11)], food=(0, 0), **flags)
    assert step_game(s, Direction.LEFT) is s


def test_step_does_not_mutate_input() -> None:
    snake = [(5, 5), (5, 6), (5, 7)]
    s = make_state(snake, food=(5, 4))
    step_game(s, Direction.UP, random.Random(0))
    step_game(replace(s, food=(0, 0)), Direction.UP)
    assert s.snake == snake
    assert s.score == 0


def test_full_board_after_eating_ends_game() -> None:
    path = serpentine()
    snake = list(reversed(path[:-1]))   # head at (1, 19), heading left
    s = make_state(snake, food=path[-1], direction=Direction.LEFT)
    s1 = step_game(s, Direction.LEFT, random.Random(0))
    assert s1.is_game_over is True
    assert s1.food is None
    assert len(s1.snake) == GRID_SIZE * GRID_SIZE
    assert s1.score == 10


# ---------- SnakeGame ----------
def test_new_game_initial_values() -> None:
    s = new_game_state(random.Random(0))
    assert s.snake == INITIAL_SNAKE
    assert s.direction is Direction.UP
    assert (s.speed_ms, s.score) == (INITIAL_SPEED, 0)
    assert s.is_running is True and s.is_game_over is False
    assert s.food not in s.snake


def test_reset_after_game_over() -> None:
    game = SnakeGame(seed=4)
    game.on_key("ArrowLeft")
    for _ in range(GRID_SIZE + 1):
        game.tick()
    assert game.state.is_game_over is True
    assert game.interval is None

    game.reset()
    s = game.state
    assert s.snake == INITIAL_SNAKE
    assert s.direction is Direction.UP
    assert (s.speed_ms, s.score) == (INITIAL_SPEED, 0)
    assert s.is_running is True and s.is_game_over is False
    assert game.mapper.pending is Direction.UP
    assert game.interval == INITIAL_SPEED


def test_reset_mid_game() -> None:
    game = SnakeGame(seed=2)
    game.on_key("d")
    game.state = replace(game.state, food=(11, 10))
    game.tick()
    assert len(game.state.snake) == 4
    assert game.state.speed_ms == INITIAL_SPEED - 5
    assert game.state.direction is Direction.RIGHT

    game.reset()
    s = game.state
    assert s.snake == INITIAL_SNAKE
    assert (s.speed_ms, s.score) == (INITIAL_SPEED, 0)
    assert s.direction is Direction.UP
    assert game.mapper.pending is Direction.UP
    assert s.is_running is True and s.is_game_over is False
    assert s.food not in s.snake


def test_pause_toggle_is_idempotent_in_pairs() -> None:
    game = SnakeGame(seed=0)
    game.on_key(" ")
    assert game.state.is_running is False
    assert game.interval is None
    before = list(game.state.snake)
    game.tick()
    assert game.state.snake == before
    game.on_key(" ")
    assert game.state.is_running is True


def test_pause_toggles_even_after_game_over() -> None:
    game = SnakeGame(seed=0)
    game.state = replace(game.state, is_game_over=True, is_running=False)
    game.toggle_pause()
    assert game.state.is_running is True
    assert game.interval is None


def test_invariants_hold_over_random_play() -> None:
    game = SnakeGame(seed=11)
    rng = random.Random(5)
    keys = ["ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight", "w", "a", "s", "d"]
    last_speed, last_score = game.state.speed_ms, game.state.score

    for _ in range(3000):
        if game.state.is_game_over:
            game.reset()
            last_speed, last_score = game.state.speed_ms, game.state.score
        game.on_key(rng.choice(keys))
        if rng.random() < 0.3:
            # put food straight ahead now and then so the snake actually grows
            hx, hy = game.state.snake[0]
            dx, dy = game.mapper.pending.value
            ahead = (hx + dx, hy + dy)
            if 0 <= ahead[0] < GRID_SIZE and 0 <= ahead[1] < GRID_SIZE and ahead not in game.state.snake:
                game.state = replace(game.state, food=ahead)
        s = game.tick()

        assert len(set(s.snake)) == len(s.snake)
        assert s.food not in s.snake
        assert MIN_SPEED <= s.speed_ms <= INITIAL_SPEED
        assert s.speed_ms <= last_speed
        assert s.score % 10 == 0 and s.score >= last_score
        last_speed, last_score = s.speed_ms, s.score
