"""Core game state and logic."""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .config import GameOptions
from .constants import (
    BASE_INTERVAL_MS, MIN_INTERVAL_MS, INTERVAL_STEP_MS, ITEM_REWARD, MAX_PLACEMENT_ATTEMPTS,
)
from .grid import Grid
from .models import Direction, Point, Snake, Status

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    grid: Grid
    snake: Snake
    item: Optional[Point] = None
    direction: Direction = Direction.RIGHT
    pending_direction: Direction = Direction.RIGHT
    score: int = 0
    interval_ms: int = BASE_INTERVAL_MS
    status: Status = Status.ALIVE
    ticks: int = 0
    wrap: bool = False
    reward: int = ITEM_REWARD
    interval_step_ms: int = INTERVAL_STEP_MS
    min_interval_ms: int = MIN_INTERVAL_MS
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def alive(self) -> bool:
        return self.status is Status.ALIVE

    @property
    def length(self) -> int:
        return len(self.snake)


def new_game(options: GameOptions, rng: Optional[random.Random] = None) -> GameState:
    """Seed a session: snake centered and facing right, body trailing to the left."""
    grid = Grid(options.width, options.height)
    mid = grid.center
    snake = Snake(
        (Point(mid.x - i, mid.y) for i in range(options.initial_length)),
        capacity=grid.capacity,
    )
    state = GameState(
        grid=grid,
        snake=snake,
        interval_ms=options.base_interval_ms,
        wrap=options.wrap,
        reward=options.reward,
        interval_step_ms=options.interval_step_ms,
        min_interval_ms=options.min_interval_ms,
        rng=rng if rng is not None else random.Random(options.seed),
    )
    state.item = place_item(state)
    return state


def place_item(state: GameState) -> Optional[Point]:
    """Pick a free cell uniformly at random.

    Rejection sampling is bounded; when the snake covers most of the board
    the first free cell of a row-major scan is used instead. Returns None
    only when the snake occupies every cell.
    """
    grid = state.grid
    occupied = set(state.snake)
    if len(occupied) >= grid.capacity:
        return None

    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        candidate = Point(state.rng.randrange(grid.width), state.rng.randrange(grid.height))
        if candidate not in occupied:
            return candidate

    logger.debug("item placement fell back to linear scan (length=%d)", len(occupied))
    for cell in grid.cells():
        if cell not in occupied:
            return cell
    return None


def tick(state: GameState, requested: Optional[Direction] = None) -> GameState:
    """Advance the simulation by one step.

    A collision only flips ``state.status``; the snake keeps the geometry it
    had before the fatal move and later calls leave the state untouched.
    """
    if state.status is Status.COLLIDED:
        return state

    if requested is not None and requested is not state.direction.opposite:
        state.pending_direction = requested
    state.direction = state.pending_direction
    state.ticks += 1

    nxt = state.snake.head + state.direction.vector
    if not state.grid.in_bounds(nxt):
        if not state.wrap:
            logger.info("wall collision at %s after %d ticks", nxt, state.ticks)
            state.status = Status.COLLIDED
            return state
        nxt = state.grid.wrap(nxt)

    if nxt in state.snake:
        logger.info("self collision at %s after %d ticks", nxt, state.ticks)
        state.status = Status.COLLIDED
        return state

    ate = nxt == state.item
    state.snake.advance(nxt, grow=ate)
    if ate:
        state.score += state.reward
        state.interval_ms = max(state.min_interval_ms, state.interval_ms - state.interval_step_ms)
        state.item = place_item(state)
        logger.debug(
            "item consumed: score=%d length=%d interval=%dms",
            state.score, len(state.snake), state.interval_ms,
        )
    return state
