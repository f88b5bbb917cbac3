import random

from consnake.config import GameOptions
from consnake.game import new_game, place_item, tick
from consnake.models import Direction, Point, Status


def test_new_game_seeds_center_facing_right() -> None:
    state = new_game(GameOptions(width=40, height=20, initial_length=4, seed=3))
    assert state.snake.segments() == [Point(20, 10), Point(19, 10), Point(18, 10), Point(17, 10)]
    assert state.direction is Direction.RIGHT
    assert state.score == 0
    assert state.interval_ms == 120
    assert state.status is Status.ALIVE
    assert state.item is not None
    assert state.item not in state.snake


def test_plain_move_is_a_shift(make_state) -> None:
    state = make_state([(5, 5), (4, 5), (3, 5)], item=(0, 0))
    before = state.snake.segments()
    tick(state, None)
    after = state.snake.segments()
    assert len(after) == len(before)
    assert after[0] == before[0] + Direction.RIGHT.vector
    assert after[1:] == before[:-1]
    assert state.score == 0


def test_consumption_grows_scores_and_relocates(make_state) -> None:
    state = make_state([(5, 5), (4, 5), (3, 5), (2, 5)], item=(6, 5))
    tick(state, Direction.RIGHT)
    assert state.snake.segments() == [Point(6, 5), Point(5, 5), Point(4, 5), Point(3, 5), Point(2, 5)]
    assert len(state.snake) == 5
    assert state.score == 10
    assert state.item is not None
    assert state.item != Point(6, 5)
    assert state.item not in state.snake
    assert state.interval_ms == 118


def test_interval_floor(make_state) -> None:
    state = make_state([(1, 1), (0, 1)], item=(2, 1), interval_ms=41)
    tick(state, None)
    assert state.interval_ms == 40
    state.item = state.snake.head + Direction.RIGHT.vector
    tick(state, None)
    assert state.interval_ms == 40


def test_reverse_request_is_ignored(make_state) -> None:
    state = make_state([(5, 5), (4, 5), (3, 5)], item=(0, 0))
    tick(state, Direction.LEFT)
    assert state.direction is Direction.RIGHT
    assert state.snake.head == Point(6, 5)


def test_turn_is_applied(make_state) -> None:
    state = make_state([(5, 5), (4, 5), (3, 5)], item=(0, 0))
    tick(state, Direction.UP)
    assert state.direction is Direction.UP
    assert state.pending_direction is Direction.UP
    assert state.snake.head == Point(5, 4)


def test_wall_collision_leaves_body_unchanged(make_state) -> None:
    state = make_state([(0, 5), (1, 5), (2, 5)], direction=Direction.LEFT, item=(9, 9))
    before = state.snake.segments()
    tick(state, None)
    assert state.status is Status.COLLIDED
    assert state.snake.segments() == before


def test_wrap_variant_crosses_edge(make_state) -> None:
    state = make_state([(0, 5), (1, 5), (2, 5)], direction=Direction.LEFT, item=(9, 9), wrap=True)
    tick(state, None)
    assert state.status is Status.ALIVE
    assert state.snake.head == Point(9, 5)
    assert len(state.snake) == 3


def test_self_collision(make_state) -> None:
    # Moving up runs the head into the tail at (2,1)
    state = make_state(
        [(2, 2), (2, 3), (1, 3), (1, 2), (1, 1), (2, 1)],
        direction=Direction.UP,
        item=(4, 4),
    )
    before = state.snake.segments()
    tick(state, None)
    assert state.status is Status.COLLIDED
    assert state.snake.segments() == before


def test_collision_is_terminal(make_state) -> None:
    state = make_state([(9, 0), (8, 0)], item=(0, 9))
    tick(state, None)
    assert state.status is Status.COLLIDED
    frozen = state.snake.segments()
    for d in (Direction.DOWN, Direction.LEFT, None):
        tick(state, d)
        assert state.snake.segments() == frozen
        assert state.status is Status.COLLIDED
    assert state.ticks == 1


def test_reverse_check_uses_applied_direction(make_state) -> None:
    state = make_state([(5, 5), (4, 5), (3, 5)], item=(0, 0))
    tick(state, Direction.UP)
    # Now moving up; left is a legal turn even though the snake started facing right
    tick(state, Direction.LEFT)
    assert state.direction is Direction.LEFT
    tick(state, Direction.RIGHT)
    assert state.direction is Direction.LEFT


def test_place_item_avoids_snake(make_state) -> None:
    state = make_state([(x, 0) for x in range(10)], seed=11)
    for _ in range(50):
        p = place_item(state)
        assert p is not None
        assert p not in state.snake
        assert state.grid.in_bounds(p)


def test_place_item_falls_back_to_scan_on_nearly_full_board(make_state) -> None:
    cells = [(x, y) for y in range(3) for x in range(3)]
    # Serpentine through every cell but (2, 2)
    body = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2)]
    assert set(body) < set(cells)

    class NeverFree(random.Random):
        def randrange(self, *args, **kwargs):
            return 0

    state = make_state(body, width=3, height=3)
    state.rng = NeverFree()
    assert place_item(state) == Point(2, 2)


def test_place_item_full_board_returns_none(make_state) -> None:
    body = [(0, 0), (1, 0), (1, 1), (0, 1)]
    state = make_state(body, width=2, height=2)
    assert place_item(state) is None


def test_filling_the_board_then_collides(make_state) -> None:
    state = make_state([(1, 0), (0, 0), (0, 1)], width=2, height=2, direction=Direction.DOWN, item=(1, 1))
    tick(state, None)
    assert len(state.snake) == 4
    assert state.item is None
    tick(state, Direction.LEFT)
    assert state.status is Status.COLLIDED


def test_seeded_games_are_deterministic() -> None:
    opts = GameOptions(seed=42)
    a, b = new_game(opts), new_game(opts)
    assert a.item == b.item
    for d in (Direction.UP, None, Direction.LEFT, None, Direction.DOWN):
        tick(a, d)
        tick(b, d)
    assert a.snake.segments() == b.snake.segments()
    assert a.item == b.item
