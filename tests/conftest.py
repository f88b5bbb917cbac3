import random
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture
def make_state():
    from consnake.game import GameState
    from consnake.grid import Grid
    from consnake.models import Direction, Point, Snake

    def _make(
        snake,
        width=10,
        height=10,
        direction=Direction.RIGHT,
        item=None,
        wrap=False,
        seed=0,
        interval_ms=120,
    ):
        grid = Grid(width, height)
        return GameState(
            grid=grid,
            snake=Snake([Point(x, y) for x, y in snake], capacity=grid.capacity),
            item=Point(*item) if item is not None else None,
            direction=direction,
            pending_direction=direction,
            interval_ms=interval_ms,
            wrap=wrap,
            rng=random.Random(seed),
        )

    return _make
