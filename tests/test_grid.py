import pytest

from consnake.grid import Grid
from consnake.models import Direction, Point, Snake


def test_in_bounds_edges() -> None:
    g = Grid(4, 3)
    assert g.in_bounds(Point(0, 0))
    assert g.in_bounds(Point(3, 2))
    assert not g.in_bounds(Point(4, 0))
    assert not g.in_bounds(Point(0, 3))
    assert not g.in_bounds(Point(-1, 1))


def test_wrap_maps_modulo() -> None:
    g = Grid(10, 10)
    assert g.wrap(Point(-1, 5)) == Point(9, 5)
    assert g.wrap(Point(10, 5)) == Point(0, 5)
    assert g.wrap(Point(3, -1)) == Point(3, 9)
    assert g.wrap(Point(3, 4)) == Point(3, 4)


def test_cells_row_major_and_capacity() -> None:
    g = Grid(3, 2)
    cells = list(g.cells())
    assert len(cells) == g.capacity == 6
    assert cells[0] == Point(0, 0)
    assert cells[1] == Point(1, 0)
    assert cells[3] == Point(0, 1)


def test_empty_grid_rejected() -> None:
    with pytest.raises(ValueError):
        Grid(0, 5)


def test_direction_vectors_and_opposites() -> None:
    assert Point(2, 2) + Direction.UP.vector == Point(2, 1)
    assert Point(2, 2) + Direction.RIGHT.vector == Point(3, 2)
    for d in Direction:
        assert d.opposite.opposite is d
        assert d.opposite is not d
    assert Direction.UP.is_vertical and not Direction.LEFT.is_vertical


def test_snake_ring_shift_and_growth() -> None:
    s = Snake([Point(2, 0), Point(1, 0), Point(0, 0)], capacity=9)
    s.advance(Point(2, 1))
    assert s.segments() == [Point(2, 1), Point(2, 0), Point(1, 0)]
    s.advance(Point(2, 2), grow=True)
    assert len(s) == 4
    assert s.head == Point(2, 2)
    assert s.tail == Point(1, 0)
    assert s.capacity == 9


def test_snake_rejects_overlapping_segments() -> None:
    with pytest.raises(ValueError):
        Snake([Point(1, 1), Point(1, 1)], capacity=4)
