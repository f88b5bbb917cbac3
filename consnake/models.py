"""Data models."""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from .constants import DIRECTIONS, OPPOSITES


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Point:
        dx, dy = DIRECTIONS[self.value]
        return Point(dx, dy)

    @property
    def opposite(self) -> "Direction":
        return Direction(OPPOSITES[self.value])

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


class Status(Enum):
    ALIVE = "alive"
    COLLIDED = "collided"


class Snake:
    """Head-first segment sequence stored in a ring bounded by the grid capacity.

    The snake can never hold more segments than the board has cells, so the
    ring is allocated with that bound up front and ``len()`` is the explicit
    length.
    """

    def __init__(self, segments: Iterable[Point], capacity: int):
        self._segments: deque = deque(maxlen=capacity)
        self._segments.extend(segments)
        if not self._segments:
            raise ValueError("snake needs at least one segment")
        if len(set(self._segments)) != len(self._segments):
            raise ValueError("snake segments must be distinct")

    @property
    def capacity(self) -> int:
        return self._segments.maxlen

    @property
    def head(self) -> Point:
        return self._segments[0]

    @property
    def tail(self) -> Point:
        return self._segments[-1]

    def advance(self, new_head: Point, grow: bool = False):
        """Shift every segment one place toward the head, keeping the tail on growth."""
        if not grow:
            self._segments.pop()
        self._segments.appendleft(new_head)

    def segments(self) -> list[Point]:
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._segments)

    def __contains__(self, point: object) -> bool:
        return point in self._segments

    def __getitem__(self, index: int) -> Point:
        return self._segments[index]

    def __repr__(self) -> str:
        return f"Snake({self.segments()!r})"
