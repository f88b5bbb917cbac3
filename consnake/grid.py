"""Board geometry."""

from dataclasses import dataclass
from typing import Iterator

from .models import Point


@dataclass(frozen=True)
class Grid:
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be non-empty, got {self.width}x{self.height}")

    @property
    def capacity(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(self.width // 2, self.height // 2)

    def in_bounds(self, p: Point) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def wrap(self, p: Point) -> Point:
        return Point(p.x % self.width, p.y % self.height)

    def cells(self) -> Iterator[Point]:
        """Every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Point(x, y)
