"""Frame rendering and the off-screen frame buffer."""

from dataclasses import dataclass

from .constants import (
    BORDER_CHAR, ITEM_CHAR, HEAD_CHAR, BODY_CHAR, EMPTY_CHAR,
    STATUS_FORMAT, CONTROLS_HINT, PAUSED_SUFFIX, STATUS_MIN_WIDTH,
)
from .errors import FatalResourceError
from .game import GameState
from .grid import Grid
from .models import Point
from .terminal import Terminal


@dataclass(frozen=True)
class Frame:
    rows: tuple[str, ...]
    status: str
    hint: str

    @property
    def lines(self) -> tuple[str, ...]:
        return self.rows + (self.status, self.hint)

    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

    def encode(self) -> bytes:
        return self.text().encode("ascii")


def line_width(grid: Grid) -> int:
    return max(grid.width + 2, STATUS_MIN_WIDTH, len(CONTROLS_HINT + PAUSED_SUFFIX))


def frame_size(grid: Grid) -> int:
    """Bytes in one encoded frame: bordered rows plus two padded status lines."""
    rows = (grid.height + 2) * (grid.width + 3)
    return rows + 2 * (line_width(grid) + 1)


def build_status(game: GameState) -> str:
    return STATUS_FORMAT.format(score=game.score, length=game.length, interval=game.interval_ms)


def render(game: GameState, paused: bool = False) -> Frame:
    grid = game.grid
    fb_w, fb_h = grid.width + 2, grid.height + 2
    head = game.snake.head
    body = set(game.snake)
    body.discard(head)
    item = game.item

    rows = []
    for y in range(fb_h):
        row = []
        for x in range(fb_w):
            if y in (0, fb_h - 1) or x in (0, fb_w - 1):
                ch = BORDER_CHAR
            else:
                cell = Point(x - 1, y - 1)
                if cell == item:
                    ch = ITEM_CHAR
                elif cell == head:
                    ch = HEAD_CHAR
                elif cell in body:
                    ch = BODY_CHAR
                else:
                    ch = EMPTY_CHAR
            row.append(ch)
        rows.append("".join(row))

    width = line_width(grid)
    hint = CONTROLS_HINT + (PAUSED_SUFFIX if paused else "")
    return Frame(
        rows=tuple(rows),
        status=build_status(game).ljust(width)[:width],
        hint=hint.ljust(width)[:width],
    )


class FrameBuffer:
    """Off-screen buffer holding exactly one encoded frame.

    ``draw`` overwrites the whole buffer before ``flush`` hands it to the
    terminal in a single write, so the display never shows a mix of two ticks.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        size = frame_size(grid)
        try:
            self._buf = bytearray(size)
        except MemoryError as exc:
            raise FatalResourceError("Failed to allocate frame buffer.") from exc
        self._view = memoryview(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def draw(self, game: GameState, paused: bool = False) -> Frame:
        frame = render(game, paused)
        self._view[:] = frame.encode()
        return frame

    def contents(self) -> bytes:
        return bytes(self._buf)

    def flush(self, terminal: Terminal) -> None:
        terminal.move_cursor_to_origin()
        terminal.write_raw(self._view)
