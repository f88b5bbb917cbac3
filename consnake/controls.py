"""Keyboard decoding and per-tick input polling."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .models import Direction
from .terminal import Terminal

ESC = 0x1B
# CSI layout: ESC [ <params and intermediates> <final>
CSI_BODY_MIN, CSI_BODY_MAX = 0x20, 0x3F
CSI_FINAL_MIN, CSI_FINAL_MAX = 0x40, 0x7E
# Windows console prefixes for extended keys (arrows, function keys)
WIN_PREFIXES = (0x00, 0xE0)

LETTER_KEYS = {
    ord("w"): Direction.UP, ord("W"): Direction.UP,
    ord("s"): Direction.DOWN, ord("S"): Direction.DOWN,
    ord("a"): Direction.LEFT, ord("A"): Direction.LEFT,
    ord("d"): Direction.RIGHT, ord("D"): Direction.RIGHT,
}
ANSI_ARROWS = {
    ord("A"): Direction.UP,
    ord("B"): Direction.DOWN,
    ord("C"): Direction.RIGHT,
    ord("D"): Direction.LEFT,
}
WIN_ARROWS = {
    72: Direction.UP,
    80: Direction.DOWN,
    75: Direction.LEFT,
    77: Direction.RIGHT,
}
QUIT_KEYS = {ord("q"), ord("Q")}
PAUSE_KEYS = {ord(" "), ord("p"), ord("P")}


class Signal(Enum):
    QUIT = "quit"
    TOGGLE_PAUSE = "toggle_pause"


@dataclass(frozen=True)
class ChangeDirection:
    direction: Direction


Command = Union[ChangeDirection, Signal]


def _csi_end(data: bytes, start: int) -> Optional[int]:
    """Index of the first byte after the parameters of a CSI sequence starting at ``start``.

    Parameter and intermediate bytes are 0x20-0x3F. None means the chunk ends
    before any other byte shows up.
    """
    for j in range(start, len(data)):
        if not CSI_BODY_MIN <= data[j] <= CSI_BODY_MAX:
            return j
    return None


def decode_keys(data: bytes, windows_console: bool = False) -> list[Command]:
    """Translate raw key bytes into commands, in arrival order.

    Arrow keys arrive as ``ESC [ X`` / ``ESC O X`` on ANSI terminals and as a
    0x00/0xE0 prefix plus scan code on the Windows console; each sequence is
    consumed as one unit. CSI sequences carrying parameters (modified arrows,
    Delete, function keys), sequences cut off at the end of ``data`` and ones
    we don't know are dropped whole. Unknown single keys are ignored.

    ``windows_console`` selects the msvcrt conventions: extended-key prefixes
    are recognised and a lone Esc quits.
    """
    commands: list[Command] = []
    i, n = 0, len(data)
    while i < n:
        b = data[i]
        if b == ESC and windows_console:
            commands.append(Signal.QUIT)
            i += 1
        elif b == ESC:
            nxt = data[i + 1] if i + 1 < n else None
            if nxt == ord("["):
                end = _csi_end(data, i + 2)
                if end is None:
                    # Cut off mid-sequence
                    break
                if not CSI_FINAL_MIN <= data[end] <= CSI_FINAL_MAX:
                    # Malformed: drop the prefix, resume at the stray byte
                    i = end
                    continue
                if end == i + 2 and data[end] in ANSI_ARROWS:
                    commands.append(ChangeDirection(ANSI_ARROWS[data[end]]))
                i = end + 1
            elif nxt == ord("O"):
                if i + 2 < n and data[i + 2] in ANSI_ARROWS:
                    commands.append(ChangeDirection(ANSI_ARROWS[data[i + 2]]))
                i += 3
            else:
                i += 1
        elif windows_console and b in WIN_PREFIXES:
            if i + 1 < n and data[i + 1] in WIN_ARROWS:
                commands.append(ChangeDirection(WIN_ARROWS[data[i + 1]]))
            i += 2
        else:
            if b in LETTER_KEYS:
                commands.append(ChangeDirection(LETTER_KEYS[b]))
            elif b in QUIT_KEYS:
                commands.append(Signal.QUIT)
            elif b in PAUSE_KEYS:
                commands.append(Signal.TOGGLE_PAUSE)
            i += 1
    return commands


def resolve(commands: list[Command], current: Direction) -> Optional[Command]:
    """Reduce one poll's worth of commands to the single command to act on.

    Quit wins over everything, then an odd number of pause toggles, then the
    last direction change that doesn't reverse ``current``.
    """
    if Signal.QUIT in commands:
        return Signal.QUIT
    if commands.count(Signal.TOGGLE_PAUSE) % 2 == 1:
        return Signal.TOGGLE_PAUSE
    for cmd in reversed(commands):
        if isinstance(cmd, ChangeDirection) and cmd.direction is not current.opposite:
            return cmd
    return None


class InputController:
    def __init__(self, terminal: Terminal):
        self.terminal = terminal

    def poll(self, current: Direction) -> Optional[Command]:
        """Drain pending input without blocking; None if nothing applies."""
        data = self.terminal.read_available()
        if not data:
            return None
        return resolve(decode_keys(data, self.terminal.windows_console), current)
