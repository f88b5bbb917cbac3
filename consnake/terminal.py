"""Terminal capability: raw input, cursor control and display writes."""

import logging
import os
import sys
import time
from abc import ABC, abstractmethod
from typing import Optional, Union

from .constants import CURSOR_HOME, CURSOR_HIDE, CURSOR_SHOW, CLEAR_SCREEN
from .errors import FatalResourceError

logger = logging.getLogger(__name__)

Bytes = Union[bytes, bytearray, memoryview]

READ_CHUNK = 1024


class Terminal(ABC):
    """Everything the game needs from a console.

    Entering the context switches input to unbuffered/no-echo and hides the
    cursor; leaving it undoes both on every exit path.
    """

    # Input follows msvcrt conventions: 0x00/0xE0 extended-key prefixes, bare Esc
    windows_console = False

    @abstractmethod
    def write_raw(self, data: Bytes) -> None:
        """Write all of ``data``; display errors are logged, never raised."""

    @abstractmethod
    def read_available(self) -> bytes:
        """Return every pending input byte without blocking (b"" if none)."""

    @abstractmethod
    def wait_for_key(self) -> bytes:
        """Block until at least one key arrives and return what was read."""

    @abstractmethod
    def enable_unbuffered_input(self) -> None:
        ...

    @abstractmethod
    def restore_input_mode(self) -> None:
        ...

    def hide_cursor(self) -> None:
        self.write_raw(CURSOR_HIDE)

    def show_cursor(self) -> None:
        self.write_raw(CURSOR_SHOW)

    def move_cursor_to_origin(self) -> None:
        self.write_raw(CURSOR_HOME)

    def clear_screen(self) -> None:
        self.write_raw(CLEAR_SCREEN + CURSOR_HOME)

    def write_text(self, text: str) -> None:
        self.write_raw(text.encode("utf-8"))

    def __enter__(self) -> "Terminal":
        self.enable_unbuffered_input()
        try:
            self.hide_cursor()
        except BaseException:
            self.restore_input_mode()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.show_cursor()
        finally:
            self.restore_input_mode()


def write_all(fd: int, data: Bytes) -> bool:
    """Write ``data`` to ``fd`` until done, retrying interrupted and partial writes.

    Returns False when a non-interrupt error abandons the write.
    """
    view = memoryview(data).cast("B")
    while view:
        try:
            written = os.write(fd, view)
        except InterruptedError:
            continue
        except OSError as exc:
            logger.warning("display write dropped with %d bytes left: %s", len(view), exc)
            return False
        view = view[written:]
    return True


class PosixTerminal(Terminal):
    def __init__(self, stdin_fd: Optional[int] = None, stdout_fd: Optional[int] = None):
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._saved_attrs = None

    def enable_unbuffered_input(self) -> None:
        import termios

        try:
            attrs = termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            raise FatalResourceError(f"Standard input is not a terminal: {exc}") from exc
        self._saved_attrs = attrs
        raw = termios.tcgetattr(self.stdin_fd)
        raw[3] &= ~(termios.ECHO | termios.ICANON)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 0
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw)

    def restore_input_mode(self) -> None:
        import termios

        if self._saved_attrs is None:
            return
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_attrs)
        self._saved_attrs = None

    def _pending(self, timeout: Optional[float]) -> bool:
        import select

        try:
            readable, _, _ = select.select([self.stdin_fd], [], [], timeout)
        except InterruptedError:
            return False
        return bool(readable)

    def read_available(self) -> bytes:
        chunks = []
        while self._pending(0):
            data = os.read(self.stdin_fd, READ_CHUNK)
            if not data:
                break
            chunks.append(data)
        return b"".join(chunks)

    def wait_for_key(self) -> bytes:
        while True:
            if self._pending(None):
                data = self.read_available()
                if data:
                    return data

    def write_raw(self, data: Bytes) -> None:
        write_all(self.stdout_fd, data)


class WindowsTerminal(Terminal):
    POLL_INTERVAL = 0.01
    windows_console = True

    def __init__(self):
        import msvcrt

        self._msvcrt = msvcrt
        try:
            self.stdout_fd = sys.stdout.fileno()
        except (AttributeError, OSError) as exc:
            raise FatalResourceError(f"Failed to get console handle: {exc}") from exc

    def enable_unbuffered_input(self) -> None:
        # getch already reads unbuffered without echo; this turns on ANSI processing
        os.system("")

    def restore_input_mode(self) -> None:
        # Drop keys typed during the session so they don't leak into the shell
        while self._msvcrt.kbhit():
            self._msvcrt.getch()

    def read_available(self) -> bytes:
        chunks = []
        while self._msvcrt.kbhit():
            chunks.append(self._msvcrt.getch())
        return b"".join(chunks)

    def wait_for_key(self) -> bytes:
        while not self._msvcrt.kbhit():
            time.sleep(self.POLL_INTERVAL)
        return self.read_available()

    def write_raw(self, data: Bytes) -> None:
        write_all(self.stdout_fd, data)


class MemoryTerminal(Terminal):
    """Scripted terminal for tests and headless runs.

    Each ``read_available`` call consumes the next queued input chunk; every
    ``write_raw`` call is recorded separately in ``writes``.
    """

    def __init__(self, inputs=(), windows_console: bool = False):
        self.inputs: list[bytes] = list(inputs)
        self.windows_console = windows_console
        self.writes: list[bytes] = []
        self.events: list[str] = []
        self.input_enabled = False
        self.cursor_visible = True

    def feed(self, *chunks: bytes) -> None:
        self.inputs.extend(chunks)

    @property
    def output(self) -> bytes:
        return b"".join(self.writes)

    def write_raw(self, data: Bytes) -> None:
        self.writes.append(bytes(data))

    def read_available(self) -> bytes:
        if not self.inputs:
            return b""
        return self.inputs.pop(0)

    def wait_for_key(self) -> bytes:
        self.events.append("wait_for_key")
        return self.read_available() or b"\n"

    def enable_unbuffered_input(self) -> None:
        self.events.append("enable_unbuffered_input")
        self.input_enabled = True

    def restore_input_mode(self) -> None:
        self.events.append("restore_input_mode")
        self.input_enabled = False

    def hide_cursor(self) -> None:
        self.events.append("hide_cursor")
        self.cursor_visible = False
        super().hide_cursor()

    def show_cursor(self) -> None:
        self.events.append("show_cursor")
        self.cursor_visible = True
        super().show_cursor()


def open_terminal() -> Terminal:
    if os.name == "nt":
        return WindowsTerminal()
    return PosixTerminal()
