"""Game loop, session lifecycle and console entry point."""

import logging
import sys
import time
from enum import Enum
from typing import Callable, Optional

from pydantic import ValidationError

from .config import GameOptions, configure_logging, load_options
from .constants import TITLE, CONTROLS_HINT, START_PROMPT, EXIT_PROMPT, GAME_OVER_FORMAT
from .controls import ChangeDirection, InputController, Signal
from .errors import FatalResourceError
from .game import GameState, new_game, tick
from .render import FrameBuffer
from .terminal import Terminal, open_terminal

logger = logging.getLogger(__name__)


class LoopState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameLoop:
    """Drives one session: poll input, tick, render, sleep the rest of the tick."""

    def __init__(
        self,
        terminal: Terminal,
        options: GameOptions,
        state: Optional[GameState] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        max_ticks: Optional[int] = None,
    ):
        self.terminal = terminal
        self.options = options
        self.state = state if state is not None else new_game(options)
        self.controls = InputController(terminal)
        self.buffer = FrameBuffer(self.state.grid)
        self.clock = clock
        self.sleep = sleep
        self.max_ticks = max_ticks
        self.loop_state = LoopState.NOT_STARTED
        self.quit_requested = False
        self.frames = 0

    @property
    def paused(self) -> bool:
        return self.loop_state is LoopState.PAUSED

    def effective_interval(self) -> float:
        """Seconds per tick, stretched while moving vertically if shaping is on."""
        interval = self.state.interval_ms
        if self.state.direction.is_vertical:
            interval *= self.options.vertical_slowdown
        return interval / 1000.0

    def draw(self) -> None:
        self.buffer.draw(self.state, paused=self.paused)
        self.buffer.flush(self.terminal)
        self.frames += 1

    def step(self) -> None:
        """One loop iteration, minus the sleep."""
        cmd = self.controls.poll(self.state.direction)
        requested = None
        if cmd is Signal.QUIT:
            self.quit_requested = True
            self.loop_state = LoopState.GAME_OVER
            return
        if cmd is Signal.TOGGLE_PAUSE:
            self.loop_state = LoopState.RUNNING if self.paused else LoopState.PAUSED
            logger.info("session %s", "paused" if self.paused else "resumed")
        elif isinstance(cmd, ChangeDirection) and not self.paused:
            requested = cmd.direction

        if not self.paused:
            tick(self.state, requested)
            if not self.state.alive:
                self.loop_state = LoopState.GAME_OVER
                return
        self.draw()

    def run(self) -> GameState:
        self.loop_state = LoopState.RUNNING
        self.draw()
        while self.loop_state is not LoopState.GAME_OVER:
            started = self.clock()
            self.step()
            if self.loop_state is LoopState.GAME_OVER:
                break
            if self.max_ticks is not None and self.state.ticks >= self.max_ticks:
                break
            elapsed = self.clock() - started
            self.sleep(max(0.0, self.effective_interval() - elapsed))

        # Final frame reflects the terminal state
        self.draw()
        return self.state


def run_session(terminal: Terminal, options: GameOptions, **loop_kwargs) -> GameState:
    """Intro prompt, one game, summary and exit prompt on an already-acquired terminal."""
    loop = GameLoop(terminal, options, **loop_kwargs)

    terminal.clear_screen()
    terminal.write_text(f"{TITLE}\n{CONTROLS_HINT}\n{START_PROMPT}")
    terminal.wait_for_key()
    terminal.clear_screen()

    logger.info(
        "session started: %dx%d wrap=%s seed=%s",
        options.width, options.height, options.wrap, options.seed,
    )
    state = loop.run()
    logger.info(
        "session ended (%s): score=%d length=%d ticks=%d",
        "quit" if loop.quit_requested else state.status.value,
        state.score, state.length, state.ticks,
    )

    summary = GAME_OVER_FORMAT.format(score=state.score, length=state.length)
    terminal.write_text(f"\n{summary}\n{EXIT_PROMPT}\n")
    terminal.wait_for_key()
    return state


def main(terminal_factory: Callable[[], Terminal] = open_terminal) -> int:
    try:
        options = load_options()
    except ValidationError as exc:
        print(f"Invalid configuration:\n{exc}", file=sys.stderr)
        return 2
    try:
        configure_logging(options)
    except OSError as exc:
        print(f"Invalid configuration: cannot open log file: {exc}", file=sys.stderr)
        return 2

    try:
        with terminal_factory() as terminal:
            run_session(terminal, options)
    except FatalResourceError as exc:
        logger.error("fatal: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
