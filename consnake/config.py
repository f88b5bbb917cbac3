"""Game options, environment loading and logging setup."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    GRID_W, GRID_H, INITIAL_LENGTH, BASE_INTERVAL_MS,
    MIN_INTERVAL_MS, INTERVAL_STEP_MS, ITEM_REWARD,
)

ENV_PREFIX = "SNAKE_"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class GameOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(default=GRID_W, ge=5, le=200)
    height: int = Field(default=GRID_H, ge=5, le=100)
    initial_length: int = Field(default=INITIAL_LENGTH, ge=1)
    # False: board edges are lethal walls. True: the snake re-enters on the opposite edge.
    wrap: bool = False
    base_interval_ms: int = Field(default=BASE_INTERVAL_MS, ge=1, le=5000)
    min_interval_ms: int = Field(default=MIN_INTERVAL_MS, ge=1, le=5000)
    interval_step_ms: int = Field(default=INTERVAL_STEP_MS, ge=0, le=1000)
    reward: int = Field(default=ITEM_REWARD, ge=0)
    # Interval multiplier while moving up or down; 1.0 disables the shaping.
    vertical_slowdown: float = Field(default=1.0, ge=1.0, le=4.0)
    seed: Optional[int] = None
    log_file: Optional[Path] = None
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def _validate_layout(self) -> "GameOptions":
        # The starting body extends left from the center column
        if self.initial_length > self.width // 2 + 1:
            raise ValueError(
                f"initial_length {self.initial_length} does not fit on a board {self.width} wide"
            )
        if self.min_interval_ms > self.base_interval_ms:
            raise ValueError("min_interval_ms must not exceed base_interval_ms")
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL,
        ):
            raise ValueError(f"unknown log level: {self.log_level!r}")
        return self


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`, fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


def options_from_env(environ: Mapping[str, str]) -> GameOptions:
    """Build options from ``SNAKE_*`` variables; unset or blank ones keep their defaults."""
    values = {}
    for name in GameOptions.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return GameOptions.model_validate(values)


def load_options() -> GameOptions:
    load_env()
    return options_from_env(os.environ)


def configure_logging(options: GameOptions) -> None:
    # stdout carries the game display, so records only ever go to a file
    root = logging.getLogger("consnake")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = False
    if options.log_file is None:
        root.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(options.log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(options.log_level.upper())
