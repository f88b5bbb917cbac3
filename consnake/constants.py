"""Game constants."""

GRID_W, GRID_H = 40, 20
INITIAL_LENGTH = 4

BASE_INTERVAL_MS = 120
MIN_INTERVAL_MS = 40
INTERVAL_STEP_MS = 2
ITEM_REWARD = 10

# Random draws before item placement falls back to a linear scan
MAX_PLACEMENT_ATTEMPTS = 64

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

BORDER_CHAR = "#"
ITEM_CHAR = "*"
HEAD_CHAR = "O"
BODY_CHAR = "o"
EMPTY_CHAR = " "

STATUS_FORMAT = "Score: {score}    Length: {length}    Speed(ms/frame): {interval}"
CONTROLS_HINT = "Controls: Arrow keys or WASD. Space/'p' to pause, 'q' to quit."
PAUSED_SUFFIX = " [PAUSED]"
# Status lines are padded to at least this width so shorter text overwrites longer
STATUS_MIN_WIDTH = 72

TITLE = "== Console Snake =="
START_PROMPT = "Press any key to start..."
EXIT_PROMPT = "Press any key to exit..."
GAME_OVER_FORMAT = "Game Over! Final score: {score}   Final length: {length}"

# ANSI control sequences
CURSOR_HOME = b"\x1b[H"
CURSOR_HIDE = b"\x1b[?25l"
CURSOR_SHOW = b"\x1b[?25h"
CLEAR_SCREEN = b"\x1b[2J"
