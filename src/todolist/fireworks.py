"""
Celebration shown when the last open todo of a list is completed.

The animation is drawn on the normal (non-curses) screen with rich, then
blocks until a key is pressed. It never touches the document.
"""

import logging
import os
import sys
import termios
import time
import tty
from typing import Callable, Optional

from rich.console import Console
from rich.control import Control

from .errors import TerminalError

log = logging.getLogger(__name__)

EXPLOSION_FRAMES = [
    ["        *        ", "       ***       ", "      *****      ", "     *******     ", "    *********    "],
    ["    *       *    ", "   **       **   ", "  ***       ***  ", " ****       **** ", "*****       *****"],
    ["  *           *  ", " * *         * * ", "*   *       *   *", " *   *     *   * ", "  *   *   *   *  "],
    [" *             * ", "*               *", "                 ", "*               *", " *             * "],
]
FRAME_WIDTH = 17
FRAME_HEIGHT = 5

COLORS = ["bright_red", "bright_yellow", "bright_green", "bright_cyan", "bright_magenta"]
POSITIONS = [(10, 8), (50, 6), (30, 10), (60, 12), (20, 14)]

ROUNDS = 3
FRAME_DELAY = 0.15
SCREEN_WIDTH = 80

BANNER = "🎉  ALL TODOS COMPLETE!  🎉"
BANNER_ROW = 2
PROMPT = "Press any key to continue..."
PROMPT_ROW = 20


def wait_for_key(stream=None) -> None:
    """
    Block until a single key is pressed on the terminal.

    The terminal is put in cbreak mode for the read and always restored.

    Raises:
        TerminalError: if the terminal settings cannot be changed
    """
    stream = stream or sys.stdin
    try:
        fd = stream.fileno()
        saved = termios.tcgetattr(fd)
    except (OSError, ValueError, termios.error) as exc:
        raise TerminalError(f"Cannot read a key from the terminal: {exc}") from exc

    try:
        tty.setcbreak(fd)
        os.read(fd, 1)
    except (OSError, termios.error) as exc:
        raise TerminalError(f"Cannot read a key from the terminal: {exc}") from exc
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def is_visible(round_idx: int, position_idx: int, frame_idx: int) -> bool:
    """Fireworks are staggered: later positions join in later frames and rounds."""
    return (round_idx * len(POSITIONS) + position_idx) // 2 <= frame_idx


def _centered(text: str) -> int:
    return max(SCREEN_WIDTH - len(text), 0) // 2


def _draw(console: Console, x: int, y: int, text: str, style: str = "") -> None:
    console.control(Control.move_to(x, y))
    console.print(text, style=style, end="", soft_wrap=True, highlight=False, markup=False)


def show_fireworks(
    console: Optional[Console] = None,
    sleep: Callable[[float], None] = time.sleep,
    wait: Callable[[], None] = wait_for_key,
) -> None:
    """
    Run the celebration animation to completion.

    Args:
        console: Console to draw on (default: stdout)
        sleep: Delay function between frames
        wait: Blocks until the user presses a key
    """
    console = console or Console(highlight=False)
    log.debug("Starting celebration")

    console.control(Control.clear(), Control.home(), Control.show_cursor(False))
    _draw(console, _centered(BANNER), BANNER_ROW, BANNER, "bold bright_green")

    blank = " " * FRAME_WIDTH
    for round_idx in range(ROUNDS):
        for frame_idx, frame in enumerate(EXPLOSION_FRAMES):
            for position_idx, (x, y) in enumerate(POSITIONS):
                if not is_visible(round_idx, position_idx, frame_idx):
                    continue
                color = COLORS[position_idx % len(COLORS)]
                for offset, row in enumerate(frame):
                    _draw(console, x, y + offset, row, color)

            sleep(FRAME_DELAY)

            # Erase every firework before the next frame
            for x, y in POSITIONS:
                for offset in range(FRAME_HEIGHT):
                    _draw(console, x, y + offset, blank)

    _draw(console, _centered(PROMPT), PROMPT_ROW, PROMPT, "dim")
    try:
        wait()
    finally:
        console.control(Control.clear(), Control.home(), Control.show_cursor(True))

    log.debug("Celebration finished")
