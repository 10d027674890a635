"""Curses front end for the interactive session."""

import curses
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .errors import TerminalError
from .fireworks import show_fireworks
from .models import Line, LineKind
from .parser import parse_file
from .session import Action, Session

log = logging.getLogger(__name__)

KEY_HINT = "[j/k] move  [Space/Enter] toggle  [g/G] top/bottom  [q] quit"

KEYMAP = {
    ord("q"): Action.QUIT,
    ord("j"): Action.DOWN,
    curses.KEY_DOWN: Action.DOWN,
    ord("k"): Action.UP,
    curses.KEY_UP: Action.UP,
    ord("g"): Action.TOP,
    ord("G"): Action.BOTTOM,
    ord(" "): Action.TOGGLE,
    10: Action.TOGGLE,
    13: Action.TOGGLE,
    curses.KEY_ENTER: Action.TOGGLE,
}

TITLE_HEIGHT = 3
STATUS_HEIGHT = 1


def key_to_action(ch: int) -> Optional[Action]:
    """Translate a curses key code; unbound keys map to None."""
    return KEYMAP.get(ch)


def line_marker(line: Line) -> str:
    """Prefix drawn in front of a line in the body."""
    if line.kind is LineKind.TODO:
        return "☑ " if line.completed else "☐ "
    if line.kind is LineKind.BULLET:
        return "  • "
    return ""


class CursesScreen:
    """Renders a Session on a curses window and reads key presses."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.scroll = 0
        # Ctrl-C and friends arrive as plain keys instead of signals
        curses.raw()
        curses.curs_set(0)
        self.stdscr.keypad(True)

        if curses.has_colors():
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_CYAN, -1)
            curses.init_pair(2, curses.COLOR_BLUE, -1)
            curses.init_pair(3, curses.COLOR_MAGENTA, -1)
            curses.init_pair(4, curses.COLOR_GREEN, -1)
            curses.init_pair(5, curses.COLOR_YELLOW, -1)
            curses.init_pair(6, curses.COLOR_WHITE, curses.COLOR_BLUE)
            self.styles = {
                LineKind.HEADER1: curses.color_pair(1) | curses.A_BOLD,
                LineKind.HEADER2: curses.color_pair(2) | curses.A_BOLD,
                LineKind.HEADER3: curses.color_pair(3) | curses.A_BOLD,
            }
            self.COL_TITLE = curses.color_pair(1) | curses.A_BOLD
            self.COL_DONE = curses.color_pair(4)
            self.COL_OPEN = curses.color_pair(5)
            self.COL_STATUS = curses.color_pair(6)
        else:
            self.styles = {
                LineKind.HEADER1: curses.A_BOLD | curses.A_UNDERLINE,
                LineKind.HEADER2: curses.A_BOLD,
                LineKind.HEADER3: curses.A_BOLD,
            }
            self.COL_TITLE = curses.A_BOLD
            self.COL_DONE = curses.A_NORMAL
            self.COL_OPEN = curses.A_NORMAL
            self.COL_STATUS = curses.A_REVERSE

    def _line_attrs(self, line: Line) -> int:
        if line.kind is LineKind.TODO:
            return curses.A_DIM | self.COL_DONE if line.completed else self.COL_OPEN
        if line.kind is LineKind.TEXT:
            return curses.A_DIM
        return self.styles.get(line.kind, curses.A_NORMAL)

    def _put(self, y: int, x: int, text: str, attrs: int = curses.A_NORMAL) -> None:
        height, width = self.stdscr.getmaxyx()
        if y >= height or x >= width:
            return
        try:
            self.stdscr.addnstr(y, x, text, width - x, attrs)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            pass

    def render(self, session: Session) -> None:
        """Draw title, body and status line."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()

        # Title
        inner = max(width - 2, 0)
        border = "─" * inner
        title = f"  {session.name}"[:inner].ljust(inner)
        self._put(0, 0, f"┌{border}┐", self.COL_TITLE)
        self._put(1, 0, f"│{title}│", self.COL_TITLE)
        self._put(2, 0, f"└{border}┘", self.COL_TITLE)

        # Body
        top = TITLE_HEIGHT
        body_h = height - TITLE_HEIGHT - STATUS_HEIGHT
        lines = session.document.lines
        selected = session.selection.index
        if body_h > 0:
            if selected < self.scroll:
                self.scroll = selected
            elif selected >= self.scroll + body_h:
                self.scroll = selected - body_h + 1
            self.scroll = max(0, min(self.scroll, max(len(lines) - body_h, 0)))

            for row, idx in enumerate(range(self.scroll, min(self.scroll + body_h, len(lines)))):
                line = lines[idx]
                attrs = self._line_attrs(line)
                if idx == selected:
                    attrs |= curses.A_REVERSE | curses.A_BOLD
                self._put(top + row, 0, f"{line_marker(line)}{line.text}", attrs)

        # Status
        incomplete, complete = session.document.counts()
        status = f" {incomplete} incomplete  {complete} complete  │  {KEY_HINT} "
        self._put(height - 1, 0, status.ljust(width), self.COL_STATUS)

        self.stdscr.refresh()

    def read_action(self) -> Optional[Action]:
        return key_to_action(self.stdscr.getch())

    @contextmanager
    def suspended(self):
        """
        Leave curses mode for the duration of the block.

        Curses mode is reacquired on exit even if the block raises.
        """
        try:
            curses.def_prog_mode()
            curses.endwin()
        except curses.error as exc:
            raise TerminalError(f"Cannot leave interactive mode: {exc}") from exc

        try:
            yield
        finally:
            try:
                curses.reset_prog_mode()
                curses.curs_set(0)
                self.stdscr.clear()
                self.stdscr.refresh()
            except curses.error as exc:
                raise TerminalError(f"Cannot re-enter interactive mode: {exc}") from exc

    def celebrate(self) -> None:
        show_fireworks()


@contextmanager
def deferred_console_logging():
    """
    Hold back log records bound for the console while curses owns the screen.

    Root handlers writing to stderr or stdout are swapped for memory buffers
    and the buffered records are written to them on exit.
    """
    root = logging.getLogger()
    swapped = []
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler) or not isinstance(handler, logging.StreamHandler):
            continue
        if handler.stream not in (sys.stderr, sys.stdout):
            continue
        buffer = logging.handlers.MemoryHandler(
            capacity=10_000, flushLevel=logging.CRITICAL + 1, target=handler,
        )
        root.removeHandler(handler)
        root.addHandler(buffer)
        swapped.append((handler, buffer))

    try:
        yield
    finally:
        for handler, buffer in swapped:
            root.removeHandler(buffer)
            root.addHandler(handler)
            buffer.close()


def run_session(path: Path, name: str) -> None:
    """
    Run the interactive view on a list file until the user quits.

    The terminal is in raw mode, so Ctrl-C is an ignored key rather than an
    interrupt. It is restored on every exit path, including errors. Console
    log output is deferred until then.

    Args:
        path: List file
        name: Display name for the title bar

    Raises:
        StorageError: if the list cannot be read or saved
        TerminalError: if the terminal cannot be set up
    """
    session = Session(parse_file(path, name))

    def _main(stdscr):
        session.run(CursesScreen(stdscr))

    log.debug("Starting interactive session on %s", path)
    try:
        with deferred_console_logging():
            curses.wrapper(_main)
    except curses.error as exc:
        raise TerminalError(f"Terminal error: {exc}") from exc
