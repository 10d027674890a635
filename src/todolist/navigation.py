"""
Selection state for the interactive view.

The selection only ever rests on todo lines while any exist. Every operation
is total: an empty document or one without todos leaves the index in range
and never raises.
"""

from .models import Document, Line


class Selection:
    """Tracks the current line of a Document."""

    def __init__(self, document: Document):
        self.document = document
        self.index = 0
        self.goto_first()

    @property
    def lines(self):
        return self.document.lines

    @property
    def current(self) -> Line | None:
        """The selected line, or None for an empty document."""
        if 0 <= self.index < len(self.lines):
            return self.lines[self.index]
        return None

    def next(self) -> None:
        """Move to the next todo, wrapping around at the end."""
        self._step(+1)

    def previous(self) -> None:
        """Move to the previous todo, wrapping around at the start."""
        self._step(-1)

    def _step(self, delta: int) -> None:
        count = len(self.lines)
        if count == 0:
            return

        start = self.index
        while True:
            self.index = (self.index + delta) % count
            # Back at the start means there is no other todo to land on
            if self.lines[self.index].is_todo or self.index == start:
                break

    def goto_first(self) -> None:
        """Jump to the first todo, or the first line if there is none."""
        self.index = next(
            (i for i, line in enumerate(self.lines) if line.is_todo),
            0,
        )

    def goto_last(self) -> None:
        """Jump to the last todo, or the last line if there is none."""
        last = max(len(self.lines) - 1, 0)
        self.index = next(
            (i for i in range(last, -1, -1) if self.lines and self.lines[i].is_todo),
            last,
        )

    def toggle_current(self) -> bool:
        """
        Flip the completion state of the selected line.

        Non-todo lines are left alone.

        Returns:
            True if a todo was toggled
        """
        line = self.current
        if line is None or not line.is_todo:
            return False
        line.completed = not line.completed
        return True
