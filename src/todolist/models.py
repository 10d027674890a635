"""
Core data models for todo lists.

A list file is an ordered sequence of typed lines. The Line model captures
everything needed to reconstruct a line via format_line; no raw text is kept,
so the model IS the source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class LineKind(Enum):
    """Structural kind of a single line."""

    TODO = "todo"
    HEADER1 = "header1"
    HEADER2 = "header2"
    HEADER3 = "header3"
    BULLET = "bullet"
    TEXT = "text"
    BLANK = "blank"


# Structural prefixes written in front of the line text
HEADER_PREFIXES = {
    LineKind.HEADER1: "= ",
    LineKind.HEADER2: "== ",
    LineKind.HEADER3: "=== ",
}
BULLET_PREFIX = "* "
OPEN_CHECKBOX = "* [ ]"
DONE_CHECKBOX = "* [x]"


@dataclass
class Line:
    """One line of a list file."""

    text: str
    kind: LineKind = LineKind.TEXT
    completed: bool = False

    def __post_init__(self):
        # Only todo lines carry a completion state
        if self.kind is not LineKind.TODO:
            self.completed = False

    @property
    def is_todo(self) -> bool:
        return self.kind is LineKind.TODO

    def __str__(self) -> str:
        return format_line(self)


@dataclass
class Document:
    """Represents a parsed list file."""

    lines: List[Line] = field(default_factory=list)
    path: Optional[Path] = None
    name: str = ""

    def __len__(self) -> int:
        return len(self.lines)

    def todos(self) -> List[Line]:
        """All todo lines, in document order."""
        return [line for line in self.lines if line.is_todo]

    def counts(self) -> Tuple[int, int]:
        """
        Count todo lines by completion state.

        Returns:
            Tuple of (incomplete, complete)
        """
        incomplete = sum(1 for line in self.lines if line.is_todo and not line.completed)
        complete = sum(1 for line in self.lines if line.is_todo and line.completed)
        return incomplete, complete

    @property
    def has_todos(self) -> bool:
        return any(line.is_todo for line in self.lines)

    @property
    def has_incomplete(self) -> bool:
        return any(line.is_todo and not line.completed for line in self.lines)

    @property
    def all_complete(self) -> bool:
        """True if every todo is completed (vacuously true with no todos)."""
        return all(line.completed for line in self.lines if line.is_todo)

    def append_todo(self, text: str) -> Line:
        """
        Add a new open todo at the end of the document.

        Args:
            text: Todo text, a single line

        Returns:
            The appended line

        Raises:
            ValueError: if the text spans more than one line
        """
        text = text.strip()
        if len(text.splitlines()) > 1:
            raise ValueError(f"Todo text must be a single line: {text!r}")
        line = Line(text=text, kind=LineKind.TODO, completed=False)
        self.lines.append(line)
        return line

    def __str__(self) -> str:
        return format_document(self)


# Formatting functions

def format_checkbox(completed: bool) -> str:
    """
    Format completion state as a checkbox prefix.

    Args:
        completed: Whether the todo is done

    Returns:
        Checkbox prefix ("* [ ]" or "* [x]")
    """
    return DONE_CHECKBOX if completed else OPEN_CHECKBOX


def format_line(line: Line) -> str:
    """
    Format a line back into list syntax (without the line terminator).

    Args:
        line: Line to format

    Returns:
        Line text with its structural prefix
    """
    if line.kind is LineKind.TODO:
        return f"{format_checkbox(line.completed)} {line.text}"
    elif line.kind in HEADER_PREFIXES:
        return f"{HEADER_PREFIXES[line.kind]}{line.text}"
    elif line.kind is LineKind.BULLET:
        return f"{BULLET_PREFIX}{line.text}"
    elif line.kind is LineKind.BLANK:
        return ""
    else:
        return line.text


def format_document(document: Document) -> str:
    """
    Format a whole document, one newline-terminated line per record.

    Args:
        document: Document to format

    Returns:
        File content
    """
    return "".join(f"{format_line(line)}\n" for line in document.lines)
