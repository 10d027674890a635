"""
Parser for todo list files.

Main API:
- parse_file(path, name) -> Document
- write_file(document, path) -> None

Grammar (one construct per line, leading/trailing whitespace ignored):
- "* [ ] text"           open todo
- "* [x] text"           completed todo ("X" accepted)
- "= / == / === text"    headers, levels 1-3
- "* text"               bullet
- empty line             blank
- anything else          free text
"""

import logging
from pathlib import Path
from typing import Optional

from .errors import StorageError
from .models import (
    BULLET_PREFIX,
    HEADER_PREFIXES,
    OPEN_CHECKBOX,
    Document,
    Line,
    LineKind,
    format_document,
)

log = logging.getLogger(__name__)

DONE_PREFIXES = ("* [x]", "* [X]")

# Longest header marker first so "=== " is not read as "= "
HEADER_ORDER = (LineKind.HEADER3, LineKind.HEADER2, LineKind.HEADER1)


def classify_line(raw: str) -> Line:
    """
    Classify a single line of a list file.

    Never fails: anything that does not match a structural prefix is free text.

    Args:
        raw: Line as read from the file (terminator optional)

    Returns:
        Line record
    """
    stripped = raw.strip()

    if stripped.startswith(OPEN_CHECKBOX):
        return Line(stripped[len(OPEN_CHECKBOX):].strip(), LineKind.TODO, completed=False)

    for prefix in DONE_PREFIXES:
        if stripped.startswith(prefix):
            return Line(stripped[len(prefix):].strip(), LineKind.TODO, completed=True)

    for kind in HEADER_ORDER:
        prefix = HEADER_PREFIXES[kind]
        if stripped.startswith(prefix):
            return Line(stripped[len(prefix):], kind)

    if stripped.startswith(BULLET_PREFIX):
        return Line(stripped[len(BULLET_PREFIX):], LineKind.BULLET)

    if not stripped:
        return Line("", LineKind.BLANK)

    return Line(stripped, LineKind.TEXT)


def parse_content(content: str, path: Optional[Path] = None, name: str = "") -> Document:
    """
    Parse list content into a Document.

    Args:
        content: File content
        path: Path the content came from (optional, for Document metadata)
        name: Display name of the list

    Returns:
        Document with one line record per input line
    """
    raw_lines = content.split('\n')

    # A trailing newline terminates the last line, it does not start a new one
    if raw_lines and raw_lines[-1] == '':
        raw_lines.pop()

    lines = [classify_line(raw) for raw in raw_lines]
    return Document(lines=lines, path=path, name=name)


def parse_file(path: Path, name: Optional[str] = None) -> Document:
    """
    Parse a list file into a Document.

    A missing file is an empty list, not an error.

    Args:
        path: Path to the list file
        name: Display name (defaults to the file name)

    Returns:
        Parsed Document

    Raises:
        StorageError: if the file exists but cannot be read
    """
    path = Path(path)
    name = name if name is not None else path.name

    try:
        content = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        log.debug("List %s does not exist yet, starting empty", path)
        return Document(lines=[], path=path, name=name)
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError("read", path, exc) from exc

    document = parse_content(content, path, name)
    incomplete, complete = document.counts()
    log.debug(
        "Parsed %s: %d line(s), %d open, %d done",
        path, len(document), incomplete, complete,
    )
    return document


def serialize(document: Document) -> str:
    """
    Serialize a Document back into list syntax.

    Every record becomes exactly one newline-terminated line.

    Args:
        document: Document to serialize

    Returns:
        File content
    """
    return format_document(document)


def write_file(document: Document, path: Optional[Path] = None) -> None:
    """
    Write a Document back to disk, replacing the whole file.

    Args:
        document: Document to write
        path: Target path (defaults to document.path)

    Raises:
        StorageError: if the file cannot be written
    """
    target = Path(path) if path is not None else document.path
    if target is None:
        raise ValueError("Document has no path to write to")

    try:
        target.write_text(serialize(document), encoding='utf-8')
    except OSError as exc:
        raise StorageError("write", target, exc) from exc

    log.debug("Saved %d line(s) to %s", len(document), target)
