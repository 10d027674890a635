"""
todolist - plain-text todo lists with an interactive terminal view.

Main API:
    from todolist import parse_file, write_file, Selection

    # Parse a list
    document = parse_file(Path("~/todos/default.adoc").expanduser())

    # Toggle the first todo
    selection = Selection(document)
    selection.toggle_current()

    # Write back
    write_file(document)
"""

from .errors import ConfigError, StorageError, TerminalError, TodoError
from .models import (
    Document,
    Line,
    LineKind,
    format_checkbox,
    format_document,
    format_line,
)
from .navigation import Selection
from .parser import (
    classify_line,
    parse_content,
    parse_file,
    serialize,
    write_file,
)
from .session import Action, Session, SessionState

__all__ = [
    # Models
    'Document',
    'Line',
    'LineKind',
    # Main API
    'parse_file',
    'write_file',
    'serialize',
    # Interactive state
    'Selection',
    'Session',
    'SessionState',
    'Action',
    # Errors
    'TodoError',
    'StorageError',
    'TerminalError',
    'ConfigError',
    # Utilities
    'classify_line',
    'parse_content',
    'format_checkbox',
    'format_line',
    'format_document',
]
