"""Exceptions raised by todolist."""

from pathlib import Path
from typing import Optional


class TodoError(Exception):
    """Base class for all todolist errors."""


class StorageError(TodoError):
    """Reading or writing a file failed."""

    def __init__(self, action: str, path: Path, reason: Optional[BaseException] = None):
        self.action = action
        self.path = path
        self.reason = reason
        message = f"Failed to {action} {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class TerminalError(TodoError):
    """Entering or leaving an interactive terminal mode failed."""


class ConfigError(TodoError):
    """The config file could not be decoded or validated."""
