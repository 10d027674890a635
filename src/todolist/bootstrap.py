"""Make sure the todo directory and list files exist before commands run."""

import logging
from pathlib import Path
from typing import List

from .config import Config
from .errors import StorageError

log = logging.getLogger(__name__)


def ensure_todo_dir(config: Config) -> Path:
    """Create the todo directory (and parents) if it is missing."""
    todo_dir = config.todo_dir
    if not todo_dir.exists():
        try:
            todo_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError("create directory", todo_dir, exc) from exc
        log.debug("Created todo directory %s", todo_dir)
    return todo_dir


def ensure_list_exists(path: Path) -> Path:
    """Create an empty list file if it is missing."""
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as exc:
            raise StorageError("create list", path, exc) from exc
        log.debug("Created empty list %s", path)
    return path


def bootstrap(config: Config) -> Path:
    """
    Prepare the todo directory and the active list.

    Returns:
        Path of the active list file
    """
    ensure_todo_dir(config)
    return ensure_list_exists(config.list_path())


def available_lists(config: Config) -> List[str]:
    """Sorted file names of all lists in the todo directory."""
    todo_dir = config.todo_dir
    if not todo_dir.is_dir():
        return []
    try:
        return sorted(entry.name for entry in todo_dir.iterdir() if entry.is_file())
    except OSError as exc:
        raise StorageError("read directory", todo_dir, exc) from exc
