"""
Configuration for todolist.

Stored as TOML (default ~/.config/todo/config.toml):

    [todo]
    active_list = "default"
    list_extension = "adoc"
    path = "~/todos"

    [editor]
    command = "nvim"

The loaded Config is passed explicitly to everything that needs a path.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError, StorageError

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TODO_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "todo" / "config.toml"


class TodoSettings(BaseModel):
    active_list: str = "default"
    list_extension: str = "adoc"
    path: str = "~/todos"


class EditorSettings(BaseModel):
    command: str = "nvim"


class Config(BaseModel):
    """Resolved configuration."""

    todo: TodoSettings = Field(default_factory=TodoSettings)
    editor: EditorSettings = Field(default_factory=EditorSettings)

    @property
    def todo_dir(self) -> Path:
        """Directory holding the list files, with ~ expanded."""
        return Path(self.todo.path).expanduser()

    def list_file_name(self, name: Optional[str] = None) -> str:
        """
        File name of a list.

        Args:
            name: List name (defaults to the active list)

        Returns:
            File name such as "default.adoc"
        """
        list_name = normalize_list_name(name) if name is not None else self.todo.active_list
        return f"{list_name}.{self.todo.list_extension}"

    def list_path(self, name: Optional[str] = None) -> Path:
        """Full path of a list file (defaults to the active list)."""
        return self.todo_dir / self.list_file_name(name)


def normalize_list_name(name: str) -> str:
    """
    Drop everything from the first '.' onwards.

    "work.adoc" -> "work", "a.b.c" -> "a". Any suffix is discarded, even one
    that differs from the configured extension.
    """
    return name.split('.', 1)[0]


def default_config_path() -> Path:
    """Config location, honouring the TODO_CONFIG environment variable."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_FILE


def save_config(config: Config, path: Path) -> None:
    """
    Write the config as TOML.

    Raises:
        StorageError: if the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomli_w.dumps(config.model_dump()), encoding='utf-8')
    except OSError as exc:
        raise StorageError("write config", path, exc) from exc


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load the config, creating it with defaults if it does not exist.

    Args:
        path: Config file (default: default_config_path())

    Returns:
        Validated Config

    Raises:
        ConfigError: if the file is not valid TOML or has invalid values
        StorageError: if the file cannot be read or created
    """
    path = Path(path) if path is not None else default_config_path()

    if not path.exists():
        config = Config()
        save_config(config, path)
        log.debug("Created default config at %s", path)
        return config

    try:
        raw = tomllib.loads(path.read_text(encoding='utf-8'))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    except OSError as exc:
        raise StorageError("read config", path, exc) from exc

    try:
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    log.debug("Loaded config from %s", path)
    return config
