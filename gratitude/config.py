"""Configuration loading for Gratitude.

Settings live in a TOML file under ``~/.config/gratitude`` (or the directory
named by ``GRATITUDE_HOME``). Every key is optional; a missing file means
defaults throughout.
"""

import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import toml

from gratitude.errors import ConfigError

DEFAULT_LOG_LEVEL = "WARNING"


def get_config_dir() -> Path:
    """Return the configuration directory."""
    override = os.environ.get("GRATITUDE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "gratitude"


def get_config_path() -> Path:
    """Return the default config file path."""
    return get_config_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration.

    Args:
        config_path: Explicit config file. Defaults to ``get_config_path()``.

    Returns:
        Config dict, empty if no config file exists.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return {}
    try:
        return toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "journal": {
            "timezone": "",  # Empty uses the local zone
        },
        "storage": {
            "db_path": "",  # Empty uses <config dir>/gratitude.db
            "files_dir": "",  # Empty uses <config dir>/files
        },
        "logging": {
            "level": DEFAULT_LOG_LEVEL,
        },
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path


def get_db_path(config: dict) -> Path:
    """Database path from config, or the default."""
    configured = config.get("storage", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "gratitude.db"


def get_files_dir(config: dict) -> Path:
    """Directory that holds copies of space documents and images."""
    configured = config.get("storage", {}).get("files_dir")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "files"


def get_timezone(config: dict):
    """Timezone used to decide which calendar day a moment falls on.

    Returns:
        A ``ZoneInfo``, or None for the local zone.
    """
    name = config.get("journal", {}).get("timezone")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone '{name}'") from e


def get_log_level(config: dict) -> str:
    """Logging level name from config."""
    return str(config.get("logging", {}).get("level", DEFAULT_LOG_LEVEL)).upper()
