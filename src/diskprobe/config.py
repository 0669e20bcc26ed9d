"""User settings stored in ~/.diskprobe/config.json."""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(os.path.expanduser("~/.diskprobe"))
CONFIG_FILE = CONFIG_DIR / "config.json"


class Settings(BaseModel):
    """Defaults used by the CLI when an option is not given."""

    max_depth: int = Field(3, ge=0, description="Depth budget for deep scans")
    top_files_limit: int = Field(20, ge=0, description="Large files shown by scan")
    large_files_limit: int = Field(50, ge=0, description="Results returned by the large command")
    large_files_min_size_mb: int = Field(100, ge=0, description="Minimum size in MB (decimal) for the large command")


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not CONFIG_FILE.exists():
        return Settings()

    try:
        with open(CONFIG_FILE) as f:
            return Settings.model_validate(json.load(f))
    except (json.JSONDecodeError, OSError, ValidationError) as e:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, e)
        return Settings()


def save_settings(settings: Settings) -> bool:
    """Save settings to disk."""
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(settings.model_dump(), f, indent=2)
        return True
    except OSError as e:
        logger.warning("Could not save config %s: %s", CONFIG_FILE, e)
        return False


def update_setting(key: str, value: str | int) -> Settings:
    """
    Change one setting and persist it.

    Raises:
        KeyError: If ``key`` is not a known setting
        ValidationError: If ``value`` is not valid for ``key``
    """
    if key not in Settings.model_fields:
        raise KeyError(key)

    data = load_settings().model_dump()
    data[key] = value
    settings = Settings.model_validate(data)
    save_settings(settings)
    return settings
