"""Configuration for parley.

Centralizes environment lookups and default values.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field


class LogLevel:
    """Levels accepted by PARLEY_LOG_LEVEL, as stdlib logging numbers."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _by_name = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def from_string(cls, value: str | None) -> int:
        """Look up a level by name; unset or unknown names give INFO."""
        if not value:
            return cls.INFO
        return cls._by_name.get(value.strip().lower(), cls.INFO)


# Log output configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Storage backends
STORAGE_FILE = "file"
STORAGE_MEMORY = "memory"

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


def parse_bool(value: str | None, default: bool) -> bool:
    """Interpret an environment flag; unset or blank gives default.

    Raises:
        ValueError: If the value is not a recognizable boolean
    """
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean flag value: {value}")


class Settings(BaseModel):
    """Effective application settings."""

    data_dir: Path = Field(
        default=Path("."),
        description="Directory holding api_list.json and sessions.json"
    )
    storage_backend: str = Field(default=STORAGE_FILE, description="'file' or 'memory'")
    log_level: int = Field(default=LogLevel.INFO, description="Numeric logging level")
    replay_system_messages: bool = Field(
        default=True,
        description="Send earlier System messages to the API as assistant turns"
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Environment variables:
            PARLEY_DATA_DIR: Data directory (default: current directory)
            PARLEY_STORAGE: Storage backend, 'file' or 'memory' (default: file)
            PARLEY_LOG_LEVEL: debug, info, warning or error (default: info)
            PARLEY_REPLAY_SYSTEM_MESSAGES: true/false (default: true)

        Raises:
            ValueError: If a boolean flag cannot be parsed
        """
        return cls(
            data_dir=Path(os.getenv("PARLEY_DATA_DIR", ".")).expanduser(),
            storage_backend=os.getenv("PARLEY_STORAGE", STORAGE_FILE).strip().lower(),
            log_level=LogLevel.from_string(os.getenv("PARLEY_LOG_LEVEL")),
            replay_system_messages=parse_bool(os.getenv("PARLEY_REPLAY_SYSTEM_MESSAGES"), True),
        )
