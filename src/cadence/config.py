"""Configuration management for Cadence."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CADENCE_HOME = Path(os.environ.get("CADENCE_HOME", Path.home() / "cadence"))
CONFIG_FILE = CADENCE_HOME / "config" / "cadence.conf"
DATA_DIR = CADENCE_HOME / "data"


@dataclass
class Config:
    """Cadence configuration."""

    todos_file: str = ""
    default_list_id: str = "default"
    log_level: str = "WARNING"
    date_format: str = "%a, %b %d"

    @property
    def todos_path(self) -> Path:
        if self.todos_file:
            return Path(self.todos_file).expanduser()
        return DATA_DIR / "todos.json"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from cadence.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "todos_file":
                config.todos_file = value
            case "default_list_id":
                config.default_list_id = value or config.default_list_id
            case "log_level":
                level = value.upper()
                if level in logging.getLevelNamesMapping():
                    config.log_level = level
                else:
                    logger.warning(f"Unknown LOG_LEVEL {value!r}, keeping {config.log_level}")
            case "date_format":
                config.date_format = value or config.date_format
            case _:
                logger.debug(f"Ignoring unknown config key {key!r}")

    return config
