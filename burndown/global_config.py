"""Global configuration storage.

Stores the sprint axis settings and the data file location in
~/.burndown/config.json (or $BURNDOWN_HOME/config.json).
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .domain.task.burndown import DEFAULT_AXIS_DAYS
from .domain.types import DateAxis

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "BURNDOWN_HOME"


class SprintConfig(BaseModel):
    """User settings for the burndown axis and storage."""

    axis_start: Optional[date] = None  # None means "today"
    axis_days: int = Field(default=DEFAULT_AXIS_DAYS, ge=1)
    data_file: Optional[str] = None  # None means <config dir>/tasks.json

    def axis(self, today: date) -> DateAxis:
        """Resolve the configured axis against the current day."""
        return DateAxis(start=self.axis_start or today, days=self.axis_days)


def get_config_dir() -> Path:
    """Get the config directory, creating it if needed."""
    override = os.environ.get(HOME_ENV_VAR)
    config_dir = Path(override) if override else Path.home() / ".burndown"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_global_config() -> SprintConfig:
    """Load the configuration, falling back to defaults when unusable."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return SprintConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Ignoring unreadable config {config_file}: {e}")
    return SprintConfig()  # defaults


def save_global_config(config: SprintConfig) -> None:
    """Save the configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )


def get_data_file(config: SprintConfig) -> Path:
    """Where the task snapshot lives for this configuration."""
    if config.data_file:
        return Path(config.data_file).expanduser()
    return get_config_dir() / "tasks.json"
