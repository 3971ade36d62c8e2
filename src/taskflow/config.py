"""Configuration defaults, env vars, and runtime options for taskflow."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


VERSION = "1.0.0"

DEFAULT_STORAGE_KEY = "taskflow-tasks"
DEFAULT_PREFERENCE_KEY = "darkMode"


def default_data_dir() -> Path:
    return Path.home() / ".taskflow"


@dataclass
class Config:
    """Runtime configuration; empty fields are filled from the environment."""

    # Storage
    data_dir: Path | str = ""
    storage_key: str = ""
    preference_key: str = DEFAULT_PREFERENCE_KEY

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.data_dir:
            env_dir = os.environ.get("TASKFLOW_DATA_DIR", "").strip()
            self.data_dir = Path(env_dir).expanduser() if env_dir else default_data_dir()
        else:
            self.data_dir = Path(self.data_dir).expanduser()
        if not self.storage_key:
            self.storage_key = (
                os.environ.get("TASKFLOW_STORAGE_KEY", "").strip()
                or DEFAULT_STORAGE_KEY
            )
