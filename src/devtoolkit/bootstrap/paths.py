"""Locations under the devtoolkit home directory.

The home directory defaults to ``~/.devtoolkit`` and can be moved with the
``DEVTOOLKIT_HOME`` environment variable::

    ~/.devtoolkit/
        config/config.yml   global configuration layer
        logs/devtoolkit.log log file (when logging.file is enabled)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOME_DIR_NAME = ".devtoolkit"
DEVTOOLKIT_HOME_ENV = "DEVTOOLKIT_HOME"

GLOBAL_CONFIG_NAME = "config.yml"
LOG_FILE_NAME = "devtoolkit.log"


def get_devtoolkit_home() -> Path:
    """Return ``$DEVTOOLKIT_HOME`` if set, else ``~/.devtoolkit``."""
    override = os.environ.get(DEVTOOLKIT_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass(frozen=True)
class ToolkitPaths:
    """Resolved locations for one devtoolkit home."""

    home: Path

    @classmethod
    def default(cls) -> "ToolkitPaths":
        return cls(get_devtoolkit_home())

    @property
    def config_dir(self) -> Path:
        return self.home / "config"

    @property
    def global_config(self) -> Path:
        return self.config_dir / GLOBAL_CONFIG_NAME

    @property
    def logs_dir(self) -> Path:
        return self.home / "logs"

    @property
    def log_file(self) -> Path:
        return self.logs_dir / LOG_FILE_NAME

    def ensure_directories(self) -> None:
        """Create the config and logs directories, and the home above them."""
        for directory in (self.config_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)
