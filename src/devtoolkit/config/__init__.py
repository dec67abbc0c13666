"""Configuration loading for devtoolkit."""

from devtoolkit.config.loader import ConfigError, load_config
from devtoolkit.config.models import ToolkitConfig

__all__ = ["ConfigError", "ToolkitConfig", "load_config"]
