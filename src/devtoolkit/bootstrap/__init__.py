"""
Bootstrap module for devtoolkit.

This module handles:
- Platform detection (OS + architecture + privileges)
- Home directory management (~/.devtoolkit/)
- Environment precondition checks run at orchestrator startup
"""

from devtoolkit.bootstrap.platform import get_platform_info, PlatformInfo
from devtoolkit.bootstrap.paths import get_devtoolkit_home, ToolkitPaths
from devtoolkit.bootstrap.preconditions import (
    PreconditionCheck,
    PreconditionReport,
    PreconditionValidator,
)

__all__ = [
    "get_platform_info",
    "PlatformInfo",
    "get_devtoolkit_home",
    "ToolkitPaths",
    "PreconditionCheck",
    "PreconditionReport",
    "PreconditionValidator",
]
