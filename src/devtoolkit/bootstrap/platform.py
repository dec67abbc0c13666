"""Platform detection for devtoolkit.

Detects OS, architecture, and privilege level for precondition checks and
platform-specific tool definitions.
"""

from __future__ import annotations

import ctypes
import os
import platform
from dataclasses import dataclass
from typing import Optional

# Supported operating systems (lowercase)
SUPPORTED_OS = frozenset({"darwin", "linux", "windows"})

# Supported architectures (normalized)
SUPPORTED_ARCH = frozenset({"amd64", "arm64", "386"})

# Architecture normalization map
_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "x86": "386",
    "i386": "386",
    "i686": "386",
}


def normalize_arch(machine: str) -> Optional[str]:
    """Normalize architecture string to standard form.

    Args:
        machine: Raw architecture string from platform.machine()

    Returns:
        Normalized architecture string or None if unknown.
    """
    return _ARCH_MAP.get(machine.lower())


def current_os() -> str:
    """Return the lowercase OS name without validating it."""
    return platform.system().lower()


def is_admin() -> bool:
    """Check whether the current process has administrator/root rights."""
    if os.name == "nt":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError):
            return False
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


@dataclass(frozen=True)
class PlatformInfo:
    """Information about the current platform.

    Attributes:
        os: Operating system (darwin, linux, windows, or the raw name).
        arch: CPU architecture (amd64, arm64, 386, or the raw machine name).
    """

    os: str
    arch: str

    @property
    def label(self) -> str:
        """Return the platform label, e.g. "windows-amd64"."""
        return f"{self.os}-{self.arch}"

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    def is_supported(self) -> bool:
        """Check if this platform is supported."""
        return self.os in SUPPORTED_OS and self.arch in SUPPORTED_ARCH


def get_platform_info() -> PlatformInfo:
    """Detect and return current platform information.

    Unknown values are reported as-is; use ``is_supported`` to validate.
    """
    machine = platform.machine()
    return PlatformInfo(
        os=current_os(),
        arch=normalize_arch(machine) or machine.lower(),
    )
