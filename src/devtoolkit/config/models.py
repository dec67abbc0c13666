"""Typed configuration model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from devtoolkit.core.models import Argv, ToolDefinition, argv_text

DEFAULT_PACKAGE_MANAGERS = ["winget", "choco", "scoop", "brew", "apt-get", "dnf"]


@dataclass
class VerificationSettings:
    """Settings for detection and smoke testing."""

    threshold: float = 0.7
    timeout: float = 30.0
    install_timeout: float = 1800.0
    max_workers: int = 4
    sequential: bool = False
    version_lines: int = 1


@dataclass
class PreconditionSettings:
    """Environment requirements checked at orchestrator startup."""

    supported_os: List[str] = field(default_factory=lambda: ["darwin", "linux", "windows"])
    min_python: str = "3.9"
    require_admin: bool = False
    require_package_manager: bool = False


@dataclass
class LoggingSettings:
    """Log file settings."""

    file: bool = False


@dataclass
class ToolkitConfig:
    """Complete devtoolkit configuration."""

    verification: VerificationSettings = field(default_factory=VerificationSettings)
    preconditions: PreconditionSettings = field(default_factory=PreconditionSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    categories: Dict[str, List[str]] = field(default_factory=dict)
    tools: Dict[str, ToolDefinition] = field(default_factory=dict)
    configure: Dict[str, List[Argv]] = field(default_factory=dict)
    package_managers: List[str] = field(default_factory=lambda: list(DEFAULT_PACKAGE_MANAGERS))

    # Sources the config was loaded from, for diagnostics
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        return list(self._config_sources)

    def tools_for(self, category: str) -> List[str]:
        """Tool names registered for a category, in configured order."""
        return list(self.categories.get(category, []))

    def definition(self, name: str) -> Optional[ToolDefinition]:
        return self.tools.get(name)

    def steps_for(self, configure_category: str) -> List[Argv]:
        return list(self.configure.get(configure_category, []))

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the configuration for status snapshots."""
        return {
            "verification": {
                "threshold": self.verification.threshold,
                "timeout": self.verification.timeout,
                "install_timeout": self.verification.install_timeout,
                "max_workers": self.verification.max_workers,
                "sequential": self.verification.sequential,
                "version_lines": self.verification.version_lines,
            },
            "preconditions": {
                "supported_os": list(self.preconditions.supported_os),
                "min_python": self.preconditions.min_python,
                "require_admin": self.preconditions.require_admin,
                "require_package_manager": self.preconditions.require_package_manager,
            },
            "logging": {"file": self.logging.file},
            "categories": {k: list(v) for k, v in self.categories.items()},
            "tools": sorted(self.tools),
            "configure": {
                k: [argv_text(step) for step in steps] for k, steps in self.configure.items()
            },
            "package_managers": list(self.package_managers),
            "sources": self.sources,
        }
