"""Environment precondition checks for devtoolkit.

Validates that the platform, interpreter, and privileges meet the
configured requirements before any category operation runs.
"""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from devtoolkit.bootstrap.platform import current_os, is_admin
from devtoolkit.config.models import DEFAULT_PACKAGE_MANAGERS, PreconditionSettings
from devtoolkit.core.logging import get_logger

LOGGER = get_logger(__name__)


class CheckStatus(str, Enum):
    """Status of a precondition check."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class PreconditionCheck:
    """Result of one precondition check."""

    name: str
    status: CheckStatus
    message: str = ""

    @property
    def passed(self) -> bool:
        return self.status != CheckStatus.FAILED


@dataclass
class PreconditionReport:
    """Results of all precondition checks."""

    checks: List[PreconditionCheck] = field(default_factory=list)

    def all_passed(self) -> bool:
        """Check if no precondition failed."""
        return all(check.passed for check in self.checks)

    def failed_checks(self) -> List[PreconditionCheck]:
        """Return the checks that failed."""
        return [check for check in self.checks if not check.passed]

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Convert to dictionary for JSON serialization."""
        return {
            check.name: {"status": check.status.value, "message": check.message}
            for check in self.checks
        }


def _parse_version(text: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in text.split(".") if part.isdigit())


class PreconditionValidator:
    """Runs the environment checks required before orchestration."""

    def __init__(
        self,
        settings: Optional[PreconditionSettings] = None,
        package_managers: Optional[List[str]] = None,
        os_name: Optional[Callable[[], str]] = None,
        admin_check: Optional[Callable[[], bool]] = None,
    ) -> None:
        """Initialize the validator.

        Args:
            settings: Precondition settings from configuration.
            package_managers: Package manager executables that satisfy the
                package-manager requirement.
            os_name: Callable returning the lowercase OS name.
            admin_check: Callable returning True when running elevated.
        """
        self._settings = settings or PreconditionSettings()
        self._package_managers = package_managers or list(DEFAULT_PACKAGE_MANAGERS)
        self._os_name = os_name or current_os
        self._admin_check = admin_check or is_admin

    def validate(self) -> PreconditionReport:
        """Run every check and return the report."""
        LOGGER.debug("Validating environment preconditions...")

        report = PreconditionReport(
            checks=[
                self._check_platform(),
                self._check_python(),
                self._check_admin(),
                self._check_package_manager(),
            ]
        )

        if report.all_passed():
            LOGGER.debug("All preconditions passed.")
        else:
            for check in report.failed_checks():
                LOGGER.error(f"Precondition {check.name} failed: {check.message}")

        return report

    def _check_platform(self) -> PreconditionCheck:
        system = self._os_name()
        supported = [s.lower() for s in self._settings.supported_os]
        if system in supported:
            return PreconditionCheck("platform", CheckStatus.PASSED, system)
        return PreconditionCheck(
            "platform",
            CheckStatus.FAILED,
            f"Unsupported operating system: {system}. Supported: {', '.join(sorted(supported))}",
        )

    def _check_python(self) -> PreconditionCheck:
        required = _parse_version(self._settings.min_python)
        running = sys.version_info[: len(required)]
        version_str = ".".join(str(p) for p in sys.version_info[:3])
        if tuple(running) >= required:
            return PreconditionCheck("python", CheckStatus.PASSED, version_str)
        return PreconditionCheck(
            "python",
            CheckStatus.FAILED,
            f"Python {self._settings.min_python}+ required, running {version_str}",
        )

    def _check_admin(self) -> PreconditionCheck:
        if not self._settings.require_admin:
            return PreconditionCheck("admin", CheckStatus.SKIPPED, "not required")
        if self._admin_check():
            return PreconditionCheck("admin", CheckStatus.PASSED, "running elevated")
        return PreconditionCheck(
            "admin",
            CheckStatus.FAILED,
            "Administrator privileges are required; re-run from an elevated shell",
        )

    def _check_package_manager(self) -> PreconditionCheck:
        if not self._settings.require_package_manager:
            return PreconditionCheck("package_manager", CheckStatus.SKIPPED, "not required")
        for manager in self._package_managers:
            if shutil.which(manager):
                return PreconditionCheck("package_manager", CheckStatus.PASSED, manager)
        return PreconditionCheck(
            "package_manager",
            CheckStatus.FAILED,
            f"No package manager found on PATH (looked for {', '.join(self._package_managers)})",
        )
