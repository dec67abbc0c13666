"""Installer collaborators.

An installer receives the tool definitions of one category and returns an
InstallResult with a pass/fail outcome and resulting executable path per
tool. The default installer shells out to the first available package
manager that knows a package id for the tool.
"""

from __future__ import annotations

import shutil
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from devtoolkit.config.models import DEFAULT_PACKAGE_MANAGERS
from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import (
    Argv,
    InstallResult,
    ToolDefinition,
    ToolInstallOutcome,
    VerificationResult,
    argv_text,
)
from devtoolkit.core.process import ProbeResult, ProcessProbe
from devtoolkit.detection.detector import Detector

LOGGER = get_logger(__name__)

# Default deadline for one package-manager command (seconds)
DEFAULT_INSTALL_TIMEOUT = 1800.0


class InstallAction(str, Enum):
    """Installer actions exposed on the CLI."""

    INSTALL = "install"
    REINSTALL = "reinstall"
    UPDATE = "update"
    UNINSTALL = "uninstall"


@dataclass
class InstallOptions:
    """Options for one installer run."""

    action: InstallAction = InstallAction.INSTALL
    force: bool = False
    tools: List[str] = field(default_factory=list)
    dry_run: bool = False


# Command templates per package manager and action. "{package}" is
# replaced by the tool's package id; each action may need several commands.
COMMAND_TEMPLATES: Dict[str, Dict[InstallAction, List[Argv]]] = {
    "winget": {
        InstallAction.INSTALL: [(
            "winget", "install", "--id", "{package}", "-e", "--silent",
            "--accept-package-agreements", "--accept-source-agreements",
        )],
        InstallAction.REINSTALL: [(
            "winget", "install", "--id", "{package}", "-e", "--silent", "--force",
            "--accept-package-agreements", "--accept-source-agreements",
        )],
        InstallAction.UPDATE: [(
            "winget", "upgrade", "--id", "{package}", "-e", "--silent",
            "--accept-package-agreements", "--accept-source-agreements",
        )],
        InstallAction.UNINSTALL: [("winget", "uninstall", "--id", "{package}", "-e", "--silent")],
    },
    "choco": {
        InstallAction.INSTALL: [("choco", "install", "{package}", "-y")],
        InstallAction.REINSTALL: [("choco", "install", "{package}", "-y", "--force")],
        InstallAction.UPDATE: [("choco", "upgrade", "{package}", "-y")],
        InstallAction.UNINSTALL: [("choco", "uninstall", "{package}", "-y")],
    },
    "scoop": {
        InstallAction.INSTALL: [("scoop", "install", "{package}")],
        InstallAction.REINSTALL: [
            ("scoop", "uninstall", "{package}"),
            ("scoop", "install", "{package}"),
        ],
        InstallAction.UPDATE: [("scoop", "update", "{package}")],
        InstallAction.UNINSTALL: [("scoop", "uninstall", "{package}")],
    },
    "brew": {
        InstallAction.INSTALL: [("brew", "install", "{package}")],
        InstallAction.REINSTALL: [("brew", "reinstall", "{package}")],
        InstallAction.UPDATE: [("brew", "upgrade", "{package}")],
        InstallAction.UNINSTALL: [("brew", "uninstall", "{package}")],
    },
    "apt-get": {
        InstallAction.INSTALL: [("apt-get", "install", "-y", "{package}")],
        InstallAction.REINSTALL: [("apt-get", "install", "--reinstall", "-y", "{package}")],
        InstallAction.UPDATE: [("apt-get", "install", "--only-upgrade", "-y", "{package}")],
        InstallAction.UNINSTALL: [("apt-get", "remove", "-y", "{package}")],
    },
    "dnf": {
        InstallAction.INSTALL: [("dnf", "install", "-y", "{package}")],
        InstallAction.REINSTALL: [("dnf", "reinstall", "-y", "{package}")],
        InstallAction.UPDATE: [("dnf", "upgrade", "-y", "{package}")],
        InstallAction.UNINSTALL: [("dnf", "remove", "-y", "{package}")],
    },
}


def build_commands(manager: str, action: InstallAction, package: str) -> List[Argv]:
    """Fill the command templates of a package manager for one package.

    Raises:
        KeyError: If the manager has no templates.
    """
    return [
        tuple(part.replace("{package}", package) for part in template)
        for template in COMMAND_TEMPLATES[manager][action]
    ]


class Installer(ABC):
    """Base class for installer collaborators."""

    @abstractmethod
    def install(
        self,
        category: str,
        definitions: Sequence[ToolDefinition],
        options: InstallOptions,
    ) -> InstallResult:
        """Run an installer action over a category's tools.

        Args:
            category: Category name, used as the result key.
            definitions: Tool definitions to act on, in order.
            options: Action and flags for this run.

        Returns:
            InstallResult with one outcome per tool.
        """


class PackageManagerInstaller(Installer):
    """Installs tools through the first usable package manager."""

    def __init__(
        self,
        probe: ProcessProbe,
        detector: Detector,
        package_managers: Optional[Sequence[str]] = None,
        timeout: float = DEFAULT_INSTALL_TIMEOUT,
    ) -> None:
        """Initialize the installer.

        Args:
            probe: Process probe used to run package-manager commands.
            detector: Detector used before and after each action.
            package_managers: Package managers in preference order.
            timeout: Deadline for each package-manager command.
        """
        self._probe = probe
        self._detector = detector
        self._package_managers = list(package_managers or DEFAULT_PACKAGE_MANAGERS)
        self._timeout = timeout
        self._available: Optional[List[str]] = None

    def available_managers(self) -> List[str]:
        """Package managers with templates that are present on PATH."""
        if self._available is None:
            self._available = [
                m for m in self._package_managers
                if m in COMMAND_TEMPLATES and shutil.which(m)
            ]
            LOGGER.debug(f"Available package managers: {self._available}")
        return self._available

    def select_manager(self, definition: ToolDefinition) -> Optional[Tuple[str, str]]:
        """Pick (manager, package id) for a tool, or None."""
        for manager in self.available_managers():
            package = definition.packages.get(manager)
            if package:
                return manager, package
        return None

    def install(
        self,
        category: str,
        definitions: Sequence[ToolDefinition],
        options: InstallOptions,
    ) -> InstallResult:
        start = time.monotonic()
        result = InstallResult(category=category, action=options.action.value)

        for definition in definitions:
            outcome = self._install_one(definition, options)
            result.outcomes[definition.name] = outcome
            if outcome.success:
                LOGGER.info(f"{options.action.value} {definition.name}: {outcome.message}")
            else:
                LOGGER.warning(f"{options.action.value} {definition.name} failed: {outcome.message}")

        result.duration_ms = int((time.monotonic() - start) * 1000)
        return result

    def _install_one(
        self, definition: ToolDefinition, options: InstallOptions
    ) -> ToolInstallOutcome:
        action = options.action
        before = self._detector.detect(definition)

        skip = self._skip_reason(before, options)
        if skip:
            return ToolInstallOutcome(
                tool=definition.name,
                success=True,
                executable_path=before.executable_path,
                skipped=True,
                message=skip,
            )

        selected = self.select_manager(definition)
        if selected is None:
            return ToolInstallOutcome(
                tool=definition.name,
                success=False,
                executable_path=before.executable_path,
                message="No available package manager provides this tool",
            )

        manager, package = selected
        commands = build_commands(manager, action, package)
        command_text = " && ".join(argv_text(c) for c in commands)

        if options.dry_run:
            return ToolInstallOutcome(
                tool=definition.name,
                success=True,
                executable_path=before.executable_path,
                skipped=True,
                package_manager=manager,
                command=command_text,
                message="dry run",
            )

        for argv in commands:
            LOGGER.debug(f"Running {argv_text(argv)}")
            probe = self._probe.execute(argv, timeout=self._timeout)
            if not probe.ok:
                return ToolInstallOutcome(
                    tool=definition.name,
                    success=False,
                    executable_path=before.executable_path,
                    package_manager=manager,
                    command=command_text,
                    message=_failure_message(probe),
                )

        after = self._detector.detect(definition)
        if action == InstallAction.UNINSTALL:
            success = not after.installed
            message = "uninstalled" if success else "still detected after uninstall"
        else:
            success = after.installed
            message = (
                f"{action.value} complete ({after.version})"
                if success
                else "command succeeded but the tool was not detected afterwards"
            )

        return ToolInstallOutcome(
            tool=definition.name,
            success=success,
            executable_path=after.executable_path,
            package_manager=manager,
            command=command_text,
            message=message,
        )

    @staticmethod
    def _skip_reason(before: VerificationResult, options: InstallOptions) -> Optional[str]:
        action = options.action
        if action == InstallAction.INSTALL and before.installed and not options.force:
            return f"already installed ({before.version})"
        if action in (InstallAction.UPDATE, InstallAction.UNINSTALL) and not before.installed:
            return "not installed"
        return None


def _failure_message(probe: ProbeResult) -> str:
    if probe.error:
        return probe.error
    lines = [line for line in probe.combined_output.splitlines() if line.strip()]
    detail = lines[-1].strip() if lines else "no output"
    return f"{probe.command} exited with {probe.exit_code}: {detail}"
