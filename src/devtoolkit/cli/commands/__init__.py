"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from devtoolkit.core.errors import ToolkitError
from devtoolkit.reporters import Reporter, get_reporter

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    # Commands that only print static text skip orchestrator construction
    needs_orchestrator = True

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier.

        Returns:
            String name of the command.
        """

    @abstractmethod
    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            orchestrator: Initialized orchestrator for this session.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


def reporter_for(args: Namespace) -> Reporter:
    """Return the reporter selected by --format (table by default)."""
    return get_reporter(getattr(args, "format", None) or "table") or get_reporter("table")  # type: ignore[return-value]


def require_orchestrator(command: Command, orchestrator: Optional["Orchestrator"]) -> "Orchestrator":
    """Return the session orchestrator, failing if the runner did not build one."""
    if orchestrator is None:
        raise ToolkitError(f"{command.name} requires an initialized orchestrator")
    return orchestrator


# Import command implementations for convenience
# ruff: noqa: E402
from devtoolkit.cli.commands.check import CheckCommand
from devtoolkit.cli.commands.configure import ConfigureCommand
from devtoolkit.cli.commands.fix_path import FixPathCommand
from devtoolkit.cli.commands.help import HelpCommand
from devtoolkit.cli.commands.install import InstallCommand
from devtoolkit.cli.commands.status import StatusCommand
from devtoolkit.cli.commands.test import TestCommand

__all__ = [
    "CheckCommand",
    "Command",
    "ConfigureCommand",
    "FixPathCommand",
    "HelpCommand",
    "InstallCommand",
    "StatusCommand",
    "TestCommand",
    "reporter_for",
    "require_orchestrator",
]
