"""Install, reinstall, update and uninstall commands."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

import questionary
from questionary import Style

from devtoolkit.cli.commands import Command, reporter_for, require_orchestrator
from devtoolkit.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS, EXIT_TOOL_ERROR
from devtoolkit.core.logging import get_logger
from devtoolkit.orchestrator.categories import parse_category
from devtoolkit.orchestrator.installers import InstallAction, InstallOptions

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator

LOGGER = get_logger(__name__)

# Custom questionary style
STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
    ("instruction", "fg:gray"),
])


class InstallCommand(Command):
    """Runs one installer action over a category."""

    def __init__(self, action: InstallAction = InstallAction.INSTALL):
        self._action = action

    @property
    def name(self) -> str:
        """Command identifier."""
        return self._action.value

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        """Execute the installer action.

        Asks for confirmation unless --yes or --dry-run is given.

        Args:
            args: Parsed command-line arguments.
            orchestrator: Initialized orchestrator.

        Returns:
            Exit code.
        """
        orchestrator = require_orchestrator(self, orchestrator)
        category = parse_category(args.category)

        tools = list(args.tools) or orchestrator.config.tools_for(category.value)
        if not args.yes and not args.dry_run:
            proceed = questionary.confirm(
                f"{self._action.value.capitalize()} {len(tools)} tools in "
                f"{category.value} ({', '.join(tools)})?",
                default=True,
                style=STYLE,
            ).ask()

            if not proceed:
                print("Aborted.")
                return EXIT_SUCCESS

        options = InstallOptions(
            action=self._action,
            force=getattr(args, "force", False),
            tools=list(args.tools),
            dry_run=args.dry_run,
        )
        result = orchestrator.install_category(category.value, options)
        reporter_for(args).report_install(result, sys.stdout)

        if result.error:
            return EXIT_TOOL_ERROR
        if not result.success:
            return EXIT_ISSUES_FOUND
        return EXIT_SUCCESS
