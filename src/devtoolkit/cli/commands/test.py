"""Test command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from devtoolkit.cli.commands import Command, reporter_for, require_orchestrator
from devtoolkit.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS
from devtoolkit.orchestrator.orchestrator import TestOptions

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


class TestCommand(Command):
    """Detects and smoke-tests the tools of a category."""

    __test__ = False

    @property
    def name(self) -> str:
        """Command identifier."""
        return "test"

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        """Execute the test command.

        Args:
            args: Parsed command-line arguments.
            orchestrator: Initialized orchestrator.

        Returns:
            EXIT_SUCCESS when every tool is installed and healthy,
            EXIT_ISSUES_FOUND otherwise.
        """
        orchestrator = require_orchestrator(self, orchestrator)
        options = TestOptions(tools=list(args.tools), sequential=args.sequential)
        result = orchestrator.test_category(args.category, options)
        reporter_for(args).report_category(result, sys.stdout)
        return EXIT_SUCCESS if result.success else EXIT_ISSUES_FOUND
