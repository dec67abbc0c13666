"""Check command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from devtoolkit.cli.commands import Command, reporter_for, require_orchestrator
from devtoolkit.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


class CheckCommand(Command):
    """Verifies tools named on the command line."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "check"

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        orchestrator = require_orchestrator(self, orchestrator)
        result = orchestrator.verify_tools(list(args.tools))
        reporter_for(args).report_category(result, sys.stdout)
        return EXIT_SUCCESS if result.success else EXIT_ISSUES_FOUND
