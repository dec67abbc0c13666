"""Fix-path command implementation.

Read-only: reports the directories that would have to be added to PATH and
leaves the environment untouched.
"""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from devtoolkit.cli.commands import Command, reporter_for, require_orchestrator
from devtoolkit.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


class FixPathCommand(Command):
    """Reports installed tools that PATH does not reach."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "fix-path"

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        orchestrator = require_orchestrator(self, orchestrator)
        entries = orchestrator.diagnose_path(args.category)
        reporter_for(args).report_path(entries, sys.stdout)
        return EXIT_ISSUES_FOUND if entries else EXIT_SUCCESS
