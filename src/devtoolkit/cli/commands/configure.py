"""Configure command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from devtoolkit.cli.commands import Command, reporter_for, require_orchestrator
from devtoolkit.cli.exit_codes import EXIT_ISSUES_FOUND, EXIT_SUCCESS, EXIT_TOOL_ERROR
from devtoolkit.orchestrator.configurators import ConfigureOptions

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


class ConfigureCommand(Command):
    """Applies the configuration steps of a configure category."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "configure"

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        orchestrator = require_orchestrator(self, orchestrator)
        result = orchestrator.configure_category(
            args.category, ConfigureOptions(dry_run=args.dry_run)
        )
        reporter_for(args).report_config(result, sys.stdout)

        if result.error:
            return EXIT_TOOL_ERROR
        return EXIT_SUCCESS if result.success else EXIT_ISSUES_FOUND
