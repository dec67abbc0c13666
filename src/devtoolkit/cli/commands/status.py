"""Status command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from devtoolkit.bootstrap.paths import ToolkitPaths
from devtoolkit.bootstrap.platform import get_platform_info
from devtoolkit.cli.commands import Command, reporter_for, require_orchestrator
from devtoolkit.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from devtoolkit.config.validation import ValidationSeverity, validate_config_file

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


def _config_files(sources: List[str]) -> List[Path]:
    """Extract file paths from config source labels like 'project:/a/b.yml'."""
    files = []
    for source in sources:
        kind, _, location = source.partition(":")
        if location and kind in ("global", "project", "custom"):
            files.append(Path(location))
    return files


class StatusCommand(Command):
    """Shows version, platform, and configuration status."""

    def __init__(self, version: str):
        """Initialize StatusCommand.

        Args:
            version: Current devtoolkit version string.
        """
        self._version = version

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        """Execute the status command.

        Args:
            args: Parsed command-line arguments.
            orchestrator: Initialized orchestrator.

        Returns:
            Exit code. Non-zero only when --validate finds errors.
        """
        orchestrator = require_orchestrator(self, orchestrator)
        snapshot = orchestrator.get_status()
        reporter = reporter_for(args)

        if reporter.name == "table":
            platform_info = get_platform_info()
            supported = "" if platform_info.is_supported() else " (unsupported)"
            print(f"Platform: {platform_info.label}{supported}")
            print(f"Home: {ToolkitPaths.default().home}")
        reporter.report_status(snapshot, sys.stdout)

        if not getattr(args, "validate", False):
            return EXIT_SUCCESS

        exit_code = EXIT_SUCCESS
        for path in _config_files(orchestrator.config.sources):
            is_valid, issues = validate_config_file(path)
            for issue in issues:
                prefix = "Error" if issue.severity == ValidationSeverity.ERROR else "Warning"
                line = f"{prefix}: {issue.message} ({issue.source})"
                if issue.suggestion:
                    line += f" - did you mean '{issue.suggestion}'?"
                print(line)
            if not is_valid:
                exit_code = EXIT_INVALID_USAGE
            elif not issues:
                print(f"{path} is valid.")
        return exit_code
