"""Help command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING, Optional

from devtoolkit.cli.commands import Command
from devtoolkit.cli.exit_codes import EXIT_SUCCESS
from devtoolkit.orchestrator.categories import (
    ALL_CATEGORIES,
    category_names,
    configure_category_names,
)

if TYPE_CHECKING:
    from devtoolkit.orchestrator import Orchestrator


def get_help_content(version: str) -> str:
    """Build the usage guide shown by ``devtoolkit help``."""
    categories = "\n".join(f"  {name}" for name in category_names())
    configure = "\n".join(f"  {name}" for name in configure_category_names())
    return f"""devtoolkit {version}

Usage: devtoolkit [--format table|json] [--config PATH] COMMAND ...

Commands:
  install <category>      Install the tools of a category
  reinstall <category>    Reinstall the tools of a category
  update <category>       Update the installed tools of a category
  uninstall <category>    Uninstall the tools of a category
  test [category]         Detect and smoke-test tools (default: {ALL_CATEGORIES})
  check TOOL...           Verify specific tools by name
  configure <category>    Apply configuration steps
  fix-path [category]     Report installed tools missing from PATH
  status                  Show version, platform and configuration
  help                    Show this guide

Tool categories:
{categories}
  {ALL_CATEGORIES} (test and fix-path only)

Configure categories:
{configure}

Exit codes:
  0  success
  1  some tool is missing, degraded, or failed to install
  2  an installer or configurator crashed
  3  invalid usage, unknown category, or bad configuration
  4  environment preconditions not met
"""


class HelpCommand(Command):
    """Shows the devtoolkit usage guide."""

    needs_orchestrator = False

    def __init__(self, version: str):
        self._version = version

    @property
    def name(self) -> str:
        """Command identifier."""
        return "help"

    def execute(self, args: Namespace, orchestrator: Optional["Orchestrator"] = None) -> int:
        print(get_help_content(self._version))
        return EXIT_SUCCESS
