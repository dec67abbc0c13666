"""Argument parser construction for devtoolkit CLI.

This module builds the argument parser with subcommands:
- devtoolkit install|reinstall|update|uninstall <category>
- devtoolkit test <category|all>
- devtoolkit check TOOL...
- devtoolkit configure <configure-category>
- devtoolkit fix-path [category]
- devtoolkit status
- devtoolkit help
"""

from __future__ import annotations

import argparse
from pathlib import Path

from devtoolkit.orchestrator.categories import (
    ALL_CATEGORIES,
    category_names,
    configure_category_names,
)
from devtoolkit.orchestrator.installers import InstallAction

INSTALL_HELP = {
    InstallAction.INSTALL: "Install every tool of a category.",
    InstallAction.REINSTALL: "Reinstall every tool of a category.",
    InstallAction.UPDATE: "Update the installed tools of a category.",
    InstallAction.UNINSTALL: "Uninstall the installed tools of a category.",
}


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show devtoolkit version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table).",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to a config file (default: .devtoolkit.yml in the current directory).",
    )


def _add_tool_filter(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tool",
        action="append",
        dest="tools",
        default=[],
        metavar="NAME",
        help="Only act on this tool (can be specified multiple times).",
    )


def _build_install_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Build the install, reinstall, update and uninstall parsers."""
    for action, help_text in INSTALL_HELP.items():
        install_parser = subparsers.add_parser(
            action.value,
            help=help_text,
            description=f"{help_text} Categories: {', '.join(category_names())}.",
        )
        install_parser.add_argument("category", help="Tool category.")
        _add_tool_filter(install_parser)
        install_parser.add_argument(
            "--yes", "-y",
            action="store_true",
            help="Do not ask for confirmation.",
        )
        install_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show the package-manager commands without running them.",
        )
        if action == InstallAction.INSTALL:
            install_parser.add_argument(
                "--force", "-f",
                action="store_true",
                help="Install even when the tool is already detected.",
            )


def _build_test_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'test' subcommand parser."""
    test_parser = subparsers.add_parser(
        "test",
        help="Detect and smoke-test the tools of a category.",
        description=(
            "Detect each tool, read its version, and run its smoke tests. "
            f"Categories: {', '.join(category_names())}, or '{ALL_CATEGORIES}'."
        ),
    )
    test_parser.add_argument(
        "category",
        nargs="?",
        default=ALL_CATEGORIES,
        help=f"Tool category (default: {ALL_CATEGORIES}).",
    )
    _add_tool_filter(test_parser)
    test_parser.add_argument(
        "--sequential",
        action="store_true",
        help="Verify tools one at a time instead of in parallel.",
    )


def _build_check_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'check' subcommand parser."""
    check_parser = subparsers.add_parser(
        "check",
        help="Verify specific tools by name.",
        description="Detect and smoke-test the named tools, registered or not.",
    )
    check_parser.add_argument("tools", nargs="+", metavar="TOOL", help="Tool name.")


def _build_configure_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'configure' subcommand parser."""
    configure_parser = subparsers.add_parser(
        "configure",
        help="Apply configuration steps for a configure category.",
        description=f"Configure categories: {', '.join(configure_category_names())}.",
    )
    configure_parser.add_argument("category", help="Configure category.")
    configure_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the steps without running them.",
    )


def _build_fix_path_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'fix-path' subcommand parser."""
    fix_path_parser = subparsers.add_parser(
        "fix-path",
        help="Report installed tools that are missing from PATH.",
        description=(
            "Find tools that were detected through common install paths or "
            "install records and show the directories to add to PATH."
        ),
    )
    fix_path_parser.add_argument(
        "category",
        nargs="?",
        default=None,
        help="Restrict the scan to one category (default: all).",
    )


def _build_status_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'status' subcommand parser."""
    status_parser = subparsers.add_parser(
        "status",
        help="Show configuration and session status.",
        description="Show the devtoolkit version, platform, and configuration.",
    )
    status_parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the loaded config files and report issues.",
    )


def _build_help_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'help' subcommand parser."""
    subparsers.add_parser(
        "help",
        help="Show a usage guide.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for devtoolkit CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="devtoolkit",
        description="devtoolkit - Detect, verify, and install developer tools.",
        epilog=(
            "Examples:\n"
            "  devtoolkit test all                      # Verify every category\n"
            "  devtoolkit test development-tools        # Verify one category\n"
            "  devtoolkit check git node                # Verify specific tools\n"
            "  devtoolkit install cloud-tools --yes     # Install a category\n"
            "  devtoolkit fix-path                      # Find tools missing from PATH\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    # Create subcommands
    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_install_parsers(subparsers)
    _build_test_parser(subparsers)
    _build_check_parser(subparsers)
    _build_configure_parser(subparsers)
    _build_fix_path_parser(subparsers)
    _build_status_parser(subparsers)
    _build_help_parser(subparsers)

    return parser
