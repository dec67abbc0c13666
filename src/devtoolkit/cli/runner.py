"""CLI runner orchestration.

This module handles command dispatch and execution for the devtoolkit CLI.
"""

from __future__ import annotations

from argparse import Namespace
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, Iterable, Optional

from devtoolkit.bootstrap.paths import ToolkitPaths
from devtoolkit.cli.arguments import build_parser
from devtoolkit.cli.commands import (
    CheckCommand,
    Command,
    ConfigureCommand,
    FixPathCommand,
    HelpCommand,
    InstallCommand,
    StatusCommand,
    TestCommand,
)
from devtoolkit.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_PRECONDITION_FAILURE,
    EXIT_SUCCESS,
    EXIT_TOOL_ERROR,
)
from devtoolkit.config.loader import ConfigError, load_config
from devtoolkit.config.models import ToolkitConfig
from devtoolkit.core.errors import PreconditionError, UnknownCategoryError
from devtoolkit.core.logging import configure_logging, get_logger
from devtoolkit.orchestrator import Orchestrator
from devtoolkit.orchestrator.installers import InstallAction

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get devtoolkit version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("devtoolkit")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from devtoolkit import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        """Initialize CLIRunner with parser and commands."""
        self.parser = build_parser()
        self._version = get_version()
        commands = [
            *(InstallCommand(action) for action in InstallAction),
            TestCommand(),
            CheckCommand(),
            ConfigureCommand(),
            FixPathCommand(),
            StatusCommand(version=self._version),
            HelpCommand(version=self._version),
        ]
        self.commands: Dict[str, Command] = {c.name: c for c in commands}

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        # Handle --help specially to return 0
        if argv is not None:
            argv_list = list(argv)
            if "--help" in argv_list or "-h" in argv_list:
                self.parser.print_help()
                return EXIT_SUCCESS
        else:
            argv_list = None

        args = self.parser.parse_args(argv_list)

        # Handle --version
        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = self.commands.get(getattr(args, "command", None) or "")
        if command is None:
            # No command specified - show help
            self.parser.print_help()
            return EXIT_SUCCESS

        if not command.needs_orchestrator:
            configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)
            return command.execute(args)

        try:
            config = load_config(cli_config_path=args.config)
        except ConfigError as e:
            configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        self._configure_logging(args, config)
        return self._dispatch(command, args, config)

    def _configure_logging(self, args: Namespace, config: ToolkitConfig) -> None:
        log_file = None
        if config.logging.file:
            paths = ToolkitPaths.default()
            paths.ensure_directories()
            log_file = paths.log_file
        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
            log_file=log_file,
        )

    def _dispatch(self, command: Command, args: Namespace, config: ToolkitConfig) -> int:
        """Build the orchestrator and run a command, mapping errors to exit codes.

        Args:
            command: Command to execute.
            args: Parsed command-line arguments.
            config: Loaded configuration.

        Returns:
            Exit code.
        """
        try:
            orchestrator = Orchestrator(config, version=self._version)
        except PreconditionError as e:
            LOGGER.error(str(e))
            return EXIT_PRECONDITION_FAILURE

        try:
            return command.execute(args, orchestrator)
        except UnknownCategoryError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except Exception as e:
            if args.debug:
                import traceback
                traceback.print_exc()
            LOGGER.error(f"{command.name} failed: {e}")
            return EXIT_TOOL_ERROR
