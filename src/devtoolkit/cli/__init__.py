"""devtoolkit command-line interface."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from devtoolkit.cli.runner import CLIRunner, get_version


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the devtoolkit console script.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    runner = CLIRunner()
    return runner.run(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

__all__ = ["CLIRunner", "get_version", "main"]
