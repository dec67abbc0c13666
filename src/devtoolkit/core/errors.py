"""Exception types raised by the devtoolkit core.

Per-tool and per-command failures never raise; they are captured in the
result records. Only structural errors propagate as exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from devtoolkit.bootstrap.preconditions import PreconditionCheck


class ToolkitError(Exception):
    """Base class for devtoolkit errors."""


class UnknownCategoryError(ToolkitError, ValueError):
    """Raised when an operation names a category that does not exist."""

    def __init__(self, category: str, valid: Iterable[str]):
        self.category = category
        self.valid = sorted(valid)
        super().__init__(
            f"Unknown category '{category}'. Valid: {', '.join(self.valid)}"
        )


class PreconditionError(ToolkitError):
    """Raised when environment preconditions are not met at startup."""

    def __init__(self, failed: List["PreconditionCheck"]):
        self.failed = failed
        details = "; ".join(f"{c.name}: {c.message}" for c in failed)
        super().__init__(f"Environment preconditions not met: {details}")
