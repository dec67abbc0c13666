"""Tool verification: smoke tests and detection combined."""

from devtoolkit.verification.functionality import DEFAULT_THRESHOLD, FunctionalityTester
from devtoolkit.verification.verifier import DEFAULT_MAX_WORKERS, ToolVerifier

__all__ = [
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_THRESHOLD",
    "FunctionalityTester",
    "ToolVerifier",
]
