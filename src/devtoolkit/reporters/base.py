"""Base class for result reporters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import IO, List

from devtoolkit.core.models import CategoryResult, ConfigResult, InstallResult
from devtoolkit.orchestrator.orchestrator import PathDiagnosis
from devtoolkit.orchestrator.session import SessionSnapshot


class Reporter(ABC):
    """Base class for all reporters.

    Each reporter renders the orchestrator's result records in one output
    format (table, JSON).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Reporter identifier (e.g., 'table', 'json')."""

    @abstractmethod
    def report_category(self, result: CategoryResult, output: IO[str]) -> None:
        """Write verification results for a category or ad-hoc tool list."""

    @abstractmethod
    def report_install(self, result: InstallResult, output: IO[str]) -> None:
        """Write installer outcomes."""

    @abstractmethod
    def report_config(self, result: ConfigResult, output: IO[str]) -> None:
        """Write configurator outcomes."""

    @abstractmethod
    def report_status(self, snapshot: SessionSnapshot, output: IO[str]) -> None:
        """Write a session snapshot."""

    @abstractmethod
    def report_path(self, entries: List[PathDiagnosis], output: IO[str]) -> None:
        """Write tools that are installed but missing from PATH."""
