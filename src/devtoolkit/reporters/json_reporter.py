"""JSON reporter for devtoolkit."""

from __future__ import annotations

import json
from typing import IO, Any, List

from devtoolkit.core.models import CategoryResult, ConfigResult, InstallResult
from devtoolkit.orchestrator.orchestrator import PathDiagnosis
from devtoolkit.orchestrator.session import SessionSnapshot
from devtoolkit.reporters.base import Reporter


class JSONReporter(Reporter):
    """Reporter that writes result records as indented JSON."""

    @property
    def name(self) -> str:
        return "json"

    def report_category(self, result: CategoryResult, output: IO[str]) -> None:
        self._dump(result.to_dict(), output)

    def report_install(self, result: InstallResult, output: IO[str]) -> None:
        self._dump(result.to_dict(), output)

    def report_config(self, result: ConfigResult, output: IO[str]) -> None:
        self._dump(result.to_dict(), output)

    def report_status(self, snapshot: SessionSnapshot, output: IO[str]) -> None:
        self._dump(snapshot.to_dict(), output)

    def report_path(self, entries: List[PathDiagnosis], output: IO[str]) -> None:
        self._dump(
            [
                {
                    "tool": e.tool,
                    "executable_path": e.executable_path,
                    "directory": e.directory,
                    "detected_by": e.detected_by.value if e.detected_by else None,
                }
                for e in entries
            ],
            output,
        )

    @staticmethod
    def _dump(data: Any, output: IO[str]) -> None:
        json.dump(data, output, indent=2)
        output.write("\n")
