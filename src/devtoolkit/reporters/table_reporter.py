"""Table reporter for devtoolkit."""

from __future__ import annotations

from typing import IO, List

from devtoolkit.core.models import (
    CategoryResult,
    ConfigResult,
    InstallResult,
    VerificationResult,
    VerificationStatus,
)
from devtoolkit.orchestrator.orchestrator import PathDiagnosis
from devtoolkit.orchestrator.session import SessionSnapshot
from devtoolkit.reporters.base import Reporter

RULE = "-" * 100

STATUS_LABELS = {
    VerificationStatus.INSTALLED: "OK",
    VerificationStatus.WARNING: "WARNING",
    VerificationStatus.NOT_INSTALLED: "MISSING",
    VerificationStatus.ERROR: "ERROR",
}


def _truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


class TableReporter(Reporter):
    """Reporter that writes results as human-readable tables."""

    @property
    def name(self) -> str:
        return "table"

    def report_category(self, result: CategoryResult, output: IO[str]) -> None:
        lines: List[str] = [f"Category: {result.category}"]

        if not result.results:
            lines.append("No tools to verify.")
            self._write(lines, output)
            return

        lines.append(f"{'TOOL':<20} {'STATUS':<9} {'TESTS':<7} {'VERSION':<30} {'PATH'}")
        lines.append(RULE)
        for tool_result in result.results.values():
            lines.append(self._tool_row(tool_result))
            for note in tool_result.notes:
                lines.append(f"{'':<20} note: {note}")
            if tool_result.error:
                lines.append(f"{'':<20} error: {tool_result.error}")

        lines.append(RULE)
        lines.append(
            f"Total: {result.total} | Installed: {result.installed} | "
            f"Not found: {result.not_found} | Warnings: {result.warnings}"
        )
        self._write(lines, output)

    def report_install(self, result: InstallResult, output: IO[str]) -> None:
        lines: List[str] = [f"{result.action.capitalize()}: {result.category}"]
        if result.error:
            lines.append(f"Error: {result.error}")
        if result.outcomes:
            lines.append(f"{'TOOL':<20} {'RESULT':<8} {'MANAGER':<10} {'MESSAGE'}")
            lines.append(RULE)
            for outcome in result.outcomes.values():
                if outcome.skipped:
                    label = "SKIPPED"
                else:
                    label = "OK" if outcome.success else "FAILED"
                lines.append(
                    f"{outcome.tool:<20} {label:<8} {outcome.package_manager or '-':<10} "
                    f"{_truncate(outcome.message, 60)}"
                )
                if outcome.command and outcome.message == "dry run":
                    lines.append(f"{'':<20} would run: {outcome.command}")
        elif not result.error:
            lines.append("No tools in category.")
        self._write(lines, output)

    def report_config(self, result: ConfigResult, output: IO[str]) -> None:
        lines: List[str] = [f"Configure: {result.category}"]
        if result.error:
            lines.append(f"Error: {result.error}")
        if not result.steps and not result.error:
            lines.append("No configuration steps defined.")
        for step in result.steps:
            label = "OK" if step.success else "FAILED"
            lines.append(f"[{label}] {step.step}")
            if step.error:
                lines.append(f"       {step.error}")
        self._write(lines, output)

    def report_status(self, snapshot: SessionSnapshot, output: IO[str]) -> None:
        lines: List[str] = [
            f"devtoolkit {snapshot.version}",
            f"Initialized: {'yes' if snapshot.is_initialized else 'no'}",
        ]
        sources = snapshot.configuration.get("sources") or []
        if sources:
            lines.append(f"Config sources: {', '.join(sources)}")

        categories = snapshot.configuration.get("categories") or {}
        if categories:
            lines.append("")
            lines.append(f"{'CATEGORY':<20} {'TOOLS'}")
            lines.append(RULE)
            for category, tools in categories.items():
                lines.append(f"{category:<20} {_truncate(', '.join(tools), 78)}")

        for label, results in (
            ("Install results", snapshot.install_results),
            ("Test results", snapshot.test_results),
            ("Config results", snapshot.config_results),
        ):
            if results:
                lines.append("")
                lines.append(f"{label}: {', '.join(results)}")
        self._write(lines, output)

    def report_path(self, entries: List[PathDiagnosis], output: IO[str]) -> None:
        if not entries:
            self._write(["All detected tools are reachable through PATH."], output)
            return

        lines: List[str] = [f"{'TOOL':<20} {'FOUND BY':<15} {'ADD TO PATH'}", RULE]
        for entry in entries:
            found_by = entry.detected_by.value if entry.detected_by else "-"
            lines.append(f"{entry.tool:<20} {found_by:<15} {entry.directory}")
        lines.append("")
        lines.append("Add the directories above to PATH to make these tools available.")
        self._write(lines, output)

    @staticmethod
    def _tool_row(result: VerificationResult) -> str:
        status = STATUS_LABELS.get(result.status, result.status.value)
        if result.functionality is not None:
            tests = f"{result.functionality.passed}/{result.functionality.total}"
        else:
            tests = "-"
        version = _truncate(result.version, 30)
        return f"{result.tool:<20} {status:<9} {tests:<7} {version:<30} {result.executable_path}"

    @staticmethod
    def _write(lines: List[str], output: IO[str]) -> None:
        output.write("\n".join(lines))
        output.write("\n")
