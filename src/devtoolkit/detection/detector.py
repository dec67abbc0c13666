"""Install-state detection for a single tool definition.

Strategies run in a fixed order and the first one that finds the tool
decides ``installed`` and ``executable_path``:

1. PATH lookup of each candidate executable name.
2. Common install-path scan.
3. Persisted install-record lookup (registry / package database).

Whatever strategy succeeded, the version is then read by running the
definition's version-probe commands.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import Optional, Tuple

from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import (
    UNKNOWN_VERSION,
    Argv,
    DetectionStrategy,
    ToolDefinition,
    VerificationResult,
    VerificationStatus,
    argv_text,
)
from devtoolkit.core.process import ProcessProbe
from devtoolkit.detection.paths import expand_path_pattern, find_executable_in
from devtoolkit.detection.records import (
    InstallRecord,
    InstallRecordSource,
    default_record_source,
)

LOGGER = get_logger(__name__)

# Number of output lines kept as the version string
DEFAULT_VERSION_LINES = 1


class Detector:
    """Determines the install state of one tool definition."""

    def __init__(
        self,
        probe: ProcessProbe,
        record_source: Optional[InstallRecordSource] = None,
        version_lines: int = DEFAULT_VERSION_LINES,
    ) -> None:
        """Initialize the detector.

        Args:
            probe: Process probe used for version commands.
            record_source: Install-record source. Defaults to the platform
                registry / package database source.
            version_lines: Number of output lines kept as the version.
        """
        self._probe = probe
        self._records = record_source or default_record_source(probe)
        self._version_lines = max(1, version_lines)

    def detect(self, definition: ToolDefinition) -> VerificationResult:
        """Detect whether a tool is installed and read its version.

        Never raises: unexpected failures are returned as an ERROR result.

        Args:
            definition: Tool definition to detect.

        Returns:
            VerificationResult with presence, path, evidence, version, and
            status filled in. Functionality fields are left at defaults.
        """
        start = time.monotonic()
        result = VerificationResult(tool=definition.name)

        try:
            self._run_strategies(definition, result)
        except Exception as e:
            LOGGER.error(f"Detection of {definition.name} failed: {e}")
            result.mark_not_installed()
            result.status = VerificationStatus.ERROR
            result.error = str(e)

        result.duration_ms = int((time.monotonic() - start) * 1000)
        return result

    def _run_strategies(self, definition: ToolDefinition, result: VerificationResult) -> None:
        record: Optional[InstallRecord] = None

        if self._detect_on_path(definition, result):
            result.detected_by = DetectionStrategy.PATH
        elif self._detect_in_common_paths(definition, result):
            result.detected_by = DetectionStrategy.COMMON_PATH
        else:
            record = self._detect_from_records(definition, result)
            if record is not None:
                result.detected_by = DetectionStrategy.INSTALL_RECORD

        if not result.installed:
            result.mark_not_installed()
            result.status = VerificationStatus.NOT_INSTALLED
            LOGGER.warning(f"{definition.name} is not installed")
            return

        version = self._probe_version(definition, result.executable_path)
        if version is not None:
            result.version = version
            result.status = VerificationStatus.INSTALLED
        elif not definition.version_commands:
            result.version = record.version if record and record.version else UNKNOWN_VERSION
            result.status = VerificationStatus.INSTALLED
        else:
            if record is not None and record.version:
                result.version = record.version
            result.status = VerificationStatus.WARNING
            result.notes.append("Version probes produced no readable output")
            LOGGER.warning(f"{definition.name} is installed but its version could not be read")

        LOGGER.info(
            f"{definition.name}: installed ({result.detected_by.value}), "
            f"version {result.version}"
        )

    def _detect_on_path(self, definition: ToolDefinition, result: VerificationResult) -> bool:
        for name in definition.executable_names:
            resolved = shutil.which(name)
            if resolved:
                LOGGER.debug(f"{definition.name}: found {name} on PATH at {resolved}")
                result.installed = True
                result.executable_path = resolved
                result.evidence.add(resolved)
                return True
        return False

    def _detect_in_common_paths(
        self, definition: ToolDefinition, result: VerificationResult
    ) -> bool:
        for pattern in definition.common_paths:
            matches = expand_path_pattern(pattern)
            if not matches:
                continue

            found = matches[0]
            LOGGER.debug(f"{definition.name}: found install path {found}")
            result.installed = True
            result.evidence.add(str(found))

            if found.is_file():
                result.executable_path = str(found)
            else:
                executable = find_executable_in(found, definition.executable_names)
                if executable is not None:
                    result.executable_path = str(executable)
                    result.evidence.add(str(executable))
            return True
        return False

    def _detect_from_records(
        self, definition: ToolDefinition, result: VerificationResult
    ) -> Optional[InstallRecord]:
        for locator in definition.registry_keys:
            record = self._records.lookup(locator)
            if record is None:
                continue

            LOGGER.debug(f"{definition.name}: install record found at {locator}")
            result.installed = True
            result.evidence.add(locator)

            location = Path(record.location) if record.location else None
            if location is not None and location.exists():
                result.evidence.add(str(location))
                if location.is_file():
                    result.executable_path = str(location)
                else:
                    executable = find_executable_in(location, definition.executable_names)
                    if executable is not None:
                        result.executable_path = str(executable)
            else:
                note = f"Install record {locator} has no readable install location"
                result.notes.append(note)
                LOGGER.warning(f"{definition.name}: {note}")
            return record
        return None

    def _probe_version(self, definition: ToolDefinition, executable_path: str) -> Optional[str]:
        for argv in definition.version_commands:
            command = self._bind_executable(definition, argv, executable_path)
            probe = self._probe.execute(command)
            if not probe.ok:
                reason = probe.error or f"exit code {probe.exit_code}"
                LOGGER.debug(
                    f"{definition.name}: version probe {argv_text(command)} failed: {reason}"
                )
                continue

            output = probe.output
            if output:
                lines = [line.strip() for line in output.splitlines() if line.strip()]
                return " ".join(lines[: self._version_lines])
        return None

    @staticmethod
    def _bind_executable(
        definition: ToolDefinition, argv: Argv, executable_path: str
    ) -> Tuple[str, ...]:
        """Point a version command at the detected executable.

        Tools found outside PATH cannot be run by bare name, so argv[0] is
        replaced when it names one of the tool's candidate executables.
        """
        if executable_path and argv and argv[0] in definition.executable_names:
            return (executable_path, *argv[1:])
        return argv
