"""Smoke-test execution and scoring."""

from __future__ import annotations

import re
import time
from typing import Optional, Sequence

from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import CommandOutcome, FunctionalityTestResult, TestCommand
from devtoolkit.core.process import ProcessProbe, ProbeResult

LOGGER = get_logger(__name__)

DEFAULT_THRESHOLD = 0.7


def output_matches(output: str, pattern: str) -> bool:
    """Case-sensitive regex search, falling back to substring on bad regex."""
    try:
        return re.search(pattern, output) is not None
    except re.error:
        return pattern in output


class FunctionalityTester:
    """Runs a tool's smoke-test commands and scores the pass rate."""

    def __init__(
        self,
        probe: ProcessProbe,
        threshold: float = DEFAULT_THRESHOLD,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the tester.

        Args:
            probe: Process probe used to run commands.
            threshold: Minimum pass rate (0..1) for overall success.
            timeout: Per-command deadline. Defaults to the probe's.
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0 and 1, got {threshold}")
        self._probe = probe
        self._threshold = threshold
        self._timeout = timeout

    @property
    def threshold(self) -> float:
        return self._threshold

    def run(self, commands: Sequence[TestCommand]) -> FunctionalityTestResult:
        """Run every command in order and score the results.

        A failing command never stops the remaining ones.

        Args:
            commands: Smoke-test commands with optional expected patterns.

        Returns:
            FunctionalityTestResult. With no commands the tool is trivially
            considered functional.
        """
        start = time.monotonic()
        result = FunctionalityTestResult(threshold=self._threshold, total=len(commands))

        for command in commands:
            outcome = self._run_one(command)
            result.outcomes.append(outcome)
            if outcome.passed:
                result.passed += 1

        if result.total == 0:
            result.success = True
        else:
            result.success = result.passed / result.total >= self._threshold

        result.duration_ms = int((time.monotonic() - start) * 1000)
        LOGGER.debug(
            f"Functionality: {result.passed}/{result.total} passed "
            f"(threshold {self._threshold:.0%}) -> {'ok' if result.success else 'failed'}"
        )
        return result

    def _run_one(self, command: TestCommand) -> CommandOutcome:
        probe = self._probe.execute(command.argv, timeout=self._timeout)
        outcome = CommandOutcome(
            command=command.text,
            output=probe.combined_output,
            expected_output=command.expected_output,
            exit_code=probe.exit_code,
        )

        if probe.spawn_failed or probe.timed_out:
            outcome.error = probe.error
            LOGGER.debug(f"Test command {command.text} did not run: {probe.error}")
            return outcome

        outcome.passed = self._judge(command, probe)
        if not outcome.passed:
            LOGGER.debug(f"Test command {command.text} failed")
        return outcome

    @staticmethod
    def _judge(command: TestCommand, probe: ProbeResult) -> bool:
        if command.expected_output is None:
            return True
        output = probe.combined_output
        if not output:
            return False
        return output_matches(output, command.expected_output)
