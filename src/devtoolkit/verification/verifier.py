"""Tool verification: detection plus functionality testing.

Batch verification runs tools in parallel using ThreadPoolExecutor; each
tool is independent, and results are aggregated under a lock and returned
in the caller's order.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Dict, List, Mapping, Sequence

from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import (
    CategoryResult,
    ToolDefinition,
    VerificationResult,
    VerificationStatus,
)
from devtoolkit.detection.detector import Detector
from devtoolkit.verification.functionality import FunctionalityTester

LOGGER = get_logger(__name__)

# Default number of worker threads
DEFAULT_MAX_WORKERS = 4


class ToolVerifier:
    """Composes a Detector and a FunctionalityTester per tool."""

    def __init__(
        self,
        detector: Detector,
        tester: FunctionalityTester,
        max_workers: int = DEFAULT_MAX_WORKERS,
        sequential: bool = False,
    ) -> None:
        """Initialize the verifier.

        Args:
            detector: Detector for install state.
            tester: Tester for smoke-test commands.
            max_workers: Maximum number of concurrent verifications.
            sequential: If True, verify tools one at a time.
        """
        self._detector = detector
        self._tester = tester
        self._max_workers = max(1, max_workers)
        self._sequential = sequential
        self._results_lock = threading.Lock()

    def verify(self, definition: ToolDefinition) -> VerificationResult:
        """Detect a tool and, if present, smoke-test it.

        A failed smoke test downgrades INSTALLED to WARNING; it never turns
        the result into ERROR or NOT_INSTALLED.
        """
        start = time.monotonic()
        result = self._detector.detect(definition)

        if result.installed:
            functionality = self._tester.run(definition.test_commands)
            result.functionality = functionality
            if not functionality.success:
                if result.status == VerificationStatus.INSTALLED:
                    result.status = VerificationStatus.WARNING
                LOGGER.warning(
                    f"{definition.name}: {functionality.passed}/{functionality.total} "
                    f"functionality tests passed"
                )

        result.duration_ms = int((time.monotonic() - start) * 1000)
        return result

    def verify_many(
        self,
        names: Sequence[str],
        definitions: Mapping[str, ToolDefinition],
        category: str = "custom",
    ) -> CategoryResult:
        """Verify many tools and collect the results in the given order.

        Args:
            names: Tool names, in the order results should be reported.
            definitions: Registered tool definitions by name. Unregistered
                names are probed by bare executable name.
            category: Category label for the returned result.

        Returns:
            CategoryResult with per-tool results and counts.
        """
        start = time.monotonic()
        category_result = CategoryResult(category=category)
        if not names:
            return category_result

        # Duplicate names are verified once, at their first position
        resolved = [
            self._definition_for(name, definitions) for name in dict.fromkeys(names)
        ]

        if self._sequential or len(resolved) == 1:
            by_name = self._verify_sequential(resolved)
        else:
            by_name = self._verify_parallel(resolved)

        for definition in resolved:
            category_result.add(by_name[definition.name])

        category_result.duration_ms = int((time.monotonic() - start) * 1000)
        LOGGER.info(
            f"{category}: {category_result.installed} installed, "
            f"{category_result.not_found} not found, {category_result.warnings} warnings"
        )
        return category_result

    @staticmethod
    def _definition_for(name: str, definitions: Mapping[str, ToolDefinition]) -> ToolDefinition:
        definition = definitions.get(name)
        if definition is None:
            LOGGER.debug(f"No definition registered for {name}, probing by name")
            return ToolDefinition.bare(name)
        if definition.name != name:
            # Results are keyed by the name the caller asked for
            return replace(definition, name=name)
        return definition

    def _verify_sequential(
        self, definitions: List[ToolDefinition]
    ) -> Dict[str, VerificationResult]:
        return {d.name: self._verify_safely(d) for d in definitions}

    def _verify_parallel(
        self, definitions: List[ToolDefinition]
    ) -> Dict[str, VerificationResult]:
        results: Dict[str, VerificationResult] = {}

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            future_to_name = {
                executor.submit(self._verify_safely, definition): definition.name
                for definition in definitions
            }

            for future in as_completed(future_to_name):
                name = future_to_name[future]
                result = future.result()
                with self._results_lock:
                    results[name] = result

        return results

    def _verify_safely(self, definition: ToolDefinition) -> VerificationResult:
        """Verify one tool, turning unexpected exceptions into an ERROR result."""
        try:
            return self.verify(definition)
        except Exception as e:
            LOGGER.error(f"Verification of {definition.name} raised exception: {e}")
            return VerificationResult(
                tool=definition.name,
                status=VerificationStatus.ERROR,
                error=str(e),
            )
