"""Session orchestrator.

Owns the probe, detector, tester and verifier for one session, checks the
environment preconditions at construction, dispatches category operations
to installer and configurator collaborators, and accumulates every result
in session state until ``reset()``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from devtoolkit import __version__
from devtoolkit.bootstrap.preconditions import PreconditionValidator
from devtoolkit.config.loader import load_config
from devtoolkit.config.models import ToolkitConfig
from devtoolkit.core.errors import PreconditionError
from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import (
    CategoryResult,
    ConfigResult,
    DetectionStrategy,
    InstallResult,
    ToolDefinition,
    VerificationResult,
)
from devtoolkit.core.process import ProcessProbe
from devtoolkit.detection.detector import Detector
from devtoolkit.detection.records import InstallRecordSource
from devtoolkit.orchestrator.categories import (
    ALL_CATEGORIES,
    Category,
    parse_category,
    parse_configure_category,
    parse_test_target,
)
from devtoolkit.orchestrator.configurators import (
    CommandConfigurator,
    ConfigureOptions,
    Configurator,
)
from devtoolkit.orchestrator.installers import (
    Installer,
    InstallOptions,
    PackageManagerInstaller,
)
from devtoolkit.orchestrator.session import SessionSnapshot, SessionState
from devtoolkit.verification.functionality import FunctionalityTester
from devtoolkit.verification.verifier import ToolVerifier

LOGGER = get_logger(__name__)


@dataclass
class TestOptions:
    """Options for a test run."""

    __test__ = False

    tools: List[str] = field(default_factory=list)
    sequential: bool = False


@dataclass
class PathDiagnosis:
    """A tool that is installed but not reachable through PATH."""

    tool: str
    executable_path: str
    directory: str
    detected_by: Optional[DetectionStrategy]


class Orchestrator:
    """Runs category operations and keeps the session's results."""

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        *,
        probe: Optional[ProcessProbe] = None,
        validator: Optional[PreconditionValidator] = None,
        installers: Optional[Mapping[str, Installer]] = None,
        configurators: Optional[Mapping[str, Configurator]] = None,
        record_source: Optional[InstallRecordSource] = None,
        version: Optional[str] = None,
    ) -> None:
        """Initialize the orchestrator and validate the environment.

        Args:
            config: Loaded configuration. Defaults to ``load_config()``.
            probe: Process probe shared by every component.
            validator: Precondition validator. Defaults to one built from
                the configuration's precondition settings.
            installers: Installer overrides keyed by category name.
            configurators: Configurator overrides keyed by configure
                category name.
            record_source: Install-record source for the detector.
            version: Version reported in status snapshots.

        Raises:
            PreconditionError: If any precondition check fails.
        """
        self._config = config or load_config()
        settings = self._config.verification

        self._probe = probe or ProcessProbe(default_timeout=settings.timeout)
        self._detector = Detector(
            self._probe,
            record_source=record_source,
            version_lines=settings.version_lines,
        )
        self._tester = FunctionalityTester(self._probe, threshold=settings.threshold)
        self._verifier = ToolVerifier(
            self._detector,
            self._tester,
            max_workers=settings.max_workers,
            sequential=settings.sequential,
        )

        self._installers: Dict[str, Installer] = dict(installers or {})
        self._default_installer = PackageManagerInstaller(
            self._probe,
            self._detector,
            package_managers=self._config.package_managers,
            timeout=settings.install_timeout,
        )
        self._configurators: Dict[str, Configurator] = dict(configurators or {})
        self._default_configurator = CommandConfigurator(
            self._probe, timeout=settings.install_timeout
        )

        self._state = SessionState(version or __version__, self._config.to_dict())

        validator = validator or PreconditionValidator(
            self._config.preconditions,
            package_managers=self._config.package_managers,
        )
        report = validator.validate()
        if not report.all_passed():
            raise PreconditionError(report.failed_checks())

        self._state.mark_initialized()
        LOGGER.debug("Orchestrator initialized")

    @property
    def config(self) -> ToolkitConfig:
        return self._config

    def install_category(
        self, category: str, options: Optional[InstallOptions] = None
    ) -> InstallResult:
        """Run an installer action over every tool of a category.

        Args:
            category: Install category name.
            options: Action and flags. Defaults to a plain install.

        Returns:
            The recorded InstallResult.

        Raises:
            UnknownCategoryError: If the category is not recognized.
        """
        parsed = parse_category(category)
        options = options or InstallOptions()
        self._warn_unmatched([parsed], options.tools)
        definitions = [
            self._definition(name) for name in self._select_tools(parsed, options.tools)
        ]
        installer = self._installers.get(parsed.value, self._default_installer)

        LOGGER.info(f"{options.action.value} {parsed.value}: {len(definitions)} tools")
        start = time.monotonic()
        try:
            result = installer.install(parsed.value, definitions, options)
        except Exception as e:
            LOGGER.error(f"Installer for {parsed.value} raised exception: {e}")
            result = InstallResult(
                category=parsed.value,
                action=options.action.value,
                error=str(e),
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        self._state.record_install(result)
        return result

    def test_category(
        self, category: str, options: Optional[TestOptions] = None
    ) -> CategoryResult:
        """Verify every tool of a category, or of all categories.

        With ``"all"`` each category's result is recorded under its own
        name and the aggregate is recorded under ``"all"``.

        Args:
            category: Category name or ``"all"``.
            options: Tool filter and sequential flag.

        Returns:
            The recorded CategoryResult.

        Raises:
            UnknownCategoryError: If the category is not recognized.
        """
        targets = parse_test_target(category)
        options = options or TestOptions()
        self._warn_unmatched(targets, options.tools)
        verifier = self._verifier_for(options)

        if category != ALL_CATEGORIES:
            result = self._test_one(verifier, targets[0], options)
            self._state.record_test(result)
            return result

        start = time.monotonic()
        aggregate = CategoryResult(category=ALL_CATEGORIES)
        for target in targets:
            result = self._test_one(verifier, target, options)
            self._state.record_test(result)
            for name, tool_result in result.results.items():
                # A tool listed in several categories counts once
                if name not in aggregate.results:
                    aggregate.add(tool_result)

        aggregate.duration_ms = int((time.monotonic() - start) * 1000)
        self._state.record_test(aggregate)
        return aggregate

    def configure_category(
        self, category: str, options: Optional[ConfigureOptions] = None
    ) -> ConfigResult:
        """Apply the configuration steps of a configure category.

        Raises:
            UnknownCategoryError: If the category is not recognized.
        """
        parsed = parse_configure_category(category)
        options = options or ConfigureOptions()
        steps = self._config.steps_for(parsed.value)
        configurator = self._configurators.get(parsed.value, self._default_configurator)

        start = time.monotonic()
        try:
            result = configurator.configure(parsed.value, steps, options)
        except Exception as e:
            LOGGER.error(f"Configurator for {parsed.value} raised exception: {e}")
            result = ConfigResult(
                category=parsed.value,
                error=str(e),
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        self._state.record_config(result)
        return result

    def verify_tools(self, names: List[str]) -> CategoryResult:
        """Verify arbitrary tools by name without recording the result."""
        return self._verifier.verify_many(names, self._config.tools, category="custom")

    def diagnose_path(self, category: Optional[str] = None) -> List[PathDiagnosis]:
        """Find installed tools whose executable is not reachable via PATH.

        Args:
            category: Restrict the scan to one category. Defaults to all.

        Returns:
            One entry per tool found by a common-path or install-record
            lookup, with the directory that would need to be on PATH.

        Raises:
            UnknownCategoryError: If the category is not recognized.
        """
        targets = parse_test_target(category or ALL_CATEGORIES)
        names: List[str] = []
        for target in targets:
            for name in self._config.tools_for(target.value):
                if name not in names:
                    names.append(name)

        found: List[PathDiagnosis] = []
        for name in names:
            result = self._detector.detect(self._definition(name))
            if not _needs_path_entry(result):
                continue
            found.append(
                PathDiagnosis(
                    tool=name,
                    executable_path=result.executable_path,
                    directory=str(Path(result.executable_path).parent),
                    detected_by=result.detected_by,
                )
            )
        return found

    def get_status(self) -> SessionSnapshot:
        """Return a copy of the session state."""
        return self._state.snapshot()

    def reset(self) -> None:
        """Clear recorded results. Preconditions are not re-run."""
        self._state.clear()
        LOGGER.debug("Session results cleared")

    def _definition(self, name: str) -> ToolDefinition:
        return self._config.definition(name) or ToolDefinition.bare(name)

    def _select_tools(self, category: Category, wanted: List[str]) -> List[str]:
        names = self._config.tools_for(category.value)
        if not wanted:
            return names
        return [n for n in names if n in wanted]

    def _warn_unmatched(self, categories: List[Category], wanted: List[str]) -> None:
        """Warn about --tool names that no targeted category contains."""
        known = {n for c in categories for n in self._config.tools_for(c.value)}
        unknown = [w for w in wanted if w not in known]
        if unknown:
            label = categories[0].value if len(categories) == 1 else "any category"
            LOGGER.warning(f"Not in {label}: {', '.join(unknown)}")

    def _test_one(
        self, verifier: ToolVerifier, category: Category, options: TestOptions
    ) -> CategoryResult:
        names = self._select_tools(category, options.tools)
        return verifier.verify_many(names, self._config.tools, category=category.value)

    def _verifier_for(self, options: TestOptions) -> ToolVerifier:
        if not options.sequential:
            return self._verifier
        return ToolVerifier(self._detector, self._tester, sequential=True)


def _needs_path_entry(result: VerificationResult) -> bool:
    return (
        result.installed
        and bool(result.executable_path)
        and result.detected_by in (DetectionStrategy.COMMON_PATH, DetectionStrategy.INSTALL_RECORD)
    )
