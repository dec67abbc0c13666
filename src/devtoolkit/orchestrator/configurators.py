"""Configurator collaborators.

A configurator applies the configured setup steps of one configure
category (terminal, powershell, tools, ai-tools) and reports each step.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import Argv, ConfigResult, ConfigStepOutcome, argv_text
from devtoolkit.core.process import ProcessProbe

LOGGER = get_logger(__name__)


@dataclass
class ConfigureOptions:
    """Options for one configurator run."""

    dry_run: bool = False


class Configurator(ABC):
    """Base class for configurator collaborators."""

    @abstractmethod
    def configure(
        self,
        category: str,
        steps: Sequence[Argv],
        options: ConfigureOptions,
    ) -> ConfigResult:
        """Apply configuration steps for a category.

        Args:
            category: Configure category name.
            steps: Step commands in order.
            options: Flags for this run.

        Returns:
            ConfigResult with one outcome per step.
        """


class CommandConfigurator(Configurator):
    """Runs each step as a command, continuing past failures."""

    def __init__(self, probe: ProcessProbe, timeout: Optional[float] = None) -> None:
        self._probe = probe
        self._timeout = timeout

    def configure(
        self,
        category: str,
        steps: Sequence[Argv],
        options: ConfigureOptions,
    ) -> ConfigResult:
        start = time.monotonic()
        result = ConfigResult(category=category)

        if not steps:
            LOGGER.info(f"No configuration steps defined for {category}")

        for argv in steps:
            text = argv_text(argv)
            if options.dry_run:
                result.steps.append(ConfigStepOutcome(step=text, success=True, output="dry run"))
                continue

            probe = self._probe.execute(argv, timeout=self._timeout)
            outcome = ConfigStepOutcome(
                step=text,
                success=probe.ok,
                output=probe.combined_output,
                error=probe.error,
            )
            if not probe.ok and outcome.error is None:
                outcome.error = f"exited with {probe.exit_code}"
            if not outcome.success:
                LOGGER.warning(f"{category}: step '{text}' failed: {outcome.error}")
            result.steps.append(outcome)

        result.duration_ms = int((time.monotonic() - start) * 1000)
        return result
