"""Tests for devtoolkit.cli.commands."""

from __future__ import annotations

from argparse import Namespace

import pytest

from devtoolkit.cli import commands
from devtoolkit.cli.exit_codes import EXIT_SUCCESS
from devtoolkit.core.errors import ToolkitError


class TestRequireOrchestrator:
    """Commands that act on a session refuse to run without one."""

    @pytest.mark.parametrize(
        "factory",
        [
            commands.CheckCommand,
            commands.ConfigureCommand,
            commands.FixPathCommand,
            commands.InstallCommand,
            lambda: commands.StatusCommand(version="9.9.9"),
            commands.TestCommand,
        ],
        ids=["check", "configure", "fix-path", "install", "status", "test"],
    )
    def test_missing_orchestrator_raises(self, factory) -> None:
        command = factory()

        with pytest.raises(ToolkitError, match=f"{command.name} requires an initialized"):
            command.execute(Namespace(), None)

    def test_help_runs_without_orchestrator(self, capsys) -> None:
        command = commands.HelpCommand(version="9.9.9")

        assert command.needs_orchestrator is False
        assert command.execute(Namespace(), None) == EXIT_SUCCESS
        assert "devtoolkit 9.9.9" in capsys.readouterr().out
