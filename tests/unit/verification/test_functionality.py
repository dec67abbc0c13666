"""Tests for devtoolkit.verification.functionality."""

from __future__ import annotations

import pytest

from devtoolkit.core.models import TestCommand
from devtoolkit.verification.functionality import (
    DEFAULT_THRESHOLD,
    FunctionalityTester,
    output_matches,
)


def _commands(count: int):
    return [TestCommand(argv=("toolX", f"cmd{i}"), expected_output="ok") for i in range(count)]


def _script_passes(probe, commands, passing: int) -> None:
    for i, command in enumerate(commands):
        probe.script(command.argv, stdout="ok" if i < passing else "nope")


class TestOutputMatches:
    def test_regex_search(self) -> None:
        assert output_matches("git version 2.43.0", r"git version \d+\.\d+")

    def test_case_sensitive(self) -> None:
        assert not output_matches("Usage: tool", "usage")

    def test_invalid_regex_falls_back_to_substring(self) -> None:
        assert output_matches("value [x", "[x")
        assert not output_matches("value", "[x")


class TestFunctionalityTester:
    """Tests for scoring smoke tests against the threshold."""

    def test_default_threshold(self, fake_probe) -> None:
        assert FunctionalityTester(fake_probe).threshold == DEFAULT_THRESHOLD == 0.7

    def test_rejects_threshold_out_of_range(self, fake_probe) -> None:
        with pytest.raises(ValueError):
            FunctionalityTester(fake_probe, threshold=1.5)

    def test_seven_of_ten_passes(self, fake_probe) -> None:
        commands = _commands(10)
        _script_passes(fake_probe, commands, 7)

        result = FunctionalityTester(fake_probe).run(commands)

        assert result.passed == 7
        assert result.total == 10
        assert result.success is True

    def test_six_of_ten_fails(self, fake_probe) -> None:
        commands = _commands(10)
        _script_passes(fake_probe, commands, 6)

        result = FunctionalityTester(fake_probe).run(commands)

        assert result.passed == 6
        assert result.success is False

    def test_no_commands_is_success(self, fake_probe) -> None:
        result = FunctionalityTester(fake_probe).run([])
        assert result.total == 0
        assert result.passed == 0
        assert result.success is True

    def test_continues_after_spawn_failure(self, fake_probe) -> None:
        commands = [
            TestCommand(argv=("missing-tool", "x"), expected_output="ok"),
            TestCommand(argv=("toolX", "y"), expected_output="ok"),
        ]
        fake_probe.script(["toolX", "y"], stdout="ok")

        result = FunctionalityTester(fake_probe).run(commands)

        assert result.total == 2
        assert result.passed == 1
        assert result.outcomes[0].passed is False
        assert result.outcomes[0].error
        assert result.outcomes[1].passed is True

    def test_timeout_is_failure_with_error(self, fake_probe) -> None:
        fake_probe.script(["toolX", "slow"], timed_out=True, error="Timed out after 5s")
        result = FunctionalityTester(fake_probe).run([TestCommand(argv=("toolX", "slow"))])

        assert result.passed == 0
        assert result.outcomes[0].error == "Timed out after 5s"

    def test_no_pattern_passes_on_spawn_even_with_nonzero_exit(self, fake_probe) -> None:
        fake_probe.script(["toolX", "--help"], stdout="", exit_code=1)
        result = FunctionalityTester(fake_probe).run([TestCommand(argv=("toolX", "--help"))])

        assert result.passed == 1
        assert result.outcomes[0].exit_code == 1

    def test_empty_output_with_pattern_fails(self, fake_probe) -> None:
        fake_probe.script(["toolX", "list"], stdout="")
        result = FunctionalityTester(
            fake_probe
        ).run([TestCommand(argv=("toolX", "list"), expected_output=".*")])

        assert result.passed == 0
        assert result.outcomes[0].error is None

    def test_pattern_matches_stderr(self, fake_probe) -> None:
        fake_probe.script(["toolX", "info"], stderr="Server: running")
        result = FunctionalityTester(fake_probe).run(
            [TestCommand(argv=("toolX", "info"), expected_output="Server")]
        )
        assert result.passed == 1

    def test_custom_threshold(self, fake_probe) -> None:
        commands = _commands(4)
        _script_passes(fake_probe, commands, 2)

        assert FunctionalityTester(fake_probe, threshold=0.5).run(commands).success is True
        assert FunctionalityTester(fake_probe, threshold=0.75).run(commands).success is False
