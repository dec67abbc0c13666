"""Tests for the command configurator."""

from __future__ import annotations

from devtoolkit.orchestrator.configurators import CommandConfigurator, ConfigureOptions


class TestCommandConfigurator:
    def test_continues_after_failed_step(self, fake_probe) -> None:
        fake_probe.script("setup-two --flag", stdout="done")
        steps = [("setup-one",), ("setup-two", "--flag")]

        result = CommandConfigurator(fake_probe).configure("terminal", steps, ConfigureOptions())

        assert [s.step for s in result.steps] == ["setup-one", "setup-two --flag"]
        assert result.steps[0].success is False
        assert "No such file" in result.steps[0].error
        assert result.steps[1].success is True
        assert result.steps[1].output == "done"
        assert not result.success

    def test_nonzero_exit_sets_error(self, fake_probe) -> None:
        fake_probe.script("setup-one", exit_code=3)
        result = CommandConfigurator(fake_probe).configure(
            "tools", [("setup-one",)], ConfigureOptions()
        )
        assert result.steps[0].error == "exited with 3"

    def test_dry_run(self, fake_probe) -> None:
        result = CommandConfigurator(fake_probe).configure(
            "tools", [("setup-one",)], ConfigureOptions(dry_run=True)
        )
        assert result.success
        assert result.steps[0].output == "dry run"
        assert fake_probe.calls == []

    def test_no_steps(self, fake_probe) -> None:
        result = CommandConfigurator(fake_probe).configure("ai-tools", [], ConfigureOptions())
        assert result.success
        assert result.steps == []
