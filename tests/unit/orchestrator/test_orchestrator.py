"""Tests for the session orchestrator."""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Dict, Optional, Sequence

import pytest

from devtoolkit.bootstrap.preconditions import PreconditionValidator
from devtoolkit.config.loader import dict_to_config
from devtoolkit.config.models import PreconditionSettings
from devtoolkit.core.errors import PreconditionError, UnknownCategoryError
from devtoolkit.core.models import (
    DetectionStrategy,
    InstallResult,
    ToolDefinition,
    VerificationStatus,
)
from devtoolkit.detection.records import StaticRecordSource
from devtoolkit.orchestrator import (
    ConfigureOptions,
    InstallAction,
    Installer,
    InstallOptions,
    Orchestrator,
    TestOptions,
)

CONFIG = {
    "categories": {
        "development-tools": ["toolX", "toolY"],
        "ai-tools": ["toolX", "toolZ"],
    },
    "tools": {
        "toolX": {
            "version_commands": ["toolX --version"],
            "test_commands": [{"command": "toolX --help", "expected_output": "Usage"}],
        },
        "toolY": {"version_commands": ["toolY --version"]},
        "toolZ": {"version_commands": ["toolZ --version"]},
    },
    "configure": {"terminal": ["setup-terminal"]},
}


@pytest.fixture
def on_path(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    paths: Dict[str, str] = {"toolX": "/usr/bin/toolX"}

    def which(name: str, *args, **kwargs) -> Optional[str]:
        return paths.get(name)

    monkeypatch.setattr("shutil.which", which)
    return paths


@pytest.fixture
def orchestrator(fake_probe, on_path) -> Orchestrator:
    fake_probe.script("toolX --version", stdout="toolX 1.4.2\n")
    fake_probe.script("toolX --help", stdout="Usage: toolX [options]")
    return make_orchestrator(fake_probe)


def make_orchestrator(probe, config: Optional[dict] = None, **kwargs) -> Orchestrator:
    kwargs.setdefault("validator", PreconditionValidator(os_name=lambda: "linux"))
    return Orchestrator(
        dict_to_config(config or CONFIG),
        probe=probe,
        record_source=StaticRecordSource(),
        version="9.9.9",
        **kwargs,
    )


class ExplodingInstaller(Installer):
    def install(
        self,
        category: str,
        definitions: Sequence[ToolDefinition],
        options: InstallOptions,
    ) -> InstallResult:
        raise RuntimeError("package manager crashed")


class RecordingInstaller(Installer):
    def __init__(self) -> None:
        self.seen = []

    def install(self, category, definitions, options) -> InstallResult:
        self.seen.append((category, [d.name for d in definitions], options.action))
        return InstallResult(category=category, action=options.action.value)


class TestConstruction:
    def test_initialized_after_preconditions(self, orchestrator) -> None:
        status = orchestrator.get_status()
        assert status.is_initialized is True
        assert status.version == "9.9.9"
        assert status.configuration["categories"]["ai-tools"] == ["toolX", "toolZ"]

    def test_failed_precondition_raises(self, fake_probe) -> None:
        validator = PreconditionValidator(
            PreconditionSettings(supported_os=["windows"]), os_name=lambda: "linux"
        )
        with pytest.raises(PreconditionError) as exc_info:
            make_orchestrator(fake_probe, validator=validator)
        assert [c.name for c in exc_info.value.failed] == ["platform"]


class TestTestCategory:
    """Tests for Orchestrator.test_category."""

    def test_single_category(self, orchestrator) -> None:
        result = orchestrator.test_category("development-tools")

        assert list(result.results) == ["toolX", "toolY"]
        tool_x = result.results["toolX"]
        assert tool_x.status == VerificationStatus.INSTALLED
        assert tool_x.version == "toolX 1.4.2"
        assert tool_x.functionality.passed == 1
        assert result.results["toolY"].status == VerificationStatus.NOT_INSTALLED
        assert result.installed == 1
        assert result.not_found == 1
        assert orchestrator.get_status().test_results["development-tools"].total == 2

    def test_unknown_category_leaves_state_unchanged(self, orchestrator) -> None:
        before = orchestrator.get_status().to_dict()

        with pytest.raises(UnknownCategoryError):
            orchestrator.test_category("bogus-category")

        assert orchestrator.get_status().to_dict() == before

    def test_all_records_each_category_and_aggregate(self, orchestrator) -> None:
        aggregate = orchestrator.test_category("all")

        recorded = orchestrator.get_status().test_results
        assert set(recorded) == {
            "package-managers",
            "development-tools",
            "cloud-tools",
            "applications",
            "ai-tools",
            "all",
        }
        assert recorded["package-managers"].total == 0
        assert list(aggregate.results) == ["toolX", "toolY", "toolZ"]
        assert aggregate.installed == 1
        assert aggregate.not_found == 2

    def test_tool_filter(self, orchestrator) -> None:
        result = orchestrator.test_category(
            "ai-tools", TestOptions(tools=["toolZ", "ghost"])
        )
        assert list(result.results) == ["toolZ"]

    def test_unmatched_tool_warns_once_for_all(self, orchestrator, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="devtoolkit.orchestrator.orchestrator"):
            orchestrator.test_category("all", TestOptions(tools=["toolZ", "ghost"]))

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        unmatched = [m for m in warnings if m.startswith("Not in")]
        assert unmatched == ["Not in any category: ghost"]

    def test_tool_in_another_category_does_not_warn(self, orchestrator, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="devtoolkit.orchestrator.orchestrator"):
            orchestrator.test_category("all", TestOptions(tools=["toolY", "toolZ"]))

        assert "Not in" not in caplog.text

    def test_sequential(self, orchestrator) -> None:
        result = orchestrator.test_category("ai-tools", TestOptions(sequential=True))
        assert list(result.results) == ["toolX", "toolZ"]

    def test_failed_smoke_test_is_warning(self, fake_probe, on_path) -> None:
        fake_probe.script("toolX --version", stdout="toolX 1.4.2")
        fake_probe.script("toolX --help", stdout="unexpected")
        orchestrator = make_orchestrator(fake_probe)

        result = orchestrator.test_category("ai-tools")

        assert result.results["toolX"].status == VerificationStatus.WARNING
        assert result.warnings == 1


class TestInstallCategory:
    def test_dispatches_to_category_installer(self, fake_probe, on_path) -> None:
        installer = RecordingInstaller()
        orchestrator = make_orchestrator(fake_probe, installers={"ai-tools": installer})

        result = orchestrator.install_category(
            "ai-tools", InstallOptions(action=InstallAction.UPDATE)
        )

        assert installer.seen == [("ai-tools", ["toolX", "toolZ"], InstallAction.UPDATE)]
        assert result.success
        assert orchestrator.get_status().install_results["ai-tools"].action == "update"

    def test_installer_exception_is_captured(self, fake_probe, on_path) -> None:
        orchestrator = make_orchestrator(
            fake_probe, installers={"development-tools": ExplodingInstaller()}
        )

        result = orchestrator.install_category("development-tools")

        assert result.error == "package manager crashed"
        assert not result.success
        assert orchestrator.get_status().install_results["development-tools"].error

    def test_unknown_category(self, orchestrator) -> None:
        with pytest.raises(UnknownCategoryError):
            orchestrator.install_category("all")
        assert orchestrator.get_status().install_results == {}


class TestConfigureCategory:
    def test_runs_configured_steps(self, orchestrator, fake_probe) -> None:
        fake_probe.script("setup-terminal", stdout="configured")

        result = orchestrator.configure_category("terminal")

        assert result.success
        assert result.steps[0].output == "configured"
        assert "terminal" in orchestrator.get_status().config_results

    def test_dry_run(self, orchestrator, fake_probe) -> None:
        result = orchestrator.configure_category("terminal", ConfigureOptions(dry_run=True))
        assert result.steps[0].output == "dry run"
        assert not fake_probe.called("setup-terminal")

    def test_install_category_name_rejected(self, orchestrator) -> None:
        with pytest.raises(UnknownCategoryError):
            orchestrator.configure_category("development-tools")


class TestVerifyTools:
    def test_not_recorded(self, orchestrator) -> None:
        result = orchestrator.verify_tools(["toolX", "notFound"])

        assert result.category == "custom"
        assert result.results["toolX"].installed
        assert result.results["notFound"].status == VerificationStatus.NOT_INSTALLED
        assert orchestrator.get_status().test_results == {}


class TestDiagnosePath:
    def test_reports_tool_found_off_path(self, fake_probe, on_path, tmp_path: Path) -> None:
        install_dir = tmp_path / "ToolY" / "bin"
        install_dir.mkdir(parents=True)
        executable = install_dir / "toolY"
        executable.write_text("#!/bin/sh\n")
        executable.chmod(executable.stat().st_mode | stat.S_IXUSR)
        fake_probe.script("toolY --version", stdout="toolY 3.0")

        config = {
            "categories": {"development-tools": ["toolX", "toolY"]},
            "tools": {
                "toolX": {"version_commands": []},
                "toolY": {
                    "version_commands": ["toolY --version"],
                    "common_paths": [str(install_dir)],
                },
            },
        }
        orchestrator = make_orchestrator(fake_probe, config)

        found = orchestrator.diagnose_path("development-tools")

        assert len(found) == 1
        assert found[0].tool == "toolY"
        assert found[0].executable_path == str(executable)
        assert found[0].directory == str(install_dir)
        assert found[0].detected_by == DetectionStrategy.COMMON_PATH

    def test_nothing_to_fix(self, orchestrator) -> None:
        assert orchestrator.diagnose_path() == []


class TestReset:
    def test_clears_results_but_stays_initialized(self, fake_probe, on_path) -> None:
        fake_probe.script("toolX --version", stdout="toolX 1.4.2")
        orchestrator = make_orchestrator(fake_probe, installers={"ai-tools": RecordingInstaller()})
        orchestrator.install_category("ai-tools")
        orchestrator.test_category("ai-tools")
        orchestrator.configure_category("terminal", ConfigureOptions(dry_run=True))

        orchestrator.reset()

        status = orchestrator.get_status()
        assert status.is_initialized is True
        assert status.install_results == {}
        assert status.test_results == {}
        assert status.config_results == {}
