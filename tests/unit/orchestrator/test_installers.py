"""Tests for the package-manager installer."""

from __future__ import annotations

from typing import Dict, Optional

import pytest

from devtoolkit.core.models import ToolDefinition
from devtoolkit.detection.detector import Detector
from devtoolkit.detection.records import StaticRecordSource
from devtoolkit.orchestrator.installers import (
    InstallAction,
    InstallOptions,
    PackageManagerInstaller,
    build_commands,
)

TOOL_X = ToolDefinition(
    name="toolX",
    executable_names=("toolX",),
    version_commands=(("toolX", "--version"),),
    packages={"brew": "toolx", "winget": "Vendor.ToolX"},
)


@pytest.fixture
def on_path(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    """Mutable PATH: executable name -> resolved path."""
    paths: Dict[str, str] = {"brew": "/usr/local/bin/brew"}

    def which(name: str, *args, **kwargs) -> Optional[str]:
        return paths.get(name)

    monkeypatch.setattr("shutil.which", which)
    return paths


def make_installer(probe) -> PackageManagerInstaller:
    detector = Detector(probe, record_source=StaticRecordSource())
    return PackageManagerInstaller(probe, detector, package_managers=["winget", "brew"])


class TestBuildCommands:
    def test_fills_package_placeholder(self) -> None:
        assert build_commands("brew", InstallAction.UPDATE, "git") == [("brew", "upgrade", "git")]

    def test_scoop_reinstall_is_two_commands(self) -> None:
        commands = build_commands("scoop", InstallAction.REINSTALL, "git")
        assert commands == [("scoop", "uninstall", "git"), ("scoop", "install", "git")]


class TestPackageManagerInstaller:
    """Tests for PackageManagerInstaller."""

    def test_available_managers_follow_preference(self, fake_probe, on_path) -> None:
        installer = make_installer(fake_probe)
        assert installer.available_managers() == ["brew"]
        assert installer.select_manager(TOOL_X) == ("brew", "toolx")

    def test_installs_and_redetects(self, fake_probe, on_path) -> None:
        fake_probe.script("toolX --version", stdout="toolX 2.0\n")
        original_execute = fake_probe.execute

        def execute(command, timeout=None):
            result = original_execute(command, timeout)
            if tuple(command[:2]) == ("brew", "install"):
                on_path["toolX"] = "/usr/local/bin/toolX"
            return result

        fake_probe.execute = execute
        fake_probe.script("brew install toolx")

        result = make_installer(fake_probe).install("ai-tools", [TOOL_X], InstallOptions())

        outcome = result.outcomes["toolX"]
        assert result.success
        assert outcome.package_manager == "brew"
        assert outcome.command == "brew install toolx"
        assert outcome.executable_path == "/usr/local/bin/toolX"
        assert outcome.message == "install complete (toolX 2.0)"

    def test_command_success_without_detection_fails(self, fake_probe, on_path) -> None:
        fake_probe.script("brew install toolx")

        result = make_installer(fake_probe).install("ai-tools", [TOOL_X], InstallOptions())

        assert not result.success
        assert result.failed_tools == ["toolX"]

    def test_already_installed_is_skipped(self, fake_probe, on_path) -> None:
        on_path["toolX"] = "/usr/local/bin/toolX"
        fake_probe.script("toolX --version", stdout="toolX 2.0")

        result = make_installer(fake_probe).install("ai-tools", [TOOL_X], InstallOptions())

        outcome = result.outcomes["toolX"]
        assert outcome.success and outcome.skipped
        assert outcome.message == "already installed (toolX 2.0)"
        assert not fake_probe.called("brew install toolx")

    def test_force_runs_install_anyway(self, fake_probe, on_path) -> None:
        on_path["toolX"] = "/usr/local/bin/toolX"
        fake_probe.script("toolX --version", stdout="toolX 2.0")
        fake_probe.script("brew install toolx")

        result = make_installer(fake_probe).install(
            "ai-tools", [TOOL_X], InstallOptions(force=True)
        )

        assert result.success
        assert fake_probe.called("brew install toolx")

    def test_update_of_missing_tool_is_skipped(self, fake_probe, on_path) -> None:
        result = make_installer(fake_probe).install(
            "ai-tools", [TOOL_X], InstallOptions(action=InstallAction.UPDATE)
        )
        outcome = result.outcomes["toolX"]
        assert outcome.success and outcome.skipped
        assert outcome.message == "not installed"

    def test_dry_run_runs_nothing(self, fake_probe, on_path) -> None:
        result = make_installer(fake_probe).install(
            "ai-tools", [TOOL_X], InstallOptions(dry_run=True)
        )

        outcome = result.outcomes["toolX"]
        assert outcome.skipped
        assert outcome.message == "dry run"
        assert outcome.command == "brew install toolx"
        assert not fake_probe.called("brew install toolx")

    def test_no_manager_for_tool(self, fake_probe, on_path) -> None:
        bare = ToolDefinition(name="toolY", executable_names=("toolY",))
        result = make_installer(fake_probe).install("ai-tools", [bare], InstallOptions())
        assert result.outcomes["toolY"].message == "No available package manager provides this tool"
        assert not result.success

    def test_failing_command_reports_last_line(self, fake_probe, on_path) -> None:
        fake_probe.script(
            "brew install toolx", stderr="==> Fetching\nError: No available formula\n", exit_code=1
        )

        result = make_installer(fake_probe).install("ai-tools", [TOOL_X], InstallOptions())

        assert result.outcomes["toolX"].message == (
            "brew install toolx exited with 1: Error: No available formula"
        )

    def test_uninstall_succeeds_when_tool_disappears(self, fake_probe, on_path) -> None:
        on_path["toolX"] = "/usr/local/bin/toolX"
        fake_probe.script("toolX --version", stdout="toolX 2.0")
        original_execute = fake_probe.execute

        def execute(command, timeout=None):
            if tuple(command[:2]) == ("brew", "uninstall"):
                on_path.pop("toolX", None)
            return original_execute(command, timeout)

        fake_probe.execute = execute
        fake_probe.script("brew uninstall toolx")

        result = make_installer(fake_probe).install(
            "ai-tools", [TOOL_X], InstallOptions(action=InstallAction.UNINSTALL)
        )

        assert result.success
        assert result.outcomes["toolX"].message == "uninstalled"
