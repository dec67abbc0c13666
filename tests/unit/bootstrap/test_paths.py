"""Tests for devtoolkit.bootstrap.paths."""

from __future__ import annotations

from pathlib import Path

from devtoolkit.bootstrap.paths import (
    DEFAULT_HOME_DIR_NAME,
    ToolkitPaths,
    get_devtoolkit_home,
)


class TestGetDevtoolkitHome:
    def test_env_override(self, isolated_home: Path) -> None:
        assert get_devtoolkit_home() == isolated_home

    def test_default_under_user_home(self, monkeypatch) -> None:
        monkeypatch.delenv("DEVTOOLKIT_HOME", raising=False)
        assert get_devtoolkit_home() == Path.home() / DEFAULT_HOME_DIR_NAME


class TestToolkitPaths:
    def test_layout(self, tmp_path: Path) -> None:
        paths = ToolkitPaths(tmp_path)
        assert paths.config_dir == tmp_path / "config"
        assert paths.logs_dir == tmp_path / "logs"
        assert paths.log_file == tmp_path / "logs" / "devtoolkit.log"
        assert paths.global_config == tmp_path / "config" / "config.yml"

    def test_ensure_directories(self, tmp_path: Path) -> None:
        paths = ToolkitPaths(tmp_path / "home")
        paths.ensure_directories()
        assert paths.config_dir.is_dir()
        assert paths.logs_dir.is_dir()

    def test_default_uses_env(self, isolated_home: Path) -> None:
        assert ToolkitPaths.default().home == isolated_home
