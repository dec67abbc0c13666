"""Tests for devtoolkit.bootstrap.platform."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from devtoolkit.bootstrap.platform import (
    PlatformInfo,
    current_os,
    get_platform_info,
    is_admin,
    normalize_arch,
)


class TestNormalizeArch:
    @pytest.mark.parametrize(
        "machine,expected",
        [("x86_64", "amd64"), ("AMD64", "amd64"), ("aarch64", "arm64"), ("i686", "386")],
    )
    def test_known_architectures(self, machine: str, expected: str) -> None:
        assert normalize_arch(machine) == expected

    def test_unknown_architecture(self) -> None:
        assert normalize_arch("riscv64") is None


class TestPlatformInfo:
    def test_label(self) -> None:
        assert PlatformInfo(os="windows", arch="amd64").label == "windows-amd64"

    def test_is_windows(self) -> None:
        assert PlatformInfo(os="windows", arch="amd64").is_windows
        assert not PlatformInfo(os="linux", arch="amd64").is_windows

    def test_is_supported(self) -> None:
        assert PlatformInfo(os="darwin", arch="arm64").is_supported()
        assert not PlatformInfo(os="sunos", arch="amd64").is_supported()
        assert not PlatformInfo(os="linux", arch="riscv64").is_supported()

    def test_get_platform_info_never_raises(self) -> None:
        with patch("devtoolkit.bootstrap.platform.platform.system", return_value="Plan9"), \
             patch("devtoolkit.bootstrap.platform.platform.machine", return_value="mips"):
            info = get_platform_info()
        assert info == PlatformInfo(os="plan9", arch="mips")

    def test_current_os_is_lowercase(self) -> None:
        with patch("devtoolkit.bootstrap.platform.platform.system", return_value="Darwin"):
            assert current_os() == "darwin"


class TestIsAdmin:
    def test_root_on_posix(self) -> None:
        with patch("devtoolkit.bootstrap.platform.os.name", "posix"), \
             patch("devtoolkit.bootstrap.platform.os.geteuid", return_value=0, create=True):
            assert is_admin() is True

    def test_regular_user_on_posix(self) -> None:
        with patch("devtoolkit.bootstrap.platform.os.name", "posix"), \
             patch("devtoolkit.bootstrap.platform.os.geteuid", return_value=1000, create=True):
            assert is_admin() is False
