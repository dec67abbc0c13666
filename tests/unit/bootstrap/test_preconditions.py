"""Tests for devtoolkit.bootstrap.preconditions."""

from __future__ import annotations

from unittest.mock import patch

from devtoolkit.bootstrap.preconditions import (
    CheckStatus,
    PreconditionValidator,
)
from devtoolkit.config.models import PreconditionSettings


def _by_name(report):
    return {check.name: check for check in report.checks}


class TestPreconditionValidator:
    """Tests for startup environment checks."""

    def test_defaults_pass_on_supported_os(self) -> None:
        report = PreconditionValidator(os_name=lambda: "linux").validate()

        checks = _by_name(report)
        assert report.all_passed()
        assert checks["platform"].status == CheckStatus.PASSED
        assert checks["python"].status == CheckStatus.PASSED
        assert checks["admin"].status == CheckStatus.SKIPPED
        assert checks["package_manager"].status == CheckStatus.SKIPPED

    def test_unsupported_os_fails(self) -> None:
        report = PreconditionValidator(os_name=lambda: "sunos").validate()

        assert not report.all_passed()
        failed = report.failed_checks()
        assert [c.name for c in failed] == ["platform"]
        assert "sunos" in failed[0].message

    def test_supported_os_is_configurable(self) -> None:
        settings = PreconditionSettings(supported_os=["windows"])
        report = PreconditionValidator(settings, os_name=lambda: "linux").validate()
        assert not report.all_passed()

    def test_python_version_requirement(self) -> None:
        settings = PreconditionSettings(min_python="99.0")
        report = PreconditionValidator(settings, os_name=lambda: "linux").validate()
        assert _by_name(report)["python"].status == CheckStatus.FAILED

    def test_admin_required_and_missing(self) -> None:
        settings = PreconditionSettings(require_admin=True)
        report = PreconditionValidator(
            settings, os_name=lambda: "windows", admin_check=lambda: False
        ).validate()
        assert _by_name(report)["admin"].status == CheckStatus.FAILED

    def test_admin_required_and_present(self) -> None:
        settings = PreconditionSettings(require_admin=True)
        report = PreconditionValidator(
            settings, os_name=lambda: "windows", admin_check=lambda: True
        ).validate()
        assert report.all_passed()

    def test_package_manager_required(self) -> None:
        settings = PreconditionSettings(require_package_manager=True)
        validator = PreconditionValidator(
            settings, package_managers=["winget", "choco"], os_name=lambda: "windows"
        )

        with patch("devtoolkit.bootstrap.preconditions.shutil.which",
                   side_effect=lambda name: "C:\\choco.exe" if name == "choco" else None):
            report = validator.validate()
        assert _by_name(report)["package_manager"].message == "choco"

        with patch("devtoolkit.bootstrap.preconditions.shutil.which", return_value=None):
            report = validator.validate()
        assert _by_name(report)["package_manager"].status == CheckStatus.FAILED

    def test_report_to_dict(self) -> None:
        report = PreconditionValidator(os_name=lambda: "darwin").validate()
        data = report.to_dict()
        assert data["platform"] == {"status": "passed", "message": "darwin"}
