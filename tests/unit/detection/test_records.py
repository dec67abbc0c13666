"""Tests for devtoolkit.detection.records."""

from __future__ import annotations

from devtoolkit.detection.records import (
    CompositeRecordSource,
    InstallRecord,
    PackageDatabaseSource,
    StaticRecordSource,
    is_registry_locator,
)


class TestRegistryLocators:
    def test_recognizes_hive_forms(self) -> None:
        assert is_registry_locator("HKLM\\SOFTWARE\\GitForWindows")
        assert is_registry_locator("HKCU:\\Software\\Microsoft")
        assert is_registry_locator("HKEY_LOCAL_MACHINE\\SOFTWARE\\Python")

    def test_rejects_other_locators(self) -> None:
        assert not is_registry_locator("dpkg:git")
        assert not is_registry_locator("HKXX\\Software")
        assert not is_registry_locator("HKLM")


class TestPackageDatabaseSource:
    """Tests for dpkg / rpm / brew lookups."""

    def test_dpkg_installed(self, fake_probe) -> None:
        fake_probe.script(
            ["dpkg-query", "-W", "-f=${Status}|${Version}", "git"],
            stdout="install ok installed|1:2.43.0-1",
        )
        record = PackageDatabaseSource(fake_probe).lookup("dpkg:git")
        assert record is not None
        assert record.source == "dpkg"
        assert record.version == "1:2.43.0-1"
        assert record.location is None

    def test_dpkg_removed_package(self, fake_probe) -> None:
        fake_probe.script(
            ["dpkg-query", "-W", "-f=${Status}|${Version}", "git"],
            stdout="deinstall ok config-files|1:2.43.0-1",
        )
        assert PackageDatabaseSource(fake_probe).lookup("dpkg:git") is None

    def test_rpm_missing(self, fake_probe) -> None:
        fake_probe.script(
            ["rpm", "-q", "--qf", "%{VERSION}", "git"],
            stdout="package git is not installed",
            exit_code=1,
        )
        assert PackageDatabaseSource(fake_probe).lookup("rpm:git") is None

    def test_brew_reads_version_and_prefix(self, fake_probe) -> None:
        fake_probe.script(["brew", "list", "--versions", "node"], stdout="node 22.1.0 20.5.0\n")
        fake_probe.script(["brew", "--prefix", "node"], stdout="/opt/homebrew/opt/node\n")
        record = PackageDatabaseSource(fake_probe).lookup("brew:node")
        assert record == InstallRecord(
            locator="brew:node",
            source="brew",
            location="/opt/homebrew/opt/node",
            version="22.1.0",
        )

    def test_unknown_scheme(self, fake_probe) -> None:
        assert PackageDatabaseSource(fake_probe).lookup("pacman:git") is None
        assert fake_probe.calls == []

    def test_manager_not_installed(self, fake_probe) -> None:
        assert PackageDatabaseSource(fake_probe).lookup("rpm:git") is None


class TestCompositeRecordSource:
    def test_routes_by_locator(self) -> None:
        registry_record = InstallRecord(locator="HKLM\\SOFTWARE\\X", source="registry")
        db_record = InstallRecord(locator="dpkg:x", source="dpkg")
        source = CompositeRecordSource(
            registry=StaticRecordSource({"HKLM\\SOFTWARE\\X": registry_record}),
            package_db=StaticRecordSource({"dpkg:x": db_record}),
        )
        assert source.lookup("HKLM\\SOFTWARE\\X") is registry_record
        assert source.lookup("dpkg:x") is db_record
        assert source.lookup("HKCU\\SOFTWARE\\Y") is None
