"""Persisted install-record lookup.

An install-record locator names a place where an installer leaves a trace
of a tool, independent of PATH:

- Windows registry keys, e.g.
  ``HKLM\\SOFTWARE\\Microsoft\\Windows\\CurrentVersion\\Uninstall\\Git_is1``
  (PowerShell-style ``HKLM:\\...`` is accepted too). ``InstallLocation`` and
  ``DisplayVersion`` values are read from the key.
- Package databases, written as ``<manager>:<package>``: ``dpkg:git``,
  ``rpm:git``, ``brew:git``.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from devtoolkit.core.logging import get_logger
from devtoolkit.core.process import ProcessProbe

LOGGER = get_logger(__name__)

REGISTRY_HIVES = ("HKLM", "HKCU", "HKEY_LOCAL_MACHINE", "HKEY_CURRENT_USER")
PACKAGE_DB_SCHEMES = ("dpkg", "rpm", "brew")


@dataclass
class InstallRecord:
    """A persisted install record for one tool."""

    locator: str
    source: str
    location: Optional[str] = None
    version: Optional[str] = None


class InstallRecordSource(ABC):
    """Looks up install records by locator."""

    @abstractmethod
    def lookup(self, locator: str) -> Optional[InstallRecord]:
        """Return the record for a locator, or None if there is none."""


def _split_registry_locator(locator: str) -> Optional[Tuple[str, str]]:
    """Split ``HKLM\\path`` or ``HKLM:\\path`` into (hive, subkey)."""
    normalized = locator.replace("/", "\\")
    head, sep, rest = normalized.partition("\\")
    hive = head.rstrip(":").upper()
    if not sep or hive not in REGISTRY_HIVES:
        return None
    return hive, rest.strip("\\")


def is_registry_locator(locator: str) -> bool:
    return _split_registry_locator(locator) is not None


class WindowsRegistrySource(InstallRecordSource):
    """Reads install records from the Windows registry.

    On other platforms every lookup returns None.
    """

    def lookup(self, locator: str) -> Optional[InstallRecord]:
        if sys.platform != "win32":
            return None

        parts = _split_registry_locator(locator)
        if parts is None:
            LOGGER.debug(f"Not a registry locator: {locator}")
            return None
        hive_name, subkey = parts

        import winreg

        hives = {
            "HKLM": winreg.HKEY_LOCAL_MACHINE,
            "HKEY_LOCAL_MACHINE": winreg.HKEY_LOCAL_MACHINE,
            "HKCU": winreg.HKEY_CURRENT_USER,
            "HKEY_CURRENT_USER": winreg.HKEY_CURRENT_USER,
        }
        hive = hives[hive_name]

        for view in (winreg.KEY_WOW64_64KEY, winreg.KEY_WOW64_32KEY):
            try:
                with winreg.OpenKey(hive, subkey, 0, winreg.KEY_READ | view) as key:
                    return InstallRecord(
                        locator=locator,
                        source="registry",
                        location=self._read_string(winreg, key, "InstallLocation"),
                        version=self._read_string(winreg, key, "DisplayVersion"),
                    )
            except FileNotFoundError:
                continue
            except OSError as e:
                LOGGER.warning(f"Cannot read registry key {locator}: {e}")
                return None

        LOGGER.debug(f"Registry key not found: {locator}")
        return None

    @staticmethod
    def _read_string(winreg, key, value_name: str) -> Optional[str]:
        try:
            value, value_type = winreg.QueryValueEx(key, value_name)
        except OSError:
            return None
        if value_type not in (winreg.REG_SZ, winreg.REG_EXPAND_SZ):
            return None
        text = str(value).strip().strip('"')
        return text or None


class PackageDatabaseSource(InstallRecordSource):
    """Queries OS package databases (dpkg, rpm, Homebrew)."""

    def __init__(self, probe: ProcessProbe) -> None:
        self._probe = probe

    def lookup(self, locator: str) -> Optional[InstallRecord]:
        scheme, sep, package = locator.partition(":")
        if not sep or not package or scheme not in PACKAGE_DB_SCHEMES:
            LOGGER.debug(f"Not a package database locator: {locator}")
            return None

        if scheme == "dpkg":
            return self._lookup_dpkg(locator, package)
        if scheme == "rpm":
            return self._lookup_rpm(locator, package)
        return self._lookup_brew(locator, package)

    def _lookup_dpkg(self, locator: str, package: str) -> Optional[InstallRecord]:
        result = self._probe.execute(
            ["dpkg-query", "-W", "-f=${Status}|${Version}", package]
        )
        if not result.ok:
            return None
        status, _, version = result.stdout.strip().partition("|")
        if "install ok installed" not in status:
            return None
        return InstallRecord(locator=locator, source="dpkg", version=version or None)

    def _lookup_rpm(self, locator: str, package: str) -> Optional[InstallRecord]:
        result = self._probe.execute(["rpm", "-q", "--qf", "%{VERSION}", package])
        if not result.ok:
            return None
        return InstallRecord(
            locator=locator, source="rpm", version=result.stdout.strip() or None
        )

    def _lookup_brew(self, locator: str, package: str) -> Optional[InstallRecord]:
        listed = self._probe.execute(["brew", "list", "--versions", package])
        if not listed.ok or not listed.stdout.strip():
            return None
        # "git 2.45.1 2.44.0" - first listed version is the active one
        fields = listed.stdout.split()
        version = fields[1] if len(fields) > 1 else None

        prefix = self._probe.execute(["brew", "--prefix", package])
        location = prefix.stdout.strip() if prefix.ok else None
        return InstallRecord(
            locator=locator, source="brew", location=location or None, version=version
        )


class CompositeRecordSource(InstallRecordSource):
    """Routes each locator to the source that understands it."""

    def __init__(
        self,
        registry: InstallRecordSource,
        package_db: InstallRecordSource,
    ) -> None:
        self._registry = registry
        self._package_db = package_db

    def lookup(self, locator: str) -> Optional[InstallRecord]:
        if is_registry_locator(locator):
            return self._registry.lookup(locator)
        return self._package_db.lookup(locator)


class StaticRecordSource(InstallRecordSource):
    """Record source backed by a fixed mapping of locators to records."""

    def __init__(self, records: Optional[Dict[str, InstallRecord]] = None) -> None:
        self._records = dict(records or {})

    def lookup(self, locator: str) -> Optional[InstallRecord]:
        return self._records.get(locator)


def default_record_source(probe: ProcessProbe) -> InstallRecordSource:
    """Build the record source for the current platform."""
    return CompositeRecordSource(
        registry=WindowsRegistrySource(),
        package_db=PackageDatabaseSource(probe),
    )
