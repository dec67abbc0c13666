"""Session state owned by the orchestrator."""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from typing import Any, Dict

from devtoolkit.core.models import CategoryResult, ConfigResult, InstallResult


@dataclass
class SessionSnapshot:
    """Read-only copy of the session state."""

    is_initialized: bool
    version: str
    install_results: Dict[str, InstallResult] = field(default_factory=dict)
    test_results: Dict[str, CategoryResult] = field(default_factory=dict)
    config_results: Dict[str, ConfigResult] = field(default_factory=dict)
    configuration: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_initialized": self.is_initialized,
            "version": self.version,
            "install_results": {k: v.to_dict() for k, v in self.install_results.items()},
            "test_results": {k: v.to_dict() for k, v in self.test_results.items()},
            "config_results": {k: v.to_dict() for k, v in self.config_results.items()},
            "configuration": self.configuration,
        }


class SessionState:
    """Result maps for one orchestrator session, guarded by a lock."""

    def __init__(self, version: str, configuration: Dict[str, Any]) -> None:
        self._lock = threading.Lock()
        self._version = version
        self._configuration = configuration
        self._initialized = False
        self._install_results: Dict[str, InstallResult] = {}
        self._test_results: Dict[str, CategoryResult] = {}
        self._config_results: Dict[str, ConfigResult] = {}

    def mark_initialized(self) -> None:
        with self._lock:
            self._initialized = True

    def record_install(self, result: InstallResult) -> None:
        with self._lock:
            self._install_results[result.category] = result

    def record_test(self, result: CategoryResult) -> None:
        with self._lock:
            self._test_results[result.category] = result

    def record_config(self, result: ConfigResult) -> None:
        with self._lock:
            self._config_results[result.category] = result

    def clear(self) -> None:
        """Drop all recorded results. Initialization is kept."""
        with self._lock:
            self._install_results.clear()
            self._test_results.clear()
            self._config_results.clear()

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                is_initialized=self._initialized,
                version=self._version,
                install_results=copy.deepcopy(self._install_results),
                test_results=copy.deepcopy(self._test_results),
                config_results=copy.deepcopy(self._config_results),
                configuration=copy.deepcopy(self._configuration),
            )
