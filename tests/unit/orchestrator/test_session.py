"""Tests for session state."""

from __future__ import annotations

from devtoolkit.core.models import CategoryResult, ConfigResult, InstallResult, VerificationResult
from devtoolkit.orchestrator.session import SessionState


class TestSessionState:
    def test_starts_uninitialized_and_empty(self) -> None:
        snapshot = SessionState("1.2.3", {"a": 1}).snapshot()
        assert snapshot.is_initialized is False
        assert snapshot.version == "1.2.3"
        assert snapshot.test_results == {}
        assert snapshot.configuration == {"a": 1}

    def test_results_keyed_by_category_and_replaced(self) -> None:
        state = SessionState("1.0", {})
        state.record_install(InstallResult(category="ai-tools", error="first"))
        state.record_install(InstallResult(category="ai-tools"))
        state.record_config(ConfigResult(category="terminal"))

        snapshot = state.snapshot()
        assert list(snapshot.install_results) == ["ai-tools"]
        assert snapshot.install_results["ai-tools"].error is None
        assert "terminal" in snapshot.config_results

    def test_snapshot_is_a_copy(self) -> None:
        state = SessionState("1.0", {"tools": ["git"]})
        result = CategoryResult(category="cloud-tools")
        state.record_test(result)

        snapshot = state.snapshot()
        snapshot.test_results["cloud-tools"].add(VerificationResult(tool="kubectl"))
        snapshot.configuration["tools"].append("node")

        fresh = state.snapshot()
        assert fresh.test_results["cloud-tools"].total == 0
        assert fresh.configuration == {"tools": ["git"]}

    def test_clear_keeps_initialization(self) -> None:
        state = SessionState("1.0", {})
        state.mark_initialized()
        state.record_test(CategoryResult(category="ai-tools"))

        state.clear()

        snapshot = state.snapshot()
        assert snapshot.is_initialized is True
        assert snapshot.test_results == {}

    def test_to_dict(self) -> None:
        state = SessionState("1.0", {})
        state.record_config(ConfigResult(category="tools"))
        data = state.snapshot().to_dict()
        assert data["config_results"]["tools"]["success"] is True
        assert data["install_results"] == {}
