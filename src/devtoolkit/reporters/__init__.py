"""Reporters for devtoolkit output formatting."""

from __future__ import annotations

from typing import Dict, List, Optional, Type

from devtoolkit.reporters.base import Reporter
from devtoolkit.reporters.json_reporter import JSONReporter
from devtoolkit.reporters.table_reporter import TableReporter

REPORTERS: Dict[str, Type[Reporter]] = {
    "table": TableReporter,
    "json": JSONReporter,
}


def get_reporter(name: str) -> Optional[Reporter]:
    """Get an instantiated reporter by name."""
    reporter_class = REPORTERS.get(name)
    if reporter_class:
        return reporter_class()
    return None


def list_available_reporters() -> List[str]:
    """List names of all available reporters."""
    return list(REPORTERS)


__all__ = [
    "JSONReporter",
    "Reporter",
    "TableReporter",
    "get_reporter",
    "list_available_reporters",
]
