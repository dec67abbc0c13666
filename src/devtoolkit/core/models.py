"""Core data model shared by detection, verification, and orchestration."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Union

UNKNOWN_VERSION = "unknown"

Argv = Tuple[str, ...]


def to_argv(command: Union[str, Sequence[str]]) -> Argv:
    """Normalize a command into an argv tuple.

    Strings are split with shell-like quoting rules but are never handed to
    a shell.
    """
    if isinstance(command, str):
        return tuple(shlex.split(command))
    return tuple(str(part) for part in command)


def argv_text(argv: Sequence[str]) -> str:
    """Render an argv tuple for display and logs."""
    return shlex.join(list(argv))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VerificationStatus(str, Enum):
    """Discrete outcome of verifying one tool."""

    NOT_INSTALLED = "not_installed"
    INSTALLED = "installed"
    WARNING = "warning"
    ERROR = "error"


class DetectionStrategy(str, Enum):
    """Strategy that established a tool's presence."""

    PATH = "path"
    COMMON_PATH = "common_path"
    INSTALL_RECORD = "install_record"


@dataclass(frozen=True)
class TestCommand:
    """One smoke-test command with an optional expected-output pattern."""

    __test__ = False  # keep pytest from collecting this class

    argv: Argv
    expected_output: Optional[str] = None

    @property
    def text(self) -> str:
        return argv_text(self.argv)


@dataclass(frozen=True)
class ToolDefinition:
    """Static description of how to detect and smoke-test one tool."""

    name: str
    executable_names: Tuple[str, ...] = ()
    version_commands: Tuple[Argv, ...] = ()
    test_commands: Tuple[TestCommand, ...] = ()
    common_paths: Tuple[str, ...] = ()
    registry_keys: Tuple[str, ...] = ()
    packages: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def bare(cls, name: str) -> "ToolDefinition":
        """Definition used for tool names with no registered definition."""
        return cls(
            name=name,
            executable_names=(name,),
            version_commands=((name, "--version"),),
        )


@dataclass
class CommandOutcome:
    """Outcome of running a single functionality-test command."""

    command: str
    output: str = ""
    expected_output: Optional[str] = None
    passed: bool = False
    exit_code: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "output": self.output,
            "expected_output": self.expected_output,
            "passed": self.passed,
            "exit_code": self.exit_code,
            "error": self.error,
        }


@dataclass
class FunctionalityTestResult:
    """Scored result of running a tool's smoke tests."""

    __test__ = False

    outcomes: List[CommandOutcome] = field(default_factory=list)
    passed: int = 0
    total: int = 0
    threshold: float = 0.7
    success: bool = True
    duration_ms: int = 0

    @property
    def pass_rate(self) -> float:
        if self.total == 0:
            return 1.0
        return self.passed / self.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "total": self.total,
            "threshold": self.threshold,
            "success": self.success,
            "duration_ms": self.duration_ms,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


@dataclass
class VerificationResult:
    """Result of detecting (and optionally smoke-testing) one tool.

    A result with ``installed=False`` always carries the ``unknown`` version
    and an empty executable path.
    """

    tool: str
    installed: bool = False
    version: str = UNKNOWN_VERSION
    executable_path: str = ""
    evidence: Set[str] = field(default_factory=set)
    status: VerificationStatus = VerificationStatus.NOT_INSTALLED
    error: Optional[str] = None
    notes: List[str] = field(default_factory=list)
    detected_by: Optional[DetectionStrategy] = None
    functionality: Optional[FunctionalityTestResult] = None
    timestamp: datetime = field(default_factory=utc_now)
    duration_ms: int = 0

    def __post_init__(self) -> None:
        if not self.installed:
            self.version = UNKNOWN_VERSION
            self.executable_path = ""

    def mark_not_installed(self) -> None:
        """Reset presence fields, restoring the not-installed invariant."""
        self.installed = False
        self.version = UNKNOWN_VERSION
        self.executable_path = ""
        self.detected_by = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tool": self.tool,
            "installed": self.installed,
            "version": self.version,
            "executable_path": self.executable_path,
            "evidence": sorted(self.evidence),
            "status": self.status.value,
            "error": self.error,
            "notes": list(self.notes),
            "detected_by": self.detected_by.value if self.detected_by else None,
            "functionality": self.functionality.to_dict() if self.functionality else None,
            "timestamp": self.timestamp.isoformat(),
            "duration_ms": self.duration_ms,
        }


@dataclass
class CategoryResult:
    """Verification results for every tool of one category, in order."""

    category: str
    results: Dict[str, VerificationResult] = field(default_factory=dict)
    installed: int = 0
    not_found: int = 0
    warnings: int = 0
    timestamp: datetime = field(default_factory=utc_now)
    duration_ms: int = 0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success(self) -> bool:
        """True when every tool is installed with a clean status."""
        return all(r.status == VerificationStatus.INSTALLED for r in self.results.values())

    def add(self, result: VerificationResult) -> None:
        self.results[result.tool] = result
        if result.installed:
            self.installed += 1
        else:
            self.not_found += 1
        if result.status in (VerificationStatus.WARNING, VerificationStatus.ERROR):
            self.warnings += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "total": self.total,
            "installed": self.installed,
            "not_found": self.not_found,
            "warnings": self.warnings,
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
            "duration_ms": self.duration_ms,
            "results": {name: r.to_dict() for name, r in self.results.items()},
        }


@dataclass
class ToolInstallOutcome:
    """Outcome of one installer action for one tool."""

    tool: str
    success: bool
    executable_path: str = ""
    skipped: bool = False
    package_manager: Optional[str] = None
    command: Optional[str] = None
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tool": self.tool,
            "success": self.success,
            "executable_path": self.executable_path,
            "skipped": self.skipped,
            "package_manager": self.package_manager,
            "command": self.command,
            "message": self.message,
        }


@dataclass
class InstallResult:
    """Installer outcome for one category."""

    category: str
    action: str = "install"
    outcomes: Dict[str, ToolInstallOutcome] = field(default_factory=dict)
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None and all(o.success for o in self.outcomes.values())

    @property
    def failed_tools(self) -> List[str]:
        return [name for name, o in self.outcomes.items() if not o.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "action": self.action,
            "success": self.success,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
            "duration_ms": self.duration_ms,
            "outcomes": {name: o.to_dict() for name, o in self.outcomes.items()},
        }


@dataclass
class ConfigStepOutcome:
    """Outcome of one configuration step."""

    step: str
    success: bool
    output: str = ""
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "success": self.success,
            "output": self.output,
            "error": self.error,
        }


@dataclass
class ConfigResult:
    """Configurator outcome for one configure category."""

    category: str
    steps: List[ConfigStepOutcome] = field(default_factory=list)
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None and all(s.success for s in self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "success": self.success,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
            "duration_ms": self.duration_ms,
            "steps": [s.to_dict() for s in self.steps],
        }
