"""Configuration validation for devtoolkit.

Validates core configuration keys and warns on unknown keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import yaml

from devtoolkit.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


# Valid top-level keys (core config)
VALID_TOP_LEVEL_KEYS: Set[str] = {
    "version",
    "verification",
    "preconditions",
    "logging",
    "package_managers",
    "categories",
    "tools",
    "configure",
}

VALID_VERIFICATION_KEYS: Set[str] = {
    "threshold",
    "timeout",
    "install_timeout",
    "max_workers",
    "sequential",
    "version_lines",
}

VALID_PRECONDITION_KEYS: Set[str] = {
    "supported_os",
    "min_python",
    "require_admin",
    "require_package_manager",
}

VALID_LOGGING_KEYS: Set[str] = {"file"}

VALID_TOOL_KEYS: Set[str] = {
    "executable_names",
    "version_commands",
    "test_commands",
    "common_paths",
    "registry_keys",
    "packages",
}

VALID_TEST_COMMAND_KEYS: Set[str] = {"command", "expected_output"}

# Install/test categories
VALID_CATEGORIES: Set[str] = {
    "package-managers",
    "development-tools",
    "cloud-tools",
    "applications",
    "ai-tools",
}

# Configure categories
VALID_CONFIGURE_CATEGORIES: Set[str] = {
    "terminal",
    "powershell",
    "tools",
    "ai-tools",
}

_NUMERIC_VERIFICATION_KEYS = ("threshold", "timeout", "install_timeout")
_INTEGER_VERIFICATION_KEYS = ("max_workers", "version_lines")


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


class _Collector:
    """Accumulates warnings for one source and logs the typo-style ones."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.warnings: List[ConfigValidationWarning] = []

    def add(self, message: str, key: Optional[str] = None, suggestion: Optional[str] = None,
            log: bool = False) -> None:
        warning = ConfigValidationWarning(
            message=message, source=self.source, key=key, suggestion=suggestion
        )
        self.warnings.append(warning)
        if log:
            _log_warning(warning)

    def unknown_keys(self, section: Dict[str, Any], valid: Set[str], prefix: str = "") -> None:
        for key in section.keys():
            if key not in valid:
                full_key = f"{prefix}{key}"
                label = f"key '{full_key}'" if prefix else f"top-level key '{key}'"
                self.add(
                    f"Unknown {label}",
                    key=full_key,
                    suggestion=_suggest_key(str(key), valid),
                    log=True,
                )

    def mapping(self, data: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, dict):
            self.add(f"'{key}' must be a mapping, got {type(value).__name__}", key=key)
            return None
        return value


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate configuration dictionary.

    Warns on unknown keys and wrong value types.
    Does not raise exceptions - returns warnings instead.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    collector = _Collector(source)

    if not isinstance(data, dict):  # type: ignore[unreachable]
        collector.add(f"Config must be a mapping, got {type(data).__name__}")
        return collector.warnings  # type: ignore[unreachable]

    collector.unknown_keys(data, VALID_TOP_LEVEL_KEYS)

    verification = collector.mapping(data, "verification")
    if verification is not None:
        collector.unknown_keys(verification, VALID_VERIFICATION_KEYS, "verification.")
        for key in _NUMERIC_VERIFICATION_KEYS:
            value = verification.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                collector.add(f"'verification.{key}' must be a number", key=f"verification.{key}")
        for key in _INTEGER_VERIFICATION_KEYS:
            value = verification.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                collector.add(f"'verification.{key}' must be an integer", key=f"verification.{key}")
        threshold = verification.get("threshold")
        if isinstance(threshold, (int, float)) and not isinstance(threshold, bool):
            if not 0 <= threshold <= 1:
                collector.add(
                    "'verification.threshold' must be between 0 and 1",
                    key="verification.threshold",
                )
        sequential = verification.get("sequential")
        if sequential is not None and not isinstance(sequential, bool):
            collector.add("'verification.sequential' must be a boolean", key="verification.sequential")

    preconditions = collector.mapping(data, "preconditions")
    if preconditions is not None:
        collector.unknown_keys(preconditions, VALID_PRECONDITION_KEYS, "preconditions.")
        for key in ("require_admin", "require_package_manager"):
            value = preconditions.get(key)
            if value is not None and not isinstance(value, bool):
                collector.add(f"'preconditions.{key}' must be a boolean", key=f"preconditions.{key}")
        supported = preconditions.get("supported_os")
        if supported is not None and not isinstance(supported, list):
            collector.add("'preconditions.supported_os' must be a list", key="preconditions.supported_os")

    logging_section = collector.mapping(data, "logging")
    if logging_section is not None:
        collector.unknown_keys(logging_section, VALID_LOGGING_KEYS, "logging.")

    package_managers = data.get("package_managers")
    if package_managers is not None and not isinstance(package_managers, list):
        collector.add("'package_managers' must be a list", key="package_managers")

    categories = collector.mapping(data, "categories")
    if categories is not None:
        for category, names in categories.items():
            if category not in VALID_CATEGORIES:
                collector.add(
                    f"Unknown category '{category}'",
                    key=f"categories.{category}",
                    suggestion=_suggest_key(str(category), VALID_CATEGORIES),
                    log=True,
                )
            if not isinstance(names, list):
                collector.add(f"'categories.{category}' must be a list", key=f"categories.{category}")

    tools = collector.mapping(data, "tools")
    if tools is not None:
        for name, tool in tools.items():
            _validate_tool(collector, str(name), tool)

    configure = collector.mapping(data, "configure")
    if configure is not None:
        for category, steps in configure.items():
            if category not in VALID_CONFIGURE_CATEGORIES:
                collector.add(
                    f"Unknown configure category '{category}'",
                    key=f"configure.{category}",
                    suggestion=_suggest_key(str(category), VALID_CONFIGURE_CATEGORIES),
                    log=True,
                )
            if steps is not None and not isinstance(steps, list):
                collector.add(f"'configure.{category}' must be a list", key=f"configure.{category}")

    return collector.warnings


def _validate_tool(collector: _Collector, name: str, tool: Any) -> None:
    prefix = f"tools.{name}"
    if tool is None:
        return
    if not isinstance(tool, dict):
        collector.add(f"'{prefix}' must be a mapping", key=prefix)
        return

    collector.unknown_keys(tool, VALID_TOOL_KEYS, f"{prefix}.")

    for key in ("executable_names", "version_commands", "test_commands", "common_paths", "registry_keys"):
        value = tool.get(key)
        if value is not None and not isinstance(value, list):
            collector.add(f"'{prefix}.{key}' must be a list", key=f"{prefix}.{key}")

    packages = tool.get("packages")
    if packages is not None and not isinstance(packages, dict):
        collector.add(f"'{prefix}.packages' must be a mapping", key=f"{prefix}.packages")

    test_commands = tool.get("test_commands")
    if isinstance(test_commands, list):
        for i, entry in enumerate(test_commands):
            key = f"{prefix}.test_commands[{i}]"
            if isinstance(entry, dict):
                if "command" not in entry:
                    collector.add(f"'{key}' must have a 'command' field", key=f"{key}.command")
                collector.unknown_keys(entry, VALID_TEST_COMMAND_KEYS, f"{key}.")
            elif not isinstance(entry, (str, list)):
                collector.add(f"'{key}' must be a string, list, or mapping", key=key)


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, list(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    """Log a validation warning."""
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)


def validate_config_file(config_path: Path) -> Tuple[bool, List[ConfigValidationIssue]]:
    """Validate a configuration file from disk.

    Checks file existence, YAML syntax, and configuration semantics.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Tuple of (is_valid, issues) where is_valid is False if any errors exist.
    """
    issues: List[ConfigValidationIssue] = []
    source = str(config_path)

    if not config_path.exists():
        issues.append(ConfigValidationIssue(
            message=f"Configuration file not found: {config_path}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        issues.append(ConfigValidationIssue(
            message=f"Invalid YAML: {e}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    if data is None:
        return True, issues

    if not isinstance(data, dict):
        issues.append(ConfigValidationIssue(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    for warning in validate_config(data, source):
        # Type errors break loading; unknown keys are only suspicious
        severity = (
            ValidationSeverity.WARNING
            if warning.message.startswith("Unknown")
            else ValidationSeverity.ERROR
        )
        issues.append(ConfigValidationIssue(
            message=warning.message,
            source=source,
            severity=severity,
            key=warning.key,
            suggestion=warning.suggestion,
        ))

    is_valid = not any(i.severity == ValidationSeverity.ERROR for i in issues)
    return is_valid, issues
