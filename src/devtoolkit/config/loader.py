"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Built-in tool definitions (devtoolkit.config.builtin)
- Global config (~/.devtoolkit/config/config.yml)
- Project config (.devtoolkit.yml) or an explicit --config file
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from devtoolkit.bootstrap.paths import ToolkitPaths
from devtoolkit.config.builtin import BUILTIN_CONFIG
from devtoolkit.config.models import (
    LoggingSettings,
    PreconditionSettings,
    ToolkitConfig,
    VerificationSettings,
)
from devtoolkit.config.validation import validate_config
from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import Argv, TestCommand, ToolDefinition, to_argv

LOGGER = get_logger(__name__)

# Config file names
PROJECT_CONFIG_NAMES = [".devtoolkit.yml", ".devtoolkit.yaml", "devtoolkit.yml", "devtoolkit.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

# Sections whose placeholders are resolved lazily at detection time
DEFERRED_EXPANSION_KEYS = {"tools"}


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Optional[Path] = None,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    include_global: bool = True,
) -> ToolkitConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.devtoolkit.yml)
    3. Global config (~/.devtoolkit/config/config.yml)
    4. Built-in defaults

    Args:
        project_root: Directory searched for .devtoolkit.yml (default: cwd).
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.
        include_global: Whether to read the global config file.

    Returns:
        Merged ToolkitConfig instance.

    Raises:
        ConfigError: If specified config file doesn't exist or has parse errors.
    """
    sources: List[str] = ["builtin"]
    merged: Dict[str, Any] = copy.deepcopy(BUILTIN_CONFIG)

    # Layer 1: Global config
    global_path = find_global_config() if include_global else None
    if global_path and global_path.exists():
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (yaml.YAMLError, ConfigError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = _merge_file(merged, cli_config_path)
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")
    else:
        project_path = find_project_config(project_root or Path.cwd())
        if project_path and project_path.exists():
            merged = _merge_file(merged, project_path)
            sources.append(f"project:{project_path}")
            LOGGER.debug(f"Loaded project config from {project_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _merge_file(merged: Dict[str, Any], path: Path) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    validate_config(data, source=str(path))
    return merge_configs(merged, data)


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find global config at ~/.devtoolkit/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    config_path = ToolkitPaths.default().global_config
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values outside the
    ``tools`` section.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return {
        key: value if key in DEFERRED_EXPANSION_KEYS else expand_env_vars(value)
        for key, value in data.items()
    }


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        data: Config data (dict, list, or scalar).

    Returns:
        Data with environment variables expanded.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge

    Args:
        base: Base configuration dictionary.
        overlay: Overlay configuration to merge on top.

    Returns:
        Merged configuration dictionary.
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def _parse_argv(value: Any, where: str) -> Argv:
    if isinstance(value, (str, list, tuple)):
        try:
            argv = to_argv(value)
        except ValueError as e:
            raise ConfigError(f"Cannot parse command in {where}: {e}") from e
        if argv:
            return argv
    raise ConfigError(f"Invalid command in {where}: {value!r}")


def _parse_test_command(value: Any, where: str) -> TestCommand:
    if isinstance(value, dict):
        if "command" not in value:
            raise ConfigError(f"Test command in {where} needs a 'command' field")
        expected = value.get("expected_output")
        return TestCommand(
            argv=_parse_argv(value["command"], where),
            expected_output=str(expected) if expected is not None else None,
        )
    return TestCommand(argv=_parse_argv(value, where))


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def parse_tool_definition(name: str, tool_data: Dict[str, Any]) -> ToolDefinition:
    """Parse a single tool definition.

    Args:
        name: Tool name (the key under ``tools``).
        tool_data: Tool definition dictionary.

    Returns:
        ToolDefinition instance.

    Raises:
        ConfigError: If a command cannot be parsed.
    """
    where = f"tools.{name}"
    executable_names = _string_list(tool_data.get("executable_names")) or [name]

    version_commands = tuple(
        _parse_argv(cmd, f"{where}.version_commands")
        for cmd in tool_data.get("version_commands") or []
    )
    test_commands = tuple(
        _parse_test_command(cmd, f"{where}.test_commands")
        for cmd in tool_data.get("test_commands") or []
    )

    packages_data = tool_data.get("packages") or {}
    packages = {str(k): str(v) for k, v in packages_data.items()}

    return ToolDefinition(
        name=name,
        executable_names=tuple(executable_names),
        version_commands=version_commands,
        test_commands=test_commands,
        common_paths=tuple(_string_list(tool_data.get("common_paths"))),
        registry_keys=tuple(_string_list(tool_data.get("registry_keys"))),
        packages=packages,
    )


def dict_to_config(data: Dict[str, Any]) -> ToolkitConfig:
    """Convert validated dict to typed ToolkitConfig.

    Args:
        data: Configuration dictionary.

    Returns:
        Typed ToolkitConfig instance.

    Raises:
        ConfigError: If a value has the wrong type or cannot be parsed.
    """
    verification_data = data.get("verification") or {}
    try:
        verification = VerificationSettings(
            threshold=float(verification_data.get("threshold", 0.7)),
            timeout=float(verification_data.get("timeout", 30)),
            install_timeout=float(verification_data.get("install_timeout", 1800)),
            max_workers=int(verification_data.get("max_workers", 4)),
            sequential=bool(verification_data.get("sequential", False)),
            version_lines=int(verification_data.get("version_lines", 1)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid verification settings: {e}") from e

    if not 0.0 <= verification.threshold <= 1.0:
        raise ConfigError(
            f"'verification.threshold' must be between 0 and 1, got {verification.threshold}"
        )

    precondition_data = data.get("preconditions") or {}
    defaults = PreconditionSettings()
    preconditions = PreconditionSettings(
        supported_os=_string_list(precondition_data.get("supported_os")) or defaults.supported_os,
        min_python=str(precondition_data.get("min_python", defaults.min_python)),
        require_admin=bool(precondition_data.get("require_admin", False)),
        require_package_manager=bool(precondition_data.get("require_package_manager", False)),
    )

    logging_data = data.get("logging") or {}
    logging_settings = LoggingSettings(file=bool(logging_data.get("file", False)))

    tools: Dict[str, ToolDefinition] = {}
    for name, tool_data in (data.get("tools") or {}).items():
        if tool_data is None:
            tool_data = {}
        if not isinstance(tool_data, dict):
            raise ConfigError(f"'tools.{name}' must be a mapping")
        tools[str(name)] = parse_tool_definition(str(name), tool_data)

    categories = {
        str(category): _string_list(names)
        for category, names in (data.get("categories") or {}).items()
    }

    configure = {
        str(category): [
            _parse_argv(step, f"configure.{category}") for step in (steps or [])
        ]
        for category, steps in (data.get("configure") or {}).items()
    }

    config = ToolkitConfig(
        verification=verification,
        preconditions=preconditions,
        logging=logging_settings,
        categories=categories,
        tools=tools,
        configure=configure,
    )

    package_managers = _string_list(data.get("package_managers"))
    if package_managers:
        config.package_managers = package_managers

    return config
