"""Common install-path expansion and executable lookup.

Path patterns may carry environment placeholders in any of the forms
``%VAR%``, ``$VAR``, or ``${VAR}``, a leading ``~``, and glob wildcards
(``*``, ``?``, ``[...]``). A pattern that references an unset variable is
skipped rather than probed literally.
"""

from __future__ import annotations

import glob
import os
import re
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from devtoolkit.core.logging import get_logger

LOGGER = get_logger(__name__)

_PERCENT_VAR = re.compile(r"%([A-Za-z_][A-Za-z0-9_()]*)%")
_DOLLAR_VAR = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}|\$([A-Za-z_][A-Za-z0-9_]*)")
_GLOB_CHARS = re.compile(r"[*?\[]")

# Executable suffixes tried on Windows when PATHEXT is not set
_DEFAULT_PATHEXT = ".COM;.EXE;.BAT;.CMD"


class _MissingVariable(KeyError):
    pass


def expand_placeholders(pattern: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Substitute environment placeholders in a path pattern.

    Args:
        pattern: Raw pattern from a tool definition.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        The expanded pattern, or None if it references an unset variable.
    """
    env = os.environ if environ is None else environ

    def lookup(name: str) -> str:
        value = env.get(name)
        if value is None:
            # Windows variable names are case-insensitive
            for key, candidate in env.items():
                if key.upper() == name.upper():
                    return candidate
            raise _MissingVariable(name)
        return value

    try:
        expanded = _PERCENT_VAR.sub(lambda m: lookup(m.group(1)), pattern)
        expanded = _DOLLAR_VAR.sub(lambda m: lookup(m.group(1) or m.group(2)), expanded)
    except _MissingVariable as e:
        LOGGER.debug(f"Skipping path pattern {pattern!r}: variable {e.args[0]} is not set")
        return None

    if expanded.startswith("~"):
        expanded = os.path.expanduser(expanded)
    return expanded


def expand_path_pattern(
    pattern: str,
    environ: Optional[Mapping[str, str]] = None,
) -> List[Path]:
    """Expand a common-path pattern into the existing paths it matches.

    Args:
        pattern: Pattern with optional placeholders and wildcards.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Existing paths in sorted order. Empty when nothing matches.
    """
    expanded = expand_placeholders(pattern, environ)
    if not expanded:
        return []

    if _GLOB_CHARS.search(expanded):
        return [Path(p) for p in sorted(glob.glob(expanded))]

    path = Path(expanded)
    return [path] if path.exists() else []


def executable_suffixes() -> List[str]:
    """Return filename suffixes that make a name executable on this OS."""
    if os.name != "nt":
        return [""]
    pathext = os.environ.get("PATHEXT", _DEFAULT_PATHEXT)
    return [""] + [ext.lower() for ext in pathext.split(os.pathsep) if ext]


def is_executable_file(path: Path) -> bool:
    if not path.is_file():
        return False
    if os.name == "nt":
        return True
    return os.access(path, os.X_OK)


def find_executable_in(directory: Path, names: Sequence[str]) -> Optional[Path]:
    """Locate one of the candidate executables inside an install directory.

    Looks in the directory itself and in its ``bin`` subdirectory, trying
    candidate names in order.

    Args:
        directory: Install directory found by a detection strategy.
        names: Candidate executable names, in priority order.

    Returns:
        Path of the first executable found, or None.
    """
    if not directory.is_dir():
        return None

    for folder in _search_dirs(directory):
        for name in names:
            for suffix in executable_suffixes():
                candidate = folder / f"{name}{suffix}"
                if is_executable_file(candidate):
                    return candidate
    return None


def _search_dirs(directory: Path) -> Iterable[Path]:
    yield directory
    bin_dir = directory / "bin"
    if bin_dir.is_dir():
        yield bin_dir
