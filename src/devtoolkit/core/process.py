"""Process probe for running external tool commands.

Runs a command as an argv list (never through a shell) with captured output
and a deadline, and reports every outcome as data instead of raising.
"""

from __future__ import annotations

import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from devtoolkit.core.logging import get_logger
from devtoolkit.core.models import Argv, argv_text, to_argv

LOGGER = get_logger(__name__)

# Default deadline for a single probe, in seconds
DEFAULT_TIMEOUT = 30.0


@dataclass
class ProbeResult:
    """Outcome of one probe execution."""

    argv: Argv
    exit_code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    spawn_failed: bool = False
    error: Optional[str] = None
    duration_ms: int = 0

    @property
    def command(self) -> str:
        return argv_text(self.argv)

    @property
    def spawned(self) -> bool:
        return not self.spawn_failed

    @property
    def ok(self) -> bool:
        """Process ran to completion with exit code 0."""
        return self.spawned and not self.timed_out and self.exit_code == 0

    @property
    def output(self) -> str:
        """Stripped stdout, or stderr when stdout is empty.

        Several tools (java, older python) print their version banner to
        stderr.
        """
        out = self.stdout.strip()
        if out:
            return out
        return self.stderr.strip()

    @property
    def combined_output(self) -> str:
        parts = [p for p in (self.stdout.strip(), self.stderr.strip()) if p]
        return "\n".join(parts)


class ProcessProbe:
    """Executes external commands synchronously with a deadline."""

    def __init__(self, default_timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        """Initialize the probe.

        Args:
            default_timeout: Deadline in seconds applied when ``execute`` is
                called without one. ``None`` or a value <= 0 disables it.
        """
        self._default_timeout = default_timeout

    @property
    def default_timeout(self) -> Optional[float]:
        return self._default_timeout

    def execute(
        self,
        command: Union[str, Sequence[str]],
        timeout: Optional[float] = None,
    ) -> ProbeResult:
        """Run a command and capture its output.

        Args:
            command: Command as an argv sequence. A string is split with
                shell quoting rules; it is never interpreted by a shell.
            timeout: Deadline in seconds. Defaults to the probe's default.
                On expiry the child is killed and ``timed_out`` is set.

        Returns:
            ProbeResult describing the outcome. Failing children, missing
            binaries, and timeouts are all reported rather than raised.
        """
        try:
            argv = to_argv(command)
        except ValueError as e:
            return ProbeResult(
                argv=(str(command),),
                spawn_failed=True,
                error=f"Cannot parse command: {e}",
            )

        if not argv:
            return ProbeResult(argv=argv, spawn_failed=True, error="Empty command")

        deadline = self._resolve_timeout(timeout)
        resolved = shutil.which(argv[0]) or argv[0]
        run_argv = [resolved, *argv[1:]]

        LOGGER.debug(f"Probing: {argv_text(argv)}")
        start = time.monotonic()

        try:
            completed = subprocess.run(
                run_argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                stdin=subprocess.DEVNULL,
                timeout=deadline,
            )
        except subprocess.TimeoutExpired as e:
            LOGGER.debug(f"Probe timed out after {deadline}s: {argv_text(argv)}")
            return ProbeResult(
                argv=argv,
                stdout=_decode(e.stdout),
                stderr=_decode(e.stderr),
                timed_out=True,
                error=f"Timed out after {deadline}s",
                duration_ms=_elapsed_ms(start),
            )
        except OSError as e:
            # FileNotFoundError, PermissionError, and friends
            LOGGER.debug(f"Probe could not start {argv[0]}: {e}")
            return ProbeResult(
                argv=argv,
                spawn_failed=True,
                error=str(e),
                duration_ms=_elapsed_ms(start),
            )

        result = ProbeResult(
            argv=argv,
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration_ms=_elapsed_ms(start),
        )
        LOGGER.debug(f"Probe exited {result.exit_code}: {argv_text(argv)}")
        return result

    def _resolve_timeout(self, timeout: Optional[float]) -> Optional[float]:
        value = self._default_timeout if timeout is None else timeout
        if value is None or value <= 0:
            return None
        return value


def _decode(data: Union[bytes, str, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
