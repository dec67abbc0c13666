"""Shared fixtures for devtoolkit tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pytest

from devtoolkit.core.models import Argv, to_argv
from devtoolkit.core.process import ProbeResult, ProcessProbe


class FakeProbe(ProcessProbe):
    """Process probe that answers from a script instead of spawning.

    Commands are keyed by argv with argv[0] reduced to its basename, so a
    version probe bound to ``/opt/tool/bin/toolX`` matches ``toolX``.
    Unscripted commands behave like a missing executable.
    """

    def __init__(self) -> None:
        super().__init__(default_timeout=5)
        self._responses: Dict[Argv, ProbeResult] = {}
        self._lock = threading.Lock()
        self.calls: List[Argv] = []

    @staticmethod
    def _key(argv: Sequence[str]) -> Argv:
        return (Path(argv[0]).name, *argv[1:])

    def script(
        self,
        command: Union[str, Sequence[str]],
        stdout: str = "",
        stderr: str = "",
        exit_code: int = 0,
        timed_out: bool = False,
        spawn_failed: bool = False,
        error: Optional[str] = None,
    ) -> None:
        argv = to_argv(command)
        self._responses[self._key(argv)] = ProbeResult(
            argv=argv,
            exit_code=None if (timed_out or spawn_failed) else exit_code,
            stdout=stdout,
            stderr=stderr,
            timed_out=timed_out,
            spawn_failed=spawn_failed,
            error=error,
        )

    def execute(
        self,
        command: Union[str, Sequence[str]],
        timeout: Optional[float] = None,
    ) -> ProbeResult:
        argv = to_argv(command)
        with self._lock:
            self.calls.append(argv)
        scripted = self._responses.get(self._key(argv))
        if scripted is None:
            return ProbeResult(
                argv=argv,
                spawn_failed=True,
                error=f"[Errno 2] No such file or directory: '{argv[0]}'",
            )
        return ProbeResult(
            argv=argv,
            exit_code=scripted.exit_code,
            stdout=scripted.stdout,
            stderr=scripted.stderr,
            timed_out=scripted.timed_out,
            spawn_failed=scripted.spawn_failed,
            error=scripted.error,
        )

    def called(self, command: Union[str, Sequence[str]]) -> bool:
        return self._key(to_argv(command)) in {self._key(c) for c in self.calls}


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def no_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every PATH lookup miss."""
    monkeypatch.setattr("shutil.which", lambda *args, **kwargs: None)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point DEVTOOLKIT_HOME at an empty directory."""
    home = tmp_path / "devtoolkit-home"
    monkeypatch.setenv("DEVTOOLKIT_HOME", str(home))
    return home
