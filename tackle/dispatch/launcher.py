"""Plugin process launching and termination mapping.

Responsibilities:
- Spawn a resolved plugin with the parent's stdio inherited (no capture).
- Block until the child terminates and classify how it ended.
- Translate that classification into the error the CLI reports.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import subprocess
from typing import Mapping, Sequence, Union

from ..errors import NonZeroExit, SubcommandLaunchFailed, SubcommandSignaled, TackleError
from ..telemetry.logger import log_event


EXECUTABLE_ENV_KEY = "TACKLE"


@dataclass(frozen=True, slots=True)
class Succeeded:
    """The child exited with status 0."""


@dataclass(frozen=True, slots=True)
class Exited:
    """The child exited normally with a non-zero status."""

    code: int


@dataclass(frozen=True, slots=True)
class Signaled:
    """The child was terminated by a signal."""

    signal: int


@dataclass(frozen=True, slots=True)
class LaunchFailed:
    """The child could not be started."""

    reason: str
    not_found: bool = False


ExitOutcome = Union[Succeeded, Exited, Signaled, LaunchFailed]


class ProcessLauncher:
    """Run plugin executables synchronously with inherited stdio."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        tackle_executable: Path | None = None,
    ) -> None:
        self._env = env
        self._tackle_executable = tackle_executable

    def child_env(self) -> dict[str, str]:
        """Return the environment handed to plugins."""

        env = dict(os.environ if self._env is None else self._env)
        if self._tackle_executable is not None:
            env[EXECUTABLE_ENV_KEY] = str(self._tackle_executable)
        return env

    def run(self, executable: Path, args: Sequence[str]) -> ExitOutcome:
        """Spawn `executable` with `args` and wait for it to terminate."""

        argv = [str(executable), *args]
        log_event("DEBUG", "launch", "spawn", executable=executable, argc=len(args))
        try:
            process = subprocess.Popen(argv, env=self.child_env())
        except FileNotFoundError:
            return LaunchFailed("no such subcommand", not_found=True)
        except OSError as exc:
            return LaunchFailed(str(exc))

        returncode = _wait(process)
        log_event("DEBUG", "launch", "exit", executable=executable, returncode=returncode)
        if returncode == 0:
            return Succeeded()
        if returncode < 0:
            return Signaled(-returncode)
        return Exited(returncode)


def _wait(process: subprocess.Popen) -> int:
    """Wait for `process`, leaving interrupt handling to the child.

    The terminal delivers Ctrl-C to the whole foreground process group, so the
    child sees it too and decides for itself whether to exit.
    """

    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            continue


def outcome_error(outcome: ExitOutcome) -> TackleError | None:
    """Map a launch outcome to the error the CLI should report, if any."""

    if isinstance(outcome, Succeeded):
        return None
    if isinstance(outcome, Exited):
        return NonZeroExit(outcome.code)
    if isinstance(outcome, Signaled):
        return SubcommandSignaled(outcome.signal)
    return SubcommandLaunchFailed(outcome.reason, not_found=outcome.not_found)
