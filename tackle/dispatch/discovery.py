"""Plugin executable discovery across ordered search directories.

Responsibilities:
- Build the deterministic search-directory order from the running
  executable's location and `PATH`.
- Resolve one plugin name to the first matching executable.
- List every installed command, unioned with the builtin names.

A broken environment (missing `PATH`, unreadable directories, non-executable
files) only narrows the result; it never raises.
"""

from __future__ import annotations

import os
from pathlib import Path
import stat
import sys
from typing import Callable, Iterable, Mapping

from ..telemetry.logger import log_event


COMMAND_PREFIX = "tackle-"
EXE_SUFFIX = ".exe" if os.name == "nt" else ""
LIB_DIR = Path("..") / "lib" / "tackle"

ExecutablePredicate = Callable[[Path], bool]


def is_executable(path: Path) -> bool:
    """Return whether `path` is a regular file the OS would let us execute.

    On POSIX at least one execute bit must be set; on Windows any regular file
    qualifies because the suffix already marks it as a program.
    """

    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    if not stat.S_ISREG(mode):
        return False
    if os.name == "nt":
        return True
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def current_exe() -> Path:
    """Resolve the path of the running tackle executable."""

    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve()
    return Path(sys.argv[0]).resolve()


class CommandDiscovery:
    """Find `tackle-<name>` plugin executables.

    Directories are recomputed on every call, so changes to `PATH` or to the
    filesystem between calls are always observed.
    """

    def __init__(
        self,
        builtin_names: Iterable[str] = (),
        *,
        exe_path: Path | None = None,
        env: Mapping[str, str] | None = None,
        predicate: ExecutablePredicate = is_executable,
        prefix: str = COMMAND_PREFIX,
        suffix: str = EXE_SUFFIX,
    ) -> None:
        self.builtin_names = frozenset(builtin_names)
        self._exe_path = exe_path
        self._env = env
        self._predicate = predicate
        self.prefix = prefix
        self.suffix = suffix

    def search_directories(self) -> list[Path]:
        """Return candidate plugin directories in lookup order.

        Order: `<exe dir>/../lib/tackle`, `<exe dir>`, then each `PATH` entry.
        """

        exe_path = self._exe_path if self._exe_path is not None else current_exe()
        env = os.environ if self._env is None else self._env

        exe_dir = exe_path.parent
        directories = [exe_dir / LIB_DIR, exe_dir]
        search_path = env.get("PATH", "")
        directories.extend(Path(entry) for entry in search_path.split(os.pathsep) if entry)
        return directories

    def executable_name(self, command: str) -> str:
        """Return the plugin filename for `command`."""

        return f"{self.prefix}{command}{self.suffix}"

    def resolve(self, command: str) -> Path | None:
        """Return the first executable plugin for `command`, or `None`."""

        filename = self.executable_name(command)
        for directory in self.search_directories():
            candidate = directory / filename
            if self._predicate(candidate):
                log_event("DEBUG", "discover", "resolved", command=command, path=candidate)
                return candidate
        return None

    def list(self) -> tuple[str, ...]:
        """Return every installed command name, builtins included, sorted."""

        commands = set(self.builtin_names)
        for directory in self.search_directories():
            commands.update(self._scan(directory))
        return tuple(sorted(commands))

    def _scan(self, directory: Path) -> set[str]:
        """Return plugin names found in one directory, empty when unreadable."""

        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            log_event(
                "DEBUG", "discover", "skipped", directory=directory, reason=type(exc).__name__
            )
            return set()

        found: set[str] = set()
        minimum_length = len(self.prefix) + len(self.suffix)
        for entry in entries:
            filename = entry.name
            if len(filename) <= minimum_length:
                continue
            if not filename.startswith(self.prefix) or not filename.endswith(self.suffix):
                continue
            if not self._predicate(entry):
                continue
            found.add(filename[len(self.prefix) : len(filename) - len(self.suffix)])
        return found
