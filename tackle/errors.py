"""Domain exceptions for dispatch and project diagnostics.

Every error carries the exit code the process should terminate with. The CLI
boundary renders exactly one of these per invocation.
"""

from __future__ import annotations


COMMAND_NOT_FOUND_EXIT_CODE = 127
DEFAULT_EXIT_CODE = 101


class TackleError(RuntimeError):
    """Base class for user-facing errors with an associated exit code."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = DEFAULT_EXIT_CODE,
        hint: str | None = None,
    ) -> None:
        """Initialize a user-facing error."""

        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.hint = hint


class CommandNotFound(TackleError):
    """Raised when neither a builtin nor a plugin matches the command name."""

    def __init__(self, command: str, suggestion: str | None = None) -> None:
        if suggestion is None:
            message = "No such subcommand"
        else:
            message = f"No such subcommand\n\n\tDid you mean `{suggestion}`?\n"
        super().__init__(message, exit_code=COMMAND_NOT_FOUND_EXIT_CODE)
        self.command = command
        self.suggestion = suggestion


class SubcommandLaunchFailed(TackleError):
    """Raised when a resolved plugin executable could not be spawned."""

    def __init__(self, reason: str, *, not_found: bool = False) -> None:
        if not_found:
            message = "No such subcommand"
        else:
            message = f"Subcommand failed to run: {reason}"
        super().__init__(message, exit_code=COMMAND_NOT_FOUND_EXIT_CODE)
        self.reason = reason
        self.not_found = not_found


class NonZeroExit(TackleError):
    """Raised when a plugin exited with a non-zero status.

    The message is empty: the plugin already reported its own diagnostics.
    """

    def __init__(self, code: int) -> None:
        super().__init__("", exit_code=code)
        self.code = code


class SubcommandSignaled(TackleError):
    """Raised when a plugin was terminated by a signal."""

    def __init__(self, signal_number: int) -> None:
        super().__init__(
            f"subcommand failed with signal: {signal_number}",
            exit_code=signal_number,
        )
        self.signal_number = signal_number


class ConfigError(TackleError):
    """Raised when configuration files or environment overrides are invalid."""


class ManifestError(TackleError):
    """Raised when a project manifest is missing or malformed."""


class LockfileError(TackleError):
    """Raised when a lock file exists but cannot be interpreted."""


class MissingLockfile(TackleError):
    """Raised when a command requires a lock file that does not exist."""

    def __init__(self, lockfile_name: str) -> None:
        super().__init__(
            f"A {lockfile_name} must exist for this command",
            hint="Generate the lock file first, then rerun this command.",
        )


class InvalidSpecifier(TackleError):
    """Raised when a package id specification cannot be parsed."""


class PackageIdNotFound(TackleError):
    """Raised when a package id specification matches no locked package."""


class AmbiguousSpecifier(TackleError):
    """Raised when a package id specification matches several locked packages."""
