"""Unit tests for the builtin command registry."""

from __future__ import annotations

from typing import Annotated

import pytest
import typer

from tackle.commands import BUILTIN_MODULES, builtin_registry
from tackle.dispatch.registry import Builtin, BuiltinRegistry, builtin_name
from tackle.errors import ManifestError


def _echo_builtin(name: str = "echo") -> Builtin:
    app = typer.Typer(add_completion=False)

    @app.command(context_settings={"help_option_names": ["-h", "--help"]})
    def echo_command(
        words: Annotated[list[str], typer.Argument()],
        code: Annotated[int, typer.Option("--code")] = 0,
    ) -> None:
        """Echo words back."""

        typer.echo(" ".join(words))
        if code:
            raise typer.Exit(code=code)

    return Builtin(name=name, app=app, summary="Echo words back")


def test_builtin_name_replaces_underscores() -> None:
    """Module identifiers map to hyphenated command names."""

    assert builtin_name("locate_project") == "locate-project"
    assert builtin_name("pkgid") == "pkgid"


def test_default_registry_lists_every_builtin_module_once() -> None:
    """Every builtin module is registered under its derived name."""

    registry = builtin_registry()

    assert len(registry) == len(BUILTIN_MODULES)
    assert registry.names() == frozenset(
        {"help", "locate-project", "pkgid", "read-manifest", "verify-project", "version"}
    )
    assert [builtin.name for builtin in registry] == sorted(registry.names())
    assert all(builtin.summary for builtin in registry)


def test_registry_rejects_duplicate_names() -> None:
    """Two builtins with one name are a programming error."""

    with pytest.raises(ValueError, match="duplicate builtin command `echo`"):
        BuiltinRegistry([_echo_builtin(), _echo_builtin()])


def test_registry_lookup() -> None:
    """Lookups are exact string matches."""

    registry = BuiltinRegistry([_echo_builtin()])

    assert registry.get("echo") is not None
    assert registry.get("Echo") is None
    assert "echo" in registry
    assert "ech" not in registry


def test_invoke_runs_command_with_its_own_parser(capsys: pytest.CaptureFixture[str]) -> None:
    """Arguments are parsed by the builtin's own schema."""

    exit_code = _echo_builtin().invoke(["hello", "world"])

    assert exit_code == 0
    assert capsys.readouterr().out == "hello world\n"


def test_invoke_returns_exit_code_from_command() -> None:
    """A command exiting with a code reports it to the dispatcher."""

    assert _echo_builtin().invoke(["x", "--code", "4"]) == 4


def test_invoke_reports_usage_errors(capsys: pytest.CaptureFixture[str]) -> None:
    """Usage errors are rendered by the builtin's parser and mapped to exit code 2."""

    exit_code = _echo_builtin().invoke(["x", "--bogus"])

    assert exit_code == 2
    assert "--bogus" in capsys.readouterr().err


def test_invoke_does_not_mutate_caller_arguments() -> None:
    """Each invocation parses its own copy of the argument list."""

    args = ["one", "two"]

    _echo_builtin().invoke(args)

    assert args == ["one", "two"]


def test_invoke_help_exits_zero(capsys: pytest.CaptureFixture[str]) -> None:
    """`-h` prints the builtin's usage and exits successfully."""

    exit_code = _echo_builtin().invoke(["-h"])

    assert exit_code == 0
    assert "tackle echo" in capsys.readouterr().out


def test_invoke_propagates_tackle_errors() -> None:
    """Domain errors raised by a builtin reach the caller unchanged."""

    app = typer.Typer(add_completion=False)

    @app.command()
    def fail_command() -> None:
        raise ManifestError("manifest is broken")

    builtin = Builtin(name="fail", app=app, summary="Always fails")

    with pytest.raises(ManifestError, match="manifest is broken"):
        builtin.invoke([])


def test_invoke_maps_abort_to_exit_code_one() -> None:
    app = typer.Typer(add_completion=False)

    @app.command()
    def abort_command() -> None:
        raise typer.Abort()

    assert Builtin(name="abort", app=app, summary="Aborts").invoke([]) == 1
