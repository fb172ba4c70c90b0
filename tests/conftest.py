"""Shared pytest fixtures for the full tackle test suite."""

from __future__ import annotations

from pathlib import Path
import stat
from typing import Callable

from loguru import logger
import pytest

from tackle.net import transport

PluginWriter = Callable[..., Path]

_ISOLATED_ENV_KEYS = (
    "HTTPS_PROXY",
    "https_proxy",
    "HTTP_PROXY",
    "http_proxy",
    "TACKLE_LOG",
    "TACKLE_HTTP_PROXY",
    "TACKLE_HTTP_TIMEOUT",
    "TACKLE_HTTP_CAINFO",
    "TACKLE_NET_RETRY",
)


@pytest.fixture(autouse=True)
def _isolate_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep proxy settings, tackle home, and the transport registry test-local."""

    for key in _ISOLATED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TACKLE_HOME", str(tmp_path_factory.mktemp("tackle-home")))
    monkeypatch.setattr(transport, "TRANSPORTS", transport.TransportRegistry())


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop loguru sinks that may point at streams closed by the previous test."""

    yield
    logger.remove()


@pytest.fixture
def write_plugin() -> PluginWriter:
    """Return a helper writing a `tackle-<name>` shell script into a directory."""

    def _write(directory: Path, name: str, body: str = "exit 0", executable: bool = True) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"tackle-{name}"
        path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        mode = path.stat().st_mode
        if executable:
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        else:
            path.chmod(mode & ~(stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))
        return path

    return _write


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project with a manifest and a lock file."""

    root = tmp_path / "demo"
    root.mkdir()
    (root / "tackle.yaml").write_text(
        "package:\n"
        "  name: demo\n"
        "  version: 0.1.0\n"
        "  authors:\n"
        "    - Ada <ada@example.org>\n"
        "dependencies:\n"
        "  serde: '1.0'\n"
        "  log: '0.4'\n",
        encoding="utf-8",
    )
    (root / "tackle.lock").write_text(
        "root:\n"
        "  name: demo\n"
        "  version: 0.1.0\n"
        "packages:\n"
        "  - name: serde\n"
        "    version: 1.0.2\n"
        "    source: registry+https://index.example.org\n"
        "  - name: log\n"
        "    version: 0.4.1\n"
        "    source: registry+https://index.example.org\n"
        "  - name: log\n"
        "    version: 0.3.9\n"
        "    source: registry+https://index.example.org\n"
        "  - name: helper\n"
        "    version: 0.2.0\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def plugin_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point discovery at a private install location and a one-entry `PATH`."""

    plugins = tmp_path / "plugins"
    plugins.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("PATH", str(plugins))
    monkeypatch.setattr("tackle.cli.current_exe", lambda: tmp_path / "install" / "bin" / "tackle")
    return plugins
