"""Unit tests for YAML config discovery and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from tackle.config import ConfigLoader, TackleConfig


def _write_config(directory: Path, text: str) -> Path:
    path = directory / ".tackle" / "config.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_from_yaml_reads_supported_keys(tmp_path: Path) -> None:
    """All supported sections map onto config fields."""

    path = _write_config(
        tmp_path,
        "http:\n  proxy: http://proxy:3128\n  timeout: 45\n  cainfo: /etc/ca.pem\n"
        "net:\n  retry: 0\n",
    )

    config = ConfigLoader.from_yaml(path)

    assert config.http_proxy == "http://proxy:3128"
    assert config.http_timeout == 45
    assert config.http_cainfo == Path("/etc/ca.pem")
    assert config.net_retry == 0
    assert config.sources == (path,)


def test_from_yaml_accepts_empty_file(tmp_path: Path) -> None:
    """An empty file yields defaults."""

    config = ConfigLoader.from_yaml(_write_config(tmp_path, ""))

    assert config.http_proxy is None
    assert config.http_timeout is None
    assert config.net_retry == 2


def test_from_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    """Unknown sections and keys are configuration errors."""

    with pytest.raises(ValueError, match="unsupported key\\(s\\): registry"):
        ConfigLoader.from_yaml(_write_config(tmp_path, "registry:\n  token: x\n"))
    with pytest.raises(ValueError, match="unsupported key\\(s\\): http.verbose"):
        ConfigLoader.from_yaml(_write_config(tmp_path, "http:\n  verbose: true\n"))


def test_from_yaml_rejects_invalid_values(tmp_path: Path) -> None:
    """Numeric settings are validated."""

    with pytest.raises(ValueError, match="http.timeout"):
        ConfigLoader.from_yaml(_write_config(tmp_path, "http:\n  timeout: 0\n"))
    with pytest.raises(ValueError, match="net.retry"):
        ConfigLoader.from_yaml(_write_config(tmp_path, "net:\n  retry: many\n"))


def test_discover_prefers_nearest_file(tmp_path: Path) -> None:
    """A key in a nearer directory overrides the same key further up."""

    home = tmp_path / "home"
    home.mkdir()
    (home / "config.yaml").write_text("http:\n  timeout: 5\n  proxy: http://home:1\n", encoding="utf-8")
    outer = tmp_path / "work"
    inner = outer / "project"
    inner.mkdir(parents=True)
    _write_config(outer, "http:\n  proxy: http://outer:1\nnet:\n  retry: 4\n")
    _write_config(inner, "http:\n  proxy: http://inner:1\n")

    config = ConfigLoader.discover(inner, {"TACKLE_HOME": str(home)})

    assert config.http_proxy == "http://inner:1"
    assert config.net_retry == 4
    assert config.http_timeout == 5
    assert config.home == home
    assert config.sources[0] == inner / ".tackle" / "config.yaml"
    assert config.sources[-1] == home / "config.yaml"


def test_discover_applies_environment_overrides(tmp_path: Path) -> None:
    """`TACKLE_*` variables win over every file."""

    _write_config(tmp_path, "http:\n  proxy: http://file:1\n")
    env = {
        "TACKLE_HOME": str(tmp_path / "home"),
        "TACKLE_HTTP_PROXY": "http://env:1",
        "TACKLE_HTTP_TIMEOUT": "9",
        "TACKLE_NET_RETRY": "1",
    }

    config = ConfigLoader.discover(tmp_path, env)

    assert config.http_proxy == "http://env:1"
    assert config.http_timeout == 9
    assert config.net_retry == 1


def test_discover_without_files_returns_defaults(tmp_path: Path) -> None:
    """No config anywhere is the normal case."""

    config = ConfigLoader.discover(tmp_path, {"TACKLE_HOME": str(tmp_path / "home")})

    assert config == TackleConfig(home=tmp_path / "home")


def test_discover_reports_invalid_override(tmp_path: Path) -> None:
    """Invalid environment overrides raise `ValueError`."""

    with pytest.raises(ValueError, match="http.timeout"):
        ConfigLoader.discover(
            tmp_path, {"TACKLE_HOME": str(tmp_path), "TACKLE_HTTP_TIMEOUT": "soon"}
        )
