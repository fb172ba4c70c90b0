"""Configuration model and loaders for tackle.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Merge YAML config files from the working directory ancestry and tackle home.
- Apply environment overrides with deterministic precedence.

Key types:
- `TackleConfig`: normalized runtime settings for one invocation.
- `ConfigLoader`: static construction helpers for `TackleConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_non_negative_int, parse_positive_int


CONFIG_DIR_NAME = ".tackle"
CONFIG_FILE_NAME = "config.yaml"
HOME_ENV_KEY = "TACKLE_HOME"

_DEFAULT_NET_RETRY = 2


@dataclass(slots=True)
class TackleConfig:
    """Runtime configuration for one invocation.

    Attributes:
        http_proxy: Explicit HTTP proxy URL from config files or overrides.
        http_timeout: Request timeout in seconds, `None` for the transport default.
        http_cainfo: Optional CA bundle path used to verify TLS peers.
        net_retry: Number of retries for transient network failures.
        home: Resolved tackle home directory.
        sources: Config files that contributed values, nearest first.
    """

    http_proxy: str | None = None
    http_timeout: int | None = None
    http_cainfo: Path | None = None
    net_retry: int = _DEFAULT_NET_RETRY
    home: Path | None = None
    sources: tuple[Path, ...] = field(default_factory=tuple)


class ConfigLoader:
    """Factory methods for creating `TackleConfig` from external sources."""

    _SUPPORTED_SECTIONS: Mapping[str, frozenset[str]] = {
        "http": frozenset({"proxy", "timeout", "cainfo"}),
        "net": frozenset({"retry"}),
    }
    _ENV_OVERRIDES: Mapping[str, str] = {
        "TACKLE_HTTP_PROXY": "http.proxy",
        "TACKLE_HTTP_TIMEOUT": "http.timeout",
        "TACKLE_HTTP_CAINFO": "http.cainfo",
        "TACKLE_NET_RETRY": "net.retry",
    }

    @staticmethod
    def from_yaml(path: Path) -> TackleConfig:
        """Create a validated config from a single YAML file."""

        values = ConfigLoader._load_values(path)
        return ConfigLoader._build_config(
            values, source_label=f"YAML `{path}`", sources=(path,), home=None
        )

    @staticmethod
    def discover(cwd: Path, env: Mapping[str, str] | None = None) -> TackleConfig:
        """Merge every config file visible from `cwd`, nearest first, then env overrides."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        home = ConfigLoader.home_dir(env_map)

        merged: dict[str, Any] = {}
        contributing: list[Path] = []
        for path in ConfigLoader.config_paths(cwd, home):
            if not path.is_file():
                continue
            contributing.append(path)
            for key, value in ConfigLoader._load_values(path).items():
                merged.setdefault(key, value)

        for env_key, dotted_key in ConfigLoader._ENV_OVERRIDES.items():
            value = normalize_optional_string(env_map.get(env_key))
            if value is not None:
                merged[dotted_key] = value

        return ConfigLoader._build_config(
            merged,
            source_label="configuration",
            sources=tuple(contributing),
            home=home,
        )

    @staticmethod
    def home_dir(env: Mapping[str, str]) -> Path:
        """Return the tackle home directory, honouring `TACKLE_HOME`."""

        override = normalize_optional_string(env.get(HOME_ENV_KEY))
        if override is not None:
            return Path(override)
        return Path.home() / CONFIG_DIR_NAME

    @staticmethod
    def config_paths(cwd: Path, home: Path) -> list[Path]:
        """Return candidate config files, nearest directory first, home last."""

        candidates = [
            directory / CONFIG_DIR_NAME / CONFIG_FILE_NAME
            for directory in (cwd, *cwd.parents)
        ]
        home_config = home / CONFIG_FILE_NAME
        if home_config not in candidates:
            candidates.append(home_config)
        return candidates

    @staticmethod
    def _load_values(path: Path) -> dict[str, Any]:
        """Read one YAML file into a flat `section.key` mapping."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            return {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping.")

        unknown_sections = sorted(
            str(key) for key in payload if key not in ConfigLoader._SUPPORTED_SECTIONS
        )
        if unknown_sections:
            key_list = ", ".join(unknown_sections)
            raise ValueError(f"YAML config `{path}` includes unsupported key(s): {key_list}.")

        values: dict[str, Any] = {}
        for section, table in payload.items():
            if table is None:
                continue
            if not isinstance(table, Mapping):
                raise ValueError(f"YAML config `{path}` field `{section}` must be a mapping.")
            supported = ConfigLoader._SUPPORTED_SECTIONS[section]
            unknown = sorted(f"{section}.{key}" for key in table if key not in supported)
            if unknown:
                key_list = ", ".join(unknown)
                raise ValueError(
                    f"YAML config `{path}` includes unsupported key(s): {key_list}."
                )
            for key, value in table.items():
                values[f"{section}.{key}"] = value
        return values

    @staticmethod
    def _build_config(
        values: Mapping[str, Any],
        source_label: str,
        sources: tuple[Path, ...],
        home: Path | None,
    ) -> TackleConfig:
        """Validate merged values and build a `TackleConfig`."""

        try:
            timeout = (
                parse_positive_int(values["http.timeout"], "http.timeout")
                if values.get("http.timeout") is not None
                else None
            )
            retry = (
                parse_non_negative_int(values["net.retry"], "net.retry")
                if values.get("net.retry") is not None
                else _DEFAULT_NET_RETRY
            )
        except ValueError as exc:
            raise ValueError(f"Invalid {source_label}: {exc}") from exc

        cainfo = normalize_optional_string(values.get("http.cainfo"))
        return TackleConfig(
            http_proxy=normalize_optional_string(values.get("http.proxy")),
            http_timeout=timeout,
            http_cainfo=Path(cainfo) if cainfo is not None else None,
            net_retry=retry,
            home=home,
            sources=sources,
        )
