"""Process-wide network transport bootstrap.

Responsibilities:
- Detect whether an HTTP proxy is configured.
- Build a proxy-aware `requests` session from configuration.
- Register it once, before any dispatch, as the transport used by
  version-control fetches for the rest of the process.

`init_transports` is called by the CLI entry point before any command runs and
never from inside a command. `TRANSPORTS.active()` is the read side: the
version-control fetch collaborator takes its session from there, and no
builtin in this package fetches anything itself.
"""

from __future__ import annotations

import os
from typing import Any, Mapping
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter

from .. import __version__
from ..config import TackleConfig
from ..parsing import normalize_optional_string
from ..telemetry.logger import log_event


_PROXY_ENV_KEYS = ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")
_DEFAULT_TIMEOUT_SECONDS = 30


class NetworkHandle(requests.Session):
    """`requests` session that applies a default timeout to every request."""

    def __init__(self, timeout_seconds: float | None = None) -> None:
        super().__init__()
        self.timeout_seconds = timeout_seconds

    def request(self, method: str | bytes, url: str | bytes, *args: Any, **kwargs: Any):
        if self.timeout_seconds is not None:
            kwargs.setdefault("timeout", self.timeout_seconds)
        return super().request(method, url, *args, **kwargs)


class TransportRegistry:
    """Holder of the transport used by version-control fetches.

    Registration is a one-shot write; registering twice is a programming error.
    """

    def __init__(self) -> None:
        self._handle: requests.Session | None = None

    @property
    def is_registered(self) -> bool:
        return self._handle is not None

    def register(self, handle: requests.Session) -> None:
        if self._handle is not None:
            raise RuntimeError("a network transport is already registered for this process")
        self._handle = handle

    def active(self) -> requests.Session:
        """Return the registered transport, or a plain session when none is registered."""

        if self._handle is not None:
            return self._handle
        return requests.Session()


TRANSPORTS = TransportRegistry()


def http_proxy(config: TackleConfig, env: Mapping[str, str] | None = None) -> str | None:
    """Return the configured proxy URL, config first, then the standard env variables."""

    if config.http_proxy is not None:
        return config.http_proxy
    env_map = os.environ if env is None else env
    for key in _PROXY_ENV_KEYS:
        value = normalize_optional_string(env_map.get(key))
        if value is not None:
            return value
    return None


def http_handle(config: TackleConfig, proxy: str | None = None) -> NetworkHandle:
    """Build a network handle from configuration.

    Raises:
        ValueError: If the proxy URL is malformed or the CA bundle is missing.
    """

    timeout = config.http_timeout if config.http_timeout is not None else _DEFAULT_TIMEOUT_SECONDS
    handle = NetworkHandle(timeout_seconds=timeout)
    handle.headers["User-Agent"] = f"tackle/{__version__}"

    adapter = HTTPAdapter(max_retries=config.net_retry)
    handle.mount("http://", adapter)
    handle.mount("https://", adapter)

    if proxy is not None:
        parts = urlsplit(proxy if "://" in proxy else f"http://{proxy}")
        if not parts.hostname:
            raise ValueError(f"invalid proxy URL `{proxy}`")
        proxy_url = parts.geturl()
        handle.proxies.update({"http": proxy_url, "https": proxy_url})

    if config.http_cainfo is not None:
        if not config.http_cainfo.is_file():
            raise ValueError(f"CA bundle `{config.http_cainfo}` does not exist")
        handle.verify = str(config.http_cainfo)
    return handle


def init_transports(
    config: TackleConfig,
    env: Mapping[str, str] | None = None,
    registry: TransportRegistry | None = None,
) -> bool:
    """Register a proxy-aware transport when a proxy is configured.

    Returns whether a transport was registered by this call. Failure to build
    the handle is logged and leaves the default transport in place.
    """

    target = registry if registry is not None else TRANSPORTS
    proxy = http_proxy(config, env)
    if proxy is None:
        log_event("DEBUG", "transport", "skipped", reason="no_proxy")
        return False
    if target.is_registered:
        log_event("DEBUG", "transport", "skipped", reason="already_registered")
        return False

    try:
        handle = http_handle(config, proxy)
    except (ValueError, OSError) as exc:
        log_event("WARNING", "transport", "failure", error_type=type(exc).__name__)
        return False

    target.register(handle)
    log_event("DEBUG", "transport", "registered")
    return True
