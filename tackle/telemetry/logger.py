"""Structured dispatch logging utilities.

Responsibilities:
- Configure the process-wide `loguru` sink once per invocation.
- Emit concise, deterministic event lines for dispatch stages.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping, TextIO

from loguru import logger

_DEFAULT_LEVEL = "WARNING"
_VERBOSE_LEVEL = "DEBUG"
_LEVEL_ENV_KEY = "TACKLE_LOG"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def _resolve_level(verbose: bool, env: Mapping[str, str]) -> str:
    """Pick the effective log level from the verbose flag and `TACKLE_LOG`."""

    if verbose:
        return _VERBOSE_LEVEL
    requested = env.get(_LEVEL_ENV_KEY, "").strip().upper()
    if not requested:
        return _DEFAULT_LEVEL
    try:
        logger.level(requested)
    except ValueError:
        return _DEFAULT_LEVEL
    return requested


def configure_logging(
    verbose: bool = False,
    sink: TextIO | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Replace loguru handlers with one plain-text sink and return its level."""

    level = _resolve_level(verbose, os.environ if env is None else env)
    logger.remove()
    logger.add(sink or sys.stderr, format="{message}", level=level, colorize=False)
    return level


def log_event(level: str, stage: str, event: str, **context: object) -> None:
    """Emit one structured dispatch log line."""

    line = f"[tackle] level={level} stage={stage} event={event}{_format_context(context)}"
    logger.log(level, line)
