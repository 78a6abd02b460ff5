"""
Environment configuration for the jot CLI.

Configuration is read once into an immutable ``JotConfig`` and handed to
``NotesService``; nothing below the CLI reads the environment for it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from jot.exceptions import ConfigError

URL_ENV = "JOT_URL"
TOKEN_ENV = "JOT_TOKEN"
TIMEOUT_ENV = "JOT_TIMEOUT"
DEBUG_ENV = "JOT_DEBUG"

DEFAULT_TIMEOUT = 10.0

MISSING_ENV_MESSAGE = (
    "missing env vars — set:\n"
    "\n"
    '  export JOT_URL="https://your-db.turso.io"\n'
    '  export JOT_TOKEN="your-auth-token"\n'
)


@dataclass(frozen=True)
class JotConfig:
    url: str
    token: str
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    def __repr__(self) -> str:
        # keep the token out of logs and tracebacks
        return (
            f"JotConfig(url={self.url!r}, token='***', "
            f"timeout={self.timeout!r}, debug={self.debug!r})"
        )


def normalize_url(url: str) -> str:
    """Rewrite the first ``libsql://`` to ``https://``; the HTTP API needs https."""
    return url.replace("libsql://", "https://", 1)


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"invalid {TIMEOUT_ENV}: {raw!r} (expected seconds)")
    if value <= 0:
        raise ConfigError(f"invalid {TIMEOUT_ENV}: {raw!r} (must be positive)")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> JotConfig:
    """Load configuration from ``environ`` (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    url = env.get(URL_ENV, "")
    token = env.get(TOKEN_ENV, "")
    if not url or not token:
        raise ConfigError(MISSING_ENV_MESSAGE)

    return JotConfig(
        url=normalize_url(url),
        token=token,
        timeout=_parse_timeout(env.get(TIMEOUT_ENV)),
        debug=_parse_bool(env.get(DEBUG_ENV)),
    )


__all__ = ["JotConfig", "load_config", "normalize_url"]
