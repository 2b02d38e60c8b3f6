"""Runtime settings with environment variable support.

Every setting has a default; ``Settings.from_env`` overrides them from
``YT_SHAPER_*`` variables.  Malformed values are logged and ignored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENV_PREFIX = "YT_SHAPER_"

DEFAULT_SEARCH_LIMIT = 100
DEFAULT_SOCKET_TIMEOUT = 30
DEFAULT_PLAYLIST_CONCURRENCY = 1
DEFAULT_LOG_LEVEL = "WARNING"


def _env_int(environ: Mapping[str, str], name: str, default: int, *, minimum: int = 1) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s%s=%r: must be >= %d", ENV_PREFIX, name, raw, minimum)
        return default
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Provider and service tuning knobs."""

    search_limit: int = DEFAULT_SEARCH_LIMIT
    """Maximum number of results requested per search."""

    socket_timeout: int = DEFAULT_SOCKET_TIMEOUT
    """Seconds yt-dlp waits on a single network operation."""

    playlist_concurrency: int = DEFAULT_PLAYLIST_CONCURRENCY
    """Default entries resolved at once by playlist batches."""

    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        level = env.get(ENV_PREFIX + "LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if logging.getLevelName(level) == f"Level {level}":
            logger.warning("Ignoring %sLOG_LEVEL=%r: unknown level", ENV_PREFIX, level)
            level = DEFAULT_LOG_LEVEL
        return cls(
            search_limit=_env_int(env, "SEARCH_LIMIT", DEFAULT_SEARCH_LIMIT),
            socket_timeout=_env_int(env, "SOCKET_TIMEOUT", DEFAULT_SOCKET_TIMEOUT),
            playlist_concurrency=_env_int(env, "PLAYLIST_CONCURRENCY", DEFAULT_PLAYLIST_CONCURRENCY),
            log_level=level,
        )
