"""Shared yt-dlp invocation and exception mapping.

This module is the **only** place in the codebase that imports
``yt_dlp``.  All yt-dlp exceptions are caught here and re-raised as typed
:class:`~yt_shaper.exceptions.YtShaperError` subclasses — nothing raw
escapes the infrastructure boundary.

yt-dlp is blocking; :func:`extract` runs it in a worker thread so the
provider coroutines never stall the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from yt_shaper.exceptions import (
    EnvironmentError,
    ProviderError,
    VideoUnavailableError,
    append_ytdlp_upgrade_suggestion,
)

logger = logging.getLogger(__name__)

# Substrings in yt-dlp error messages that indicate the target itself
# is unavailable (as opposed to a transient or extraction error).
_UNAVAILABLE_SIGNALS: tuple[str, ...] = (
    "unavailable",
    "private video",
    "removed",
    "not available",
    "account terminated",
    "video has been removed",
    "this video is no longer available",
    "sign in to confirm your age",
    "does not exist",
)


def build_opts(*, socket_timeout: int, **extra: Any) -> dict[str, Any]:
    """Return yt-dlp options for metadata-only extraction."""
    opts: dict[str, Any] = {
        "quiet": True,
        "no_warnings": True,
        "no_color": True,
        # Do not write any files to disk.
        "skip_download": True,
        "socket_timeout": socket_timeout,
    }
    opts.update(extra)
    return opts


def _raise_mapped(exc: Exception) -> None:
    """Translate a yt-dlp ``DownloadError`` into a domain exception."""
    msg_lower = str(exc).lower()
    if any(signal in msg_lower for signal in _UNAVAILABLE_SIGNALS):
        raise VideoUnavailableError(
            str(exc),
            hint="The video may be private, removed, or geo-restricted.",
        ) from exc
    raise ProviderError(
        str(exc),
        hint=append_ytdlp_upgrade_suggestion("Check the URL and your network."),
    ) from exc


def extract_info_sync(url: str, opts: dict[str, Any]) -> dict[str, Any]:
    """Run ``YoutubeDL.extract_info`` and return a sanitised info dict.

    Raises
    ------
    EnvironmentError
        When yt-dlp is not installed.
    VideoUnavailableError
        When yt-dlp reports the target as unavailable / private / removed.
    ProviderError
        For all other extraction failures.
    """
    try:
        import yt_dlp
        import yt_dlp.utils
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "yt-dlp is not installed. Install with: pip install yt-dlp",
        ) from exc

    logger.debug("yt-dlp extract_info %s", url)
    try:
        with yt_dlp.YoutubeDL(opts) as ydl:
            info: Any = ydl.extract_info(url, download=False)
            if isinstance(info, dict):
                info = ydl.sanitize_info(info)
    except yt_dlp.utils.DownloadError as exc:
        _raise_mapped(exc)
    except Exception as exc:
        raise ProviderError(f"Unexpected yt-dlp error: {exc}") from exc

    if info is None:
        raise ProviderError(
            "yt-dlp returned no metadata for the given URL.",
            hint="The URL may not point to a valid video or playlist.",
        )

    if not isinstance(info, dict):
        raise ProviderError("yt-dlp returned an unexpected data structure.")

    return dict(info)


async def extract(url: str, opts: dict[str, Any]) -> dict[str, Any]:
    """Awaitable :func:`extract_info_sync`."""
    return await asyncio.to_thread(extract_info_sync, url, opts)


def first_thumbnail(info: dict[str, Any]) -> str | None:
    """Return ``thumbnail`` or the last (largest) entry of ``thumbnails``."""
    thumbnail = info.get("thumbnail")
    if thumbnail:
        return str(thumbnail)
    thumbnails = info.get("thumbnails")
    if isinstance(thumbnails, list):
        for entry in reversed(thumbnails):
            if isinstance(entry, dict) and entry.get("url"):
                return str(entry["url"])
    return None
