"""Raw format descriptor → :class:`FormatRecord` normalisation.

Pure and deterministic.  A descriptor is expected to be a mapping with:

* ``"mime_type"`` — e.g. ``video/mp4; codecs="avc1.64001F, mp4a.40.2"``
* ``"quality_label"`` — e.g. ``720p``; absent/``None`` for audio-only
* ``"has_audio"`` — whether the stream carries audio
* ``"url"`` — direct playback URL

Descriptors without ``mime_type`` or ``url`` are dropped, not rejected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from yt_shaper.core.models import FormatRecord, FormatType

_UNSAFE_TITLE_CHARS = re.compile(r"[/|#]")
_PLAYBACK_PATH = re.compile(r"/videoplayback\?", re.IGNORECASE)


def sanitize_title(title: str) -> str:
    """Replace path-unsafe characters (``/``, ``|``, ``#``) with ``~``."""
    return _UNSAFE_TITLE_CHARS.sub("~", title)


def embed_file_hint(url: str, video_number: int, safe_title: str) -> str:
    """Rewrite ``/videoplayback?`` as ``/videoplayback/<n> - <title>?``."""
    replacement = f"/videoplayback/{video_number} - {safe_title}?"
    return _PLAYBACK_PATH.sub(lambda _match: replacement, url)


def compose_title(mime_type: str, quality: str | None, has_audio: bool) -> str:
    """Build the display title used by the quality filter.

    >>> compose_title('video/mp4; codecs="avc1"', "720p", True)
    'video/mp4 [720p] [+audio]'
    """
    base_mime = mime_type.split("; ")[0]
    quality_part = quality if quality is not None else ""
    audio_part = "+audio" if has_audio else "-audio"
    return f"{base_mime} [{quality_part}] [{audio_part}]"


def build_format_record(
    raw: Mapping[str, Any],
    video_number: int = 1,
    video_title: str = "video title",
) -> FormatRecord:
    """Convert one raw descriptor (which must carry ``mime_type``)."""
    mime_type = str(raw["mime_type"])
    raw_quality = raw.get("quality_label")
    quality: str | None = str(raw_quality) if raw_quality is not None else None
    has_video = quality is not None
    has_audio = bool(raw.get("has_audio"))

    return FormatRecord(
        title=compose_title(mime_type, quality, has_audio),
        mime_type=mime_type,
        has_video=has_video,
        has_audio=has_audio,
        type=FormatType.classify(has_video, has_audio),
        quality=quality,
        url=embed_file_hint(str(raw.get("url") or ""), video_number, sanitize_title(video_title)),
    )


def build_format_records(
    raw_formats: Iterable[Any],
    video_number: int = 1,
    video_title: str = "video title",
) -> list[FormatRecord]:
    """Build records for every descriptor that exposes ``mime_type`` and ``url``.

    Input order is preserved.
    """
    return [
        build_format_record(raw, video_number, video_title)
        for raw in raw_formats
        if isinstance(raw, Mapping) and "mime_type" in raw and raw.get("url")
    ]
