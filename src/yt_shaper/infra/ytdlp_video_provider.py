"""yt-dlp backed implementation of :class:`~yt_shaper.core.protocols.VideoInfoProvider`."""

from __future__ import annotations

from typing import Any

from yt_shaper.config import DEFAULT_SOCKET_TIMEOUT
from yt_shaper.infra.ytdlp_runner import build_opts, extract, first_thumbnail


def _has_codec(codec: Any) -> bool:
    return codec not in (None, "none")


def quality_label(fmt: dict[str, Any]) -> str | None:
    """Return a label like ``720p`` or ``1080p60`` for a video stream."""
    height = fmt.get("height")
    if isinstance(height, int) and height > 0:
        fps = fmt.get("fps")
        suffix = str(round(fps)) if isinstance(fps, (int, float)) and fps > 30 else ""
        return f"{height}p{suffix}"
    note = fmt.get("format_note")
    return str(note) if note else None


def to_descriptor(fmt: dict[str, Any]) -> dict[str, Any]:
    """Map a yt-dlp format dict onto the raw descriptor contract.

    Streams without a URL or without any codec (storyboards, manifests)
    get no ``mime_type`` and are therefore dropped by the core.
    """
    url = fmt.get("url")
    vcodec, acodec = fmt.get("vcodec"), fmt.get("acodec")
    has_video, has_audio = _has_codec(vcodec), _has_codec(acodec)

    if not url or not (has_video or has_audio):
        return {"url": url}

    codecs = ", ".join(
        str(codec) for codec, present in ((vcodec, has_video), (acodec, has_audio)) if present
    )
    kind = "video" if has_video else "audio"
    return {
        "mime_type": f'{kind}/{fmt.get("ext") or "unknown"}; codecs="{codecs}"',
        "quality_label": quality_label(fmt) if has_video else None,
        "has_audio": has_audio,
        "url": str(url),
    }


class YtDlpVideoInfoProvider:
    """Concrete :class:`VideoInfoProvider` backed by the yt-dlp Python API.

    Usage::

        provider = YtDlpVideoInfoProvider()
        info = await provider.fetch("https://www.youtube.com/watch?v=...")

    This class satisfies the protocol structurally — no explicit
    inheritance required.
    """

    def __init__(self, *, socket_timeout: int = DEFAULT_SOCKET_TIMEOUT) -> None:
        self._socket_timeout = socket_timeout

    def _build_opts(self) -> dict[str, Any]:
        return build_opts(socket_timeout=self._socket_timeout, noplaylist=True)

    async def fetch(self, url: str) -> dict[str, Any]:
        """Extract metadata and formats for *url* without downloading."""
        info = await extract(url, self._build_opts())
        raw_formats = info.get("formats")
        if not isinstance(raw_formats, list):
            raw_formats = []

        return {
            "id": info.get("id"),
            "title": info.get("title"),
            "webpage_url": info.get("webpage_url") or url,
            "formats": [to_descriptor(fmt) for fmt in raw_formats if isinstance(fmt, dict)],
            "thumbnail": first_thumbnail(info),
            "uploader": info.get("uploader") or info.get("channel"),
            "uploader_url": info.get("uploader_url") or info.get("channel_url"),
            "uploader_avatar": None,
            "view_count": info.get("view_count"),
            "duration": info.get("duration"),
            "upload_date": info.get("upload_date"),
            # yt-dlp does not expose the watch page's related videos.
            "related": [],
        }
