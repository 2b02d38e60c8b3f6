"""yt-dlp backed implementation of :class:`~yt_shaper.core.protocols.PlaylistInfoProvider`."""

from __future__ import annotations

from typing import Any

from yt_shaper.config import DEFAULT_SOCKET_TIMEOUT
from yt_shaper.exceptions import ProviderError
from yt_shaper.infra.ytdlp_runner import build_opts, extract

WATCH_URL = "https://www.youtube.com/watch?v={id}"


def to_entry(raw: dict[str, Any]) -> dict[str, Any]:
    """Reduce a flat playlist entry to ``id``/``title``/``url``."""
    video_id = raw.get("id")
    url = raw.get("url") or raw.get("webpage_url")
    if not url and video_id:
        url = WATCH_URL.format(id=video_id)
    return {"id": video_id, "title": raw.get("title"), "url": url}


class YtDlpPlaylistInfoProvider:
    """Concrete :class:`PlaylistInfoProvider` using flat playlist extraction.

    Entries are listed without resolving each video, which keeps both
    listing and counting to a single request per playlist page.
    """

    def __init__(self, *, socket_timeout: int = DEFAULT_SOCKET_TIMEOUT) -> None:
        self._socket_timeout = socket_timeout

    def _build_opts(self, *, limit: int | None) -> dict[str, Any]:
        extra: dict[str, Any] = {"extract_flat": "in_playlist"}
        if limit is not None:
            extra["playlistend"] = limit
        return build_opts(socket_timeout=self._socket_timeout, **extra)

    async def fetch(self, url: str, *, limit: int | None = None) -> dict[str, Any]:
        """List the playlist at *url*; ``limit=None`` lists every entry."""
        info = await extract(url, self._build_opts(limit=limit))
        entries = info.get("entries")
        if entries is None:
            raise ProviderError(
                "The URL does not point to a playlist.",
                hint="Pass a playlist URL (containing list=...).",
            )

        return {
            "id": info.get("id"),
            "title": info.get("title"),
            "playlist_count": info.get("playlist_count"),
            "entries": [to_entry(entry) for entry in entries if isinstance(entry, dict)],
        }

    async def count(self, url: str) -> int:
        """Return ``playlist_count`` from a one-entry listing.

        Falls back to listing every entry when yt-dlp reports no count.
        """
        head = await self.fetch(url, limit=1)
        count = head.get("playlist_count")
        if isinstance(count, int):
            return count

        full = await self.fetch(url)
        return len(full["entries"])
