"""yt-dlp backed implementation of :class:`~yt_shaper.core.protocols.SearchProvider`."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote_plus

from yt_shaper.config import DEFAULT_SOCKET_TIMEOUT
from yt_shaper.exceptions import InvalidSearchTypeError
from yt_shaper.infra.ytdlp_runner import build_opts, extract, first_thumbnail

# ``sp`` filter selecting playlist results on the search page.
PLAYLIST_SEARCH_URL = "https://www.youtube.com/results?search_query={query}&sp=EgIQAw%3D%3D"


def to_search_entry(raw: dict[str, Any]) -> dict[str, Any]:
    """Map a flat yt-dlp search entry onto the raw search contract."""
    return {
        "id": raw.get("id"),
        "title": raw.get("title"),
        "url": raw.get("url") or raw.get("webpage_url"),
        "thumbnail": first_thumbnail(raw),
        "uploader": raw.get("uploader") or raw.get("channel"),
        "uploader_url": raw.get("uploader_url") or raw.get("channel_url"),
        "uploader_avatar": None,
        "view_count": raw.get("view_count"),
        "duration": raw.get("duration"),
        "upload_date": raw.get("upload_date"),
    }


class YtDlpSearchProvider:
    """Concrete :class:`SearchProvider` using yt-dlp's search extractors."""

    def __init__(self, *, socket_timeout: int = DEFAULT_SOCKET_TIMEOUT) -> None:
        self._socket_timeout = socket_timeout

    @staticmethod
    def search_url(query: str, *, kind: str, limit: int) -> str:
        """Return the yt-dlp input for a *kind* search."""
        if kind == "video":
            return f"ytsearch{limit}:{query}"
        if kind == "playlist":
            return PLAYLIST_SEARCH_URL.format(query=quote_plus(query))
        raise InvalidSearchTypeError(
            f'Invalid search type: {kind}. Must be "video" or "playlist".',
        )

    async def search(self, query: str, *, kind: str, limit: int) -> list[dict[str, Any]]:
        url = self.search_url(query, kind=kind, limit=limit)
        opts = build_opts(
            socket_timeout=self._socket_timeout,
            extract_flat=True,
            playlistend=limit,
        )
        info = await extract(url, opts)
        entries = info.get("entries") or []
        return [to_search_entry(entry) for entry in entries if isinstance(entry, dict)][:limit]
