"""Core search service — video/playlist search and related videos.

Raw search entries are reshaped into :class:`SearchItem` values with
display-ready counts, durations and upload ages.
"""

from __future__ import annotations

import logging
from typing import Any

from yt_shaper.core.humanize import seconds_to_duration, separate_numbers, upload_age
from yt_shaper.core.models import Envelope, SearchItem, SearchResults, VideoAndRecommendations
from yt_shaper.core.playlist_service import PlaylistService
from yt_shaper.core.protocols import SearchProvider
from yt_shaper.core.video_service import VideoService
from yt_shaper.exceptions import InvalidSearchTypeError, ProviderError, YtShaperError

logger = logging.getLogger(__name__)

VIDEO = "video"
PLAYLIST = "playlist"
WATCH_URL = "https://www.youtube.com/watch?v={id}"


def _str_or_none(value: Any) -> str | None:
    return str(value) if value is not None else None


def video_item(raw: dict[str, Any], *, url: str | None = None) -> SearchItem:
    """Shape one raw video entry."""
    return SearchItem(
        type=VIDEO,
        id=_str_or_none(raw.get("id")),
        name=_str_or_none(raw.get("title")),
        url=url if url is not None else _str_or_none(raw.get("url") or raw.get("webpage_url")),
        views=separate_numbers(raw.get("view_count")),
        duration=seconds_to_duration(raw.get("duration")),
        uploaded_at=upload_age(raw.get("upload_date")),
        thumbnail=_str_or_none(raw.get("thumbnail")),
        author_name=_str_or_none(raw.get("uploader")),
        author_url=_str_or_none(raw.get("uploader_url")),
        author_img_url=_str_or_none(raw.get("uploader_avatar")),
    )


def playlist_item(raw: dict[str, Any], number_videos: int | None) -> SearchItem:
    """Shape one raw playlist entry."""
    return SearchItem(
        type=PLAYLIST,
        id=_str_or_none(raw.get("id")),
        name=_str_or_none(raw.get("title")),
        url=_str_or_none(raw.get("url")),
        views=separate_numbers(raw.get("view_count")),
        thumbnail=_str_or_none(raw.get("thumbnail")),
        author_name=_str_or_none(raw.get("uploader")),
        author_url=_str_or_none(raw.get("uploader_url")),
        author_img_url=_str_or_none(raw.get("uploader_avatar")),
        number_videos=number_videos,
    )


def recommendation_item(raw: dict[str, Any]) -> SearchItem:
    """Shape a related video; its URL is rebuilt from the id."""
    video_id = raw.get("id")
    url = WATCH_URL.format(id=video_id) if video_id is not None else None
    return video_item(raw, url=url)


class SearchService:
    """Stateless service shaping search results.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`SearchProvider` protocol.
    videos, playlists:
        Services used for related videos and playlist sizes.
    search_limit:
        Maximum number of video results requested per search.
    """

    def __init__(
        self,
        provider: SearchProvider,
        videos: VideoService,
        playlists: PlaylistService,
        *,
        search_limit: int = 100,
    ) -> None:
        self._provider: SearchProvider = provider
        self._videos: VideoService = videos
        self._playlists: PlaylistService = playlists
        self._search_limit: int = search_limit

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def raw_search(self, kind: str, query: str) -> Envelope[list[dict[str, Any]]]:
        """Return the provider's unshaped search entries for *kind*."""
        if kind not in (VIDEO, PLAYLIST):
            error = InvalidSearchTypeError(
                f'Invalid search type: {kind}. Must be "video" or "playlist".',
            )
            return Envelope.fail(str(error))
        try:
            entries = await self._search(query, kind=kind)
        except YtShaperError as exc:
            return Envelope.fail(str(exc))
        return Envelope.ok(entries)

    async def search_videos(self, query: str) -> Envelope[SearchResults]:
        try:
            entries = await self._search(query, kind=VIDEO)
        except YtShaperError as exc:
            return Envelope.fail(f"Failed to search videos: {exc}")

        items = tuple(video_item(entry) for entry in entries)
        return Envelope.ok(SearchResults(number_items=len(items), items=items))

    async def search_playlists(self, query: str) -> Envelope[SearchResults]:
        """Search playlists; each item's size is looked up one by one."""
        try:
            entries = await self._search(query, kind=PLAYLIST)
        except YtShaperError as exc:
            return Envelope.fail(f"Failed to search playlists: {exc}")

        items: list[SearchItem] = []
        for entry in entries:
            count = await self._playlists.number_video(str(entry.get("url") or ""))
            if count.err:
                logger.warning("Playlist size unavailable for %s: %s", entry.get("url"), count.err_msg)
            items.append(playlist_item(entry, count.data))
        return Envelope.ok(SearchResults(number_items=len(items), items=tuple(items)))

    async def search(self, kind: str, query: str) -> Envelope[SearchResults]:
        """Dispatch to :meth:`search_videos` or :meth:`search_playlists`."""
        if kind == VIDEO:
            return await self.search_videos(query)
        if kind == PLAYLIST:
            return await self.search_playlists(query)
        error = InvalidSearchTypeError(
            f'Invalid search type: {kind}. Must be "video" or "playlist".',
        )
        return Envelope.fail(str(error))

    async def video_and_recommendations(self, url: str) -> Envelope[VideoAndRecommendations]:
        """Return the video at *url* together with its related videos.

        Recommendations come from the provider's ``related`` list.  The
        yt-dlp provider cannot see the watch page's related videos and
        always reports none, so with the default wiring the list is
        empty.
        """
        raw = await self._videos.raw_info(url)
        if raw.err or raw.data is None:
            return Envelope.fail(f"Failed to get video and recommendations: {raw.err_msg}")

        info = raw.data
        related = info.get("related")
        if not isinstance(related, list):
            related = []

        return Envelope.ok(
            VideoAndRecommendations(
                origin_video_info=video_item(info, url=_str_or_none(info.get("webpage_url") or url)),
                recommendations=tuple(
                    recommendation_item(entry) for entry in related if isinstance(entry, dict)
                ),
            )
        )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    async def _search(self, query: str, *, kind: str) -> list[dict[str, Any]]:
        logger.debug("Searching %ss for %r", kind, query)
        try:
            entries = await self._provider.search(query, kind=kind, limit=self._search_limit)
        except YtShaperError:
            raise
        except Exception as exc:
            raise ProviderError(f"Unexpected provider error: {exc}") from exc

        if not isinstance(entries, list):
            raise ProviderError("Provider returned no search results.")
        return [entry for entry in entries if isinstance(entry, dict)]
