"""Core playlist service — playlist info, range validation and batch links.

Depends on a :class:`~yt_shaper.core.protocols.PlaylistInfoProvider` for
playlist listings and on :class:`~yt_shaper.core.video_service.VideoService`
for per-video download links.

Error signalling is two-tier:

* batch-level failures (range validation, playlist fetch) produce an
  ``err=True`` envelope before any per-video work starts;
* per-video failures are written into that video's slot and never flip
  the batch's ``err`` flag.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from yt_shaper.core.models import Envelope, PlaylistData, PlaylistVideo, RangeSpec, VideoData
from yt_shaper.core.options import (
    TEXT,
    DownloadLinksOptions,
    GetInfoOptions,
    coerce_download_links_options,
    normalize_data_type,
)
from yt_shaper.core.protocols import PlaylistInfoProvider
from yt_shaper.core.range_validator import coerce_ordinal, prepare_range
from yt_shaper.core.video_service import VideoService
from yt_shaper.exceptions import ProviderError, YtShaperError

logger = logging.getLogger(__name__)


class PlaylistService:
    """Stateless service shaping playlist data.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`PlaylistInfoProvider` protocol.
    videos:
        Service used to resolve per-entry formats and download links.
    default_concurrency:
        Entries resolved at once when an operation does not say
        otherwise.  ``1`` (strictly sequential) unless configured.
    """

    def __init__(
        self,
        provider: PlaylistInfoProvider,
        videos: VideoService,
        *,
        default_concurrency: int = 1,
    ) -> None:
        self._provider: PlaylistInfoProvider = provider
        self._videos: VideoService = videos
        self._default_concurrency: int = max(1, default_concurrency)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def raw_info(self, url: str, limit: Any = 1) -> Envelope[dict[str, Any]]:
        """Return the provider's unshaped playlist listing.

        A non-numeric *limit* falls back to one entry.
        """
        normalized_limit = coerce_ordinal(limit) or 1
        try:
            info = await self._fetch(url, limit=normalized_limit)
        except YtShaperError as exc:
            return Envelope.fail(str(exc))
        return Envelope.ok(info)

    async def number_video(self, url: str) -> Envelope[int]:
        """Return the estimated number of videos in the playlist."""
        logger.debug("Counting videos in %s", url)
        try:
            count = await self._count(url)
        except YtShaperError as exc:
            logger.debug("Counting videos in %s failed: %s", url, exc)
            return Envelope.fail(
                f"Failed to get number of videos | url: {url} | ERROR MESSAGE: {exc}",
            )
        logger.debug("Estimated item count for %s: %d", url, count)
        return Envelope.ok(count)

    async def get_info(
        self,
        url: str,
        with_download_links: bool = False,
    ) -> Envelope[PlaylistData]:
        """Return every entry of the playlist keyed by 1-based ordinal.

        With *with_download_links* each entry also carries its formats,
        fetched one video at a time.
        """
        try:
            info = await self._fetch(url, limit=None)
            playlist = self.shape(info, url)
        except YtShaperError as exc:
            return Envelope.fail(f"Failed to get playlist info: {exc}")

        if with_download_links:
            playlist = await self._add_download_links(playlist)
        return Envelope.ok(playlist)

    async def prepare_range(self, url: str, start: Any = None, end: Any = None) -> RangeSpec:
        """Validate ``[start, end]`` against the playlist's size.

        Raises
        ------
        ProviderError
            If the playlist size cannot be fetched.
        RangeValidationError
            If the window is invalid for that size.
        """
        try:
            total = await self._count(url)
        except YtShaperError as exc:
            raise ProviderError(
                f"Error in Get Number Videos in Playlist | ERROR MESSAGE: {exc}",
            ) from exc
        return prepare_range(total, start, end)

    async def get_downloads_links(
        self,
        url: str,
        options: DownloadLinksOptions | Mapping[str, Any] | None = None,
    ) -> Envelope[list[str] | str]:
        """Resolve one download link per playlist entry in ``[from, to]``.

        In ``json`` mode the payload is an ordered list of slots; in
        ``text`` mode the same slots joined one per line.  Each slot is
        a URL, a ``No download link found`` message or an inline error.
        """
        opts = coerce_download_links_options(options)
        response_format = normalize_data_type(opts.video_data_type)

        try:
            window = await self.prepare_range(url, opts.start, opts.end)
        except YtShaperError as exc:
            return Envelope.fail(str(exc))

        logger.info("Resolving download links %d-%d of %s", window.start, window.end, url)

        playlist = await self.get_info(url)
        if playlist.err or playlist.data is None:
            return Envelope.fail(f"Error in download playlist data: {playlist.err_msg}")

        concurrency = coerce_ordinal(opts.concurrency) or self._default_concurrency
        slots = await self._collect_links(playlist.data, window, opts, concurrency)

        if response_format == TEXT:
            return Envelope.ok("\n".join(slots))
        return Envelope.ok(slots)

    # ------------------------------------------------------------------
    # Batch helpers
    # ------------------------------------------------------------------

    async def _collect_links(
        self,
        playlist: PlaylistData,
        window: RangeSpec,
        opts: DownloadLinksOptions,
        concurrency: int,
    ) -> list[str]:
        if concurrency <= 1:
            slots: list[str] = []
            for number in window:
                slots.append(await self._link_for(playlist, number, opts))
            return slots

        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(number: int) -> str:
            async with semaphore:
                return await self._link_for(playlist, number, opts)

        return list(await asyncio.gather(*(bounded(number) for number in window)))

    async def _link_for(
        self,
        playlist: PlaylistData,
        number: int,
        opts: DownloadLinksOptions,
    ) -> str:
        logger.debug("Resolving playlist entry %d", number)
        entry = playlist.videos.get(number)
        if entry is None or not entry.video_url:
            return f"Video URL not found | N: {number}"

        result = await self._videos.get_download_link(
            entry.video_url, number, opts.types, opts.qualitys,
        )
        if result.err:
            logger.warning("Playlist entry %d failed: %s", number, result.err_msg)
            return result.err_msg
        return result.data or ""

    async def _add_download_links(self, playlist: PlaylistData) -> PlaylistData:
        videos: dict[int, PlaylistVideo] = {}
        for number, video in playlist.videos.items():
            result = await self._videos.get_info(
                video.video_url, GetInfoOptions(video_number=number),
            )
            if not result.err and isinstance(result.data, VideoData):
                formats: Any = result.data.formats
            else:
                formats = f"Error in Get Video Info | ERROR MESSAGE: {result.err_msg}"
            videos[number] = dataclasses.replace(video, formats=formats)
        return dataclasses.replace(playlist, videos=videos)

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    async def _fetch(self, url: str, *, limit: int | None) -> dict[str, Any]:
        try:
            info = await self._provider.fetch(url, limit=limit)
        except YtShaperError:
            raise
        except Exception as exc:
            raise ProviderError(f"Unexpected provider error: {exc}") from exc

        if not isinstance(info, dict):
            raise ProviderError("Provider returned no playlist data for the given URL.")
        return info

    async def _count(self, url: str) -> int:
        try:
            count = await self._provider.count(url)
        except YtShaperError:
            raise
        except Exception as exc:
            raise ProviderError(f"Unexpected provider error: {exc}") from exc

        normalized = coerce_ordinal(count)
        if normalized is None:
            raise ProviderError(f"Provider returned an invalid item count: {count!r}")
        return normalized

    # ------------------------------------------------------------------
    # Raw-dict → domain-model shaping (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def shape(info: dict[str, Any], url: str) -> PlaylistData:
        """Convert a raw playlist dict into :class:`PlaylistData`.

        Entries that are not dicts keep their ordinal but are left out
        of ``videos``.
        """
        entries = info.get("entries")
        if not isinstance(entries, list):
            entries = []

        videos = {
            number: PlaylistVideo(
                id=str(entry.get("id") or ""),
                title=str(entry.get("title") or ""),
                video_url=str(entry.get("url") or ""),
            )
            for number, entry in enumerate(entries, start=1)
            if isinstance(entry, dict)
        }
        return PlaylistData(
            id=str(info.get("id") or ""),
            title=str(info.get("title") or ""),
            url=url,
            number_videos=len(entries),
            videos=videos,
        )
