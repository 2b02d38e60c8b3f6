"""Core video service — fetch, build, filter and serialise format data.

The service depends on a :class:`~yt_shaper.core.protocols.VideoInfoProvider`
injected at construction time (dependency inversion), keeping the core
free of any external-system imports.

Guarantees
----------
* Pure orchestration — no ``print()``, no filesystem access.
* Public operations never raise: failures become ``err=True`` envelopes.
* Multi-video batches never fail as a whole; each failed slot carries
  its own error text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from yt_shaper.core.format_builder import build_format_records
from yt_shaper.core.format_filter import apply_filters
from yt_shaper.core.models import Envelope, VideoData
from yt_shaper.core.options import (
    DOWNLOAD_TYPES,
    TEXT,
    GetInfoOptions,
    coerce_get_info_options,
    normalize_data_type,
)
from yt_shaper.core.protocols import VideoInfoProvider
from yt_shaper.core.range_validator import coerce_ordinal
from yt_shaper.exceptions import ProviderError, YtShaperError

logger = logging.getLogger(__name__)

TEXT_SEPARATOR: str = "-" * 100


def video_data_to_text(video: VideoData) -> str:
    """Serialise *video* into the fixed-layout text block."""
    header = (
        f"ID          : {video.id}\n"
        f"Title       : {video.title}\n"
        f"Youtube Url : {video.video_url}"
    )
    body = "\n\n".join(
        f"Type : {fmt.title}\nUrl  : {fmt.url}" for fmt in video.formats
    )
    return f"{header}\n{TEXT_SEPARATOR}\n\n{body}"


class VideoService:
    """Stateless service shaping single-video metadata.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`VideoInfoProvider` protocol.
    """

    def __init__(self, provider: VideoInfoProvider) -> None:
        self._provider: VideoInfoProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def raw_info(self, url: str) -> Envelope[dict[str, Any]]:
        """Return the provider's unshaped metadata for *url*."""
        try:
            info = await self.fetch(url)
        except YtShaperError as exc:
            return Envelope.fail(str(exc))
        return Envelope.ok(info)

    async def get_info(
        self,
        url: str,
        options: GetInfoOptions | Mapping[str, Any] | None = None,
    ) -> Envelope[VideoData | str]:
        """Fetch *url* and return its filtered formats.

        With ``video_data_type="text"`` the payload is the text block
        produced by :func:`video_data_to_text`.
        """
        opts = coerce_get_info_options(options)
        data_type = normalize_data_type(opts.video_data_type)
        video_number = coerce_ordinal(opts.video_number) or 1

        try:
            info = await self.fetch(url)
            video = self.shape(info, url, video_number, opts.types, opts.qualitys)
        except YtShaperError as exc:
            return Envelope.fail(f"Failed to get video info: {exc}")

        if data_type == TEXT:
            return Envelope.ok(video_data_to_text(video))
        return Envelope.ok(video)

    async def get_download_link(
        self,
        video_url: str,
        video_number: int = 1,
        types: Any = DOWNLOAD_TYPES,
        qualitys: Mapping[str, bool] | None = None,
    ) -> Envelope[str]:
        """Return the URL of the first format surviving the filters.

        An empty selection is not an error: the payload is then a
        ``No download link found`` message.
        """
        context = f"| N: {video_number} | url: {video_url}"
        result = await self.get_info(
            video_url,
            GetInfoOptions(video_number=video_number, types=types, qualitys=qualitys or {}),
        )

        if result.err:
            return Envelope.fail(
                f"ERROR: In Get Download Link {context} | ERROR MESSAGE: {result.err_msg}",
            )

        formats = result.data.formats if isinstance(result.data, VideoData) else ()
        if not formats:
            return Envelope.ok(f"No download link found {context}")
        return Envelope.ok(formats[0].url)

    async def get_download_link_for_many(
        self,
        video_urls: str | Sequence[str],
        types: Any = DOWNLOAD_TYPES,
        qualitys: Mapping[str, bool] | None = None,
    ) -> Envelope[str]:
        """Resolve one download link per URL, blank-line separated.

        URLs are processed sequentially; a failed URL contributes its
        error message to its slot and the envelope stays ``err=False``.
        """
        if isinstance(video_urls, str):
            video_urls = [video_urls]

        links: list[str] = []
        for number, video_url in enumerate(video_urls or [], start=1):
            result = await self.get_download_link(video_url, number, types, qualitys)
            if result.err:
                logger.warning("Download link %d failed: %s", number, result.err_msg)
                links.append(result.err_msg)
            else:
                links.append(result.data or "")

        return Envelope.ok("\n\n".join(links))

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    async def fetch(self, url: str) -> dict[str, Any]:
        """Call the provider and ensure only our exceptions escape."""
        logger.debug("Fetching video info for %s", url)
        try:
            info = await self._provider.fetch(url)
        except YtShaperError:
            raise
        except Exception as exc:
            raise ProviderError(f"Unexpected provider error: {exc}") from exc

        if not isinstance(info, dict):
            raise ProviderError("Provider returned no metadata for the given URL.")
        return info

    # ------------------------------------------------------------------
    # Raw-dict → domain-model shaping (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def shape(
        info: dict[str, Any],
        url: str,
        video_number: int,
        types: Any,
        qualitys: Mapping[str, bool] | None,
    ) -> VideoData:
        """Build, filter and wrap the formats of one raw info dict."""
        title = str(info.get("title") or "Unknown")
        raw_formats = info.get("formats")
        if not isinstance(raw_formats, list):
            raw_formats = []

        formats = build_format_records(raw_formats, video_number, title)
        formats = apply_filters(formats, types, qualitys)

        return VideoData(
            id=str(info.get("id", "")),
            title=title,
            video_url=str(info.get("webpage_url") or url),
            formats=tuple(formats),
        )
