"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; providers are awaited through protocols.
* No imports from ``cli`` or ``infra``.
* Public operations return :class:`Envelope` values and never raise.
"""

from yt_shaper.core.models import (
    Envelope,
    FormatRecord,
    FormatType,
    PlaylistData,
    PlaylistVideo,
    RangeSpec,
    SearchItem,
    SearchResults,
    VideoAndRecommendations,
    VideoData,
)
from yt_shaper.core.options import DownloadLinksOptions, GetInfoOptions
from yt_shaper.core.playlist_service import PlaylistService
from yt_shaper.core.protocols import PlaylistInfoProvider, SearchProvider, VideoInfoProvider
from yt_shaper.core.search_service import SearchService
from yt_shaper.core.video_service import VideoService

__all__: list[str] = [
    "DownloadLinksOptions",
    "Envelope",
    "FormatRecord",
    "FormatType",
    "GetInfoOptions",
    "PlaylistData",
    "PlaylistInfoProvider",
    "PlaylistService",
    "PlaylistVideo",
    "RangeSpec",
    "SearchItem",
    "SearchProvider",
    "SearchResults",
    "SearchService",
    "VideoAndRecommendations",
    "VideoData",
    "VideoInfoProvider",
    "VideoService",
]
