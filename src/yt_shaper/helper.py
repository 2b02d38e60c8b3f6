"""Public facade grouping the video, playlist and search services.

Usage::

    helper = YouTubeHelper.default()
    result = await helper.video.get_download_link(url, qualitys={"720p": True})
    if not result.err:
        print(result.data)
"""

from __future__ import annotations

from dataclasses import dataclass

from yt_shaper.config import Settings
from yt_shaper.core.playlist_service import PlaylistService
from yt_shaper.core.protocols import PlaylistInfoProvider, SearchProvider, VideoInfoProvider
from yt_shaper.core.search_service import SearchService
from yt_shaper.core.video_service import VideoService


@dataclass(frozen=True, slots=True)
class YouTubeHelper:
    video: VideoService
    playlist: PlaylistService
    search: SearchService

    @classmethod
    def from_providers(
        cls,
        video_provider: VideoInfoProvider,
        playlist_provider: PlaylistInfoProvider,
        search_provider: SearchProvider,
        settings: Settings | None = None,
    ) -> YouTubeHelper:
        """Wire the services around explicit providers (e.g. test fakes)."""
        settings = settings or Settings()
        video = VideoService(video_provider)
        playlist = PlaylistService(
            playlist_provider,
            video,
            default_concurrency=settings.playlist_concurrency,
        )
        search = SearchService(
            search_provider,
            video,
            playlist,
            search_limit=settings.search_limit,
        )
        return cls(video=video, playlist=playlist, search=search)

    @classmethod
    def default(cls, settings: Settings | None = None) -> YouTubeHelper:
        """Wire the services around the yt-dlp providers."""
        from yt_shaper.infra import (
            YtDlpPlaylistInfoProvider,
            YtDlpSearchProvider,
            YtDlpVideoInfoProvider,
        )

        settings = settings or Settings.from_env()
        timeout = settings.socket_timeout
        return cls.from_providers(
            YtDlpVideoInfoProvider(socket_timeout=timeout),
            YtDlpPlaylistInfoProvider(socket_timeout=timeout),
            YtDlpSearchProvider(socket_timeout=timeout),
            settings,
        )
