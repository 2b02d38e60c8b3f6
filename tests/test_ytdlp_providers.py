"""Tests for the yt-dlp adapters (infra/).

yt-dlp is **never** invoked: provider tests patch the awaitable
``extract`` helper, and runner tests install a fake ``yt_dlp`` module.
"""

from __future__ import annotations

import sys
import types
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from yt_shaper.exceptions import (
    InvalidSearchTypeError,
    ProviderError,
    VideoUnavailableError,
)
from yt_shaper.infra.ytdlp_playlist_provider import YtDlpPlaylistInfoProvider, to_entry
from yt_shaper.infra.ytdlp_runner import build_opts, extract, extract_info_sync, first_thumbnail
from yt_shaper.infra.ytdlp_search_provider import YtDlpSearchProvider, to_search_entry
from yt_shaper.infra.ytdlp_video_provider import YtDlpVideoInfoProvider, quality_label, to_descriptor

VIDEO_URL = "https://www.youtube.com/watch?v=abc123"
PLAYLIST_URL = "https://www.youtube.com/playlist?list=PL123"


# ---------------------------------------------------------------------------
# Fake yt_dlp module
# ---------------------------------------------------------------------------

class _DownloadError(Exception):
    pass


def _install_fake_ytdlp(
    monkeypatch: pytest.MonkeyPatch,
    result: Any = None,
    error: Exception | None = None,
) -> list[dict[str, Any]]:
    """Install a fake ``yt_dlp`` module; return the list of opts it saw."""
    seen_opts: list[dict[str, Any]] = []

    class FakeYoutubeDL:
        def __init__(self, opts: dict[str, Any]) -> None:
            seen_opts.append(opts)

        def __enter__(self) -> FakeYoutubeDL:
            return self

        def __exit__(self, *exc_info: object) -> None:
            return None

        def extract_info(self, url: str, download: bool = True) -> Any:
            assert download is False
            if error is not None:
                raise error
            return result

        def sanitize_info(self, info: dict[str, Any]) -> dict[str, Any]:
            return info

    utils_module = types.ModuleType("yt_dlp.utils")
    utils_module.DownloadError = _DownloadError  # type: ignore[attr-defined]
    module = types.ModuleType("yt_dlp")
    module.YoutubeDL = FakeYoutubeDL  # type: ignore[attr-defined]
    module.utils = utils_module  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "yt_dlp", module)
    monkeypatch.setitem(sys.modules, "yt_dlp.utils", utils_module)
    return seen_opts


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class TestRunner:
    def test_build_opts_metadata_only(self) -> None:
        opts = build_opts(socket_timeout=7, noplaylist=True)
        assert opts["skip_download"] is True
        assert opts["quiet"] is True
        assert opts["socket_timeout"] == 7
        assert opts["noplaylist"] is True

    def test_returns_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen = _install_fake_ytdlp(monkeypatch, result={"id": "abc123"})
        assert extract_info_sync(VIDEO_URL, {"quiet": True}) == {"id": "abc123"}
        assert seen == [{"quiet": True}]

    def test_unavailable_mapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, error=_DownloadError("ERROR: Private video"))
        with pytest.raises(VideoUnavailableError) as exc_info:
            extract_info_sync(VIDEO_URL, {})
        assert exc_info.value.hint is not None

    def test_other_download_error_suggests_upgrade(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, error=_DownloadError("HTTP Error 403"))
        with pytest.raises(ProviderError) as exc_info:
            extract_info_sync(VIDEO_URL, {})
        assert not isinstance(exc_info.value, VideoUnavailableError)
        assert "pip install --upgrade yt-dlp" in (exc_info.value.hint or "")

    def test_unexpected_error_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, error=KeyError("formats"))
        with pytest.raises(ProviderError, match="Unexpected yt-dlp error"):
            extract_info_sync(VIDEO_URL, {})

    def test_none_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, result=None)
        with pytest.raises(ProviderError, match="no metadata"):
            extract_info_sync(VIDEO_URL, {})

    @pytest.mark.asyncio
    async def test_extract_runs_in_thread(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, result={"id": "abc123"})
        assert await extract(VIDEO_URL, {}) == {"id": "abc123"}

    def test_first_thumbnail(self) -> None:
        assert first_thumbnail({"thumbnail": "t.jpg"}) == "t.jpg"
        assert first_thumbnail({"thumbnails": [{"url": "small"}, {"url": "big"}]}) == "big"
        assert first_thumbnail({}) is None


# ---------------------------------------------------------------------------
# Video provider
# ---------------------------------------------------------------------------

class TestDescriptors:
    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [
            ({"height": 720, "fps": 30}, "720p"),
            ({"height": 1080, "fps": 60}, "1080p60"),
            ({"height": 1440, "fps": 59.94}, "1440p60"),
            ({"height": None, "format_note": "DASH video"}, "DASH video"),
            ({}, None),
        ],
    )
    def test_quality_label(self, fmt: dict[str, Any], expected: str | None) -> None:
        assert quality_label(fmt) == expected

    def test_muxed(self) -> None:
        desc = to_descriptor({
            "url": "https://cdn/videoplayback?x=1",
            "ext": "mp4",
            "vcodec": "avc1.42001E",
            "acodec": "mp4a.40.2",
            "height": 360,
            "fps": 30,
        })
        assert desc == {
            "mime_type": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"',
            "quality_label": "360p",
            "has_audio": True,
            "url": "https://cdn/videoplayback?x=1",
        }

    def test_audio_only(self) -> None:
        desc = to_descriptor({"url": "u", "ext": "webm", "vcodec": "none", "acodec": "opus"})
        assert desc["mime_type"] == 'audio/webm; codecs="opus"'
        assert desc["quality_label"] is None
        assert desc["has_audio"] is True

    def test_video_only(self) -> None:
        desc = to_descriptor({"url": "u", "ext": "mp4", "vcodec": "vp9", "acodec": "none", "height": 1080})
        assert desc["mime_type"] == 'video/mp4; codecs="vp9"'
        assert desc["has_audio"] is False

    def test_storyboard_has_no_mime_type(self) -> None:
        desc = to_descriptor({"url": "sb", "ext": "mhtml", "vcodec": "none", "acodec": "none"})
        assert "mime_type" not in desc


@pytest.mark.asyncio
class TestVideoProvider:
    async def test_fetch_shapes_info(self) -> None:
        raw = {
            "id": "abc123",
            "title": "Title",
            "webpage_url": VIDEO_URL,
            "formats": [
                {"url": "a", "ext": "m4a", "vcodec": "none", "acodec": "mp4a"},
                "junk",
            ],
            "thumbnails": [{"url": "thumb"}],
            "channel": "Chan",
            "view_count": 10,
            "duration": 61,
            "upload_date": "20240101",
        }
        with patch(
            "yt_shaper.infra.ytdlp_video_provider.extract", new=AsyncMock(return_value=raw),
        ) as mock_extract:
            info = await YtDlpVideoInfoProvider(socket_timeout=5).fetch(VIDEO_URL)

        assert info["id"] == "abc123"
        assert len(info["formats"]) == 1
        assert info["formats"][0]["mime_type"] == 'audio/m4a; codecs="mp4a"'
        assert info["thumbnail"] == "thumb"
        assert info["uploader"] == "Chan"
        assert info["related"] == []
        opts = mock_extract.await_args.args[1]
        assert opts["noplaylist"] is True
        assert opts["socket_timeout"] == 5


# ---------------------------------------------------------------------------
# Playlist provider
# ---------------------------------------------------------------------------

class TestToEntry:
    def test_url_kept(self) -> None:
        assert to_entry({"id": "a", "title": "t", "url": "u"}) == {"id": "a", "title": "t", "url": "u"}

    def test_url_built_from_id(self) -> None:
        assert to_entry({"id": "a"})["url"] == "https://www.youtube.com/watch?v=a"


@pytest.mark.asyncio
class TestPlaylistProvider:
    async def test_fetch(self) -> None:
        raw = {
            "id": "PL123",
            "title": "Mix",
            "playlist_count": 2,
            "entries": [{"id": "a", "url": "ua"}, None, {"id": "b", "url": "ub"}],
        }
        with patch(
            "yt_shaper.infra.ytdlp_playlist_provider.extract", new=AsyncMock(return_value=raw),
        ) as mock_extract:
            info = await YtDlpPlaylistInfoProvider().fetch(PLAYLIST_URL)

        assert info["playlist_count"] == 2
        assert [e["id"] for e in info["entries"]] == ["a", "b"]
        opts = mock_extract.await_args.args[1]
        assert opts["extract_flat"] == "in_playlist"
        assert "playlistend" not in opts

    async def test_fetch_with_limit(self) -> None:
        raw = {"id": "PL123", "entries": []}
        with patch(
            "yt_shaper.infra.ytdlp_playlist_provider.extract", new=AsyncMock(return_value=raw),
        ) as mock_extract:
            await YtDlpPlaylistInfoProvider().fetch(PLAYLIST_URL, limit=1)
        assert mock_extract.await_args.args[1]["playlistend"] == 1

    async def test_not_a_playlist(self) -> None:
        with patch(
            "yt_shaper.infra.ytdlp_playlist_provider.extract",
            new=AsyncMock(return_value={"id": "abc123"}),
        ):
            with pytest.raises(ProviderError, match="does not point to a playlist"):
                await YtDlpPlaylistInfoProvider().fetch(VIDEO_URL)

    async def test_count_from_head(self) -> None:
        raw = {"id": "PL123", "playlist_count": 42, "entries": [{"id": "a"}]}
        mock_extract = AsyncMock(return_value=raw)
        with patch("yt_shaper.infra.ytdlp_playlist_provider.extract", new=mock_extract):
            assert await YtDlpPlaylistInfoProvider().count(PLAYLIST_URL) == 42
        assert mock_extract.await_count == 1

    async def test_count_falls_back_to_full_listing(self) -> None:
        head = {"id": "PL123", "entries": [{"id": "a"}]}
        full = {"id": "PL123", "entries": [{"id": "a"}, {"id": "b"}, {"id": "c"}]}
        mock_extract = AsyncMock(side_effect=[head, full])
        with patch("yt_shaper.infra.ytdlp_playlist_provider.extract", new=mock_extract):
            assert await YtDlpPlaylistInfoProvider().count(PLAYLIST_URL) == 3


# ---------------------------------------------------------------------------
# Search provider
# ---------------------------------------------------------------------------

class TestSearchUrl:
    def test_video(self) -> None:
        assert YtDlpSearchProvider.search_url("lofi beats", kind="video", limit=5) == "ytsearch5:lofi beats"

    def test_playlist(self) -> None:
        url = YtDlpSearchProvider.search_url("lofi beats", kind="playlist", limit=5)
        assert url == "https://www.youtube.com/results?search_query=lofi+beats&sp=EgIQAw%3D%3D"

    def test_invalid(self) -> None:
        with pytest.raises(InvalidSearchTypeError):
            YtDlpSearchProvider.search_url("q", kind="channel", limit=5)

    def test_entry_mapping(self) -> None:
        entry = to_search_entry({"id": "a", "title": "t", "url": "u", "channel": "c", "view_count": 3})
        assert entry["uploader"] == "c"
        assert entry["view_count"] == 3
        assert entry["uploader_avatar"] is None


@pytest.mark.asyncio
class TestSearchProvider:
    async def test_search_limits_results(self) -> None:
        raw = {"entries": [{"id": str(n), "url": f"u{n}"} for n in range(5)]}
        with patch(
            "yt_shaper.infra.ytdlp_search_provider.extract", new=AsyncMock(return_value=raw),
        ) as mock_extract:
            entries = await YtDlpSearchProvider().search("q", kind="video", limit=3)

        assert [e["id"] for e in entries] == ["0", "1", "2"]
        url, opts = mock_extract.await_args.args
        assert url == "ytsearch3:q"
        assert opts["extract_flat"] is True
        assert opts["playlistend"] == 3
