"""Domain models for yt-shaper.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are discarded once the response envelope has
been returned.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Format classification
# ---------------------------------------------------------------------------

class FormatType(str, Enum):
    """Stream classification derived from video/audio presence."""

    VIDEO = "video"
    AUDIO = "audio"
    VIDEO_AND_AUDIO = "video and audio"
    OTHER = "other"

    @classmethod
    def classify(cls, has_video: bool, has_audio: bool) -> FormatType:
        if has_video and has_audio:
            return cls.VIDEO_AND_AUDIO
        if has_video:
            return cls.VIDEO
        if has_audio:
            return cls.AUDIO
        return cls.OTHER


# ---------------------------------------------------------------------------
# Single format record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FormatRecord:
    """One normalised stream variant of a video."""

    title: str
    """Composed label, e.g. ``video/mp4 [720p] [+audio]``."""

    mime_type: str
    """Full mime type as reported by the provider."""

    has_video: bool
    has_audio: bool

    type: FormatType
    """Derived from :attr:`has_video` / :attr:`has_audio`."""

    quality: str | None
    """Quality label (e.g. ``720p``), ``None`` for audio-only streams."""

    url: str
    """Direct playback URL with ordinal and title embedded."""


# ---------------------------------------------------------------------------
# Video / playlist payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoData:
    """Shaped result of :meth:`VideoService.get_info`."""

    id: str
    title: str
    video_url: str
    formats: tuple[FormatRecord, ...]


@dataclass(frozen=True, slots=True)
class RangeSpec:
    """Validated, 1-based inclusive playlist window."""

    start: int
    end: int

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, slots=True)
class PlaylistVideo:
    """One playlist entry.

    ``formats`` stays ``None`` unless download links were requested, in
    which case it holds the format records or an inline error string.
    """

    id: str
    title: str
    video_url: str
    formats: tuple[FormatRecord, ...] | str | None = None


@dataclass(frozen=True, slots=True)
class PlaylistData:
    id: str
    title: str
    url: str
    number_videos: int
    videos: dict[int, PlaylistVideo] = field(default_factory=dict)
    """Entries keyed by 1-based ordinal."""


# ---------------------------------------------------------------------------
# Search payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SearchItem:
    """A video or playlist as shown in search results."""

    type: str
    id: str | None
    name: str | None
    url: str | None
    views: str | None = None
    duration: str | None = None
    uploaded_at: str | None = None
    thumbnail: str | None = None
    author_name: str | None = None
    author_url: str | None = None
    author_img_url: str | None = None
    number_videos: int | None = None


@dataclass(frozen=True, slots=True)
class SearchResults:
    number_items: int
    items: tuple[SearchItem, ...]


@dataclass(frozen=True, slots=True)
class VideoAndRecommendations:
    origin_video_info: SearchItem
    recommendations: tuple[SearchItem, ...]


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

def to_plain(value: Any) -> Any:
    """Convert dataclasses and enums into JSON-friendly builtins."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


@dataclass(frozen=True, slots=True)
class Envelope(Generic[T]):
    """Uniform ``{data, err, err_msg}`` contract of every public operation.

    ``err=True`` implies ``data is None`` and a non-empty ``err_msg``;
    ``err=False`` implies ``err_msg == ""``.
    """

    data: T | None
    err: bool = False
    err_msg: str = ""

    def __post_init__(self) -> None:
        if self.err:
            if self.data is not None:
                raise ValueError("A failed envelope must not carry data.")
            if not self.err_msg:
                raise ValueError("A failed envelope needs an error message.")
        elif self.err_msg:
            raise ValueError("A successful envelope must have an empty err_msg.")

    @classmethod
    def ok(cls, data: T) -> Envelope[T]:
        return cls(data=data)

    @classmethod
    def fail(cls, message: str) -> Envelope[T]:
        return cls(data=None, err=True, err_msg=message or "Unknown error")

    def to_dict(self, key: str = "data") -> dict[str, Any]:
        """Render the envelope with *key* naming the payload field."""
        return {key: to_plain(self.data), "err": self.err, "err_msg": self.err_msg}
