"""Per-operation option objects and their documented defaults.

Callers may pass either an option dataclass or a plain mapping.  Mapping
input goes through ``from_mapping``: recognised keys (and their legacy
camel-case aliases) override the defaults, unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from yt_shaper.core.models import FormatType

ALL_TYPES: tuple[str, ...] = (
    FormatType.VIDEO.value,
    FormatType.AUDIO.value,
    FormatType.VIDEO_AND_AUDIO.value,
)
"""Every real stream type; the default type selector for ``get_info``."""

DOWNLOAD_TYPES: tuple[str, ...] = (FormatType.VIDEO_AND_AUDIO.value,)
"""Default type selector when picking a single download link."""

DEFAULT_QUALITIES: dict[str, bool] = {
    "144p": False,
    "240p": False,
    "360p": False,
    "480p": False,
    "720p": False,
    "1080p": False,
    "1440p": False,
    "2160p": False,
}
"""Known quality labels, all disabled (no quality filtering)."""

JSON = "json"
TEXT = "text"


def normalize_data_type(value: Any) -> str:
    """Trim and lower-case a response format; blank or non-string → ``json``."""
    if not isinstance(value, str):
        return JSON
    return value.strip().lower() or JSON


def _pick(mapping: Mapping[str, Any], *keys: str, default: Any) -> Any:
    for key in keys:
        if key in mapping:
            return mapping[key]
    return default


@dataclass(frozen=True, slots=True)
class GetInfoOptions:
    """Options for :meth:`VideoService.get_info`."""

    video_number: int = 1
    """Ordinal embedded into every format URL."""

    video_data_type: str = JSON
    """``json`` for structured data, ``text`` for the fixed text layout."""

    types: Any = ALL_TYPES
    """Allowed format types; a non-list value disables type filtering."""

    qualitys: Mapping[str, bool] = field(default_factory=dict)
    """Quality labels to enable, merged over :data:`DEFAULT_QUALITIES`."""

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> GetInfoOptions:
        mapping = mapping or {}
        return cls(
            video_number=_pick(mapping, "video_number", "VideoNumber", default=1),
            video_data_type=_pick(mapping, "video_data_type", "VideoDataType", default=JSON),
            types=_pick(mapping, "types", default=ALL_TYPES),
            qualitys=_pick(mapping, "qualitys", "qualities", default={}) or {},
        )


@dataclass(frozen=True, slots=True)
class DownloadLinksOptions:
    """Options for :meth:`PlaylistService.get_downloads_links`."""

    video_data_type: str = JSON
    """``json`` returns a list of slots, ``text`` one slot per line."""

    types: Any = DOWNLOAD_TYPES
    qualitys: Mapping[str, bool] = field(default_factory=dict)

    start: Any = None
    """First ordinal (``from``); ``None`` means the first video."""

    end: Any = None
    """Last ordinal (``to``); ``None`` means the last video."""

    concurrency: Any = None
    """Entries resolved at once; ``None`` defers to the service default.

    ``1`` keeps the batch strictly sequential.
    """

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> DownloadLinksOptions:
        mapping = mapping or {}
        return cls(
            video_data_type=_pick(mapping, "video_data_type", "VideoDataType", default=JSON),
            types=_pick(mapping, "types", default=DOWNLOAD_TYPES),
            qualitys=_pick(mapping, "qualitys", "qualities", default={}) or {},
            start=_pick(mapping, "from", "start", default=None),
            end=_pick(mapping, "to", "end", default=None),
            concurrency=_pick(mapping, "concurrency", default=None),
        )


def coerce_get_info_options(
    options: GetInfoOptions | Mapping[str, Any] | None,
) -> GetInfoOptions:
    if isinstance(options, GetInfoOptions):
        return options
    return GetInfoOptions.from_mapping(options)


def coerce_download_links_options(
    options: DownloadLinksOptions | Mapping[str, Any] | None,
) -> DownloadLinksOptions:
    if isinstance(options, DownloadLinksOptions):
        return options
    return DownloadLinksOptions.from_mapping(options)
