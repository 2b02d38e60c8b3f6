"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.

Every method is a coroutine: the core awaits exactly one provider call
at a time, everything between awaits is synchronous shaping.
"""

from __future__ import annotations

from typing import Any, Protocol


class VideoInfoProvider(Protocol):
    """Contract for single-video metadata backends."""

    async def fetch(self, url: str) -> dict[str, Any]:
        """Fetch raw metadata for *url*.

        The returned dict must contain at least:

        * ``"id"`` — video identifier (``str``)
        * ``"title"`` — video title (``str``)
        * ``"webpage_url"`` — canonical page URL (``str``)
        * ``"formats"`` — list of descriptor dicts with ``mime_type``,
          ``quality_label``, ``has_audio`` and ``url``

        Optional display fields: ``thumbnail``, ``uploader``,
        ``uploader_url``, ``uploader_avatar``, ``view_count``,
        ``duration`` (seconds), ``upload_date`` (``YYYYMMDD``) and
        ``related`` (list of dicts shaped like search entries).

        Raises
        ------
        ProviderError
            When the backend fails to return metadata.
        VideoUnavailableError
            When the video is confirmed unavailable.
        """
        ...  # pragma: no cover


class PlaylistInfoProvider(Protocol):
    """Contract for playlist backends."""

    async def fetch(self, url: str, *, limit: int | None = None) -> dict[str, Any]:
        """Fetch playlist metadata and up to *limit* entries.

        ``limit=None`` fetches every entry.  The returned dict contains
        ``"id"``, ``"title"`` and ``"entries"`` (ordered dicts with
        ``id``, ``title`` and ``url``).
        """
        ...  # pragma: no cover

    async def count(self, url: str) -> int:
        """Return the estimated number of items without listing them all."""
        ...  # pragma: no cover


class SearchProvider(Protocol):
    """Contract for search backends."""

    async def search(self, query: str, *, kind: str, limit: int) -> list[dict[str, Any]]:
        """Return up to *limit* raw results of *kind* (``video``/``playlist``).

        Each entry carries ``id``, ``title``, ``url`` and, where known,
        ``thumbnail``, ``uploader``, ``uploader_url``,
        ``uploader_avatar``, ``view_count``, ``duration`` and
        ``upload_date``.
        """
        ...  # pragma: no cover
