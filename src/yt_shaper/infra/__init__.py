"""Infrastructure layer — external system integration.

This layer wraps all interaction with yt-dlp.  Every raw third-party
exception must be caught here and re-raised as a
:class:`~yt_shaper.exceptions.YtShaperError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from yt_shaper.infra.ytdlp_playlist_provider import YtDlpPlaylistInfoProvider
from yt_shaper.infra.ytdlp_search_provider import YtDlpSearchProvider
from yt_shaper.infra.ytdlp_video_provider import YtDlpVideoInfoProvider

__all__: list[str] = [
    "YtDlpPlaylistInfoProvider",
    "YtDlpSearchProvider",
    "YtDlpVideoInfoProvider",
]
