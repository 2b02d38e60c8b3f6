"""Custom exception hierarchy for yt-shaper.

All exceptions that cross layer boundaries must inherit from
:class:`YtShaperError`.  Raw third-party exceptions (e.g. from yt-dlp)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

The core services never let these escape a public operation: they are
folded into an :class:`~yt_shaper.core.models.Envelope` with
``err=True``.  Only the CLI renders them.

Hierarchy
---------
YtShaperError
├── ProviderError
│   └── VideoUnavailableError
├── ValidationError
│   ├── RangeValidationError
│   └── InvalidSearchTypeError
└── EnvironmentError
"""

from __future__ import annotations


class YtShaperError(Exception):
    """Base exception for all yt-shaper errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Provider / extraction -------------------------------------------------

class ProviderError(YtShaperError):
    """Raised when a video, playlist or search fetch fails."""


class VideoUnavailableError(ProviderError):
    """Raised when the target is unavailable (private, removed, etc.)."""


# --- Input validation ------------------------------------------------------

class ValidationError(YtShaperError):
    """Raised when caller input is malformed."""


class RangeValidationError(ValidationError):
    """Raised when a playlist ``from``/``to`` window is invalid."""


class InvalidSearchTypeError(ValidationError):
    """Raised when a search kind is neither ``video`` nor ``playlist``."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(YtShaperError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
