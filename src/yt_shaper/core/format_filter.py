"""Pure format filtering logic.

Every function in this module is a **pure** transformation — no I/O,
fully deterministic, and input order is always preserved.

Pipeline order (enforced by :func:`apply_filters`):

1. **Type** — keep records whose ``type`` is in the type selector.
2. **Quality** — keep records whose title mentions an enabled quality.

Both steps are inclusive allow-lists; a selector that enables nothing
disables its step instead of excluding everything.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from yt_shaper.core.models import FormatRecord, FormatType
from yt_shaper.core.options import DEFAULT_QUALITIES

logger = logging.getLogger(__name__)

_SELECTOR_TYPES = (list, tuple, set, frozenset)


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


# ---------------------------------------------------------------------------
# 1. Type
# ---------------------------------------------------------------------------

def filter_by_types(
    formats: Sequence[FormatRecord],
    types: Any,
) -> list[FormatRecord]:
    """Keep formats whose type is listed in *types*.

    A *types* value that is empty, or not a list/tuple/set, is ignored
    and the input is returned unchanged.  Unhashable entries never match.
    """
    if not isinstance(types, _SELECTOR_TYPES):
        logger.warning(
            "Format types must be a list, got %s. Using unfiltered formats.",
            type(types).__name__,
        )
        return list(formats)
    if not types:
        return list(formats)

    allowed = {t.value if isinstance(t, FormatType) else t for t in types if _is_hashable(t)}
    return [fmt for fmt in formats if fmt.type.value in allowed]


# ---------------------------------------------------------------------------
# 2. Quality
# ---------------------------------------------------------------------------

def enabled_qualities(qualitys: Mapping[str, bool] | None) -> list[str]:
    """Merge *qualitys* over the defaults and return the enabled labels."""
    if qualitys is not None and not isinstance(qualitys, Mapping):
        logger.warning(
            "Qualities must be a mapping, got %s. Ignoring.",
            type(qualitys).__name__,
        )
        qualitys = None
    merged: dict[str, bool] = dict(DEFAULT_QUALITIES)
    for label, enabled in (qualitys or {}).items():
        if not isinstance(label, str):
            logger.warning("Quality labels must be strings, got %r. Ignoring.", label)
            continue
        merged[label] = enabled
    return [label for label, enabled in merged.items() if enabled]


def filter_by_qualities(
    formats: Sequence[FormatRecord],
    qualitys: Mapping[str, bool] | None,
) -> list[FormatRecord]:
    """Keep formats whose title contains an enabled quality label.

    Matching is a case-insensitive substring search over the composed
    title, not an equality check on :attr:`FormatRecord.quality`.
    """
    labels = [label.lower() for label in enabled_qualities(qualitys)]
    if not labels:
        return list(formats)

    return [
        fmt
        for fmt in formats
        if any(label in fmt.title.lower() for label in labels)
    ]


# ---------------------------------------------------------------------------
# Composite pipeline
# ---------------------------------------------------------------------------

def apply_filters(
    formats: Sequence[FormatRecord],
    types: Any,
    qualitys: Mapping[str, bool] | None,
) -> list[FormatRecord]:
    """Run the type → quality pipeline."""
    return filter_by_qualities(filter_by_types(formats, types), qualitys)
