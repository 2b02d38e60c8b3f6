"""Playlist range normalisation and validation.

:func:`prepare_range` is pure: the caller supplies the playlist size.
Fetching that size (and wrapping its failure) is the playlist service's
job.
"""

from __future__ import annotations

import math
from typing import Any

from yt_shaper.core.models import RangeSpec
from yt_shaper.exceptions import RangeValidationError


def coerce_ordinal(value: Any) -> int | None:
    """Return *value* as an int, or ``None`` when it is not numeric.

    Numeric strings and integral floats are accepted; booleans and
    fractional numbers are not.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or not number.is_integer():
        return None
    return int(number)


def prepare_range(total_count: int, start: Any = None, end: Any = None) -> RangeSpec:
    """Normalise and validate a 1-based inclusive ``[start, end]`` window.

    Raises
    ------
    RangeValidationError
        If either bound is not positive, the bounds are inverted, or a
        bound exceeds *total_count*.
    """
    normalized_start = coerce_ordinal(start)
    normalized_end = coerce_ordinal(end)
    if normalized_start is None:
        normalized_start = 1
    if normalized_end is None:
        normalized_end = total_count

    if normalized_start <= 0 or normalized_end <= 0:
        raise RangeValidationError(
            f"ERROR: From '{normalized_start}' and To '{normalized_end}' "
            "must be greater than 0",
        )

    if normalized_start > normalized_end:
        raise RangeValidationError(
            f"ERROR: From '{normalized_start}' must be less than or equal to "
            f"To '{normalized_end}'",
        )

    if normalized_start > total_count or normalized_end > total_count:
        raise RangeValidationError(
            f"ERROR: From '{normalized_start}' and To '{normalized_end}' "
            f"exceeds playlist size ({total_count})",
        )

    return RangeSpec(start=normalized_start, end=normalized_end)
