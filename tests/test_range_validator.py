"""Tests for playlist range validation (core/range_validator.py)."""

from __future__ import annotations

import pytest

from yt_shaper.core.models import RangeSpec
from yt_shaper.core.range_validator import coerce_ordinal, prepare_range
from yt_shaper.exceptions import RangeValidationError, ValidationError


class TestCoerceOrdinal:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3, 3),
            (0, 0),
            (-2, -2),
            ("7", 7),
            (" 4 ", 4),
            (5.0, 5),
            ("5.0", 5),
        ],
    )
    def test_numeric(self, value: object, expected: int) -> None:
        assert coerce_ordinal(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", float("nan"), float("inf"), 2.5, True, [], object()],
    )
    def test_non_numeric(self, value: object) -> None:
        assert coerce_ordinal(value) is None


class TestPrepareRange:
    def test_defaults_to_full_playlist(self) -> None:
        assert prepare_range(10, None, None) == RangeSpec(start=1, end=10)

    def test_explicit_window(self) -> None:
        assert prepare_range(10, 2, 5) == RangeSpec(start=2, end=5)

    def test_single_item(self) -> None:
        assert prepare_range(10, 10, 10) == RangeSpec(start=10, end=10)

    def test_non_numeric_falls_back(self) -> None:
        assert prepare_range(8, "x", "y") == RangeSpec(start=1, end=8)

    def test_numeric_strings_accepted(self) -> None:
        assert prepare_range(8, "2", "3") == RangeSpec(start=2, end=3)

    def test_zero_from_rejected(self) -> None:
        with pytest.raises(RangeValidationError, match="greater than 0"):
            prepare_range(10, 0, 5)

    def test_negative_to_rejected(self) -> None:
        with pytest.raises(RangeValidationError, match="greater than 0"):
            prepare_range(10, 1, -1)

    def test_inverted_rejected(self) -> None:
        with pytest.raises(RangeValidationError, match="less than or equal to"):
            prepare_range(10, 6, 3)

    def test_to_beyond_size_rejected(self) -> None:
        with pytest.raises(RangeValidationError, match=r"exceeds playlist size \(10\)"):
            prepare_range(10, 1, 20)

    def test_from_beyond_size_rejected(self) -> None:
        with pytest.raises(RangeValidationError, match="exceeds playlist size"):
            prepare_range(3, 4, 4)

    def test_empty_playlist_rejects_default_range(self) -> None:
        with pytest.raises(RangeValidationError, match="greater than 0"):
            prepare_range(0, None, None)

    def test_is_a_validation_error(self) -> None:
        assert issubclass(RangeValidationError, ValidationError)


class TestRangeSpec:
    def test_iterates_inclusive(self) -> None:
        assert list(RangeSpec(start=2, end=4)) == [2, 3, 4]

    def test_len(self) -> None:
        assert len(RangeSpec(start=3, end=3)) == 1
