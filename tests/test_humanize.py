"""Tests for display formatting helpers (core/humanize.py)."""

from __future__ import annotations

from datetime import date

import pytest

from yt_shaper.core.humanize import seconds_to_duration, separate_numbers, upload_age

TODAY = date(2024, 6, 15)


class TestSeparateNumbers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0"), (999, "999"), (1000, "1,000"), (1234567, "1,234,567"), ("42000", "42,000")],
    )
    def test_grouping(self, value: object, expected: str) -> None:
        assert separate_numbers(value) == expected

    def test_none(self) -> None:
        assert separate_numbers(None) is None

    def test_non_numeric_passes_through(self) -> None:
        assert separate_numbers("No views") == "No views"


class TestSecondsToDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0:00"), (59, "0:59"), (61, "1:01"), (3600, "1:00:00"), (3725, "1:02:05"), (212.7, "3:32")],
    )
    def test_render(self, value: object, expected: str) -> None:
        assert seconds_to_duration(value) == expected

    @pytest.mark.parametrize("value", [None, "soon", -5, True])
    def test_invalid(self, value: object) -> None:
        assert seconds_to_duration(value) is None


class TestUploadAge:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("20240615", "today"),
            ("20240614", "1 day ago"),
            ("20240610", "5 days ago"),
            ("2024-06-01", "2 weeks ago"),
            ("20240415", "2 months ago"),
            ("20230615", "1 year ago"),
            ("20200101", "4 years ago"),
            (date(2024, 6, 8), "1 week ago"),
        ],
    )
    def test_relative(self, value: object, expected: str) -> None:
        assert upload_age(value, today=TODAY) == expected

    def test_future_is_today(self) -> None:
        assert upload_age("20250101", today=TODAY) == "today"

    def test_unparseable_string_returned(self) -> None:
        assert upload_age("3 years ago", today=TODAY) == "3 years ago"

    def test_none(self) -> None:
        assert upload_age(None) is None
