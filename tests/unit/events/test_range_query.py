# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for event time range parsing."""

from datetime import datetime, timezone

import pytest

from caliper_store.domains.events import EventTimeRange, InvalidDateBoundError, build_time_range
from caliper_store.domains.events.exceptions import DATE_BOUND_FORMAT_MESSAGE
from caliper_store.domains.events.range_query import parse_date_bound
from caliper_store.utils.datetime import local_to_utc


class TestParseDateBound:
    """Tests for parse_date_bound."""

    def test_parses_local_time_to_utc(self) -> None:
        result = parse_date_bound("2020-01-02 10:30")

        assert result == local_to_utc(datetime(2020, 1, 2, 10, 30))
        assert result.tzinfo == timezone.utc

    def test_twelve_oclock_is_midnight(self) -> None:
        """Test that the 12-hour clock reads 12:xx as 00:xx."""
        result = parse_date_bound("2020-01-02 12:15")

        assert result == local_to_utc(datetime(2020, 1, 2, 0, 15))

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2020-01-01 13:00", datetime(2020, 1, 1, 13, 0)),
            ("2020-01-01 23:59", datetime(2020, 1, 1, 23, 59)),
            ("2020-01-01 00:30", datetime(2020, 1, 1, 0, 30)),
            ("2020-01-01 10:00:00", datetime(2020, 1, 1, 10, 0)),
            ("2020-01-01 10:00 trailing", datetime(2020, 1, 1, 10, 0)),
            ("2020-1-2 9:05", datetime(2020, 1, 2, 9, 5)),
        ],
    )
    def test_lenient_values_are_accepted(self, value: str, expected: datetime) -> None:
        """Test that 24-hour values and trailing text are tolerated."""
        assert parse_date_bound(value) == local_to_utc(expected)

    def test_afternoon_bound_orders_after_morning(self) -> None:
        assert parse_date_bound("2020-01-01 13:00") > parse_date_bound("2020-01-01 11:00")

    @pytest.mark.parametrize(
        "value",
        [
            "2020/01/01",
            "2020/01/01 10:00",
            "2020-01-01",
            "2020-01-01T10:00",
            "2020-13-01 10:00",
            "2020-01-01 24:00",
            "not a date",
        ],
    )
    def test_malformed_values_raise(self, value: str) -> None:
        with pytest.raises(InvalidDateBoundError) as exc_info:
            parse_date_bound(value)

        assert exc_info.value.value == value
        assert str(exc_info.value) == DATE_BOUND_FORMAT_MESSAGE


class TestBuildTimeRange:
    """Tests for build_time_range."""

    @pytest.mark.parametrize("from_, to", [("", ""), (None, None), ("  ", ""), ("", None)])
    def test_blank_bounds_are_unbounded(self, from_, to) -> None:
        result = build_time_range(from_, to)

        assert result == EventTimeRange()
        assert result.is_unbounded

    def test_only_upper_bound(self) -> None:
        result = build_time_range("", "2020-01-03 10:00")

        assert result.lower is None
        assert result.upper == parse_date_bound("2020-01-03 10:00")

    def test_only_lower_bound(self) -> None:
        result = build_time_range("2020-01-01 10:00", "")

        assert result.lower == parse_date_bound("2020-01-01 10:00")
        assert result.upper is None

    def test_both_bounds(self) -> None:
        result = build_time_range("2020-01-01 10:00", "2020-01-03 10:00")

        assert result.lower == parse_date_bound("2020-01-01 10:00")
        assert result.upper == parse_date_bound("2020-01-03 10:00")
        assert not result.is_unbounded

    @pytest.mark.parametrize(
        "from_, to",
        [
            ("2020/01/01", ""),
            ("", "2020/01/01"),
            ("2020/01/01", "2020-01-03 10:00"),
            ("2020-01-01 10:00", "2020/01/03"),
        ],
    )
    def test_any_malformed_bound_raises(self, from_: str, to: str) -> None:
        with pytest.raises(InvalidDateBoundError):
            build_time_range(from_, to)
