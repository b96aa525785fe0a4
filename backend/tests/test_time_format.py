"""
Tests for the 12-hour <-> 24-hour time adapter.
"""

from datetime import time

import pytest

from hrm.time_format import is_12_hour, parse_12_hour, to_12_hour, to_24_hour


class TestTo24Hour:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2:00 PM", "14:00:00"),
            ("9:05 AM", "09:05:00"),
            ("09:05 AM", "09:05:00"),
            ("11:59 PM", "23:59:00"),
            ("3:30pm", "15:30:00"),
            ("3:30PM", "15:30:00"),
        ],
    )
    def test_converts(self, value, expected):
        assert to_24_hour(value) == expected

    def test_midnight(self):
        """12 AM is hour zero."""
        assert to_24_hour("12:00 AM") == "00:00:00"
        assert to_24_hour("12:45 AM") == "00:45:00"

    def test_noon(self):
        """12 PM stays 12."""
        assert to_24_hour("12:00 PM") == "12:00:00"
        assert to_24_hour("12:15 PM") == "12:15:00"

    @pytest.mark.parametrize("value", ["", "14:00", "13:00 PM", "0:30 AM", "2:60 PM", "2 PM", "noon", None])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            to_24_hour(value)


class TestTo12Hour:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("14:00:00", "2:00 PM"),
            ("14:00", "2:00 PM"),
            ("00:00:00", "12:00 AM"),
            ("12:00:00", "12:00 PM"),
            ("09:05:00", "9:05 AM"),
            ("23:59", "11:59 PM"),
            (time(0, 30), "12:30 AM"),
            (time(13, 15), "1:15 PM"),
        ],
    )
    def test_converts(self, value, expected):
        assert to_12_hour(value) == expected

    @pytest.mark.parametrize("value", ["", "24:00:00", "7:00", "12:61", "2:00 PM"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            to_12_hour(value)


class TestRoundTrip:
    def test_every_minute_of_the_day(self):
        for hour in range(24):
            for minute in range(60):
                stored = f"{hour:02d}:{minute:02d}:00"
                display = to_12_hour(stored)
                assert is_12_hour(display)
                assert to_24_hour(display) == stored
                assert to_12_hour(to_24_hour(display)) == display

    def test_parse_12_hour_returns_time(self):
        assert parse_12_hour("2:00 PM") == time(14, 0)
        assert parse_12_hour("12:00 AM") == time(0, 0)
