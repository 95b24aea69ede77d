"""Unit tests for prompteditor.utilities.utils."""

import time
from datetime import timezone

import pytest

from prompteditor.utilities.utils import ELLIPSIS, format_timestamp, now_utc, summarize


class TestSummarize:
    def test_collapses_whitespace_and_trims(self):
        assert summarize("  # Hello\n\n\tWorld  ") == "# Hello World"

    def test_short_text_unchanged(self):
        assert summarize("# Hello World") == "# Hello World"

    def test_none_and_empty(self):
        assert summarize(None) == ""
        assert summarize("") == ""
        assert summarize("   \n ") == ""

    def test_truncates_with_ellipsis(self):
        result = summarize("x" * 100)
        assert len(result) == 80
        assert result == "x" * 79 + ELLIPSIS

    def test_exactly_at_limit_not_truncated(self):
        assert summarize("y" * 80) == "y" * 80

    def test_custom_length(self):
        assert summarize("abcdefghij", 5) == "abcd" + ELLIPSIS


class TestFormatTimestamp:
    @pytest.fixture
    def local_tz(self, monkeypatch):
        def _set(tz):
            monkeypatch.setenv("TZ", tz)
            time.tzset()
        _set("UTC")
        yield _set
        monkeypatch.undo()
        time.tzset()

    def test_formats_valid_iso(self, local_tz):
        assert format_timestamp("2025-08-25T14:30:00Z") == "Aug 25, 2025, 2:30 PM"

    def test_morning_and_midnight(self, local_tz):
        assert format_timestamp("2023-01-01T00:05:00+00:00") == "Jan 1, 2023, 12:05 AM"

    def test_converts_to_local_time(self, local_tz):
        local_tz("EST+05")
        assert format_timestamp("2025-08-25T14:30:00+00:00") == "Aug 25, 2025, 9:30 AM"

    def test_naive_timestamp_unchanged(self, local_tz):
        local_tz("EST+05")
        assert format_timestamp("2025-08-25T14:30:00") == "Aug 25, 2025, 2:30 PM"

    def test_invalid_returns_input(self):
        assert format_timestamp("not-a-date") == "not-a-date"


class TestNowUtc:
    def test_is_timezone_aware(self):
        assert now_utc().tzinfo == timezone.utc
