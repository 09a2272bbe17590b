"""
Unit tests for the short-form classifier.
"""
import pytest

from subfeed.core.duration import classify, is_short_form, parse_duration_seconds


class TestParseDuration:
    @pytest.mark.parametrize(
        "encoding, expected",
        [
            ("PT45S", 45),
            ("PT1M30S", 90),
            ("PT4M", 240),
            ("PT1H", 3600),
            ("PT1H2M3S", 3723),
            ("PT0S", 0),
        ],
    )
    def test_parses_subset(self, encoding, expected):
        assert parse_duration_seconds(encoding) == expected

    @pytest.mark.parametrize("encoding", [None, "", "garbage", "P1D", "45", 45])
    def test_unparseable_is_zero(self, encoding):
        assert parse_duration_seconds(encoding) == 0


class TestClassify:
    @pytest.mark.parametrize("seconds", [1, 30, 45, 59])
    def test_under_a_minute_is_short(self, seconds):
        assert classify("Regular title", f"PT{seconds}S").is_short_form is True

    @pytest.mark.parametrize("seconds", [60, 61, 600, 3600])
    def test_a_minute_or_more_is_long(self, seconds):
        assert classify("Regular title", f"PT{seconds}S").is_short_form is False

    @pytest.mark.parametrize("encoding", [None, "PT0S", "not-a-duration"])
    def test_unknown_duration_depends_on_title(self, encoding):
        assert classify("Regular title", encoding).is_short_form is False
        assert classify("Clip #shorts", encoding).is_short_form is True

    @pytest.mark.parametrize("title", ["#SHORTS", "wow #Shorts", "#shorts at start", "a#sHoRtSb"])
    def test_marker_is_case_insensitive(self, title):
        assert is_short_form(title, "PT30M") is True

    def test_missing_title(self):
        assert is_short_form(None, None) is False
        assert is_short_form(None, "PT10S") is True

    def test_short_without_hash_is_not_marker(self):
        assert is_short_form("shorts compilation", "PT10M") is False
