"""Tests for the format-key vocabulary."""

from __future__ import annotations

import pytest

from formatdata.keys import (
    CALENDARS,
    Category,
    FormatKey,
    calendar_key,
    category_of,
    expected_length,
)


# =============================================================================
# Parsing Tests
# =============================================================================


class TestFormatKeyParse:
    """Test FormatKey.parse."""

    def test_plain_key_is_gregorian(self):
        """Test that a key without prefixes belongs to the gregorian calendar."""
        key = FormatKey.parse("MonthNames")
        assert key.name == "MonthNames"
        assert key.calendar == "gregorian"
        assert key.context == "format"
        assert key.width is None
        assert key.java_time is False

    def test_calendar_prefix(self):
        """Test calendar system prefixes."""
        for calendar in ("buddhist", "japanese", "roc", "islamic"):
            key = FormatKey.parse(f"{calendar}.DayNames")
            assert key.calendar == calendar
            assert key.name == "DayNames"

    def test_standalone_context(self):
        """Test the standalone context segment."""
        key = FormatKey.parse("standalone.MonthNarrows")
        assert key.context == "standalone"
        assert key.name == "MonthNarrows"

    def test_calendar_and_width(self):
        """Test a calendar followed by a width."""
        key = FormatKey.parse("roc.narrow.AmPmMarkers")
        assert (key.calendar, key.width, key.name) == ("roc", "narrow", "AmPmMarkers")

    def test_java_time_prefix(self):
        """Test the java.time namespace."""
        key = FormatKey.parse("java.time.buddhist.DatePatterns")
        assert key.java_time is True
        assert key.calendar == "buddhist"
        assert key.name == "DatePatterns"

    def test_namespaced_names_are_kept_whole(self):
        """Test that field, calendarname and numbering keys keep their dots."""
        assert FormatKey.parse("field.year").name == "field.year"
        assert FormatKey.parse("latn.NumberElements").name == "latn.NumberElements"
        assert FormatKey.parse("timezone.regionFormat.daylight").name == (
            "timezone.regionFormat.daylight"
        )

    def test_calendar_name_alone_is_a_base_name(self):
        """Test that a lone calendar word is not treated as a prefix."""
        key = FormatKey.parse("roc")
        assert key.name == "roc"
        assert key.calendar == "gregorian"

    def test_empty_key_rejected(self):
        """Test that empty keys raise ValueError."""
        with pytest.raises(ValueError):
            FormatKey.parse("")

    @pytest.mark.parametrize("raw", [
        "MonthNames",
        "standalone.QuarterNames",
        "japanese.abbreviated.AmPmMarkers",
        "buddhist.long.Eras",
        "java.time.roc.DatePatterns",
        "calendarname.islamic-civil",
    ])
    def test_key_rebuilds_original(self, raw):
        """Test that parsed keys rebuild their original string."""
        assert FormatKey.parse(raw).key == raw
        assert str(FormatKey.parse(raw)) == raw


# =============================================================================
# Key Building Tests
# =============================================================================


class TestCalendarKey:
    """Test calendar_key."""

    def test_gregorian_has_no_prefix(self):
        assert calendar_key("MonthNames") == "MonthNames"

    def test_calendar_prefix(self):
        assert calendar_key("MonthNames", "roc") == "roc.MonthNames"

    def test_all_segments(self):
        assert calendar_key(
            "DatePatterns", "islamic", java_time=True
        ) == "java.time.islamic.DatePatterns"
        assert calendar_key(
            "AmPmMarkers", "buddhist", width="narrow"
        ) == "buddhist.narrow.AmPmMarkers"
        assert calendar_key(
            "DayNames", context="standalone"
        ) == "standalone.DayNames"

    def test_unknown_calendar_rejected(self):
        with pytest.raises(ValueError, match="calendar"):
            calendar_key("MonthNames", "hebrew")

    def test_unknown_width_rejected(self):
        with pytest.raises(ValueError, match="width"):
            calendar_key("Eras", width="tiny")

    def test_calendars_constant(self):
        assert CALENDARS == ("gregorian", "buddhist", "japanese", "roc", "islamic")


# =============================================================================
# Category Tests
# =============================================================================


class TestCategories:
    """Test fixed-length categories."""

    def test_expected_lengths(self):
        assert Category.MONTHS.expected_length == 13
        assert Category.DAYS.expected_length == 7
        assert Category.QUARTERS.expected_length == 4
        assert Category.AM_PM.expected_length == 2

    def test_category_of(self):
        assert category_of("buddhist.MonthAbbreviations") is Category.MONTHS
        assert category_of("standalone.DayNarrows") is Category.DAYS
        assert category_of("roc.QuarterNames") is Category.QUARTERS
        assert category_of("japanese.narrow.AmPmMarkers") is Category.AM_PM

    def test_uncategorised_keys(self):
        """Test keys without a fixed length."""
        assert category_of("Eras") is None
        assert category_of("DatePatterns") is None
        assert category_of("latn.NumberElements") is None
        assert expected_length("field.year") is None

    def test_expected_length(self):
        assert expected_length("MonthNarrows") == 13
        assert expected_length("islamic.DayAbbreviations") == 7
