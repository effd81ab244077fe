"""Format-key vocabulary.

Format keys are dotted strings. A key may carry, in this order, a
``java.time.`` prefix, a calendar system, a ``standalone`` context and a
width, followed by the base name::

    MonthNames
    standalone.MonthNarrows
    roc.narrow.AmPmMarkers
    java.time.buddhist.DatePatterns
    field.year
    latn.NumberElements

Keys without a calendar segment belong to the gregorian calendar. Base names
in the month/day/quarter/AM-PM families hold sequences of a fixed length in
every locale.

Example:
    >>> key = FormatKey.parse("roc.narrow.AmPmMarkers")
    >>> key.calendar, key.width, key.name
    ('roc', 'narrow', 'AmPmMarkers')
    >>> expected_length("buddhist.MonthNames")
    13
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


GREGORIAN = "gregorian"

CALENDARS: tuple[str, ...] = (GREGORIAN, "buddhist", "japanese", "roc", "islamic")

JAVA_TIME_PREFIX = "java.time."

STANDALONE = "standalone"

WIDTHS: tuple[str, ...] = ("abbreviated", "narrow", "long")


class Category(Enum):
    """Semantic categories whose sequences have a fixed length."""

    MONTHS = "months"
    DAYS = "days"
    QUARTERS = "quarters"
    AM_PM = "am_pm"

    @property
    def expected_length(self) -> int:
        """Number of entries every sequence in this category holds."""
        return _CATEGORY_LENGTHS[self]


_CATEGORY_LENGTHS = {
    # twelve months plus an empty thirteenth placeholder
    Category.MONTHS: 13,
    Category.DAYS: 7,
    Category.QUARTERS: 4,
    Category.AM_PM: 2,
}

_BASE_NAME_CATEGORIES = {
    "MonthNames": Category.MONTHS,
    "MonthAbbreviations": Category.MONTHS,
    "MonthNarrows": Category.MONTHS,
    "DayNames": Category.DAYS,
    "DayAbbreviations": Category.DAYS,
    "DayNarrows": Category.DAYS,
    "QuarterNames": Category.QUARTERS,
    "QuarterAbbreviations": Category.QUARTERS,
    "QuarterNarrows": Category.QUARTERS,
    "AmPmMarkers": Category.AM_PM,
}


@dataclass(frozen=True)
class FormatKey:
    """A format key split into its dotted components.

    Attributes:
        name: Base name once all prefixes are removed (e.g. "MonthNames",
            "field.year", "latn.NumberElements").
        calendar: Calendar system; "gregorian" when the key has no
            calendar segment.
        context: "format" or "standalone".
        width: Width prefix ("abbreviated", "narrow", "long") or None.
        java_time: True for keys under the "java.time." namespace.
    """

    name: str
    calendar: str = GREGORIAN
    context: str = "format"
    width: str | None = None
    java_time: bool = False

    @classmethod
    def parse(cls, key: str) -> "FormatKey":
        """Split a dotted format key.

        Args:
            key: Format key string.

        Returns:
            Parsed FormatKey.

        Raises:
            ValueError: If the key is empty or has no base name.
        """
        if not key:
            raise ValueError("Format key must not be empty")

        rest = key
        java_time = False
        if rest.startswith(JAVA_TIME_PREFIX):
            java_time = True
            rest = rest[len(JAVA_TIME_PREFIX):]

        segments = rest.split(".")
        calendar = GREGORIAN
        context = "format"
        width = None

        if len(segments) > 1 and segments[0] in CALENDARS[1:]:
            calendar = segments.pop(0)
        if len(segments) > 1 and segments[0] == STANDALONE:
            context = segments.pop(0)
        if len(segments) > 1 and segments[0] in WIDTHS:
            width = segments.pop(0)

        name = ".".join(segments)
        if not name:
            raise ValueError(f"Format key has no base name: {key!r}")

        return cls(
            name=name,
            calendar=calendar,
            context=context,
            width=width,
            java_time=java_time,
        )

    @property
    def key(self) -> str:
        """Rebuild the dotted key string."""
        return calendar_key(
            self.name,
            self.calendar,
            context=self.context,
            width=self.width,
            java_time=self.java_time,
        )

    @property
    def category(self) -> Category | None:
        return _BASE_NAME_CATEGORIES.get(self.name)

    def __str__(self) -> str:
        return self.key


def calendar_key(
    name: str,
    calendar: str = GREGORIAN,
    *,
    context: str = "format",
    width: str | None = None,
    java_time: bool = False,
) -> str:
    """Build the format key for a base name in a calendar system.

    Args:
        name: Base name (e.g. "MonthNames").
        calendar: Calendar system.
        context: "format" or "standalone".
        width: Optional width prefix.
        java_time: Place the key under the "java.time." namespace.

    Returns:
        Dotted format key, e.g. ``calendar_key("MonthNames", "roc")`` returns
        ``"roc.MonthNames"``.

    Raises:
        ValueError: For an unknown calendar, context or width.
    """
    if calendar not in CALENDARS:
        raise ValueError(f"Unknown calendar system: {calendar!r}")
    if context not in ("format", STANDALONE):
        raise ValueError(f"Unknown context: {context!r}")
    if width is not None and width not in WIDTHS:
        raise ValueError(f"Unknown width: {width!r}")

    parts = []
    if java_time:
        parts.append(JAVA_TIME_PREFIX.rstrip("."))
    if calendar != GREGORIAN:
        parts.append(calendar)
    if context == STANDALONE:
        parts.append(STANDALONE)
    if width is not None:
        parts.append(width)
    parts.append(name)
    return ".".join(parts)


def category_of(key: str) -> Category | None:
    """Return the fixed-length category of a key, if it has one."""
    return FormatKey.parse(key).category


def expected_length(key: str) -> int | None:
    """Return the sequence length required for a key, if it is fixed."""
    category = category_of(key)
    return category.expected_length if category is not None else None
