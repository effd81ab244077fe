"""Consistency checks for locale tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from formatdata.keys import FormatKey
from formatdata.table import LocaleTable


logger = logging.getLogger(__name__)


class IssueKind(Enum):
    """Kinds of table issues."""

    KEY = "key"
    TYPE = "type"
    LENGTH = "length"
    SHARED_MISMATCH = "shared_mismatch"


@dataclass(frozen=True)
class TableIssue:
    """A single problem found in a locale table.

    Attributes:
        locale: Locale of the table.
        key: Offending format key.
        kind: Issue kind.
        message: Human-readable description.
    """

    locale: str
    key: str
    kind: IssueKind
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.locale} {self.key}: {self.message}"


def validate_values(
    locale: str,
    values: Mapping[str, Any],
    shared: Iterable[Iterable[str]] = (),
) -> list[TableIssue]:
    """Check raw format values against the table invariants.

    Args:
        locale: Locale the values belong to.
        values: Format key to value.
        shared: Groups of keys expected to hold equal values.

    Returns:
        Issues found, in key order; empty when the values are consistent.
    """
    issues: list[TableIssue] = []

    for key, value in values.items():
        try:
            format_key = FormatKey.parse(key)
        except ValueError as e:
            issues.append(TableIssue(locale, key, IssueKind.KEY, str(e)))
            continue

        if isinstance(value, str):
            is_sequence = False
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            is_sequence = True
        else:
            issues.append(TableIssue(
                locale, key, IssueKind.TYPE,
                f"expected a string or a sequence of strings, got {type(value).__name__}",
            ))
            continue

        category = format_key.category
        if category is None:
            continue
        if not is_sequence:
            issues.append(TableIssue(
                locale, key, IssueKind.TYPE,
                f"{category.value} values must be sequences",
            ))
        elif len(value) != category.expected_length:
            issues.append(TableIssue(
                locale, key, IssueKind.LENGTH,
                f"expected {category.expected_length} {category.value} entries, got {len(value)}",
            ))

    for group in shared:
        members = sorted(k for k in group if k in values)
        if not members:
            continue
        first = _comparable(values[members[0]])
        for key in members[1:]:
            if _comparable(values[key]) != first:
                issues.append(TableIssue(
                    locale, key, IssueKind.SHARED_MISMATCH,
                    f"value differs from shared key {members[0]!r}",
                ))

    if issues:
        logger.debug("%s: %d issue(s) found", locale, len(issues))
    return issues


def validate_table(table: LocaleTable) -> list[TableIssue]:
    """Check a loaded table against the table invariants."""
    return validate_values(table.locale, table.entries, table.shared)


def _comparable(value: Any) -> Any:
    return tuple(value) if isinstance(value, list) else value
