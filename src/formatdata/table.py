"""Immutable per-locale format tables.

A LocaleTable maps format keys to FormatValues for a single locale. Values
are either strings or tuples of strings. Keys that alias one value (for
example ``"MonthNames"`` and ``"roc.MonthNames"``) reference the same tuple
and are recorded as a shared group.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Union

import yaml

from formatdata.errors import LocaleDataError, UnknownKeyError


FormatValue = Union[str, tuple[str, ...]]


def freeze_value(value: Any) -> FormatValue:
    """Convert a raw document value into a FormatValue.

    Raises:
        TypeError: If the value is not a string or a sequence of strings.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        if not all(isinstance(item, str) for item in value):
            raise TypeError("sequence values must contain only strings")
        return tuple(value)
    raise TypeError(f"expected a string or a list of strings, got {type(value).__name__}")


@dataclass(frozen=True, eq=False)
class LocaleTable(Mapping):
    """Read-only format table for one locale.

    Attributes:
        locale: Locale identifier (e.g. "ar_MA", "ii", "pt_PT").
        entries: Format key to FormatValue, in document order.
        shared: Groups of keys that alias one value.
        metadata: Additional document metadata (e.g. source path).

    Example:
        table = get_table("ro")
        table["MonthNames"][0]            # "ianuarie"
        table.shared_with("roc.MonthNames")
    """

    locale: str
    entries: Mapping[str, FormatValue] = field(default_factory=dict)
    shared: tuple[frozenset[str], ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen: dict[str, FormatValue] = {}
        memo: dict[int, FormatValue] = {}
        for key, value in self.entries.items():
            # aliased lists collapse onto a single tuple
            if id(value) not in memo:
                try:
                    memo[id(value)] = freeze_value(value)
                except TypeError as e:
                    raise LocaleDataError(f"{self.locale}: invalid value for {key!r}: {e}") from e
            frozen[key] = memo[id(value)]

        groups = []
        for group in self.shared:
            members = list(group)
            if not all(isinstance(key, str) for key in members):
                raise LocaleDataError(
                    f"{self.locale}: shared group keys must be strings: {members!r}"
                )
            group = frozenset(members)
            missing = group.difference(frozen)
            if missing:
                raise LocaleDataError(
                    f"{self.locale}: shared group names unknown keys: {sorted(missing)}"
                )
            if len(group) > 1:
                groups.append(group)

        merged = _merge_groups(groups)
        for group in merged:
            first, *rest = sorted(group)
            # unequal groups are left for validation to report
            if all(frozen[key] == frozen[first] for key in rest):
                for key in rest:
                    frozen[key] = frozen[first]

        object.__setattr__(self, "entries", MappingProxyType(frozen))
        object.__setattr__(self, "shared", merged)
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __getitem__(self, key: str) -> FormatValue:
        try:
            return self.entries[key]
        except KeyError:
            raise UnknownKeyError(self.locale, key) from None

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return f"LocaleTable(locale={self.locale!r}, keys={len(self.entries)})"

    def shared_with(self, key: str) -> frozenset[str]:
        """Return every key that shares ``key``'s value, including ``key``.

        Raises:
            UnknownKeyError: If the key is not in the table.
        """
        if key not in self.entries:
            raise UnknownKeyError(self.locale, key)
        for group in self.shared:
            if key in group:
                return group
        return frozenset((key,))

    def with_prefix(self, prefix: str) -> dict[str, FormatValue]:
        """Return the entries whose key starts with ``prefix``."""
        return {k: v for k, v in self.entries.items() if k.startswith(prefix)}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk document shape.

        Shared tuples become one list object referenced by every key of the
        group, so YAML output writes them as anchors and aliases.
        """
        memo: dict[int, Any] = {}
        values: dict[str, Any] = {}
        for key, value in self.entries.items():
            if isinstance(value, tuple):
                if id(value) not in memo:
                    memo[id(value)] = list(value)
                values[key] = memo[id(value)]
            else:
                values[key] = value

        data: dict[str, Any] = {"locale": self.locale, "values": values}
        if self.shared:
            data["shared"] = [sorted(group) for group in self.shared]
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data

    def to_json(self, path: Path) -> None:
        """Save to a JSON document."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    def to_yaml(self, path: Path) -> None:
        """Save to a YAML document."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self.to_dict(),
                f,
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
            )


def _merge_groups(groups: Iterable[frozenset[str]]) -> tuple[frozenset[str], ...]:
    """Merge overlapping key groups into disjoint groups."""
    merged: list[set[str]] = []
    for group in groups:
        overlapping = [m for m in merged if not m.isdisjoint(group)]
        combined = set(group)
        for m in overlapping:
            combined |= m
            merged.remove(m)
        merged.append(combined)
    return tuple(frozenset(m) for m in sorted(merged, key=lambda m: sorted(m)))
