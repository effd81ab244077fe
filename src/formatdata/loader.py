"""Locale document loader.

Reads locale documents (YAML or JSON) into LocaleTables. A document holds
one locale::

    locale: ro
    values:
      MonthNames: &MonthNames
        - "ianuarie"
        ...
      roc.MonthNames: *MonthNames
      field.year: "an"

YAML anchors and aliases mark keys that share one value. JSON documents,
which have no aliases, list the shared keys in an optional ``shared``
section. Documents without a ``values`` section are read flat, with every
root entry other than ``locale``, ``metadata`` and ``shared`` taken as a
format key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from formatdata.config import DEFAULT_PATTERNS
from formatdata.errors import LocaleDataError
from formatdata.table import LocaleTable
from formatdata.validation import validate_table


logger = logging.getLogger(__name__)

_RESERVED_KEYS = ("locale", "metadata", "shared")


class LocaleLoader:
    """Loader for locale documents.

    Example:
        loader = LocaleLoader()

        # Load single file
        table = loader.load_file(Path("data/ro.yaml"))

        # Load directory of locale documents
        tables = loader.load_directory(Path("data/"))
    """

    def __init__(self, strict: bool = True) -> None:
        """Initialize loader.

        Args:
            strict: Validate each table and reject documents with issues.
        """
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def load_file(self, path: Path, locale: str | None = None) -> LocaleTable:
        """Load a locale document.

        Args:
            path: Path to a YAML or JSON document.
            locale: Expected locale identifier. The document's ``locale``
                entry must match it when both are present.

        Returns:
            Loaded LocaleTable.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            LocaleDataError: If the document is malformed, its locale does not
                match, or (in strict mode) the table fails validation.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Locale document not found: {path}")

        suffix = path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data, shared = self._load_yaml(path)
        elif suffix == ".json":
            data, shared = self._load_json(path)
        else:
            raise LocaleDataError(f"Unsupported locale document format: {suffix}", path)

        table = self._parse_locale_data(data, shared, path, locale)
        logger.debug(
            "Loaded %s from %s (%d keys, %d shared groups)",
            table.locale, path, len(table), len(table.shared),
        )
        return table

    def load_directory(
        self,
        directory: Path,
        patterns: Iterable[str] = DEFAULT_PATTERNS,
        skip_invalid: bool = False,
    ) -> dict[str, LocaleTable]:
        """Load every locale document in a directory.

        Args:
            directory: Directory containing locale documents.
            patterns: Glob patterns for document files.
            skip_invalid: Log and skip malformed documents instead of raising.

        Returns:
            Dictionary of locale to table.
        """
        tables = {}
        for locale, path in discover_documents(directory, patterns).items():
            try:
                tables[locale] = self.load_file(path, locale)
            except LocaleDataError as e:
                if not skip_invalid:
                    raise
                logger.warning("Skipping invalid locale document %s: %s", path, e)
        return tables

    def load_dict(
        self,
        locale: str,
        values: Mapping[str, Any],
        shared: Iterable[Iterable[str]] = (),
        metadata: Mapping[str, Any] | None = None,
    ) -> LocaleTable:
        """Build a table from in-memory values.

        Raises:
            LocaleDataError: If the values are malformed or, in strict mode,
                fail validation.
        """
        table = LocaleTable(
            locale=locale,
            entries=dict(values),
            shared=tuple(frozenset(group) for group in shared),
            metadata=metadata or {},
        )
        self._check(table, None)
        return table

    def _load_yaml(self, path: Path) -> tuple[Any, list[frozenset[str]]]:
        """Load a YAML document and collect its alias groups."""
        shared: list[frozenset[str]] = []
        with open(path, "r", encoding="utf-8") as f:
            loader = yaml.SafeLoader(f)
            try:
                node = loader.get_single_node()
                # keys are checked on the composed node; construction
                # rewrites mappings in place
                values_node = _values_node(node)
                if values_node is not None:
                    _check_unique_keys(values_node, path)
                    shared = _alias_groups(values_node)
                data = loader.construct_document(node) if node is not None else None
            except yaml.YAMLError as e:
                raise LocaleDataError(f"Invalid YAML: {e}", path) from e
            finally:
                loader.dispose()
        return data, shared

    def _load_json(self, path: Path) -> tuple[Any, list[frozenset[str]]]:
        """Load a JSON document."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f, object_pairs_hook=_unique_pairs(path))
            except json.JSONDecodeError as e:
                raise LocaleDataError(f"Invalid JSON: {e}", path) from e
        return data, []

    def _parse_locale_data(
        self,
        data: Any,
        shared: list[frozenset[str]],
        path: Path,
        expected_locale: str | None,
    ) -> LocaleTable:
        """Parse document data into a table.

        Args:
            data: Parsed document.
            shared: Alias groups found while parsing.
            path: Source file path (for locale inference).
            expected_locale: Locale the caller expects, if any.

        Returns:
            LocaleTable.
        """
        if not isinstance(data, dict):
            raise LocaleDataError("Locale document must be a mapping", path)

        # Extract locale, inferring from filename (e.g. "pt_PT.yaml" -> "pt_PT")
        locale = data.get("locale") or expected_locale or path.stem
        if not isinstance(locale, str):
            raise LocaleDataError(f"Locale identifier must be a string, got {locale!r}", path)
        if expected_locale is not None and locale != expected_locale:
            raise LocaleDataError(
                f"Document declares locale {locale!r}, expected {expected_locale!r}", path
            )

        if "values" in data:
            values = data["values"]
        else:
            values = {k: v for k, v in data.items() if k not in _RESERVED_KEYS}
        if not isinstance(values, dict):
            raise LocaleDataError("'values' must be a mapping", path)
        if not all(isinstance(k, str) for k in values):
            raise LocaleDataError("Format keys must be strings", path)

        explicit = data.get("shared") or []
        if not isinstance(explicit, list) or not all(
            isinstance(group, list) and all(isinstance(key, str) for key in group)
            for group in explicit
        ):
            raise LocaleDataError("'shared' must be a list of key lists", path)
        shared = shared + [frozenset(group) for group in explicit]

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise LocaleDataError("'metadata' must be a mapping", path)
        metadata = {**metadata, "source": str(path)}

        try:
            table = LocaleTable(
                locale=locale,
                entries=values,
                shared=tuple(shared),
                metadata=metadata,
            )
        except LocaleDataError as e:
            raise LocaleDataError(str(e), path) from e

        self._check(table, path)
        return table

    def _check(self, table: LocaleTable, path: Path | None) -> None:
        if not self._strict:
            return
        issues = validate_table(table)
        if issues:
            raise LocaleDataError(
                f"Locale table {table.locale!r} failed validation", path, issues
            )


def discover_documents(
    directory: Path,
    patterns: Iterable[str] = DEFAULT_PATTERNS,
) -> dict[str, Path]:
    """Index the locale documents in a directory by file stem.

    Raises:
        NotADirectoryError: If ``directory`` is not a directory.
        LocaleDataError: If two documents share a locale identifier.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    documents: dict[str, Path] = {}
    for pattern in patterns:
        for path in sorted(directory.glob(pattern)):
            if not path.is_file():
                continue
            locale = path.stem
            if locale in documents and documents[locale] != path:
                raise LocaleDataError(
                    f"Duplicate document for locale {locale!r} (also {documents[locale].name})",
                    path,
                )
            documents[locale] = path
    logger.debug("Found %d locale documents in %s", len(documents), directory)
    return documents


def load_table_from_file(path: Path | str, strict: bool = True) -> LocaleTable:
    """Load a table from a document file."""
    return LocaleLoader(strict=strict).load_file(Path(path))


def load_table_from_dict(
    locale: str,
    values: Mapping[str, Any],
    shared: Iterable[Iterable[str]] = (),
    metadata: Mapping[str, Any] | None = None,
    strict: bool = True,
) -> LocaleTable:
    """Create a table from a dictionary."""
    return LocaleLoader(strict=strict).load_dict(locale, values, shared, metadata)


def _values_node(root: yaml.Node | None) -> yaml.MappingNode | None:
    """Return the node holding the format values."""
    if not isinstance(root, yaml.MappingNode):
        return None
    for key_node, value_node in root.value:
        if key_node.value == "values":
            return value_node if isinstance(value_node, yaml.MappingNode) else None
    return root


_MERGE_TAG = "tag:yaml.org,2002:merge"


def _check_unique_keys(node: yaml.MappingNode, path: Path) -> None:
    seen: set[str] = set()
    for key_node, _ in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            raise LocaleDataError("Format keys must be strings", path)
        if key_node.tag == _MERGE_TAG:
            raise LocaleDataError("YAML merge keys ('<<') are not supported", path)
        key = key_node.value
        if key in seen:
            raise LocaleDataError(f"Duplicate format key {key!r}", path)
        seen.add(key)


def _alias_groups(node: yaml.MappingNode) -> list[frozenset[str]]:
    """Group keys whose values are the same YAML node."""
    by_node: dict[int, list[str]] = {}
    for key_node, value_node in node.value:
        if key_node.value in _RESERVED_KEYS:
            continue
        by_node.setdefault(id(value_node), []).append(key_node.value)
    return [frozenset(keys) for keys in by_node.values() if len(keys) > 1]


def _unique_pairs(path: Path):
    def hook(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in pairs:
            if key in result:
                raise LocaleDataError(f"Duplicate key {key!r}", path)
            result[key] = value
        return result

    return hook
