"""Process-wide registry of locale tables.

The registry maps exact locale identifiers to LocaleTables. It is filled
once from the documents in the configured data directory: in lazy mode the
documents are indexed on first use and each one is parsed on its first
lookup; otherwise every document is parsed during initialization. Tables are
never replaced or modified afterwards, so lookups need no locking once a
table has been loaded.

Example:
    from formatdata import get_table, get_value

    get_value("ar_MA", "DefaultNumberingSystem")   # "latn"
    get_table("ro_MD")["QuarterAbbreviations"]     # ("trim. 1", ...)
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterator, Mapping

from formatdata.config import FormatDataConfig
from formatdata.errors import UnknownLocaleError
from formatdata.loader import LocaleLoader, discover_documents
from formatdata.table import FormatValue, LocaleTable


logger = logging.getLogger(__name__)


class LocaleTableRegistry:
    """Read-only registry of locale tables.

    Lookups match locale identifiers exactly: "pt_PT" is not "pt-PT" and
    "ar_MA" never falls back to "ar".
    """

    def __init__(
        self,
        config: FormatDataConfig | None = None,
        tables: Mapping[str, LocaleTable] | None = None,
    ) -> None:
        """Initialize registry.

        Args:
            config: Registry configuration; defaults to the embedded data.
            tables: Fixed set of tables. When given, no documents are read.
        """
        self._config = config or FormatDataConfig()
        self._loader = LocaleLoader(strict=self._config.strict)
        self._lock = threading.Lock()
        self._documents: dict[str, Path] = {}
        self._tables: dict[str, LocaleTable] = {}
        self._initialized = False

        if tables is not None:
            for locale, table in tables.items():
                if table.locale != locale:
                    raise ValueError(
                        f"Table for {table.locale!r} registered under {locale!r}"
                    )
            self._tables = dict(tables)
            self._initialized = True

    @property
    def config(self) -> FormatDataConfig:
        return self._config

    def _ensure_initialized(self) -> None:
        """Index (and, when not lazy, load) the documents exactly once."""
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            documents = discover_documents(self._config.data_dir, self._config.patterns)
            tables = {}
            if not self._config.lazy:
                for locale, path in documents.items():
                    tables[locale] = self._loader.load_file(path, locale)
            self._documents = documents
            self._tables = tables
            self._initialized = True
            logger.debug(
                "Locale registry initialized from %s (%d documents, lazy=%s)",
                self._config.data_dir, len(documents), self._config.lazy,
            )

    def get_table(self, locale: str) -> LocaleTable:
        """Get the table for a locale.

        Args:
            locale: Exact locale identifier (e.g. "ar_MA").

        Returns:
            The locale's table.

        Raises:
            UnknownLocaleError: If no table exists for the identifier.
            LocaleDataError: If the locale's document is invalid.
        """
        self._ensure_initialized()

        table = self._tables.get(locale)
        if table is not None:
            return table

        path = self._documents.get(locale)
        if path is None:
            raise UnknownLocaleError(locale)

        with self._lock:
            table = self._tables.get(locale)
            if table is None:
                table = self._loader.load_file(path, locale)
                self._tables[locale] = table
        return table

    def get_value(self, locale: str, key: str) -> FormatValue:
        """Get one format value.

        Raises:
            UnknownLocaleError: If no table exists for the locale.
            UnknownKeyError: If the table has no such key.
        """
        return self.get_table(locale)[key]

    def has_locale(self, locale: str) -> bool:
        """Check whether a table exists for the locale."""
        self._ensure_initialized()
        return locale in self._tables or locale in self._documents

    def list_locales(self) -> list[str]:
        """List registered locale identifiers, sorted."""
        self._ensure_initialized()
        return sorted(set(self._documents) | set(self._tables))

    def load_all(self) -> dict[str, LocaleTable]:
        """Load every table and return them keyed by locale."""
        return {locale: self.get_table(locale) for locale in self.list_locales()}

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, str) and self.has_locale(locale)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_locales())

    def __len__(self) -> int:
        return len(self.list_locales())


# Default registry
_registry: LocaleTableRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> LocaleTableRegistry:
    """Get the default registry, creating it from the environment on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = LocaleTableRegistry(FormatDataConfig.from_env())
    return _registry


def configure_registry(config: FormatDataConfig) -> LocaleTableRegistry:
    """Replace the default registry with one built from ``config``."""
    global _registry
    with _registry_lock:
        _registry = LocaleTableRegistry(config)
    return _registry


def reset_registry() -> None:
    """Drop the default registry; the next lookup rebuilds it."""
    global _registry
    with _registry_lock:
        _registry = None


def get_table(locale: str) -> LocaleTable:
    """Get the table for a locale from the default registry."""
    return get_registry().get_table(locale)


def get_value(locale: str, key: str) -> FormatValue:
    """Get one format value from the default registry."""
    return get_registry().get_value(locale, key)


def get_supported_locales() -> list[str]:
    """Get the locale identifiers of the default registry."""
    return get_registry().list_locales()


def has_locale(locale: str) -> bool:
    """Check whether the default registry has a table for the locale."""
    return get_registry().has_locale(locale)
