"""Exceptions raised by the locale resource layer."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class FormatDataError(Exception):
    """Base exception for all formatdata errors."""

    pass


class UnknownLocaleError(FormatDataError, LookupError):
    """Raised when no table is registered for a locale identifier."""

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"Unknown locale: {locale!r}")


class UnknownKeyError(FormatDataError, KeyError):
    """Raised when a locale table has no value for a format key."""

    def __init__(self, locale: str, key: str) -> None:
        self.locale = locale
        self.key = key
        super().__init__(f"Unknown format key {key!r} for locale {locale!r}")

    def __str__(self) -> str:
        # KeyError would otherwise render the repr of the message
        return str(self.args[0])


class LocaleDataError(FormatDataError):
    """Raised when a locale document is malformed or inconsistent."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        issues: Sequence[object] = (),
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.issues = list(issues)
        detail = message
        if self.path is not None:
            detail = f"{self.path}: {message}"
        if self.issues:
            detail += "".join(f"\n  - {issue}" for issue in self.issues)
        super().__init__(detail)


class ConfigError(FormatDataError):
    """Raised for invalid configuration values."""

    pass
