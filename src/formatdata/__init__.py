"""formatdata - Per-locale calendar and number formatting tables.

Example:
    from formatdata import get_table, get_value

    get_value("ar_MA", "DefaultNumberingSystem")   # "latn"
    get_value("ro_MD", "QuarterAbbreviations")     # ("trim. 1", "trim. 2", ...)

    table = get_table("ro")
    table["roc.MonthNames"] == table["MonthNames"]  # True
"""

from formatdata.config import FormatDataConfig
from formatdata.errors import (
    ConfigError,
    FormatDataError,
    LocaleDataError,
    UnknownKeyError,
    UnknownLocaleError,
)
from formatdata.keys import (
    CALENDARS,
    Category,
    FormatKey,
    calendar_key,
    category_of,
    expected_length,
)
from formatdata.loader import (
    LocaleLoader,
    load_table_from_dict,
    load_table_from_file,
)
from formatdata.registry import (
    LocaleTableRegistry,
    configure_registry,
    get_registry,
    get_supported_locales,
    get_table,
    get_value,
    has_locale,
    reset_registry,
)
from formatdata.table import FormatValue, LocaleTable
from formatdata.validation import IssueKind, TableIssue, validate_table

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("formatdata")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Lookup
    "get_table",
    "get_value",
    "get_supported_locales",
    "has_locale",
    "LocaleTableRegistry",
    "get_registry",
    "configure_registry",
    "reset_registry",
    # Tables
    "LocaleTable",
    "FormatValue",
    "LocaleLoader",
    "load_table_from_file",
    "load_table_from_dict",
    # Keys
    "CALENDARS",
    "Category",
    "FormatKey",
    "calendar_key",
    "category_of",
    "expected_length",
    # Validation
    "IssueKind",
    "TableIssue",
    "validate_table",
    # Configuration
    "FormatDataConfig",
    # Errors
    "FormatDataError",
    "UnknownLocaleError",
    "UnknownKeyError",
    "LocaleDataError",
    "ConfigError",
]
