"""
Core data model, settings and exceptions.
"""

from csv_table.core.config import Settings, configure_logging, get_settings
from csv_table.core.exceptions import (
    ColumnIndexOutOfBoundsError,
    ColumnNotFoundError,
    ColumnResolutionError,
    ConfigurationError,
    CsvParseError,
    CsvTableError,
    SourceReadError,
)
from csv_table.core.models import FormatOptions, ParseConfig, Table

__all__ = [
    # Models
    "Table",
    "ParseConfig",
    "FormatOptions",
    # Settings
    "Settings",
    "get_settings",
    "configure_logging",
    # Exceptions
    "CsvTableError",
    "ConfigurationError",
    "ColumnResolutionError",
    "ColumnNotFoundError",
    "ColumnIndexOutOfBoundsError",
    "CsvParseError",
    "SourceReadError",
]
