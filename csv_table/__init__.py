"""
csv_table: parse CSV text, project columns, render as CSV / text table / Markdown.

Provides:
- CSV codec with custom separator, enclosure and escape characters
- Column projections by name or index (only / without / reorder)
- Pluggable formatters: csv, table, markdown_table, or any callable
- CsvPipeline tying the stages together
"""

from csv_table.codec import CsvParser, format_csv, parse
from csv_table.core import (
    ColumnIndexOutOfBoundsError,
    ColumnNotFoundError,
    ColumnResolutionError,
    ConfigurationError,
    CsvParseError,
    CsvTableError,
    ParseConfig,
    Settings,
    SourceReadError,
    Table,
    configure_logging,
    get_settings,
)
from csv_table.formatters import (
    format_markdown_table,
    format_table,
    list_available_formatters,
    register_formatter,
    resolve_formatter,
)
from csv_table.pipeline import CsvPipeline, PipelineConfig
from csv_table.projection import ColumnProjector, Projection, ProjectionKind

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Pipeline
    "CsvPipeline",
    "PipelineConfig",
    # Codec
    "CsvParser",
    "parse",
    "format_csv",
    # Formatters
    "format_table",
    "format_markdown_table",
    "list_available_formatters",
    "register_formatter",
    "resolve_formatter",
    # Projection
    "ColumnProjector",
    "Projection",
    "ProjectionKind",
    # Models and settings
    "Table",
    "ParseConfig",
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
