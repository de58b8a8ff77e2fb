"""
Output formatters.

Built-in formatters:
- csv: CSV re-emission (see csv_table.codec.writer)
- table: pipe-joined text table
- markdown_table: aligned Markdown table

Usage:
    from csv_table.formatters import resolve_formatter

    formatter = resolve_formatter("table")
    print(formatter(header, rows, {}))

    # List all registered names
    from csv_table.formatters import list_available_formatters
    print(list_available_formatters())
    # ['csv', 'table', 'markdown_table']
"""

from csv_table.codec.writer import format_csv
from csv_table.formatters.markdown import MarkdownTable, format_markdown_table
from csv_table.formatters.table import format_table
from csv_table.formatters.registry import (
    DEFAULT_FORMATTER,
    FORMATTERS,
    Formatter,
    FormatterInfo,
    accepts_options,
    accepts_options_keyword,
    call_formatter,
    get_formatter,
    list_available_formatters,
    register_formatter,
    resolve_formatter,
    unregister_formatter,
)

__all__ = [
    # Formatters
    "format_csv",
    "format_table",
    "format_markdown_table",
    "MarkdownTable",
    # Registry
    "DEFAULT_FORMATTER",
    "FORMATTERS",
    "Formatter",
    "FormatterInfo",
    "accepts_options",
    "accepts_options_keyword",
    "call_formatter",
    "get_formatter",
    "list_available_formatters",
    "register_formatter",
    "resolve_formatter",
    "unregister_formatter",
]
