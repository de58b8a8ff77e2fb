"""
Plain text table formatter ("table").

Joins cells with the column separator and underlines the header with
dashes. No padding: ragged rows stay ragged.
"""

from typing import Optional, Sequence

from csv_table.core.models import FormatOptions

DEFAULT_TABLE_OPTIONS = {
    "column_separator": "|",
    "row_separator": "\n",
}


def format_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    options: Optional[FormatOptions] = None,
) -> str:
    """
    Render header and rows as a pipe-joined table.

    Example:
        col11|col12|col13
        -----------------
        col21|col22|col23
    """
    opts = {**DEFAULT_TABLE_OPTIONS, **(options or {})}
    column_separator = opts["column_separator"]
    row_separator = opts["row_separator"]

    lines = []
    if len(header) > 0:
        header_line = column_separator.join(header)
        lines.append(header_line)
        lines.append("-" * len(header_line))

    lines.extend(column_separator.join(row) for row in rows)

    if len(header) > 0 and not rows:
        # Header block keeps its trailing separator even without body rows
        return row_separator.join(lines) + row_separator

    return row_separator.join(lines)
