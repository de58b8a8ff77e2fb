"""
Markdown table formatter ("markdown_table").

Pads ragged rows to the widest record, aligns every column to its longest
cell and turns line breaks inside cells into an inline separator:

    | col11a | col12ab          |
    |--------|------------------|
    | col21a | col22ab<br/>cdef |
"""

import logging
import re
from typing import List, Optional, Sequence

from csv_table.core.models import FormatOptions

logger = logging.getLogger(__name__)

DEFAULT_MARKDOWN_OPTIONS = {
    "column_separator": "|",
    "row_separator": "\n",
    "header_separator": "-",
    "value_row_separator": "<br/>",
}

LINE_BREAK_PATTERN = re.compile(r"\r\n|\n|\r")


class MarkdownTable:
    """
    Renders one table as Markdown.

    Usage:
        text = MarkdownTable(header, rows, {"header_separator": "="}).render()
    """

    def __init__(
        self,
        header: Sequence[str],
        rows: Sequence[Sequence[str]],
        options: Optional[FormatOptions] = None,
    ):
        self.options = {**DEFAULT_MARKDOWN_OPTIONS, **(options or {})}

        self.header = [self._process_value(v) for v in header]
        self.rows = [[self._process_value(v) for v in row] for row in rows]

        self.col_count = max([len(self.header)] + [len(row) for row in self.rows])

        if self.header:
            self.header = self._pad(self.header)
        self.rows = [self._pad(row) for row in self.rows]

        self.col_widths = self._get_col_widths()

    def render(self) -> str:
        if self.col_count == 0:
            return ""

        output = ""
        if self.header:
            output += self._create_row(self.header) + self._create_header_separator()

        output += "".join(self._create_row(row) for row in self.rows)

        logger.debug(f"Rendered markdown table: {len(self.rows)} rows x {self.col_count} columns")
        return output

    def _process_value(self, value: str) -> str:
        """Replace any line break sequence with the value row separator."""
        return LINE_BREAK_PATTERN.sub(lambda _: self.options["value_row_separator"], str(value))

    def _pad(self, row: List[str]) -> List[str]:
        return row + [""] * (self.col_count - len(row))

    def _get_col_widths(self) -> List[int]:
        widths = [0] * self.col_count
        for record in ([self.header] if self.header else []) + self.rows:
            for idx, value in enumerate(record):
                widths[idx] = max(widths[idx], len(value))
        return widths

    def _create_row(self, row: Sequence[str]) -> str:
        sep = self.options["column_separator"]
        cells = [value.ljust(width) for value, width in zip(row, self.col_widths)]
        return f"{sep} " + f" {sep} ".join(cells) + f" {sep}" + self.options["row_separator"]

    def _create_header_separator(self) -> str:
        sep = self.options["column_separator"]
        fill = self.options["header_separator"]
        segments = [fill * (width + 2) for width in self.col_widths]
        return sep + sep.join(segments) + sep + self.options["row_separator"]


def format_markdown_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    options: Optional[FormatOptions] = None,
) -> str:
    """
    Render header and rows as a Markdown table.

    Options:
        column_separator: Cell border (default "|")
        row_separator: Line terminator (default "\\n")
        header_separator: Fill character of the header rule (default "-")
        value_row_separator: Replacement for line breaks in cells (default "<br/>")
    """
    return MarkdownTable(header, rows, options).render()
