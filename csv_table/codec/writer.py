"""
CSV Writer.

The "csv" formatter. Output parses back to the same table with the
matching ParseConfig.
"""

import logging
from typing import List, Optional, Sequence

from csv_table.core.models import FormatOptions

logger = logging.getLogger(__name__)

DEFAULT_CSV_OPTIONS = {
    "separator": ",",
    "enclosure": '"',
    "escape": "\\",
}


def needs_enclosure(value: str, separator: str, enclosure: str) -> bool:
    """A field is enclosed when it holds the separator, the enclosure or a line break."""
    return (
        separator in value
        or enclosure in value
        or "\n" in value
        or "\r" in value
    )


def encode_field(value: str, separator: str, enclosure: str, escape: str = "") -> str:
    """
    Encode one field.

    Inside an enclosed field each enclosure is doubled, except the one in
    an escape+enclosure pair, which the parser keeps verbatim.
    """
    if not needs_enclosure(value, separator, enclosure):
        return value

    escape_enabled = bool(escape) and escape != enclosure
    out: List[str] = [enclosure]

    i = 0
    while i < len(value):
        char = value[i]
        next_char = value[i + 1] if i + 1 < len(value) else None

        if escape_enabled and char == escape and next_char in (enclosure, escape):
            out.append(char)
            out.append(next_char)
            i += 2
            continue

        out.append(enclosure + enclosure if char == enclosure else char)
        i += 1

    out.append(enclosure)
    return "".join(out)


def format_csv(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    options: Optional[FormatOptions] = None,
) -> str:
    """
    Render header and rows as CSV.

    Options:
        separator: Field separator (default ",")
        enclosure: Quote character (default '"')
        escape: Escape character (default "\\")

    Every record, the header included, ends with "\\n". An empty header
    is not written.
    """
    opts = {**DEFAULT_CSV_OPTIONS, **(options or {})}
    separator = str(opts["separator"])
    enclosure = str(opts["enclosure"])
    escape = str(opts["escape"] or "")

    records = [header] if len(header) > 0 else []
    records.extend(rows)

    lines = [
        separator.join(encode_field(str(value), separator, enclosure, escape) for value in record) + "\n"
        for record in records
    ]

    logger.debug(f"Formatted {len(lines)} CSV records")
    return "".join(lines)
