"""
CSV Parser.

Turns raw delimited text into a Table using a small state machine:

    FIELD_START --enclosure--> QUOTED --enclosure--> AFTER_QUOTED
         |                       ^  |
         +--other--> UNQUOTED    +--+ doubled enclosure / escape pairs

Separators and line breaks (\\n, \\r\\n, \\r) end a field only outside
quotes. Malformed input is accepted: an unterminated quoted field is
closed at end of text unless strict mode is enabled.
"""

import logging
from enum import Enum
from typing import List, Optional

from csv_table.core.exceptions import CsvParseError
from csv_table.core.models import ParseConfig, Table

logger = logging.getLogger(__name__)


class ParserState(Enum):
    """Scanner position relative to the current field."""
    FIELD_START = "field_start"
    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    AFTER_QUOTED = "after_quoted"  # Closing enclosure seen, waiting for separator


class CsvParser:
    """
    Splits CSV text into records.

    Usage:
        parser = CsvParser(ParseConfig(separator=";"))
        table = parser.parse("a;b\\n1;2\\n")
    """

    def __init__(self, config: Optional[ParseConfig] = None):
        self.config = config or ParseConfig()

    def parse(self, text: str) -> Table:
        """
        Parse text into a Table.

        With header mode on and at least one record, the first record
        becomes the header.
        """
        records = self.split_records(text)

        if self.config.has_header and records:
            table = Table(header=records[0], rows=records[1:])
        else:
            table = Table(header=(), rows=records)

        logger.debug(
            f"Parsed {len(records)} records "
            f"(header={'yes' if table.has_header else 'no'}, rows={len(table.rows)})"
        )
        return table

    def split_records(self, text: str) -> List[List[str]]:
        """Split text into records without interpreting a header."""
        if not text:
            return []

        separator = self.config.separator
        enclosure = self.config.enclosure
        escape = self.config.escape if self.config.escape_enabled else None

        records: List[List[str]] = []
        record: List[str] = []
        buffer: List[str] = []
        state = ParserState.FIELD_START
        line = 1
        quote_line = 1

        i = 0
        length = len(text)

        while i < length:
            char = text[i]
            next_char = text[i + 1] if i + 1 < length else None

            if state is ParserState.QUOTED:
                if escape is not None and char == escape and next_char in (enclosure, escape):
                    # Escaped pair is kept verbatim and never closes the field
                    buffer.append(char)
                    buffer.append(next_char)
                    i += 2
                elif char == enclosure:
                    if next_char == enclosure:
                        buffer.append(enclosure)
                        i += 2
                    else:
                        state = ParserState.AFTER_QUOTED
                        i += 1
                elif char == "\r" and next_char == "\n":
                    buffer.append("\r\n")
                    line += 1
                    i += 2
                else:
                    if char in ("\r", "\n"):
                        line += 1
                    buffer.append(char)
                    i += 1
                continue

            if char == separator:
                record.append("".join(buffer))
                buffer = []
                state = ParserState.FIELD_START
                i += 1
                continue

            if char in ("\r", "\n"):
                record.append("".join(buffer))
                records.append(record)
                record = []
                buffer = []
                state = ParserState.FIELD_START
                line += 1
                i += 2 if char == "\r" and next_char == "\n" else 1
                continue

            if state is ParserState.FIELD_START:
                if char == enclosure:
                    state = ParserState.QUOTED
                    quote_line = line
                    i += 1
                    continue
                state = ParserState.UNQUOTED

            buffer.append(char)
            i += 1

        if state is ParserState.QUOTED:
            if self.config.strict:
                raise CsvParseError(
                    f"Unterminated quoted field starting on line {quote_line}.",
                    line=quote_line,
                )
            logger.warning(
                f"Unterminated quoted field starting on line {quote_line}; "
                f"closing it at end of input"
            )

        # A trailing line break leaves nothing pending
        if state is not ParserState.FIELD_START or record:
            record.append("".join(buffer))
            records.append(record)

        return records


def parse(text: str, config: Optional[ParseConfig] = None) -> Table:
    """Parse CSV text into a Table."""
    return CsvParser(config).parse(text)
