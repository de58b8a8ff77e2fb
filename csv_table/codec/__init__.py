"""
CSV codec: text to Table and back.
"""

from csv_table.codec.parser import CsvParser, ParserState, parse
from csv_table.codec.writer import encode_field, format_csv

__all__ = [
    "CsvParser",
    "ParserState",
    "parse",
    "format_csv",
    "encode_field",
]
