"""
Unit tests for the CSV writer and parse/format round trips.
"""

import pytest

from csv_table.codec.parser import parse
from csv_table.codec.writer import encode_field, format_csv, needs_enclosure
from csv_table.core.models import ParseConfig


class TestEncodeField:
    """Test single field encoding."""

    def test_plain_value_unchanged(self):
        """Values without special characters are written as-is."""
        assert encode_field("abc", ",", '"') == "abc"

    def test_spaces_do_not_trigger_quoting(self):
        """Only separator, enclosure and line breaks trigger quoting."""
        assert encode_field("New York", ",", '"') == "New York"

    @pytest.mark.parametrize("value,expected", [
        ("a,b", '"a,b"'),
        ("line1\nline2", '"line1\nline2"'),
        ("a\rb", '"a\rb"'),
        ('say "hi"', '"say ""hi"""'),
    ])
    def test_quoting(self, value, expected):
        """Fields with special characters are enclosed, enclosures doubled."""
        assert encode_field(value, ",", '"', "\\") == expected

    def test_escape_pair_not_doubled(self):
        """An enclosure right after the escape character is left alone."""
        assert encode_field('a\\"b', ",", '"', "\\") == '"a\\"b"'

    def test_escape_disabled_doubles_every_enclosure(self):
        """Without escape every enclosure is doubled."""
        assert encode_field('a\\"b', ",", '"', "") == '"a\\""b"'

    def test_needs_enclosure_uses_given_separator(self):
        """Quoting follows the configured separator."""
        assert needs_enclosure("a;b", ";", '"')
        assert not needs_enclosure("a,b", ";", '"')


class TestFormatCsv:
    """Test the csv formatter."""

    def test_header_and_rows(self):
        """Header first, every record terminated by a line break."""
        assert format_csv(["a", "b"], [["1", "2"], ["3", "4"]]) == "a,b\n1,2\n3,4\n"

    def test_empty_table(self):
        """Nothing to write gives an empty string."""
        assert format_csv([], []) == ""

    def test_no_header(self):
        """An empty header is omitted entirely."""
        assert format_csv([], [["1", "2"]]) == "1,2\n"

    def test_header_only(self):
        """A header without rows is still written."""
        assert format_csv(["a", "b"], []) == "a,b\n"

    def test_custom_options(self):
        """Separator and enclosure come from the options."""
        output = format_csv(["a", "b"], [["x;y", "z,w"]], {"separator": ";", "enclosure": "'"})
        assert output == "a;b\n'x;y';z,w\n"

    def test_unknown_options_ignored(self):
        """Options the writer does not know are ignored."""
        assert format_csv(["a"], [["1"]], {"column_separator": "|"}) == "a\n1\n"

    def test_ragged_rows(self):
        """Rows are written with their own length."""
        assert format_csv(["a", "b", "c"], [["1"], ["1", "2", "3", "4"]]) == "a,b,c\n1\n1,2,3,4\n"


class TestRoundTrip:
    """Parsing the writer's output gives back the same table."""

    def test_multiline_byte_for_byte(self):
        """A quoted multiline field is reproduced exactly."""
        text = 'col1,"line1\nline2",col3\n'
        table = parse(text, ParseConfig(has_header=False))
        assert table.rows == (("col1", "line1\nline2", "col3"),)
        assert format_csv(table.header, table.rows) == text

    def test_fixture_round_trip(self):
        """A plain fixture survives parse and format unchanged."""
        text = "col11,col12,col13\ncol21,col22,col23\ncol31,col32,col33\n"
        table = parse(text)
        assert format_csv(table.header, table.rows) == text

    def test_special_characters_round_trip(self):
        """Separators, enclosures, escapes and line breaks survive a round trip."""
        header = ["id", "text", "note"]
        rows = [
            ["1", 'quote " inside', "comma, here"],
            ["2", "multi\r\nline", 'escaped \\" pair'],
            ["3", "", "back\\slash"],
        ]
        table = parse(format_csv(header, rows))
        assert table.header == tuple(header)
        assert table.rows == tuple(tuple(row) for row in rows)

    def test_custom_characters_round_trip(self):
        """Round trip holds with non-default separator and enclosure."""
        options = {"separator": ";", "enclosure": "'", "escape": "\\"}
        rows = [["it's", "a;b"], ["plain", "x"]]
        text = format_csv([], rows, options)

        table = parse(text, ParseConfig(separator=";", enclosure="'", has_header=False))
        assert table.rows == (("it's", "a;b"), ("plain", "x"))
