"""
Unit tests for the formatter registry and formatter resolution.
"""

import pytest

from csv_table.codec.writer import format_csv
from csv_table.core.exceptions import ConfigurationError
from csv_table.formatters.markdown import format_markdown_table
from csv_table.formatters.registry import (
    FORMATTERS,
    accepts_options,
    accepts_options_keyword,
    call_formatter,
    get_formatter,
    list_available_formatters,
    register_formatter,
    resolve_formatter,
    unregister_formatter,
)
from csv_table.formatters.table import format_table


class PipeFormatter:
    """Formatter class exposing format as a static method."""

    @staticmethod
    def format(header, rows, options=None):
        delimiter = (options or {}).get("delimiter", "|")
        output = ""
        if header:
            output = delimiter.join(header)
            output += "\n" + "=" * len(output) + "\n"
        return output + "\n".join(delimiter.join(row) for row in rows)

    @staticmethod
    def custom_format(header, rows):
        return PipeFormatter.format(header, rows, {"delimiter": "!"})


class BoundFormatter:
    """Formatter instance with a bound format method."""

    def __init__(self, prefix):
        self.prefix = prefix

    def format(self, header, rows, options):
        return self.prefix + str(len(rows))


class CountFormatter:
    """Formatter class exposing format as a class method."""

    label = "rows"

    @classmethod
    def format(cls, header, rows, options):
        return f"{cls.label}={len(rows)}"


class NoFormat:
    """Class without any format method."""


@pytest.fixture
def scratch_formatter():
    """Register a throwaway formatter and remove it afterwards."""
    name = "upper_csv"

    @register_formatter(name, description="Upper-cased CSV")
    def upper_csv(header, rows, options):
        return format_csv(header, rows, options).upper()

    yield name
    unregister_formatter(name)


class TestBuiltins:
    """Test the built-in registry entries."""

    def test_builtin_names(self):
        """The three built-ins are registered."""
        names = list_available_formatters()
        assert names[:3] == ["csv", "table", "markdown_table"]

    def test_get_formatter(self):
        """Names map to their functions."""
        assert get_formatter("csv") is format_csv
        assert get_formatter("table") is format_table
        assert get_formatter("markdown_table") is format_markdown_table

    def test_get_unknown(self):
        """Unknown names give None."""
        assert get_formatter("nope") is None

    def test_builtins_cannot_be_replaced(self):
        """Registering over a built-in fails."""
        with pytest.raises(ConfigurationError):
            register_formatter("csv")(lambda header, rows: "")

        assert get_formatter("csv") is format_csv

    def test_builtins_cannot_be_unregistered(self):
        """Built-ins stay registered."""
        assert unregister_formatter("table") is False
        assert "table" in FORMATTERS


class TestCustomRegistration:
    """Test registering custom formatters."""

    def test_register_and_resolve(self, scratch_formatter):
        """A registered name resolves to the decorated function."""
        func = resolve_formatter(scratch_formatter)
        assert func(["a"], [["b"]], {}) == "A\nB\n"
        assert FORMATTERS[scratch_formatter].description == "Upper-cased CSV"
        assert FORMATTERS[scratch_formatter].builtin is False

    def test_unregister(self, scratch_formatter):
        """Unregistering removes the name."""
        assert unregister_formatter(scratch_formatter) is True
        assert scratch_formatter not in list_available_formatters()
        assert unregister_formatter(scratch_formatter) is False


class TestResolveFormatter:
    """Test formatter resolution."""

    def test_none_is_csv(self):
        """No formatter means CSV."""
        assert resolve_formatter(None) is format_csv
        assert resolve_formatter() is format_csv

    def test_unknown_name(self):
        """Unregistered names are rejected with the fixed message."""
        with pytest.raises(ConfigurationError, match="Formatter must be callable."):
            resolve_formatter("Not callable")

    def test_configuration_error_is_value_error(self):
        """Resolution failures can be caught as ValueError."""
        with pytest.raises(ValueError):
            resolve_formatter("Not callable")

    def test_plain_function(self):
        """Callables are returned unchanged."""
        def render(header, rows):
            return "x"

        assert resolve_formatter(render) is render

    def test_lambda(self):
        """Lambdas are callables too."""
        func = lambda header, rows, options: ""  # noqa: E731
        assert resolve_formatter(func) is func

    def test_class_with_format(self):
        """A class resolves to its format attribute."""
        func = resolve_formatter(PipeFormatter)
        assert func([], [["a", "b"]]) == "a|b"

    def test_static_method_reference(self):
        """A method reference is a plain callable."""
        func = resolve_formatter(PipeFormatter.custom_format)
        assert func(["h"], [["a", "b"]]) == "h\n=\na!b"

    def test_instance_with_format(self):
        """A non-callable object with a format method resolves to the bound method."""
        func = resolve_formatter(BoundFormatter("rows="))
        assert func([], [["a"], ["b"]], {}) == "rows=2"

    @pytest.mark.parametrize("value", [42, 3.5, ["csv"], {"name": "csv"}])
    def test_invalid_values(self, value):
        """Values that are neither names nor callables are rejected."""
        with pytest.raises(ConfigurationError, match="Formatter must be callable."):
            resolve_formatter(value)

    def test_class_with_classmethod_format(self):
        """A class method resolves bound to the class."""
        func = resolve_formatter(CountFormatter)
        assert call_formatter(func, ["a"], [["1"], ["2"]], {}) == "rows=2"

    def test_class_without_format(self):
        """A class lacking format is rejected, not instantiated."""
        with pytest.raises(ConfigurationError, match="Formatter must be callable."):
            resolve_formatter(NoFormat)

    def test_class_with_instance_method_format(self):
        """A class whose format needs an instance is rejected."""
        with pytest.raises(ConfigurationError, match="Formatter must be callable."):
            resolve_formatter(BoundFormatter)


class TestCallFormatter:
    """Test option passing."""

    def test_two_argument_formatter(self):
        """Formatters without an options parameter are called with two arguments."""
        def render(header, rows):
            return f"{len(header)}:{len(rows)}"

        assert not accepts_options(render)
        assert call_formatter(render, ["a"], [["1"], ["2"]], {"x": "y"}) == "1:2"

    def test_three_argument_formatter(self):
        """Formatters with an options parameter receive the options."""
        def render(header, rows, options):
            return options["x"]

        assert accepts_options(render)
        assert call_formatter(render, [], [], {"x": "y"}) == "y"

    def test_varargs_formatter(self):
        """Formatters taking *args receive the options."""
        def render(*args):
            return str(len(args))

        assert call_formatter(render, [], [], {}) == "3"

    def test_bound_method(self):
        """self does not count towards the parameters."""
        assert accepts_options(BoundFormatter("").format)

    def test_keyword_only_options(self):
        """A keyword-only options parameter receives the options by name."""
        def render(header, rows, *, options):
            return options["x"]

        assert not accepts_options(render)
        assert accepts_options_keyword(render)
        assert call_formatter(render, [], [], {"x": "y"}) == "y"

    def test_keyword_only_options_with_default(self):
        """Keyword-only options with a default are still passed."""
        def render(header, rows, *, options=None):
            return (options or {}).get("x", "missing")

        assert call_formatter(render, [], [], {"x": "y"}) == "y"
