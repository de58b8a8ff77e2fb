"""
Formatter Registry.

Maps symbolic names to formatter functions and resolves whatever a caller
passes as "formatter" (name, callable, or object with a format method)
into something callable.

A formatter is any callable taking (header, rows, options) and returning
a string. Formatters that take only (header, rows) are accepted too.

Usage:
    from csv_table.formatters import resolve_formatter

    formatter = resolve_formatter("markdown_table")
    text = formatter(["a", "b"], [["1", "2"]], {})
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from csv_table.codec.writer import format_csv
from csv_table.core.exceptions import ConfigurationError
from csv_table.formatters.markdown import format_markdown_table
from csv_table.formatters.table import format_table

logger = logging.getLogger(__name__)

Formatter = Callable[[Sequence[str], Sequence[Sequence[str]], Mapping[str, str]], str]

DEFAULT_FORMATTER = "csv"


@dataclass
class FormatterInfo:
    """Information about a registered formatter."""
    name: str
    format_func: Callable[..., str]
    description: str = ""
    builtin: bool = False


# ============================================================================
# Built-in formatters
# ============================================================================

FORMATTERS: Dict[str, FormatterInfo] = {
    "csv": FormatterInfo(
        name="csv",
        format_func=format_csv,
        description="CSV with minimal quoting",
        builtin=True,
    ),
    "table": FormatterInfo(
        name="table",
        format_func=format_table,
        description="Pipe-joined text table with dashed header rule",
        builtin=True,
    ),
    "markdown_table": FormatterInfo(
        name="markdown_table",
        format_func=format_markdown_table,
        description="Column-aligned Markdown table",
        builtin=True,
    ),
}


def register_formatter(name: str, description: str = ""):
    """
    Decorator to register a formatter under a name.

    Usage:
        @register_formatter("tsv")
        def format_tsv(header, rows, options):
            ...
    """
    def decorator(func: Callable[..., str]) -> Callable[..., str]:
        existing = FORMATTERS.get(name)
        if existing and existing.builtin:
            raise ConfigurationError(f"Cannot replace built-in formatter '{name}'.", field="formatter")

        FORMATTERS[name] = FormatterInfo(name=name, format_func=func, description=description)
        logger.debug(f"Registered formatter '{name}'")
        return func

    return decorator


def unregister_formatter(name: str) -> bool:
    """Remove a custom formatter. Returns False if it was not registered."""
    info = FORMATTERS.get(name)
    if info is None or info.builtin:
        return False

    del FORMATTERS[name]
    return True


def get_formatter(name: str) -> Optional[Callable[..., str]]:
    """
    Get a formatter function by its registered name.

    Returns:
        The formatter function, or None if not found
    """
    info = FORMATTERS.get(name)
    return info.format_func if info else None


def list_available_formatters() -> List[str]:
    """List all registered formatter names."""
    return list(FORMATTERS.keys())


def resolve_formatter(formatter: Any = None) -> Callable[..., str]:
    """
    Resolve a formatter reference to a callable.

    Accepts:
    - None: the default CSV formatter
    - a registered name ("csv", "table", "markdown_table", ...)
    - any callable
    - a class whose "format" is a staticmethod or classmethod
    - an object with a callable "format" attribute

    A class is never instantiated or called itself.

    Raises:
        ConfigurationError: If nothing callable can be resolved
    """
    if formatter is None:
        return FORMATTERS[DEFAULT_FORMATTER].format_func

    if isinstance(formatter, str):
        func = get_formatter(formatter)
        if func is None:
            logger.debug(f"Formatter name '{formatter}' is not registered")
            raise ConfigurationError("Formatter must be callable.", field="formatter")
        return func

    if inspect.isclass(formatter):
        # Instance methods would bind the header to self
        static_attr = inspect.getattr_static(formatter, "format", None)
        if isinstance(static_attr, (staticmethod, classmethod)):
            return getattr(formatter, "format")
        logger.debug(f"Class {formatter.__name__} has no static or class format method")
        raise ConfigurationError("Formatter must be callable.", field="formatter")

    format_attr = getattr(formatter, "format", None)

    if callable(formatter):
        return formatter

    if callable(format_attr):
        return format_attr

    raise ConfigurationError("Formatter must be callable.", field="formatter")


def accepts_options(func: Callable[..., Any]) -> bool:
    """True when the formatter can be called with a third (options) argument."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures get the full call
        return True

    positional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1

    return positional >= 3


def accepts_options_keyword(func: Callable[..., Any]) -> bool:
    """True when the formatter declares a keyword-only "options" parameter."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    param = signature.parameters.get("options")
    return param is not None and param.kind is inspect.Parameter.KEYWORD_ONLY


def call_formatter(
    func: Callable[..., str],
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    options: Mapping[str, str],
) -> str:
    """
    Invoke a formatter, passing options only if it takes them.

    Options go in as the third positional argument, or as options=...
    for formatters declaring it keyword-only.
    """
    if accepts_options(func):
        return func(header, rows, options)
    if accepts_options_keyword(func):
        return func(header, rows, options=options)
    return func(header, rows)
