"""
Column selector resolution.

A selector is either a header name (str, case-sensitive, first match wins)
or a 0-based column index (int).
"""

from typing import List, Sequence, Union

from csv_table.core.exceptions import (
    ColumnIndexOutOfBoundsError,
    ColumnNotFoundError,
    ColumnResolutionError,
)

ColumnSelector = Union[str, int]


def resolve_column(selector: ColumnSelector, header: Sequence[str], column_count: int) -> int:
    """
    Resolve one selector to a column index.

    Names are looked up in the header; without a header every name is
    reported as not found. Indices must fall in [0, column_count - 1].
    """
    # bool is an int subclass but never a column reference
    if isinstance(selector, bool):
        raise ColumnResolutionError(
            f"Column selector must be a name or an index, got {selector!r}.",
            details={"selector": selector},
        )

    if isinstance(selector, int):
        if not 0 <= selector < column_count:
            raise ColumnIndexOutOfBoundsError(selector, column_count)
        return selector

    if isinstance(selector, str):
        for idx, name in enumerate(header):
            if name == selector:
                return idx
        raise ColumnNotFoundError(selector)

    raise ColumnResolutionError(
        f"Column selector must be a name or an index, got {type(selector).__name__}.",
        details={"selector": repr(selector)},
    )


def resolve_columns(
    selectors: Sequence[ColumnSelector],
    header: Sequence[str],
    column_count: int,
) -> List[int]:
    """Resolve selectors in order, keeping duplicates."""
    return [resolve_column(selector, header, column_count) for selector in selectors]


def unique_in_order(indices: Sequence[int]) -> List[int]:
    """Drop repeated indices, keeping first occurrences."""
    seen = set()
    result = []
    for idx in indices:
        if idx not in seen:
            seen.add(idx)
            result.append(idx)
    return result
