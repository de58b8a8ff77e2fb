"""
Column Projector.

Applies column projections between parsing and formatting:
- without_columns: drop the selected columns, keep original order
- only_columns: keep exactly the selected columns, in selector order
- column_order: move the selected columns to the front, rest follow

At most one projection of each kind is active. They always run in the
order above, each stage resolving its selectors against the columns left
by the previous one.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from csv_table.core.exceptions import ColumnResolutionError
from csv_table.core.models import Table
from csv_table.projection.selectors import (
    ColumnSelector,
    resolve_columns,
    unique_in_order,
)

logger = logging.getLogger(__name__)


class ProjectionKind(Enum):
    """Projection stages, declared in apply order."""
    WITHOUT_COLUMNS = "without_columns"
    ONLY_COLUMNS = "only_columns"
    COLUMN_ORDER = "column_order"


APPLY_ORDER: Tuple[ProjectionKind, ...] = tuple(ProjectionKind)


@dataclass(frozen=True)
class Projection:
    """A projection stage and its column selectors."""
    kind: ProjectionKind
    selectors: Tuple[ColumnSelector, ...]

    def __post_init__(self):
        object.__setattr__(self, "selectors", tuple(self.selectors))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "selectors": list(self.selectors),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Projection":
        """Create from dictionary (from YAML)."""
        return cls(
            kind=ProjectionKind(data["kind"]),
            selectors=tuple(data.get("selectors", [])),
        )


class ColumnProjector:
    """
    Holds the configured projections and applies them to tables.

    Projections are configuration, not cached results: apply() recomputes
    from the table it is given on every call.

    Usage:
        projector = ColumnProjector()
        projector.without_columns(["Email"]).column_order(["Country", 0])

        projected = projector.apply(table)
    """

    def __init__(self, projections: Optional[Iterable[Projection]] = None):
        self._projections: Dict[ProjectionKind, Projection] = {}

        self._handlers: Dict[ProjectionKind, Callable[[Table, Sequence[ColumnSelector]], Table]] = {
            ProjectionKind.WITHOUT_COLUMNS: self._apply_without_columns,
            ProjectionKind.ONLY_COLUMNS: self._apply_only_columns,
            ProjectionKind.COLUMN_ORDER: self._apply_column_order,
        }

        for projection in projections or []:
            self.set(projection.kind, projection.selectors)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set(self, kind: Union[ProjectionKind, str], selectors: Sequence[ColumnSelector]) -> "ColumnProjector":
        """Set (or replace) the projection of the given kind."""
        kind = ProjectionKind(kind)
        if isinstance(selectors, (str, bytes)):
            raise ColumnResolutionError(
                f"{kind.value} expects a list of column selectors, got the string {selectors!r}.",
                details={"selectors": selectors},
            )
        self._projections[kind] = Projection(kind=kind, selectors=tuple(selectors))
        return self

    def reset(self, kind: Union[ProjectionKind, str, None] = None) -> "ColumnProjector":
        """Reset one projection kind to identity, or all of them when kind is None."""
        if kind is None:
            self._projections.clear()
        else:
            self._projections.pop(ProjectionKind(kind), None)
        return self

    def without_columns(self, selectors: Sequence[ColumnSelector]) -> "ColumnProjector":
        return self.set(ProjectionKind.WITHOUT_COLUMNS, selectors)

    def only_columns(self, selectors: Sequence[ColumnSelector]) -> "ColumnProjector":
        return self.set(ProjectionKind.ONLY_COLUMNS, selectors)

    def column_order(self, selectors: Sequence[ColumnSelector]) -> "ColumnProjector":
        return self.set(ProjectionKind.COLUMN_ORDER, selectors)

    def reset_without_columns(self) -> "ColumnProjector":
        return self.reset(ProjectionKind.WITHOUT_COLUMNS)

    def reset_only_columns(self) -> "ColumnProjector":
        return self.reset(ProjectionKind.ONLY_COLUMNS)

    def reset_column_order(self) -> "ColumnProjector":
        return self.reset(ProjectionKind.COLUMN_ORDER)

    @property
    def projections(self) -> List[Projection]:
        """Active projections in apply order."""
        return [self._projections[kind] for kind in APPLY_ORDER if kind in self._projections]

    @property
    def is_identity(self) -> bool:
        return not self._projections

    def copy(self) -> "ColumnProjector":
        return ColumnProjector(self.projections)

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply(self, table: Table) -> Table:
        """Apply all active projections to a table and return the new table."""
        if self.is_identity or table.is_empty:
            return table

        for projection in self.projections:
            table = self.apply_projection(table, projection)

        return table

    def apply_projection(self, table: Table, projection: Projection) -> Table:
        """Apply a single projection stage."""
        handler = self._handlers[projection.kind]
        result = handler(table, projection.selectors)

        logger.debug(
            f"Applied '{projection.kind.value}' {list(projection.selectors)}: "
            f"{table.column_count} -> {result.column_count} columns"
        )
        return result

    def _apply_without_columns(self, table: Table, selectors: Sequence[ColumnSelector]) -> Table:
        count = table.column_count
        excluded = set(resolve_columns(selectors, table.header, count))
        indices = [idx for idx in range(count) if idx not in excluded]
        return _select(table, indices, keep_extra=True)

    def _apply_only_columns(self, table: Table, selectors: Sequence[ColumnSelector]) -> Table:
        indices = resolve_columns(selectors, table.header, table.column_count)
        return _select(table, indices, keep_extra=False)

    def _apply_column_order(self, table: Table, selectors: Sequence[ColumnSelector]) -> Table:
        count = table.column_count
        front = unique_in_order(resolve_columns(selectors, table.header, count))
        chosen = set(front)
        indices = front + [idx for idx in range(count) if idx not in chosen]
        return _select(table, indices, keep_extra=True)


def _select(table: Table, indices: Sequence[int], keep_extra: bool) -> Table:
    """
    Build a table from the given source column indices.

    Cells missing from short rows become empty strings. With keep_extra,
    cells beyond the column count of over-long rows are appended as-is.
    """
    count = table.column_count

    def pick(record: Sequence[str]) -> List[str]:
        cells = [record[idx] if idx < len(record) else "" for idx in indices]
        if keep_extra:
            cells.extend(record[count:])
        return cells

    header = pick(table.header) if table.header else []
    rows = [pick(row) for row in table.rows]

    return Table(header=header, rows=rows)
