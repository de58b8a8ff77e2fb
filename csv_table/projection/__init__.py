"""
Column projection: select, exclude and reorder columns by name or index.
"""

from csv_table.projection.selectors import (
    ColumnSelector,
    resolve_column,
    resolve_columns,
)
from csv_table.projection.projector import (
    APPLY_ORDER,
    ColumnProjector,
    Projection,
    ProjectionKind,
)

__all__ = [
    # Selectors
    "ColumnSelector",
    "resolve_column",
    "resolve_columns",
    # Projector
    "APPLY_ORDER",
    "ColumnProjector",
    "Projection",
    "ProjectionKind",
]
