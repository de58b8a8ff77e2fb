"""
Custom exceptions for CSV parsing, projection and formatting.
"""

from typing import Any, Dict, Optional


class CsvTableError(Exception):
    """Base csv_table exception."""

    def __init__(
        self,
        message: str,
        error_type: str = "csv_table_error",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "detail": self.message,
            "type": self.error_type,
            "details": self.details,
        }


class ConfigurationError(CsvTableError, ValueError):
    """Invalid configuration: unresolvable formatter, bad parse characters, etc."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            error_type="configuration_error",
            details=details,
        )


class ColumnResolutionError(CsvTableError, ValueError):
    """A column selector could not be resolved against the table."""

    def __init__(
        self,
        message: str,
        error_type: str = "column_resolution_error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, error_type=error_type, details=details)


class ColumnNotFoundError(ColumnResolutionError):
    """Column name not present in the header."""

    def __init__(self, name: str):
        super().__init__(
            message=f'Column "{name}" not found in header.',
            error_type="column_not_found",
            details={"name": name},
        )


class ColumnIndexOutOfBoundsError(ColumnResolutionError):
    """Column index outside of [0, column_count - 1]."""

    def __init__(self, index: int, column_count: int):
        super().__init__(
            message=f"Column index {index} is out of bounds (0-{column_count - 1}).",
            error_type="column_out_of_bounds",
            details={"index": index, "column_count": column_count},
        )


class CsvParseError(CsvTableError, ValueError):
    """Malformed CSV input, only raised in strict parsing mode."""

    def __init__(self, message: str, line: Optional[int] = None):
        details = {"line": line} if line is not None else {}
        super().__init__(
            message=message,
            error_type="parse_error",
            details=details,
        )


class SourceReadError(CsvTableError, OSError):
    """CSV source could not be read."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"Unable to read the file {path}.",
            error_type="source_read_error",
            details={"path": path},
        )
