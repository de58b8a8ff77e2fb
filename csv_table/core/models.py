"""
Data model shared by the codec, projection and formatter stages.

- Table: header plus body rows, all cells strings
- ParseConfig: separator / enclosure / escape characters and header mode
"""

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

import pandas as pd

from csv_table.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from csv_table.core.config import Settings

# Formatter options: each formatter picks the keys it knows
FormatOptions = Mapping[str, str]

Header = Tuple[str, ...]
Rows = Tuple[Tuple[str, ...], ...]

LINE_BREAK_CHARS = ("\r", "\n")


@dataclass(frozen=True)
class Table:
    """
    Parsed CSV data: an optional header and the body rows.

    Rows may have differing lengths. Every transformation returns a new
    Table; instances are never modified in place.
    """
    header: Header = ()
    rows: Rows = ()

    def __post_init__(self):
        object.__setattr__(self, "header", tuple("" if v is None else str(v) for v in self.header))
        object.__setattr__(
            self,
            "rows",
            tuple(tuple("" if v is None else str(v) for v in row) for row in self.rows),
        )

    @property
    def has_header(self) -> bool:
        return len(self.header) > 0

    @property
    def is_empty(self) -> bool:
        return not self.header and not self.rows

    @property
    def column_count(self) -> int:
        """Width used for selector resolution: header length, else first row length."""
        if self.header:
            return len(self.header)
        if self.rows:
            return len(self.rows[0])
        return 0

    @property
    def max_width(self) -> int:
        """Widest record across header and rows."""
        return max([len(self.header)] + [len(row) for row in self.rows])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "header": list(self.header),
            "rows": [list(row) for row in self.rows],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        """Create from dictionary."""
        return cls(
            header=data.get("header", ()),
            rows=data.get("rows", ()),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert to a pandas DataFrame of strings.

        Short rows are padded with empty strings up to the widest record.
        Without a header the DataFrame gets a default integer column index.
        """
        width = self.max_width
        data = [list(row) + [""] * (width - len(row)) for row in self.rows]

        if self.header:
            columns = list(self.header) + [""] * (width - len(self.header))
            return pd.DataFrame(data, columns=columns, dtype=str)

        return pd.DataFrame(data, columns=range(width), dtype=str)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, include_header: bool = True) -> "Table":
        """
        Create from a pandas DataFrame.

        Missing values become empty strings and everything else is
        converted with str().
        """
        def _cell(value: Any) -> str:
            if value is None or (not isinstance(value, str) and pd.isna(value)):
                return ""
            return str(value)

        header = [str(col) for col in df.columns] if include_header else []
        rows = [[_cell(v) for v in record] for record in df.itertuples(index=False, name=None)]

        return cls(header=header, rows=rows)


@dataclass(frozen=True)
class ParseConfig:
    """Configuration supplied to the parser on every parse."""
    separator: str = ","
    enclosure: str = '"'
    escape: str = "\\"  # Empty string disables escape handling
    has_header: bool = True
    strict: bool = False  # Raise on unterminated quoted fields

    def __post_init__(self):
        for name in ("separator", "enclosure"):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ConfigurationError(f"{name} must be a single character, got {value!r}.", field=name)
            if value in LINE_BREAK_CHARS:
                raise ConfigurationError(f"{name} cannot be a line break character.", field=name)

        if self.separator == self.enclosure:
            raise ConfigurationError("separator and enclosure must differ.", field="enclosure")

        if not isinstance(self.escape, str) or len(self.escape) > 1:
            raise ConfigurationError(
                f"escape must be a single character or empty, got {self.escape!r}.", field="escape"
            )

    @property
    def escape_enabled(self) -> bool:
        """True when the escape character is set and distinct from the enclosure."""
        return bool(self.escape) and self.escape != self.enclosure

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParseConfig":
        """Create from dictionary (from YAML)."""
        return cls(
            separator=data.get("separator", ","),
            enclosure=data.get("enclosure", '"'),
            escape=data.get("escape", "\\"),
            has_header=data.get("has_header", True),
            strict=data.get("strict", False),
        )

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None) -> "ParseConfig":
        """Create from environment-backed settings."""
        if settings is None:
            from csv_table.core.config import get_settings
            settings = get_settings()

        return cls(
            separator=settings.separator,
            enclosure=settings.enclosure,
            escape=settings.escape,
            has_header=settings.has_header,
            strict=settings.strict_parsing,
        )
