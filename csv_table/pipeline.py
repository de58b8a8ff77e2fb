"""
CSV Pipeline Orchestrator.

Owns the CSV text, the parse configuration and the column projections,
and runs parse -> project -> format on demand.

The parsed table is cached until the text or the parse configuration
changes. Projections are re-applied on every call, so reconfiguring them
takes effect immediately.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd
import yaml

from csv_table.codec.parser import CsvParser
from csv_table.core.config import Settings, get_settings
from csv_table.core.exceptions import ConfigurationError, SourceReadError
from csv_table.core.models import FormatOptions, ParseConfig, Table
from csv_table.formatters.registry import (
    DEFAULT_FORMATTER,
    call_formatter,
    resolve_formatter,
)
from csv_table.projection.projector import (
    APPLY_ORDER,
    ColumnProjector,
    Projection,
)
from csv_table.projection.selectors import ColumnSelector

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """
    Complete pipeline configuration.

    Loaded from a dict or from a YAML file:

        pipeline:
          parse:
            separator: ";"
            has_header: true
          without_columns: [Email]
          column_order: [Country, City]
          formatter: markdown_table
          format_options:
            header_separator: "="
    """
    parse: ParseConfig = field(default_factory=ParseConfig)
    projections: List[Projection] = field(default_factory=list)
    formatter: str = DEFAULT_FORMATTER
    format_options: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create from dictionary (from YAML pipeline section)."""
        projections = []
        for kind in APPLY_ORDER:
            selectors = data.get(kind.value)
            if selectors is None:
                continue
            if not isinstance(selectors, (list, tuple)):
                raise ConfigurationError(f"{kind.value} must be a list of column selectors.", field=kind.value)
            projections.append(Projection(kind=kind, selectors=tuple(selectors)))

        format_options = data.get("format_options") or {}
        if not isinstance(format_options, dict):
            raise ConfigurationError("format_options must be a mapping.", field="format_options")

        return cls(
            parse=ParseConfig.from_dict(data.get("parse") or {}),
            projections=projections,
            formatter=data.get("formatter", DEFAULT_FORMATTER),
            format_options={str(k): str(v) for k, v in format_options.items()},
        )

    @classmethod
    def from_yaml_file(cls, yaml_path: Union[str, Path]) -> "PipelineConfig":
        """Load pipeline config from a YAML file."""
        path = Path(yaml_path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise SourceReadError(str(path)) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid pipeline YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Pipeline YAML in {path} must be a mapping.")

        config = cls.from_dict(data.get("pipeline", data))
        logger.info(f"Loaded pipeline config from {path}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "parse": self.parse.to_dict(),
            "formatter": self.formatter,
            "format_options": dict(self.format_options),
        }
        for projection in self.projections:
            result[projection.kind.value] = list(projection.selectors)
        return result


class CsvPipeline:
    """
    Parses CSV text, projects columns and renders the result.

    Configuration methods return the pipeline itself so calls chain.
    An instance is not meant to be reconfigured from several threads at
    once; use one pipeline per thread instead.

    Usage:
        pipeline = CsvPipeline("Name,Age,City\\nJohn,30,Paris\\n")

        print(pipeline.only_columns(["City", "Name"]).format("markdown_table"))

        # From a file, semicolon separated, no header row
        pipeline = CsvPipeline.from_file("data.csv", separator=";").without_header()
        print(pipeline.format("table"))
    """

    def __init__(
        self,
        text: Optional[str] = "",
        separator: str = ",",
        enclosure: str = '"',
        escape: str = "\\",
        has_header: bool = True,
        strict: bool = False,
        default_formatter: Any = DEFAULT_FORMATTER,
        format_options: Optional[FormatOptions] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            text: CSV text (None is treated as empty)
            separator: Field separator
            enclosure: Quote character
            escape: Escape character, "" to disable
            has_header: Whether the first record is the header
            strict: Raise on unterminated quoted fields
            default_formatter: Formatter used when format() gets none
            format_options: Options merged under per-call format options
        """
        self._text = text or ""
        self._parse_config = ParseConfig(
            separator=separator,
            enclosure=enclosure,
            escape=escape,
            has_header=has_header,
            strict=strict,
        )
        self.projector = ColumnProjector()
        self.default_formatter = default_formatter
        self.format_options: Dict[str, str] = dict(format_options or {})

        self._table: Optional[Table] = None

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> "CsvPipeline":
        """
        Create a pipeline from a CSV file.

        The file is read as UTF-8; a leading BOM is dropped.

        Raises:
            SourceReadError: If the file cannot be read
        """
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read CSV file {path}: {e}")
            raise SourceReadError(str(path)) from e

        logger.info(f"Loaded {len(text)} characters from {path}")
        return cls(text, **kwargs)

    @classmethod
    def from_settings(cls, text: Optional[str] = "", settings: Optional[Settings] = None) -> "CsvPipeline":
        """Create a pipeline with defaults taken from environment settings."""
        settings = settings or get_settings()
        config = ParseConfig.from_settings(settings)

        return cls(
            text,
            separator=config.separator,
            enclosure=config.enclosure,
            escape=config.escape,
            has_header=config.has_header,
            strict=config.strict,
            default_formatter=settings.default_formatter,
        )

    @classmethod
    def from_config(cls, text: Optional[str], config: Union[PipelineConfig, Dict[str, Any]]) -> "CsvPipeline":
        """Create a pipeline from a PipelineConfig (or its dict form)."""
        if isinstance(config, dict):
            config = PipelineConfig.from_dict(config)

        pipeline = cls(
            text,
            separator=config.parse.separator,
            enclosure=config.parse.enclosure,
            escape=config.parse.escape,
            has_header=config.parse.has_header,
            strict=config.parse.strict,
            default_formatter=config.formatter,
            format_options=config.format_options,
        )
        for projection in config.projections:
            pipeline.projector.set(projection.kind, projection.selectors)

        return pipeline

    # ------------------------------------------------------------------
    # Source and parse configuration
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self._text = value or ""
        self._table = None

    @property
    def parse_config(self) -> ParseConfig:
        return self._parse_config

    @parse_config.setter
    def parse_config(self, config: ParseConfig) -> None:
        self._parse_config = config
        self._table = None

    def with_parse_config(self, **changes: Any) -> "CsvPipeline":
        """Change parse settings (separator, enclosure, escape, has_header, strict)."""
        self.parse_config = replace(self._parse_config, **changes)
        return self

    @property
    def has_header(self) -> bool:
        return self._parse_config.has_header

    def with_header(self) -> "CsvPipeline":
        """Treat the first record as the header."""
        return self.with_parse_config(has_header=True)

    def without_header(self) -> "CsvPipeline":
        """Treat every record as data."""
        return self.with_parse_config(has_header=False)

    # ------------------------------------------------------------------
    # Column projections
    # ------------------------------------------------------------------

    def column_order(self, selectors: Sequence[ColumnSelector]) -> "CsvPipeline":
        """Move the selected columns to the front; the rest follow in original order."""
        self.projector.column_order(selectors)
        return self

    def only_columns(self, selectors: Sequence[ColumnSelector]) -> "CsvPipeline":
        """Keep only the selected columns, in selector order."""
        self.projector.only_columns(selectors)
        return self

    def without_columns(self, selectors: Sequence[ColumnSelector]) -> "CsvPipeline":
        """Drop the selected columns."""
        self.projector.without_columns(selectors)
        return self

    def reset_column_order(self) -> "CsvPipeline":
        self.projector.reset_column_order()
        return self

    def reset_only_columns(self) -> "CsvPipeline":
        self.projector.reset_only_columns()
        return self

    def reset_without_columns(self) -> "CsvPipeline":
        self.projector.reset_without_columns()
        return self

    def reset_columns(self) -> "CsvPipeline":
        """Clear every column projection."""
        self.projector.reset()
        return self

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def table(self) -> Table:
        """Parsed table before projection."""
        if self._table is None:
            self._table = CsvParser(self._parse_config).parse(self._text)
        return self._table

    @property
    def header(self) -> List[str]:
        return list(self.table.header)

    @property
    def rows(self) -> List[List[str]]:
        return [list(row) for row in self.table.rows]

    def parse(self) -> Table:
        """Re-parse the text, discarding the cached table."""
        self._table = None
        return self.table

    def projected(self) -> Table:
        """Parsed table with the current projections applied."""
        return self.projector.apply(self.table)

    def format(self, formatter: Any = None, options: Optional[Mapping[str, str]] = None) -> str:
        """
        Render the projected table.

        Args:
            formatter: Registered name, callable, or object/class with a
                format method. Defaults to the pipeline's default formatter.
            options: Formatter options, layered over the pipeline defaults

        Raises:
            ConfigurationError: If the formatter cannot be resolved
            ColumnResolutionError: If a projection selector does not match
        """
        func = resolve_formatter(formatter if formatter is not None else self.default_formatter)
        table = self.projected()
        merged_options = {**self.format_options, **(options or {})}

        logger.debug(
            f"Formatting {len(table.rows)} rows with {getattr(func, '__name__', repr(func))}"
        )
        return call_formatter(
            func,
            list(table.header),
            [list(row) for row in table.rows],
            merged_options,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Projected table as a pandas DataFrame."""
        return self.projected().to_dataframe()
