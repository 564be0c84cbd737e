"""Pydantic models for run configuration and machine-readable reports"""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from logalyzer.errors import ConfigError


DEFAULT_SEPARATOR_EVERY = 100


class InputFormat(str, Enum):
    """Supported access log dialects."""

    NGINX = 'nginx'  # key=value tokens
    CLOUDFRONT = 'cloudfront'  # tab separated columns


class AggregateBy(str, Enum):
    """What a log line is grouped by."""

    URL = 'url'
    TIME = 'hm'  # hits per minute
    URL_TIME = 'uhm'  # hits per minute for each url

    @property
    def needs_time(self) -> bool:
        return self is not AggregateBy.URL


class AnalyzerConfig(BaseModel):
    """Immutable run configuration, built once at startup.

    Every pipeline component receives this object explicitly; nothing reads
    process-wide switches.
    """

    model_config = ConfigDict(frozen=True)

    input_format: InputFormat = Field(InputFormat.NGINX, description="Log dialect of the input files")
    file_name: str | None = Field(None, example="/var/log/nginx/access.log", description="Single file to parse")
    directory: str | None = Field(
        None, example="/var/log/cloudfront/", description="Directory to load files from, overrides file_name"
    )
    file_pattern: str = Field('.*', description="Regex matched against file names inside directory")
    url_pattern: str = Field('.*', description="Regex the url must match to be counted")
    ignore_query_string: bool = Field(False, description="Strip query string and fragment from urls")
    method: str = Field('', example="GET", description="Only count this HTTP method, empty for all")
    cdn_result: str = Field(
        '',
        example="Pass",
        description="Only count this CloudFront result type; Pass and Exceed select groups, empty for all",
    )
    max_lines: int = Field(0, ge=0, description="Stop reading a file after this many accepted lines, 0 = no limit")
    show_hits: bool = Field(False, description="Show hit counts next to keys")
    show_statistics: bool = Field(False, description="Rank keys by hits; implies show_hits")
    human: bool = Field(True, description="Human annotated output instead of terse key/count lines")
    full_display: bool = Field(False, description="Print every accepted key as it is read, no counting")
    aggregate: bool = Field(False, description="Aggregate counts across files instead of per file")
    aggregate_every: int = Field(0, ge=0, description="Report every N files when aggregating, 0 = once at the end")
    aggregate_by: AggregateBy = Field(AggregateBy.URL, description="Group lines by url, minute, or url and minute")
    top: int = Field(0, ge=0, description="Show only the first N ranked keys, 0 = all")
    separator_every: int = Field(
        DEFAULT_SEPARATOR_EVERY, ge=0, description="Print a separator every N ranked keys, 0 = default"
    )
    prefix: str = Field('', example="https://example.com", description="Prefix printed before every url")
    json_output: bool = Field(False, description="Emit one JSON document per report window")

    @field_validator('url_pattern', 'file_pattern')
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f'invalid regex {value!r}: {e}') from e
        return value

    @model_validator(mode='before')
    @classmethod
    def _statistics_imply_hits(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get('show_statistics'):
            data = {**data, 'show_hits': True}
        return data

    @model_validator(mode='after')
    def _input_selected(self) -> 'AnalyzerConfig':
        if not self.file_name and not self.directory:
            raise ValueError('filename or directory not specified')
        return self

    @classmethod
    def build(cls, **options: Any) -> 'AnalyzerConfig':
        """Validate options into a config, raising ConfigError on any problem."""
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigError('; '.join(_describe_error(err) for err in e.errors())) from e

    @property
    def separator_period(self) -> int:
        return self.separator_every or DEFAULT_SEPARATOR_EVERY

    @property
    def has_url_pattern(self) -> bool:
        return self.url_pattern not in ('', '.*')


def _describe_error(err: dict[str, Any]) -> str:
    """Render one pydantic error as 'field: message', without pydantic's 'Value error, ' prefix."""
    if err['type'] == 'value_error' and 'error' in err.get('ctx', {}):
        message = str(err['ctx']['error'])
    else:
        message = err['msg']
    field = '.'.join(str(part) for part in err['loc'])
    return f'{field}: {message}' if field else message


class ReportEntry(BaseModel):
    """A key and the number of accepted lines that mapped to it"""

    key: str = Field(..., example="/static/app.js")
    hits: int = Field(..., example=42)


class WindowReport(BaseModel):
    """Machine-readable summary of one aggregation window

    Attributes:
        entries: Keys with their hits; ranked and truncated when statistics are on
        unique_keys: Number of distinct keys in the window
        total_accepted: Number of lines accepted in the window
        biggest: Entry with the most hits (None for an empty window or without statistics)
    """

    entries: list[ReportEntry] = Field(default_factory=list)
    unique_keys: int = Field(..., example=120)
    total_accepted: int = Field(..., example=5000)
    biggest: ReportEntry | None = Field(None)
