"""Base classes and data models for log line decoding."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from logalyzer.errors import DecodeFailure


TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M'


@dataclass(frozen=True)
class DecodedLine:
    """Fields of one log line that filtering and keying care about.

    Only produced for well-formed lines; a malformed line raises
    DecodeFailure instead and never reaches the counters.
    """

    path: str  # Url path, with ?query appended when the dialect carries one
    method: str | None = None  # HTTP method, None when the dialect has none
    cdn_result: str | None = None  # CloudFront x-edge-result-type, None for other dialects
    timestamp: int = 0  # Epoch seconds truncated to the minute, 0 when unknown or not needed


class LineDecoder(ABC):
    """Base class for all log dialect decoders.

    Subclass this to support a new dialect, then register it in
    get_decoder(). Callers only ever use decode().
    """

    # Leading lines of every file that are headers, not records
    header_lines: int = 0

    def __init__(self, parse_time: bool = False):
        self.parse_time = parse_time

    @property
    @abstractmethod
    def name(self) -> str:
        """Dialect identifier (e.g., 'nginx', 'cloudfront')."""
        pass

    @abstractmethod
    def decode(self, line: str) -> DecodedLine:
        """Extract the classification fields from one raw line.

        Args:
            line: Raw log line without its trailing newline.

        Returns:
            The decoded fields.

        Raises:
            DecodeFailure: If the line does not match the dialect's shape.
        """
        pass


def token_between(line: str, start_marker: str, end_marker: str) -> str:
    """Return the text strictly between start_marker and the next end_marker.

    Raises:
        DecodeFailure: If either marker is missing.
    """
    start = line.find(start_marker)
    if start == -1:
        raise DecodeFailure(f'missing {start_marker!r}')
    start += len(start_marker)
    end = line.find(end_marker, start)
    if end == -1:
        raise DecodeFailure(f'missing {end_marker!r} after {start_marker!r}')
    return line[start:end]


def parse_minute(date_str: str, time_str: str) -> int:
    """Parse a local 'YYYY-MM-DD' date and 'HH:MM...' time into epoch seconds.

    Seconds in time_str are ignored. Returns 0 when the values do not parse,
    which groups every such line into the same unknown-time bucket.
    """
    try:
        dt = datetime.strptime(f'{date_str} {time_str[:5]}', TIMESTAMP_FORMAT)
        return int(dt.timestamp())
    except (ValueError, OverflowError, OSError):
        return 0
