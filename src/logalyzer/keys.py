"""Classification keys: what an accepted line is counted under."""

from datetime import datetime

from logalyzer.decoders import DecodedLine
from logalyzer.models import AggregateBy, AnalyzerConfig


# RFC 822 as used for time buckets, minute resolution
HUMAN_TIME_FORMAT = '%d %b %y %H:%M %Z'

UNKNOWN_TIMESTAMP = 0


def strip_query_string(path: str) -> str:
    """Drop the query string and fragment from a url path."""
    return path.split('?', 1)[0].split('#', 1)[0]


def format_timestamp(timestamp: int, human: bool) -> str:
    """Render a minute bucket either as local RFC 822 time or as epoch seconds.

    Unknown timestamps (0) render like any other value, so they all share
    one bucket.
    """
    if not human:
        return str(timestamp)
    return datetime.fromtimestamp(timestamp).astimezone().strftime(HUMAN_TIME_FORMAT)


class KeyBuilder:
    """Maps decoded lines to classification keys for one aggregation mode."""

    def __init__(self, config: AnalyzerConfig):
        self.mode = config.aggregate_by
        self.human = config.human
        self.ignore_query_string = config.ignore_query_string

    def path_for(self, decoded: DecodedLine) -> str:
        """Path used both for url filtering and for keys."""
        if self.ignore_query_string:
            return strip_query_string(decoded.path)
        return decoded.path

    def build_key(self, decoded: DecodedLine) -> str:
        if self.mode is AggregateBy.URL:
            return self.path_for(decoded)

        bucket = format_timestamp(decoded.timestamp, self.human)
        if self.mode is AggregateBy.TIME:
            return bucket

        separator = ' on ' if self.human else ' '
        return self.path_for(decoded) + separator + bucket
