"""Decoder for CloudFront access logs."""

from logalyzer.errors import DecodeFailure

from .base import DecodedLine, LineDecoder, parse_minute


class CloudFrontDecoder(LineDecoder):
    """Decodes tab separated CloudFront web distribution log lines.

    Each file starts with '#Version' and '#Fields' header lines that are
    skipped before decoding starts.
    """

    header_lines = 2

    MIN_COLUMNS = 14
    DATE_COL = 0
    TIME_COL = 1
    METHOD_COL = 5
    PATH_COL = 7
    QUERY_COL = 11
    RESULT_COL = 13
    NO_QUERY = '-'

    @property
    def name(self) -> str:
        return 'cloudfront'

    def decode(self, line: str) -> DecodedLine:
        columns = line.split('\t')
        if len(columns) < self.MIN_COLUMNS:
            raise DecodeFailure(f'expected {self.MIN_COLUMNS} columns, got {len(columns)}')

        path = normalize_path(columns[self.PATH_COL])
        query = columns[self.QUERY_COL]
        if query != self.NO_QUERY:
            path += '?' + query

        timestamp = 0
        if self.parse_time:
            timestamp = parse_minute(columns[self.DATE_COL], columns[self.TIME_COL])

        return DecodedLine(
            path=path,
            method=columns[self.METHOD_COL],
            cdn_result=columns[self.RESULT_COL],
            timestamp=timestamp,
        )


def normalize_path(path: str) -> str:
    """Append a trailing slash to paths that do not look like files.

    A path looks like a file when a '.' sits 4 or 5 characters from the end
    ('/app.js', '/index.html'). Paths shorter than 5 characters are returned
    unchanged.
    """
    if len(path) < 5 or path.endswith('/'):
        return path
    if path[-4] != '.' and path[-5] != '.':
        path += '/'
    return path
