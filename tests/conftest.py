"""Pytest configuration and shared fixtures for logalyzer tests.

This module provides builders for log lines in both supported dialects
and a helper fixture for writing log files.
"""

import pytest


CLOUDFRONT_HEADER = [
    '#Version: 1.0',
    '#Fields: date time x-edge-location sc-bytes c-ip cs-method cs(Host) cs-uri-stem sc-status '
    'cs(Referer) cs(User-Agent) cs-uri-query cs(Cookie) x-edge-result-type x-edge-request-id',
]


def nginx_line(uri: str = '/foo/bar', method: str = 'GET', status: int = 200) -> str:
    """Build an nginx key=value log line."""
    return f'time=2024-01-15T10:30:45+00:00 ip=10.0.0.1 method={method} status={status} uri="{uri}" ref="-" ua="curl/8.0"'


def cloudfront_line(
    path: str = '/a/b',
    query: str = '-',
    result: str = 'Hit',
    method: str = 'GET',
    date: str = '2024-01-15',
    time: str = '10:30:45',
) -> str:
    """Build a 15 column CloudFront log line."""
    columns = [
        date,
        time,
        'FRA2',
        '1234',
        '10.0.0.1',
        method,
        'd111111abcdef8.cloudfront.net',
        path,
        '200',
        '-',
        'curl/8.0',
        query,
        '-',
        result,
        'req-id-1',
    ]
    return '\t'.join(columns)


@pytest.fixture
def write_log(tmp_path):
    """Write lines to a log file under tmp_path and return its path.

    Pass header=True to prepend the two CloudFront header lines.
    """

    def _write(name: str, lines: list[str], header: bool = False) -> str:
        filepath = tmp_path / name
        content = (CLOUDFRONT_HEADER if header else []) + lines
        filepath.write_text(''.join(line + '\n' for line in content))
        return str(filepath)

    return _write
