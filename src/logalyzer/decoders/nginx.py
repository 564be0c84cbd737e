"""Decoder for nginx logs written as key=value tokens."""

from logalyzer.errors import DecodeFailure

from .base import DecodedLine, LineDecoder, token_between


class NginxDecoder(LineDecoder):
    """Decodes lines such as::

        time=... method=GET status=200 uri="/foo/bar" ref="-" ...

    The url sits between ``uri=`` and `` ref=`` wrapped in quotes. The method
    is bounded by the next `` status=``. This dialect carries no timestamp in
    the fields consulted, so time buckets always fall into the unknown bucket.
    """

    URI_MARKER = 'uri='
    URI_END_MARKER = ' ref='
    METHOD_MARKER = 'method='
    METHOD_END_MARKER = ' status='

    @property
    def name(self) -> str:
        return 'nginx'

    def decode(self, line: str) -> DecodedLine:
        quoted_url = token_between(line, self.URI_MARKER, self.URI_END_MARKER)
        if len(quoted_url) < 2:
            raise DecodeFailure(f'url token too short: {quoted_url!r}')
        method = token_between(line, self.METHOD_MARKER, self.METHOD_END_MARKER)

        return DecodedLine(path=quoted_url[1:-1], method=method)
