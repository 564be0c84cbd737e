"""Inclusion filters applied to decoded lines."""

import re

from logalyzer.decoders import DecodedLine
from logalyzer.keys import strip_query_string
from logalyzer.models import AnalyzerConfig


# Named CloudFront result groups accepted by the cdn_result filter
CDN_RESULT_GROUPS: dict[str, frozenset[str]] = {
    'Pass': frozenset({'RefreshHit', 'Miss'}),
    'Exceed': frozenset({'LimitExceded', 'CapacityExceeded'}),
}


class FilterChain:
    """AND composition of the url, method and CDN result predicates.

    A predicate without a configured value always passes, as does a
    predicate whose field the line's dialect does not carry.
    """

    def __init__(self, config: AnalyzerConfig):
        self.url_regex: re.Pattern | None = re.compile(config.url_pattern) if config.has_url_pattern else None
        self.ignore_query_string = config.ignore_query_string
        self.method = config.method
        self.cdn_results: frozenset[str] | None = None
        if config.cdn_result:
            self.cdn_results = CDN_RESULT_GROUPS.get(config.cdn_result, frozenset({config.cdn_result}))

    def url_matches(self, decoded: DecodedLine) -> bool:
        if self.url_regex is None:
            return True
        path = strip_query_string(decoded.path) if self.ignore_query_string else decoded.path
        return self.url_regex.search(path) is not None

    def method_matches(self, decoded: DecodedLine) -> bool:
        if not self.method or decoded.method is None:
            return True
        return decoded.method == self.method

    def cdn_result_matches(self, decoded: DecodedLine) -> bool:
        if self.cdn_results is None or decoded.cdn_result is None:
            return True
        return decoded.cdn_result in self.cdn_results

    def accept(self, decoded: DecodedLine) -> bool:
        return self.url_matches(decoded) and self.method_matches(decoded) and self.cdn_result_matches(decoded)
