"""logalyzer - access log hit counting and ranking.

This package provides:
- Decoders for nginx key=value and CloudFront access logs
- Url, method and CloudFront result filters
- Per file, chunked or whole run aggregation with ranked reports
"""

from .__version__ import __version__
from .accumulator import Accumulator, RankedEntry
from .errors import ConfigError, DecodeFailure, LogalyzerError, ResourceError
from .models import AggregateBy, AnalyzerConfig, InputFormat
from .runner import RunController


__all__ = [
    '__version__',
    'Accumulator',
    'AggregateBy',
    'AnalyzerConfig',
    'ConfigError',
    'DecodeFailure',
    'InputFormat',
    'LogalyzerError',
    'RankedEntry',
    'ResourceError',
    'RunController',
]
