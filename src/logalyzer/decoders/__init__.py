"""Log line decoders.

This package contains one decoder per supported access log dialect.
"""

from logalyzer.models import AnalyzerConfig, InputFormat

from .base import DecodedLine, LineDecoder, parse_minute, token_between
from .cloudfront import CloudFrontDecoder, normalize_path
from .nginx import NginxDecoder


__all__ = [
    # Base classes
    'DecodedLine',
    'LineDecoder',
    # Decoders
    'CloudFrontDecoder',
    'NginxDecoder',
    # Factory
    'get_decoder',
    # Helpers
    'normalize_path',
    'parse_minute',
    'token_between',
]


DECODERS: dict[InputFormat, type[LineDecoder]] = {
    InputFormat.NGINX: NginxDecoder,
    InputFormat.CLOUDFRONT: CloudFrontDecoder,
}


def get_decoder(config: AnalyzerConfig) -> LineDecoder:
    """Get the decoder for the configured input format.

    Returns:
        Instantiated decoder, parsing timestamps only when the aggregation
        mode groups by time.
    """
    return DECODERS[config.input_format](parse_time=config.aggregate_by.needs_time)
