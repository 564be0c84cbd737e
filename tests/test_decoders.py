"""Unit tests for log line decoders."""

from datetime import datetime

import pytest
from conftest import cloudfront_line, nginx_line

from logalyzer.decoders import (
    CloudFrontDecoder,
    DecodedLine,
    NginxDecoder,
    get_decoder,
    normalize_path,
    parse_minute,
    token_between,
)
from logalyzer.errors import DecodeFailure
from logalyzer.models import AnalyzerConfig


class TestNginxDecoder:
    """Tests for NginxDecoder."""

    def setup_method(self):
        self.decoder = NginxDecoder()

    def test_name_and_header(self):
        assert self.decoder.name == 'nginx'
        assert self.decoder.header_lines == 0

    def test_extracts_url_and_method(self):
        decoded = self.decoder.decode(nginx_line('/foo/bar', method='POST'))
        assert decoded == DecodedLine(path='/foo/bar', method='POST')

    def test_url_keeps_query_string(self):
        decoded = self.decoder.decode(nginx_line('/search?q=1'))
        assert decoded.path == '/search?q=1'

    def test_loose_token_order(self):
        line = 'ip=1.2.3.4 method=GET host=x uri="/foo/bar" ref=- status=200 bytes=5'
        decoded = self.decoder.decode(line)
        assert decoded.path == '/foo/bar'

    def test_no_timestamp(self):
        decoder = NginxDecoder(parse_time=True)
        assert decoder.decode(nginx_line()).timestamp == 0

    def test_no_cdn_result(self):
        assert self.decoder.decode(nginx_line()).cdn_result is None

    def test_missing_uri_marker(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('method=GET status=200 ref="-"')

    def test_missing_ref_marker(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('method=GET status=200 uri="/foo"')

    def test_missing_method_marker(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('status=200 uri="/foo" ref="-"')

    def test_missing_status_marker(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('uri="/foo" ref="-" method=GET')

    def test_url_token_too_short(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('method=GET status=200 uri=x ref="-"')

    def test_empty_line(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('')


class TestCloudFrontDecoder:
    """Tests for CloudFrontDecoder."""

    def setup_method(self):
        self.decoder = CloudFrontDecoder()

    def test_name_and_header(self):
        assert self.decoder.name == 'cloudfront'
        assert self.decoder.header_lines == 2

    def test_extracts_fields(self):
        decoded = self.decoder.decode(cloudfront_line('/a/b', result='Miss', method='POST'))
        assert decoded.path == '/a/b'
        assert decoded.method == 'POST'
        assert decoded.cdn_result == 'Miss'
        assert decoded.timestamp == 0

    def test_appends_query_string(self):
        decoded = self.decoder.decode(cloudfront_line('/a/b', query='x=1'))
        assert decoded.path == '/a/b?x=1'

    def test_dash_query_means_none(self):
        decoded = self.decoder.decode(cloudfront_line('/a/b', query='-'))
        assert '?' not in decoded.path

    def test_directory_path_gets_trailing_slash(self):
        decoded = self.decoder.decode(cloudfront_line('/images/large', query='w=10'))
        assert decoded.path == '/images/large/?w=10'

    def test_file_path_unchanged(self):
        assert self.decoder.decode(cloudfront_line('/static/app.css')).path == '/static/app.css'
        assert self.decoder.decode(cloudfront_line('/index.html')).path == '/index.html'

    def test_too_few_columns(self):
        line = '\t'.join(['x'] * 13)
        with pytest.raises(DecodeFailure):
            self.decoder.decode(line)

    def test_exactly_fourteen_columns(self):
        line = '\t'.join(cloudfront_line('/a/b', result='Miss').split('\t')[:14])
        assert self.decoder.decode(line).cdn_result == 'Miss'

    def test_header_line_fails(self):
        with pytest.raises(DecodeFailure):
            self.decoder.decode('#Version: 1.0')

    def test_parses_timestamp_when_needed(self):
        decoder = CloudFrontDecoder(parse_time=True)
        decoded = decoder.decode(cloudfront_line(date='2024-01-15', time='10:30:45'))
        expected = int(datetime(2024, 1, 15, 10, 30).timestamp())
        assert decoded.timestamp == expected

    def test_same_minute_same_timestamp(self):
        decoder = CloudFrontDecoder(parse_time=True)
        first = decoder.decode(cloudfront_line(time='10:30:01'))
        second = decoder.decode(cloudfront_line(time='10:30:59'))
        assert first.timestamp == second.timestamp

    def test_bad_timestamp_is_zero(self):
        decoder = CloudFrontDecoder(parse_time=True)
        decoded = decoder.decode(cloudfront_line(date='not-a-date'))
        assert decoded.timestamp == 0
        assert decoded.path == '/a/b'


class TestNormalizePath:
    """Tests for the CloudFront path normalization."""

    def test_appends_slash(self):
        assert normalize_path('/products/shoes') == '/products/shoes/'

    def test_keeps_existing_slash(self):
        assert normalize_path('/products/') == '/products/'

    def test_three_letter_extension(self):
        assert normalize_path('/logo.png') == '/logo.png'

    def test_four_letter_extension(self):
        assert normalize_path('/logo.jpeg') == '/logo.jpeg'

    def test_dot_only_checked_four_or_five_from_end(self):
        assert normalize_path('/script.js') == '/script.js/'
        assert normalize_path('/archive.gz1') == '/archive.gz1'
        assert normalize_path('/data.c') == '/data.c/'

    def test_short_paths_untouched(self):
        assert normalize_path('/a/b') == '/a/b'
        assert normalize_path('/') == '/'
        assert normalize_path('') == ''


class TestHelpers:
    """Tests for shared decoding helpers."""

    def test_token_between(self):
        assert token_between('a=1 b=2 c=3', 'b=', ' c=') == '2'

    def test_token_between_uses_next_end_marker(self):
        assert token_between('x] a=1] b=2]', 'a=', ']') == '1'

    def test_token_between_missing(self):
        with pytest.raises(DecodeFailure):
            token_between('a=1', 'b=', ' ')

    def test_parse_minute_ignores_seconds(self):
        assert parse_minute('2024-01-15', '10:30:45') == parse_minute('2024-01-15', '10:30')

    def test_parse_minute_invalid(self):
        assert parse_minute('2024-13-45', '10:30:45') == 0
        assert parse_minute('2024-01-15', '') == 0


class TestGetDecoder:
    """Tests for decoder selection."""

    def test_default_is_nginx(self):
        decoder = get_decoder(AnalyzerConfig(file_name='x.log'))
        assert isinstance(decoder, NginxDecoder)
        assert decoder.parse_time is False

    def test_cloudfront_by_minute(self):
        config = AnalyzerConfig(file_name='x.log', input_format='cloudfront', aggregate_by='hm')
        decoder = get_decoder(config)
        assert isinstance(decoder, CloudFrontDecoder)
        assert decoder.parse_time is True
