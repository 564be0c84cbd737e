"""CLI entry point for logalyzer"""

import sys

import click

from logalyzer.__version__ import __version__
from logalyzer.errors import ConfigError, ResourceError
from logalyzer.models import DEFAULT_SEPARATOR_EVERY, AggregateBy, AnalyzerConfig, InputFormat
from logalyzer.runner import RunController
from logalyzer.sources import select_files
from logalyzer.utils import setup_logging


@click.command('logalyzer')
@click.version_option(version=__version__, prog_name='logalyzer')
@click.option(
    '--format',
    'input_format',
    type=click.Choice([f.value for f in InputFormat]),
    default=InputFormat.NGINX.value,
    show_default=True,
    help='Input file format',
)
@click.option('--file', '-f', 'file_name', default=None, help='File to parse')
@click.option('--dir', '-d', 'directory', default=None, help='Directory to load files from, overrides --file')
@click.option('--file-regex', 'file_pattern', default='.*', show_default=True, help='Regex of file names to parse')
@click.option('--url', 'url_pattern', default='.*', show_default=True, help='Regex of urls to count')
@click.option('--ignore-query-string', is_flag=True, help='Ignore the query string of urls')
@click.option('--method', default='', help='Only count this request method (GET, POST, ...)')
@click.option(
    '--cdn-result',
    default='',
    help='Only count this CloudFront result: Hit, RefreshHit, Miss, Pass (RefreshHit, Miss), '
    'LimitExceded, CapacityExceeded, Exceed (LimitExceded, CapacityExceeded), Error',
)
@click.option('--limit', '-l', 'max_lines', type=click.IntRange(min=0), default=0, help='Lines to count, 0 = all')
@click.option('--hits', 'show_hits', is_flag=True, help='Show hits for each key')
@click.option('--stats', '-s', 'show_statistics', is_flag=True, help='Rank keys by hits (implies --hits)')
@click.option('--human/--terse', default=True, show_default=True, help='Human annotated or terse ranked output')
@click.option('--full-display', is_flag=True, help='Print every url as it is read; only --limit and --prefix apply')
@click.option('--aggregate', '-a', is_flag=True, help='Aggregate data from all input files')
@click.option(
    '--aggregate-every',
    type=click.IntRange(min=0),
    default=0,
    help='With --aggregate, report every N files, 0 = once at the end',
)
@click.option(
    '--aggregate-by',
    type=click.Choice([a.value for a in AggregateBy]),
    default=AggregateBy.URL.value,
    show_default=True,
    help='url, hm (hits/minute) or uhm (url hits/minute)',
)
@click.option('--top', type=click.IntRange(min=0), default=0, help='With --stats, show only the first N keys')
@click.option(
    '--separator-every',
    type=click.IntRange(min=0),
    default=DEFAULT_SEPARATOR_EVERY,
    show_default=True,
    help='With --stats, print a separator every N keys, 0 = default',
)
@click.option('--prefix', '-p', default='', help='Prefix printed before urls')
@click.option('--json', 'json_output', is_flag=True, help='Output each report as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Log progress to stderr')
def main(verbose: bool, **options):
    """Count and rank access log lines by url and/or minute.

    \b
    Examples:
        logalyzer -f access.log -s
        logalyzer -f access.log -s --top 20 --method POST
        logalyzer --format cloudfront -d logs/ --file-regex '\\.log$' -a -s
        logalyzer --format cloudfront -f cf.log -s --aggregate-by hm --terse
        logalyzer -f access.log --full-display -p https://example.com
    """
    setup_logging(verbose)

    try:
        config = AnalyzerConfig.build(**options)
        files = select_files(config.file_name, config.directory, config.file_pattern)
        RunController(config).run(files)
    except (ConfigError, ResourceError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
