"""Rendering of aggregation windows as text or JSON lines."""

import json
from typing import Callable

import click

from logalyzer.accumulator import RankedEntry
from logalyzer.models import AggregateBy, AnalyzerConfig, ReportEntry, WindowReport
from logalyzer.ranking import RankingResult, rank


SEPARATOR_FILL = '=' * 60


def format_separator(index: int, unique_count: int, top: int) -> str:
    """Separator printed between pages of ranked entries."""
    if top == 0:
        return f'============ {index}/{unique_count} {SEPARATOR_FILL}'
    return f'============ {index}/{top} ({unique_count} total){SEPARATOR_FILL}'


class Reporter:
    """Writes reports for flushed windows and full-display lines.

    Display policy, from config:
    - full_display: every accepted key as it is read (emit_line)
    - no hits: keys only, in encounter order
    - hits without statistics: keys with counts, in encounter order
    - statistics: ranked list, optionally truncated to `top` entries, with
      a separator every `separator_every` entries and, for human url
      output, a summary of the window
    """

    def __init__(self, config: AnalyzerConfig, echo: Callable[[str], None] = click.echo):
        self.config = config
        self.echo = echo

    def emit_line(self, key: str) -> None:
        """Print one key immediately (full-display mode)."""
        self.echo(f'{self.config.prefix}{key}')

    def report_window(self, entries: list[RankedEntry], total_accepted: int) -> None:
        """Render one flushed window.

        Args:
            entries: Snapshot of the window's accumulator
            total_accepted: Number of lines accepted in the window
        """
        if self.config.json_output:
            self._render_json(entries, total_accepted)
        elif not self.config.show_hits:
            self._render_raw(entries)
        elif not self.config.show_statistics:
            self._render_counts(entries)
        else:
            self._render_ranked(rank(entries), len(entries), total_accepted)

    def _render_raw(self, entries: list[RankedEntry]) -> None:
        for entry in entries:
            self.echo(f'{self.config.prefix}{entry.key}')

    def _render_counts(self, entries: list[RankedEntry]) -> None:
        for entry in entries:
            self.echo(f'URL: {self.config.prefix}{entry.key} hits: {entry.count}')

    def _ranked_line(self, index: int, entry: RankedEntry) -> str:
        prefix = self.config.prefix
        mode = self.config.aggregate_by

        if self.config.human:
            if mode is AggregateBy.URL:
                return f'{index} URL {prefix}{entry.key}: hits: {entry.count}'
            if mode is AggregateBy.URL_TIME:
                return f'{index} URL {prefix}{entry.key} hits: {entry.count}'
            return f'{index} Time: {entry.key}  hits: {entry.count}'

        if mode is AggregateBy.TIME:
            return f'{entry.key}  {entry.count}'
        return f'{prefix}{entry.key}  {entry.count}'

    def _render_ranked(self, ranking: RankingResult, unique_count: int, total_accepted: int) -> None:
        top = self.config.top
        period = self.config.separator_period

        for index, entry in enumerate(ranking.entries, start=1):
            self.echo(self._ranked_line(index, entry))

            if index == top:
                break

            if index % period == 0:
                self.echo(format_separator(index, unique_count, top))

        if self.config.human and self.config.aggregate_by is AggregateBy.URL:
            biggest_key = ranking.biggest.key if ranking.biggest else ''
            biggest_count = ranking.biggest.count if ranking.biggest else 0
            self.echo('')
            self.echo(f'Biggest URL: {self.config.prefix}{biggest_key} hits: {biggest_count}')
            self.echo(f'Total unique URLs: {unique_count}')
            self.echo(f'Total URLs accessed: {total_accepted}')

    def _render_json(self, entries: list[RankedEntry], total_accepted: int) -> None:
        biggest = None
        if self.config.show_statistics:
            ranking = rank(entries)
            selected = ranking.entries[: self.config.top] if self.config.top else ranking.entries
            if ranking.biggest:
                biggest = ReportEntry(key=ranking.biggest.key, hits=ranking.biggest.count)
        else:
            selected = entries

        report = WindowReport(
            entries=[ReportEntry(key=entry.key, hits=entry.count) for entry in selected],
            unique_keys=len(entries),
            total_accepted=total_accepted,
            biggest=biggest,
        )
        self.echo(json.dumps(report.model_dump(), indent=2))
