"""Drives the decode, filter, count and report pipeline over a file sequence."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from logalyzer.accumulator import Accumulator
from logalyzer.decoders import LineDecoder, get_decoder
from logalyzer.errors import DecodeFailure, ResourceError
from logalyzer.filters import FilterChain
from logalyzer.keys import KeyBuilder
from logalyzer.models import AnalyzerConfig
from logalyzer.report import Reporter
from logalyzer.sources import open_lines


logger = logging.getLogger(__name__)


class WindowPolicy(ABC):
    """Decides after which files the accumulator is flushed."""

    @abstractmethod
    def flush_after(self, file_number: int) -> bool:
        """Whether to flush once file number `file_number` (1-based) is done."""
        pass

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class PerFileWindow(WindowPolicy):
    def flush_after(self, file_number: int) -> bool:
        return True


class ChunkedWindow(WindowPolicy):
    def __init__(self, chunk_size: int):
        if chunk_size <= 0:
            raise ValueError(f'chunk size must be positive, got {chunk_size}')
        self.chunk_size = chunk_size

    def flush_after(self, file_number: int) -> bool:
        return file_number % self.chunk_size == 0

    def __repr__(self) -> str:
        return f'ChunkedWindow({self.chunk_size})'


class WholeRunWindow(WindowPolicy):
    def flush_after(self, file_number: int) -> bool:
        return False


def window_policy_for(config: AnalyzerConfig) -> WindowPolicy:
    if not config.aggregate:
        return PerFileWindow()
    if config.aggregate_every:
        return ChunkedWindow(config.aggregate_every)
    return WholeRunWindow()


@dataclass
class RunState:
    """Progress of one run."""

    file_count: int
    max_lines: int
    file_number: int = 0
    window_accepted: int = 0  # Accepted lines in the current window, checked against max_lines
    window_files: int = 0  # Files read since the last flush
    skipped_lines: int = 0  # Malformed lines in the current file

    def cap_reached(self) -> bool:
        """Whether one more accepted line would go over max_lines."""
        return self.max_lines != 0 and self.window_accepted + 1 > self.max_lines


class RunController:
    """Runs the pipeline across files and flushes windows per its policy.

    Each file is read lazily. A line that fails to decode is skipped; a file
    that cannot be opened aborts the run with ResourceError after the
    pending window, if any, has been reported.

    Line cap: an accepted line is only counted while the window's accepted
    count stays at or below max_lines. When the next line would exceed it
    the rest of the current file is not read. The count is not reset between
    files of the same window, so later files in that window stop after their
    first accepted line.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        reporter: Reporter | None = None,
        decoder: LineDecoder | None = None,
    ):
        self.config = config
        self.decoder = decoder or get_decoder(config)
        self.filters = FilterChain(config)
        self.keys = KeyBuilder(config)
        self.reporter = reporter or Reporter(config)
        self.policy = window_policy_for(config)
        self.accumulator = Accumulator()
        self.state: RunState | None = None

    def run(self, files: list[str]) -> RunState:
        """Process files in order and report every window.

        Returns:
            The final run state.

        Raises:
            ResourceError: If a file cannot be opened
        """
        self.state = RunState(file_count=len(files), max_lines=self.config.max_lines)
        logger.debug(f'Processing {len(files)} files with {self.policy!r}')

        for filepath in files:
            self.state.file_number += 1
            logger.info(f'{self.state.file_number}/{self.state.file_count} file: {filepath}')

            try:
                self.process_file(filepath)
            except ResourceError:
                if self.state.window_accepted and not self.config.full_display:
                    logger.warning('Reporting pending window before aborting')
                    self.flush()
                raise

            if not self.config.full_display and self.policy.flush_after(self.state.file_number):
                self.flush()

        if not self.config.full_display and self._final_flush_pending():
            self.flush()

        return self.state

    def _final_flush_pending(self) -> bool:
        if isinstance(self.policy, WholeRunWindow):
            return True
        return self.state.window_files > 0

    def process_file(self, filepath: str) -> None:
        """Feed every line of one file through decode, filter and count."""
        state = self.state
        state.skipped_lines = 0
        state.window_files += 1

        with open_lines(filepath, header_lines=self.decoder.header_lines) as lines:
            for line in lines:
                try:
                    decoded = self.decoder.decode(line)
                except DecodeFailure:
                    state.skipped_lines += 1
                    continue

                if not self.filters.accept(decoded):
                    continue

                if state.cap_reached():
                    logger.info(f'Line limit {state.max_lines} reached, skipping rest of {filepath}')
                    break

                key = self.keys.build_key(decoded)
                if self.config.full_display:
                    self.reporter.emit_line(key)
                else:
                    self.accumulator.increment(key)
                state.window_accepted += 1

        if state.skipped_lines:
            logger.info(f'Skipped {state.skipped_lines} malformed lines in {filepath}')

    def flush(self) -> None:
        """Snapshot and reset the accumulator, then report the window."""
        entries = self.accumulator.snapshot_and_reset()
        accepted = self.state.window_accepted
        logger.debug(f'Flushing window: {len(entries)} keys, {accepted} lines')

        self.state.window_accepted = 0
        self.state.window_files = 0
        self.reporter.report_window(entries, accepted)
