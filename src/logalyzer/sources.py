"""File selection and lazy line reading."""

import logging
import os
import re
from collections.abc import Iterator
from contextlib import contextmanager
from itertools import islice

from logalyzer.errors import ConfigError, ResourceError


logger = logging.getLogger(__name__)


def select_files(file_name: str | None = None, directory: str | None = None, file_pattern: str = '.*') -> list[str]:
    """Resolve the ordered list of files to process.

    A directory takes precedence over a single file. Directory entries are
    filtered to regular files whose name matches file_pattern and returned
    sorted by name.

    Args:
        file_name: Single file to process
        directory: Directory to list
        file_pattern: Regex searched in each file name

    Returns:
        List of file paths

    Raises:
        ConfigError: If neither input is given or file_pattern is invalid
        ResourceError: If the directory cannot be listed
    """
    if not directory:
        if not file_name:
            raise ConfigError('filename or directory not specified')
        return [file_name]

    try:
        regex = re.compile(file_pattern)
    except re.error as e:
        raise ConfigError(f'invalid file regex {file_pattern!r}: {e}') from e

    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise ResourceError(f'cannot list directory {directory}: {e}') from e

    files = []
    for name in names:
        filepath = os.path.join(directory, name)
        if os.path.isfile(filepath) and regex.search(name):
            files.append(filepath)

    logger.debug(f'Selected {len(files)} of {len(names)} entries in {directory}')
    return files


@contextmanager
def open_lines(filepath: str, header_lines: int = 0) -> Iterator[Iterator[str]]:
    """Open a file and yield a lazy iterator over its lines.

    Lines end at a line feed only. A carriage return right before it is
    dropped, one inside a record is kept. Undecodable bytes are replaced.
    The file is closed on every exit path, including when the caller stops
    iterating early.

    Args:
        filepath: File to read
        header_lines: Number of leading lines to discard

    Raises:
        ResourceError: If the file cannot be opened
    """
    try:
        f = open(filepath, encoding='utf-8', errors='replace', newline='\n')
    except OSError as e:
        raise ResourceError(f'error opening file: {e}') from e

    with f:
        lines = (line.rstrip('\r\n') for line in f)
        yield islice(lines, header_lines, None)
