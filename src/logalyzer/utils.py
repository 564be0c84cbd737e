"""Utility functions for logalyzer"""

import logging
import os


LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def get_log_level(verbose: bool = False) -> int:
    """
    Resolve the log level.

    --verbose forces INFO unless LOGALYZER_LOG_LEVEL asks for something
    more detailed. Unknown level names fall back to WARNING.
    """
    name = get_str_env('LOGALYZER_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    if verbose:
        level = min(level, logging.INFO)
    return level


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr so they never mix with report output."""
    logging.basicConfig(level=get_log_level(verbose), format=LOG_FORMAT, force=True)
