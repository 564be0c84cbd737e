"""Error types raised by the analysis pipeline."""


class LogalyzerError(Exception):
    """Base class for all logalyzer errors."""


class ConfigError(LogalyzerError):
    """Invalid or missing configuration. Raised before any file is read."""


class ResourceError(LogalyzerError):
    """A selected file or directory cannot be opened or read."""


class DecodeFailure(LogalyzerError):
    """A single line does not have the shape its dialect expects.

    Never fatal: the run controller skips the line and moves on.
    """
