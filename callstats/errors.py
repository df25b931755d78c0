"""
callstats/errors.py
Exception types raised by the dataset codec, store and writers.
"""

from pathlib import Path
from typing import Optional, Union


class CallStatsError(Exception):
    """Base class for every error raised by callstats."""


class DataFormatError(CallStatsError, ValueError):
    """A dataset line could not be turned into a CallRecord."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line        = line
        self.reason      = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class DatasetIOError(CallStatsError, OSError):
    """Reading or writing a dataset (or report) file failed."""

    def __init__(self, path: Union[str, Path], message: str, cause: Optional[OSError] = None):
        self.path  = Path(path)
        self.cause = cause
        detail = f" ({cause.strerror or cause})" if cause else ''
        super().__init__(f"{message}: {self.path}{detail}")
