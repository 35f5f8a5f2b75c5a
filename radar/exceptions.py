"""Exception types raised by the radar outside of the (total) classifiers."""

from typing import Any, Optional


class RadarError(Exception):
    """Base class for radar errors."""


class StoreUnavailableError(RadarError):
    """The keyword store could not be reached; the run was aborted.

    ``summary`` carries whatever work completed before the abort so the
    caller can report partial progress.
    """

    def __init__(self, message: str, summary: Optional[Any] = None):
        super().__init__(message)
        self.summary = summary


class KeywordNotFoundError(RadarError):
    """No keyword row matched the requested id or text."""
