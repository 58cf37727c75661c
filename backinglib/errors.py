"""Exception types raised by the backing-ratio projection engine."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional


class BackingEngineError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(BackingEngineError, ValueError):
    """Raised at construction time when required configuration is missing or invalid."""


class InsufficientDataError(BackingEngineError):
    """Raised when the historical series is too short to fit a regression."""


class DataSourceError(BackingEngineError):
    """Raised when an input series cannot be fetched or decoded."""


class MalformedRecordWarning(UserWarning):
    """A single non-numeric field that was coerced and kept.

    Instances are collected as diagnostics, never raised.
    """

    def __init__(self, day: Optional[date], field: str, raw_value: Any):
        self.day = day
        self.field = field
        self.raw_value = raw_value
        super().__init__(f"{day}: malformed {field}={raw_value!r}")
