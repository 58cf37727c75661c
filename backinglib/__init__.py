"""Backing-ratio projection engine for HEX stake-backed tokens.

Fuses the protocol yield series and market price series into a daily
backing ratio and market discount, then extends the ratio past the last
observed day with anchored exponential/linear trends and a damped
oscillation.

Key modules:
- series: alignment, yield accumulation and discount
- regression: anchored trend models and the damped oscillation
- projection: configuration, series builder and async service
- data: yield/price loaders, filters and the daily cache
- conventions: predefined stake-backed instruments
"""

__version__ = "1.0.0"

from .conventions import StakeInstrument, get_instrument
from .errors import (
    BackingEngineError,
    ConfigurationError,
    DataSourceError,
    InsufficientDataError,
    MalformedRecordWarning,
)
from .projection import (
    BackingProjectionService,
    ProjectionConfig,
    ProjectionResult,
    ProjectionSeriesBuilder,
    project_backing_series,
)
from .schema import BackingPoint, PriceRecord, ProjectedPoint, YieldRecord

__all__ = [
    "__version__",
    "ProjectionConfig",
    "ProjectionSeriesBuilder",
    "ProjectionResult",
    "BackingProjectionService",
    "project_backing_series",
    "StakeInstrument",
    "get_instrument",
    "YieldRecord",
    "PriceRecord",
    "BackingPoint",
    "ProjectedPoint",
    "BackingEngineError",
    "ConfigurationError",
    "InsufficientDataError",
    "DataSourceError",
    "MalformedRecordWarning",
]
