"""
Data loading module for the yield and price input series.

Provides abstractions and implementations for loading input series from various sources.
"""

from .base import BaseDataSource, BaseFilter, PriceSource, RecordFilter, YieldSource
from .cache import DailyCache, daily_cache_key
from .factory import DataSourceType, create_data_source
from .filters import CompositeFilter, CustomFilter, DateRangeFilter
from .loaders import (
    HexDailyStatsSource,
    JSONDataSource,
    PostgreSQLDataSource,
    price_record_from_row,
    yield_record_from_row,
)

__all__ = [
    # Base abstractions
    "YieldSource",
    "PriceSource",
    "RecordFilter",
    "BaseDataSource",
    "BaseFilter",
    # Concrete implementations
    "HexDailyStatsSource",
    "PostgreSQLDataSource",
    "JSONDataSource",
    "yield_record_from_row",
    "price_record_from_row",
    # Filters
    "DateRangeFilter",
    "CompositeFilter",
    "CustomFilter",
    # Cache
    "DailyCache",
    "daily_cache_key",
    # Factory
    "create_data_source",
    "DataSourceType",
]
