"""
Factory for creating data sources.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from .base import BaseDataSource
from .filters import DateRangeFilter
from .loaders import HexDailyStatsSource, JSONDataSource, PostgreSQLDataSource


class DataSourceType(Enum):
    """Supported data source types."""
    HTTP = "http"
    POSTGRESQL = "postgresql"
    JSON = "json"


def create_data_source(
    source_type: DataSourceType,
    **kwargs
) -> BaseDataSource:
    """
    Create data source with appropriate configuration.

    Args:
        source_type: Type of data source to create
        **kwargs: Configuration parameters specific to source type;
            ``start``/``end`` add a :class:`DateRangeFilter`

    Returns:
        Configured data source

    Examples:
        >>> # HEX daily stats over HTTP
        >>> source = create_data_source(DataSourceType.HTTP)

        >>> # PostgreSQL price history with custom config
        >>> source = create_data_source(
        ...     DataSourceType.POSTGRESQL,
        ...     host="localhost",
        ...     port=5432
        ... )

        >>> # JSON files
        >>> source = create_data_source(
        ...     DataSourceType.JSON,
        ...     data_directory="/path/to/data"
        ... )
    """
    if source_type == DataSourceType.HTTP:
        source = HexDailyStatsSource(
            base_url=kwargs.get("base_url", "https://hexdailystats.com"),
            client=kwargs.get("client"),
            timeout=kwargs.get("timeout", 10.0),
        )
    elif source_type == DataSourceType.POSTGRESQL:
        source = PostgreSQLDataSource(
            host=kwargs.get("host"),
            port=kwargs.get("port"),
            user=kwargs.get("user"),
            password=kwargs.get("password"),
            database=kwargs.get("database"),
        )
    elif source_type == DataSourceType.JSON:
        data_directory: Optional[str] = kwargs.get("data_directory")
        if not data_directory:
            raise ValueError("data_directory required for JSON data source")
        source = JSONDataSource(data_directory=Path(data_directory))
    else:
        raise ValueError(f"Unsupported data source type: {source_type}")

    if kwargs.get("start") is not None or kwargs.get("end") is not None:
        source.add_filter(DateRangeFilter(kwargs.get("start"), kwargs.get("end")))

    return source
