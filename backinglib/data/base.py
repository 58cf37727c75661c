"""
Base abstractions for input series loading.

Defines interfaces for yield sources, price sources and record filters.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Protocol, TypeVar, runtime_checkable

from backinglib.conventions.instruments import StakeInstrument
from backinglib.schema.enums import Chain
from backinglib.schema.records import PriceRecord, YieldRecord

R = TypeVar("R", YieldRecord, PriceRecord)


@runtime_checkable
class YieldSource(Protocol):
    """
    Protocol for protocol-yield sources.

    Loads the daily payout-per-share series from any source (HTTP, file, ...).
    """

    def load_yield_records(
        self,
        chain: Chain,
        start_date: Optional[date] = None,
    ) -> List[YieldRecord]:
        """
        Load the daily yield series for a chain.

        Args:
            chain: Chain whose HEX daily stats to load
            start_date: Optional first day of interest

        Returns:
            List of YieldRecord objects
        """
        ...


@runtime_checkable
class PriceSource(Protocol):
    """
    Protocol for historic price sources.
    """

    def load_price_records(
        self,
        instrument: StakeInstrument,
        start_date: Optional[date] = None,
    ) -> List[PriceRecord]:
        """
        Load tracked/reference prices for an instrument.

        Args:
            instrument: Instrument whose price columns to read
            start_date: Optional first day of interest

        Returns:
            List of PriceRecord objects
        """
        ...


@runtime_checkable
class RecordFilter(Protocol):
    """
    Protocol for filtering loaded records.

    Allows composable filtering strategies.
    """

    def filter(self, records: List[R]) -> List[R]:
        ...


class BaseDataSource(ABC):
    """
    Abstract base class for data sources.

    Provides filter registration shared by concrete implementations.
    """

    def __init__(self):
        """Initialize data source."""
        self._filters: List[RecordFilter] = []

    def add_filter(self, filter_instance: RecordFilter) -> None:
        """
        Add a filter to be applied when loading records.

        Args:
            filter_instance: Filter to add
        """
        self._filters.append(filter_instance)

    def _apply_filters(self, records: List[R]) -> List[R]:
        """
        Apply all registered filters to records.

        Args:
            records: Records to filter

        Returns:
            Filtered records
        """
        result = records
        for filter_instance in self._filters:
            result = filter_instance.filter(result)
        return result


class BaseFilter(ABC):
    """
    Abstract base class for record filters.
    """

    @abstractmethod
    def filter(self, records: List[R]) -> List[R]:
        """
        Filter records based on specific criteria.

        Args:
            records: Records to filter

        Returns:
            Filtered records
        """
        pass
