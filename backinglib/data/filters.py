"""
Record filtering strategies.

Provides composable filters for yield and price records.
"""

from datetime import date
from typing import Callable, List, Optional

from backinglib.utils.date import to_date

from .base import BaseFilter, R


class DateRangeFilter(BaseFilter):
    """
    Keep records whose calendar day falls in a closed range.
    """

    def __init__(self, start: Optional[date] = None, end: Optional[date] = None):
        """
        Initialize date range filter.

        Args:
            start: First day kept (inclusive), None for no lower bound
            end: Last day kept (inclusive), None for no upper bound
        """
        self.start = to_date(start) if start is not None else None
        self.end = to_date(end) if end is not None else None

    def filter(self, records: List[R]) -> List[R]:
        result = records

        if self.start is not None:
            result = [r for r in result if to_date(r.date) >= self.start]

        if self.end is not None:
            result = [r for r in result if to_date(r.date) <= self.end]

        return result


class CustomFilter(BaseFilter):
    """
    Filter records using a custom predicate function.
    """

    def __init__(self, predicate: Callable[[R], bool]):
        """
        Initialize custom filter.

        Args:
            predicate: Function that returns True if record should be kept
        """
        self.predicate = predicate

    def filter(self, records: List[R]) -> List[R]:
        return [r for r in records if self.predicate(r)]


class CompositeFilter(BaseFilter):
    """
    Combine multiple filters using AND logic.
    """

    def __init__(self, filters: List[BaseFilter]):
        self.filters = filters

    def add_filter(self, filter_instance: BaseFilter) -> None:
        self.filters.append(filter_instance)

    def filter(self, records: List[R]) -> List[R]:
        """
        Apply all filters in sequence.

        Args:
            records: Records to filter

        Returns:
            Records that pass all filters
        """
        result = records
        for f in self.filters:
            result = f.filter(result)
        return result
