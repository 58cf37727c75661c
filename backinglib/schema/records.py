"""
Record schemas for the yield, price, historical and projected series.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

DateLike = Union[date, datetime, str]
RawNumber = Union[float, int, str, None]


@dataclass(frozen=True)
class YieldRecord:
    """One day of protocol yield accrual.

    As fetched, ``date`` may carry a time part and ``payout_per_share_unit``
    may be a string; :class:`~backinglib.series.SeriesNormalizer` returns
    copies with a calendar ``date`` and a float-or-None payout.
    """

    date: DateLike
    payout_per_share_unit: RawNumber
    raw_fields: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class PriceRecord:
    """One day of market prices for the tracked and reference tokens."""

    date: DateLike
    tracked_price: RawNumber
    reference_price: RawNumber
    # Used when reference_price is missing or unusable (e.g. pHEX -> eHEX).
    fallback_reference_price: RawNumber = None


@dataclass(frozen=True)
class BackingPoint:
    """Derived historical point: accumulated yield and backing ratio for one day."""

    date: date
    day_index: int
    daily_yield: float
    cumulative_yield: float
    backing_ratio: float
    discount: Optional[float] = None


@dataclass(frozen=True)
class ProjectedPoint:
    """One output day, historical or projected.

    Attributes:
        date: Calendar day of the point
        day_index: Day number on the configured epoch
        backing_ratio: Observed backing ratio (None past the last historical day)
        discount: Observed market discount (None when there is no price signal)
        trend_value: Exponential regression evaluated at ``day_index``
        linear_trend: Linear regression evaluated at ``day_index``
        sine_trend: Damped oscillation projection (None on and before the last historical day)
    """

    date: date
    day_index: int
    backing_ratio: Optional[float]
    discount: Optional[float]
    trend_value: float
    linear_trend: float
    sine_trend: Optional[float]

    @property
    def is_historical(self) -> bool:
        return self.backing_ratio is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "dayIndex": self.day_index,
            "backingRatio": self.backing_ratio,
            "discount": self.discount,
            "trendValue": self.trend_value,
            "linearTrend": self.linear_trend,
            "sineTrend": self.sine_trend,
        }
