"""Running yield totals and per-day backing ratios."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from backinglib.errors import ConfigurationError
from backinglib.schema.records import BackingPoint, YieldRecord
from backinglib.utils.date import days_between, to_date

logger = logging.getLogger(__name__)


class CumulativeYieldAccumulator:
    """Walks a normalized yield series from the stake start date.

    ``backing_ratio = (cumulative_yield + principal) / denominator``, where the
    denominator is either the stake principal or the token supply depending
    on the instrument. Day indices are ``start_day`` plus the calendar-day
    offset from ``start_date``.
    """

    def __init__(
        self,
        start_date: Optional[date],
        principal: float,
        shares_held: float,
        denominator: float,
        start_day: int = 0,
    ):
        if start_date is None:
            raise ConfigurationError("start_date is required for yield accumulation")
        if denominator is None or denominator <= 0:
            raise ConfigurationError(f"denominator must be positive: {denominator}")
        self.start_date = to_date(start_date)
        self.principal = float(principal)
        self.shares_held = float(shares_held)
        self.denominator = float(denominator)
        self.start_day = int(start_day)

    def day_index(self, day: date) -> int:
        return self.start_day + days_between(self.start_date, day)

    def backing_ratio(self, cumulative_yield: float) -> float:
        return (cumulative_yield + self.principal) / self.denominator

    def accumulate(self, yields: Iterable[YieldRecord]) -> List[BackingPoint]:
        """Build one BackingPoint per yield day on or after ``start_date``.

        Records are expected to be normalized (calendar-day dates, float or
        None payouts). A missing payout contributes zero yield; the day is kept.
        """
        eligible = sorted(
            (r for r in yields if to_date(r.date) >= self.start_date),
            key=lambda r: to_date(r.date),
        )

        points: List[BackingPoint] = []
        cumulative = 0.0
        for record in eligible:
            payout = record.payout_per_share_unit
            daily = payout * self.shares_held if isinstance(payout, (int, float)) else 0.0
            cumulative += daily
            day = to_date(record.date)
            points.append(
                BackingPoint(
                    date=day,
                    day_index=self.day_index(day),
                    daily_yield=daily,
                    cumulative_yield=cumulative,
                    backing_ratio=self.backing_ratio(cumulative),
                )
            )

        logger.debug(
            "Accumulated %d yield days from %s (cumulative=%s)",
            len(points),
            self.start_date,
            cumulative,
        )
        return points
