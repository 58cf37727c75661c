"""High-level builder for the historical + projected backing series."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from backinglib.errors import InsufficientDataError, MalformedRecordWarning
from backinglib.regression import (
    DampedOscillationProjector,
    ExponentialRegression,
    LinearRegression,
)
from backinglib.schema.records import BackingPoint, PriceRecord, ProjectedPoint, YieldRecord
from backinglib.series import CumulativeYieldAccumulator, DiscountCalculator, SeriesNormalizer
from backinglib.utils.date import add_days, utc_today

from .config import ProjectionConfig
from .results import FittedModels, ProjectionResult

logger = logging.getLogger(__name__)


class ProjectionSeriesBuilder:
    """Normalizes inputs, fits the trends and emits one point per day.

    The output covers ``config.start_day`` to ``config.end_day`` inclusive.
    Days with a historical point carry the observed backing ratio and
    discount; later days carry only trend values and the oscillation.
    """

    def __init__(self, config: ProjectionConfig, as_of: Optional[date] = None):
        self.config = config
        self.as_of = as_of
        self.normalizer = SeriesNormalizer()
        self.accumulator = CumulativeYieldAccumulator(
            start_date=config.start_date,
            principal=config.principal,
            shares_held=config.shares_held,
            denominator=config.denominator,
            start_day=config.start_day,
        )
        self.discounts = DiscountCalculator(config.discount_alert_threshold)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def build_history(
        self, yields: Iterable[YieldRecord], prices: Iterable[PriceRecord]
    ) -> Tuple[List[BackingPoint], List[MalformedRecordWarning]]:
        aligned = self.normalizer.align(yields, prices)
        points = self.accumulator.accumulate(aligned.yields)
        return self.discounts.apply(points, aligned.prices), aligned.malformed

    # ------------------------------------------------------------------
    # Fit
    # ------------------------------------------------------------------
    def fit(self, history: List[BackingPoint]) -> FittedModels:
        if len(history) < 2:
            raise InsufficientDataError(
                f"Need at least 2 historical points to fit trends, got {len(history)}"
            )
        days = [p.day_index for p in history]
        ratios = [p.backing_ratio for p in history]
        anchor = self.config.start_day

        exponential = ExponentialRegression(
            days, ratios, anchor, curve_intensity=self.config.curve_intensity
        )
        linear = LinearRegression(
            days, ratios, anchor, slope_multiplier=self.config.slope_multiplier
        )
        oscillation = DampedOscillationProjector(
            exponential, max(days), self.config.oscillation_params()
        )
        logger.debug("Exponential: %s", exponential.equation)
        logger.debug("Linear: %s", linear.equation)
        return FittedModels(exponential=exponential, linear=linear, oscillation=oscillation)

    # ------------------------------------------------------------------
    # Project
    # ------------------------------------------------------------------
    def project(self, history: List[BackingPoint], models: FittedModels) -> List[ProjectedPoint]:
        by_day: Dict[int, BackingPoint] = {p.day_index: p for p in history}
        last_day = models.last_historical_day
        today = self.as_of or utc_today()

        series: List[ProjectedPoint] = []
        for day in range(self.config.start_day, self.config.end_day + 1):
            trend = models.exponential.calculate(day)
            linear = models.linear.calculate(day)
            point = by_day.get(day)
            if point is not None:
                series.append(
                    ProjectedPoint(
                        date=point.date,
                        day_index=day,
                        backing_ratio=point.backing_ratio,
                        discount=point.discount,
                        trend_value=trend,
                        linear_trend=linear,
                        sine_trend=None,
                    )
                )
                continue

            if day > last_day:
                point_date = add_days(today, day - last_day)
            else:
                # Gap inside the observed range: keep the calendar mapping.
                point_date = add_days(self.config.start_date, day - self.config.start_day)
            series.append(
                ProjectedPoint(
                    date=point_date,
                    day_index=day,
                    backing_ratio=None,
                    discount=None,
                    trend_value=trend,
                    linear_trend=linear,
                    sine_trend=models.oscillation.calculate(day),
                )
            )
        return series

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------
    def build(
        self, yields: Iterable[YieldRecord], prices: Iterable[PriceRecord]
    ) -> ProjectionResult:
        history, malformed = self.build_history(yields, prices)
        models = self.fit(history)
        points = self.project(history, models)
        logger.info(
            "Built %d points (%d historical, last day %d)",
            len(points),
            len(history),
            models.last_historical_day,
        )
        return ProjectionResult(
            points=points, history=history, models=models, malformed=malformed
        )


def project_backing_series(
    yields: Iterable[YieldRecord],
    prices: Iterable[PriceRecord],
    config: ProjectionConfig,
    as_of: Optional[date] = None,
) -> List[ProjectedPoint]:
    builder = ProjectionSeriesBuilder(config, as_of=as_of)
    return builder.build(yields, prices).points
