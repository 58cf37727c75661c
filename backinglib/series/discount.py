"""Market discount: tracked token price over reference token price."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional

from backinglib.schema.records import BackingPoint, PriceRecord

logger = logging.getLogger(__name__)


class DiscountCalculator:
    """Attaches the per-day price ratio to historical backing points."""

    def __init__(self, alert_threshold: Optional[float] = None):
        self.alert_threshold = alert_threshold

    @staticmethod
    def ratio(tracked_price: Optional[float], reference_price: Optional[float]) -> Optional[float]:
        """tracked / reference when both are positive numbers, otherwise None."""
        if not isinstance(tracked_price, (int, float)) or not isinstance(
            reference_price, (int, float)
        ):
            return None
        if tracked_price <= 0 or reference_price <= 0:
            return None
        return tracked_price / reference_price

    def discount_for(self, price: Optional[PriceRecord]) -> Optional[float]:
        if price is None:
            return None
        discount = self.ratio(price.tracked_price, price.reference_price)
        if (
            discount is not None
            and self.alert_threshold is not None
            and discount > self.alert_threshold
        ):
            logger.debug(
                "High price ratio on %s: %s / %s = %s",
                price.date,
                price.tracked_price,
                price.reference_price,
                discount,
            )
        return discount

    def apply(
        self, points: List[BackingPoint], prices: Dict[date, PriceRecord]
    ) -> List[BackingPoint]:
        return [replace(p, discount=self.discount_for(prices.get(p.date))) for p in points]
