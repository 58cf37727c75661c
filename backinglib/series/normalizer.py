"""
Alignment of the yield and price series onto canonical calendar days.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from backinglib.errors import MalformedRecordWarning
from backinglib.schema.records import PriceRecord, YieldRecord
from backinglib.utils.date import to_date

logger = logging.getLogger(__name__)


def coerce_decimal(value: Any) -> Optional[float]:
    """Convert a raw numeric field to float, or None when it is not a usable number.

    Empty strings, non-numeric strings, booleans, NaN and infinities all map to
    None; nothing maps to 0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass
class AlignedSeries:
    """Normalizer output.

    Attributes:
        yields: Yield records with calendar-day dates, ascending, one per day
        prices: Calendar day -> price record with float-or-None prices
        malformed: Fields that were coerced to None
    """

    yields: List[YieldRecord]
    prices: Dict[date, PriceRecord]
    malformed: List[MalformedRecordWarning] = field(default_factory=list)


class SeriesNormalizer:
    """Keys both input series by calendar day.

    Timestamps are truncated to their UTC date. When two records land on the
    same day the later one in input order wins. Missing days are left
    missing; nothing is interpolated or carried forward. The normalizer holds
    no per-run state, so one instance can serve concurrent builds.
    """

    @staticmethod
    def _coerce(
        value: Any, day: date, field_name: str, malformed: List[MalformedRecordWarning]
    ) -> Optional[float]:
        number = coerce_decimal(value)
        if number is None and value is not None:
            malformed.append(MalformedRecordWarning(day, field_name, value))
            logger.debug("Coerced %s=%r on %s to None", field_name, value, day)
        return number

    def normalize_yields(
        self,
        records: Iterable[YieldRecord],
        malformed: Optional[List[MalformedRecordWarning]] = None,
    ) -> List[YieldRecord]:
        if malformed is None:
            malformed = []
        by_day: Dict[date, YieldRecord] = {}
        for record in records:
            day = to_date(record.date)
            payout = self._coerce(
                record.payout_per_share_unit, day, "payout_per_share_unit", malformed
            )
            by_day[day] = replace(record, date=day, payout_per_share_unit=payout)
        return [by_day[day] for day in sorted(by_day)]

    def normalize_prices(
        self,
        records: Iterable[PriceRecord],
        malformed: Optional[List[MalformedRecordWarning]] = None,
    ) -> Dict[date, PriceRecord]:
        if malformed is None:
            malformed = []
        by_day: Dict[date, PriceRecord] = {}
        for record in records:
            day = to_date(record.date)
            tracked = self._coerce(record.tracked_price, day, "tracked_price", malformed)
            reference = self._coerce(record.reference_price, day, "reference_price", malformed)
            fallback = self._coerce(
                record.fallback_reference_price, day, "fallback_reference_price", malformed
            )
            # A zero/absent primary reference falls through to the fallback column.
            if not reference and fallback is not None:
                reference = fallback
            by_day[day] = PriceRecord(
                date=day,
                tracked_price=tracked,
                reference_price=reference,
                fallback_reference_price=fallback,
            )
        return by_day

    def align(
        self, yields: Iterable[YieldRecord], prices: Iterable[PriceRecord]
    ) -> AlignedSeries:
        malformed: List[MalformedRecordWarning] = []
        aligned = AlignedSeries(
            yields=self.normalize_yields(yields, malformed),
            prices=self.normalize_prices(prices, malformed),
            malformed=malformed,
        )
        if aligned.malformed:
            logger.warning(
                "Coerced %d malformed numeric field(s) to None", len(aligned.malformed)
            )
        return aligned
