"""
Historical series construction: alignment, yield accumulation and discount.
"""

from .accumulator import CumulativeYieldAccumulator
from .discount import DiscountCalculator
from .normalizer import AlignedSeries, SeriesNormalizer, coerce_decimal

__all__ = [
    "SeriesNormalizer",
    "AlignedSeries",
    "coerce_decimal",
    "CumulativeYieldAccumulator",
    "DiscountCalculator",
]
