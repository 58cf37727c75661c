"""
Schema package: record types and enums shared across the engine.
"""

from .enums import Chain, DenominatorMode, RegressionKind
from .records import BackingPoint, PriceRecord, ProjectedPoint, YieldRecord

__all__ = [
    "Chain",
    "DenominatorMode",
    "RegressionKind",
    "YieldRecord",
    "PriceRecord",
    "BackingPoint",
    "ProjectedPoint",
]
