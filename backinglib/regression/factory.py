"""
Factory for creating regression models.
"""
from typing import Sequence, Union

from .base import RegressionModel
from .exponential import ExponentialRegression
from .linear import LinearRegression
from backinglib.schema.enums import RegressionKind


def create_regression(kind: Union[str, RegressionKind],
                      days: Sequence[float],
                      values: Sequence[float],
                      anchor_day: int,
                      **params) -> RegressionModel:
    """
    Create and fit a regression model by kind.

    Args:
        kind: RegressionKind or its name ("EXPONENTIAL", "LINEAR")
        days: Day indices
        values: Backing ratios
        anchor_day: Day forced through the anchor value
        **params: Model-specific knobs (curve_intensity, slope_multiplier, anchor_value)

    Returns:
        Fitted model
    """
    if isinstance(kind, str):
        try:
            kind = RegressionKind[kind.upper()]
        except KeyError:
            raise ValueError(f"Unknown regression kind: {kind}. "
                             f"Available: EXPONENTIAL, LINEAR") from None

    if kind == RegressionKind.EXPONENTIAL:
        return ExponentialRegression(days, values, anchor_day, **params)
    elif kind == RegressionKind.LINEAR:
        return LinearRegression(days, values, anchor_day, **params)
    else:
        raise ValueError(f"Unsupported regression kind: {kind}")
