"""
Exponential trend with a damped growth rate.
"""
import logging
import math
from typing import List, Sequence

import numpy as np

from .base import RegressionModel
from backinglib.errors import InsufficientDataError
from backinglib.schema.enums import RegressionKind

logger = logging.getLogger(__name__)


class ExponentialRegression(RegressionModel):
    """``y = anchor_value * exp(a*x * curve_intensity)`` with ``x = day - anchor_day``.

    ``a`` is the OLS slope of ln(y) on x. The fitted intercept is discarded
    and the curve is scaled by ``anchor_value``, so it passes through the
    anchor regardless of the data or the intensity. This is a modelling
    choice, not the textbook log-linear fit.
    """

    kind = RegressionKind.EXPONENTIAL

    def __init__(
        self,
        days: Sequence[float],
        values: Sequence[float],
        anchor_day: int,
        curve_intensity: float = 1.0,
        anchor_value: float = 1.0,
    ):
        """
        Args:
            curve_intensity: Multiplier in (0, 1] applied to the exponent
        """
        if not 0 < curve_intensity <= 1:
            raise ValueError(f"curve_intensity must be in (0, 1]: {curve_intensity}")
        if anchor_value <= 0:
            raise ValueError("anchor_value must be positive for an exponential fit")
        self.curve_intensity = float(curve_intensity)
        super().__init__(days, values, anchor_day, anchor_value)

    def _fit(self) -> float:
        if np.any(self.values <= 0):
            raise InsufficientDataError(
                "Backing ratios must be positive for an exponential fit"
            )
        slope = self._ols_slope(self._offsets(), np.log(self.values))
        logger.debug("Exponential fit: a=%s intensity=%s", slope, self.curve_intensity)
        return slope

    @property
    def parameters(self) -> List[float]:
        return [self.slope, self.anchor_value, self.curve_intensity]

    def calculate(self, day: float) -> float:
        x = day - self.anchor_day
        return self.anchor_value * math.exp(self.slope * x * self.curve_intensity)

    @property
    def equation(self) -> str:
        return (
            f"y = {self.anchor_value:.6f} * e^({self.slope:.6f}x * {self.curve_intensity})"
        )
