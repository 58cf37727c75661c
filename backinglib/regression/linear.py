"""
Linear trend through the anchor point.
"""
import logging
from typing import List, Sequence

from .base import RegressionModel
from backinglib.schema.enums import RegressionKind

logger = logging.getLogger(__name__)


class LinearRegression(RegressionModel):
    """``y = slope * (day - anchor_day) + anchor_value``.

    The OLS slope is scaled by ``slope_multiplier`` so the projection can be
    steepened or flattened without refitting.
    """

    kind = RegressionKind.LINEAR

    def __init__(
        self,
        days: Sequence[float],
        values: Sequence[float],
        anchor_day: int,
        slope_multiplier: float = 1.0,
        anchor_value: float = 1.0,
    ):
        self.slope_multiplier = float(slope_multiplier)
        super().__init__(days, values, anchor_day, anchor_value)

    def _fit(self) -> float:
        self.base_slope = self._ols_slope(self._offsets(), self.values)
        slope = self.base_slope * self.slope_multiplier
        logger.debug("Linear fit: base slope=%s adjusted=%s", self.base_slope, slope)
        return slope

    @property
    def parameters(self) -> List[float]:
        return [self.slope, self.anchor_value]

    def calculate(self, day: float) -> float:
        return self.slope * (day - self.anchor_day) + self.anchor_value

    @property
    def equation(self) -> str:
        return f"y = {self.slope:.6f}x + {self.anchor_value:.6f}"
