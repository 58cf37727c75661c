"""
Base class for anchored regression models.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from backinglib.errors import InsufficientDataError
from backinglib.schema.enums import RegressionKind


class RegressionModel(ABC):
    """Least-squares trend through a fixed anchor point.

    Every model satisfies ``calculate(anchor_day) == anchor_value`` exactly;
    only the slope is estimated from data.
    """

    kind: RegressionKind

    def __init__(
        self,
        days: Sequence[float],
        values: Sequence[float],
        anchor_day: int,
        anchor_value: float = 1.0,
    ):
        """
        Initialize and fit the model.

        Args:
            days: Day indices of the historical points
            values: Backing ratios observed on those days
            anchor_day: Day through which the curve is forced
            anchor_value: Curve value at the anchor day
        """
        if len(days) != len(values):
            raise ValueError("Days and values must have same length")
        if len(days) < 2:
            raise InsufficientDataError(
                f"Need at least 2 historical points for regression, got {len(days)}"
            )

        # Sort by day
        sorted_pairs = sorted(zip(days, values))
        self.days = np.array([p[0] for p in sorted_pairs], dtype=float)
        self.values = np.array([p[1] for p in sorted_pairs], dtype=float)

        if len(np.unique(self.days)) < 2:
            raise InsufficientDataError("Need at least 2 distinct days for regression")

        self.anchor_day = int(anchor_day)
        self.anchor_value = float(anchor_value)
        self.slope = self._fit()

    @staticmethod
    def _ols_slope(x: np.ndarray, y: np.ndarray) -> float:
        """Ordinary least-squares slope of y on x."""
        n = len(x)
        sum_x = x.sum()
        sum_y = y.sum()
        sum_xy = (x * y).sum()
        sum_xx = (x * x).sum()
        return float((n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x))

    def _offsets(self) -> np.ndarray:
        return self.days - self.anchor_day

    @abstractmethod
    def _fit(self) -> float:
        """Estimate and return the model slope."""
        pass

    @abstractmethod
    def calculate(self, day: float) -> float:
        """Evaluate the trend at a day index."""
        pass

    @property
    @abstractmethod
    def equation(self) -> str:
        pass

    @property
    def parameters(self) -> List[float]:
        return [self.slope]

    def calculate_many(self, days: Sequence[float]) -> List[float]:
        """Evaluate the trend at multiple days."""
        return [self.calculate(d) for d in days]
