"""
Damped sinusoidal projection layered on an exponential baseline.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .base import RegressionModel


@dataclass(frozen=True)
class OscillationParams:
    """Wave shape for the post-data projection.

    Attributes:
        amplitude: Wave height around the baseline
        frequency: Radians per day
        phase: Phase shift in radians
        offset: Constant shift added to the whole wave
        dampening_rate: Exponential decay rate of the amplitude
        dampening_start_day: Day index after which the amplitude decays
    """

    amplitude: float = 0.8
    frequency: float = 0.01
    phase: float = 4.7
    offset: float = 0.15
    dampening_rate: float = 0.003
    dampening_start_day: int = 5000


class DampedOscillationProjector:
    """Projects past the last historical day with a decaying wave.

    ``sine(x) = baseline(x) + A*sin(f*(x - last) + phase)*damp(x) + offset``
    where ``damp(x) = exp(-rate*(x - dampening_start_day))`` after the
    dampening start and 1 before it. Undefined (None) on and before the last
    historical day.
    """

    def __init__(
        self,
        baseline: RegressionModel,
        last_historical_day: int,
        params: Optional[OscillationParams] = None,
    ):
        """
        Initialize projector.

        Args:
            baseline: Fitted exponential trend the wave rides on
            last_historical_day: Day index of the latest observed point
            params: Wave shape; defaults to :class:`OscillationParams`
        """
        self.baseline = baseline
        self.last_historical_day = int(last_historical_day)
        self.params = params or OscillationParams()

    def dampening_multiplier(self, day: float) -> float:
        """Amplitude scale at ``day``: 1 up to the dampening start, decaying after."""
        p = self.params
        if day > p.dampening_start_day:
            return math.exp(-p.dampening_rate * (day - p.dampening_start_day))
        return 1.0

    def wave(self, day: float) -> Optional[float]:
        """Oscillation term alone (without baseline or offset)."""
        days_after_last = day - self.last_historical_day
        if days_after_last <= 0:
            return None
        p = self.params
        return (
            p.amplitude
            * math.sin(p.frequency * days_after_last + p.phase)
            * self.dampening_multiplier(day)
        )

    def calculate(self, day: float) -> Optional[float]:
        wave = self.wave(day)
        if wave is None:
            return None
        return self.baseline.calculate(day) + wave + self.params.offset

    def calculate_many(self, days: Sequence[float]) -> List[Optional[float]]:
        return [self.calculate(d) for d in days]

    @property
    def equation(self) -> str:
        p = self.params
        return (
            f"y = exp_trend + {p.amplitude}*sin({p.frequency}*(x-{self.last_historical_day})"
            f" + {p.phase})*e^(-{p.dampening_rate}*(x-{p.dampening_start_day})) + {p.offset}"
        )
