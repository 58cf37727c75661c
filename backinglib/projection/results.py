"""Result dataclasses for the projection stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from backinglib.errors import BackingEngineError, MalformedRecordWarning
from backinglib.regression import DampedOscillationProjector, RegressionModel
from backinglib.schema.records import BackingPoint, ProjectedPoint


@dataclass(frozen=True)
class FittedModels:
    """Trend models fitted on one historical series."""

    exponential: RegressionModel
    linear: RegressionModel
    oscillation: DampedOscillationProjector

    @property
    def last_historical_day(self) -> int:
        return self.oscillation.last_historical_day

    def equations(self) -> Dict[str, str]:
        return {
            "exponential": self.exponential.equation,
            "linear": self.linear.equation,
            "oscillation": self.oscillation.equation,
        }


@dataclass(frozen=True)
class ProjectionResult:
    """Aggregate output returned by :class:`ProjectionSeriesBuilder`.

    A failed result carries ``error`` and no points, so callers can render an
    error state instead of a degenerate chart.
    """

    points: List[ProjectedPoint]
    history: List[BackingPoint] = field(default_factory=list)
    models: Optional[FittedModels] = None
    malformed: List[MalformedRecordWarning] = field(default_factory=list)
    error: Optional[BackingEngineError] = None

    @classmethod
    def failed(
        cls,
        error: BackingEngineError,
        malformed: Optional[List[MalformedRecordWarning]] = None,
    ) -> "ProjectionResult":
        return cls(points=[], error=error, malformed=list(malformed or []))

    @property
    def ok(self) -> bool:
        return self.error is None

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def to_records(self) -> List[Dict[str, Any]]:
        """JSON-ready dicts, date-ascending."""
        return [p.to_dict() for p in self.points]

    def to_dataframe(self) -> pd.DataFrame:
        """Points as a DataFrame indexed by day index, for charting."""
        columns = [
            "date",
            "day_index",
            "backing_ratio",
            "discount",
            "trend_value",
            "linear_trend",
            "sine_trend",
        ]
        frame = pd.DataFrame(
            [{name: getattr(p, name) for name in columns} for p in self.points],
            columns=columns,
        )
        return frame.set_index("day_index")
