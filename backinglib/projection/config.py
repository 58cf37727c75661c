"""Configuration for the backing-ratio projection."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Optional, Union

from backinglib.conventions.instruments import StakeInstrument
from backinglib.errors import ConfigurationError
from backinglib.regression.oscillation import OscillationParams
from backinglib.utils.date import hex_day, to_date

# Days before the stake end at which the oscillation starts to decay.
END_DAMPENING_WINDOW = 555

_REQUIRED = ("start_date", "principal", "denominator", "shares_held")
_DAY_FIELDS = ("start_day", "end_day", "dampening_start_day")


@dataclass(frozen=True)
class ProjectionConfig:
    """All knobs of the engine.

    Attributes:
        start_date: First calendar day of accumulation (stake start)
        principal: Stake principal P0 added to the accumulated yield
        denominator: Divisor of the backing ratio (principal or token supply)
        shares_held: T-shares backing the token; scales the per-share payout
        curve_intensity: Exponent damping in (0, 1] for the exponential trend
        slope_multiplier: Scale applied to the fitted linear slope
        amplitude, frequency, phase, offset: Oscillation wave shape
        dampening_rate: Decay rate of the oscillation amplitude
        dampening_start_day: Day index after which the amplitude decays
        start_day: Day index of ``start_date`` and the regression anchor
        end_day: Last day index of the output series
        discount_alert_threshold: Discounts above this are logged at debug level
    """

    start_date: Optional[Union[date, datetime, str]] = None
    principal: Optional[float] = None
    denominator: Optional[float] = None
    shares_held: Optional[float] = None
    curve_intensity: float = 1.0
    slope_multiplier: float = 1.0
    amplitude: float = 0.8
    frequency: float = 0.01
    phase: float = 4.7
    offset: float = 0.15
    dampening_rate: float = 0.003
    dampening_start_day: int = 5000
    start_day: int = 881
    end_day: int = 5555
    discount_alert_threshold: Optional[float] = 2.5

    def __post_init__(self):
        missing = [name for name in _REQUIRED if getattr(self, name) is None]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration field(s): {', '.join(missing)}"
            )

        try:
            object.__setattr__(self, "start_date", to_date(self.start_date))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid start_date: {exc}") from exc

        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "start_date" or value is None:
                continue
            if not _is_finite_number(value):
                raise ConfigurationError(f"{f.name} must be a finite number: {value!r}")

        for name in _DAY_FIELDS:
            value = getattr(self, name)
            if value != int(value):
                raise ConfigurationError(f"{name} must be a whole day index: {value!r}")
            object.__setattr__(self, name, int(value))

        if self.principal <= 0:
            raise ConfigurationError(f"principal must be positive: {self.principal}")
        if self.denominator <= 0:
            raise ConfigurationError(f"denominator must be positive: {self.denominator}")
        if self.shares_held < 0:
            raise ConfigurationError(f"shares_held must be non-negative: {self.shares_held}")
        if not 0 < self.curve_intensity <= 1:
            raise ConfigurationError(
                f"curve_intensity must be in (0, 1]: {self.curve_intensity}"
            )
        if self.dampening_rate < 0:
            raise ConfigurationError(
                f"dampening_rate must be non-negative: {self.dampening_rate}"
            )
        if self.end_day < self.start_day:
            raise ConfigurationError(
                f"end_day ({self.end_day}) must not precede start_day ({self.start_day})"
            )

    @classmethod
    def for_instrument(cls, instrument: StakeInstrument, **overrides: Any) -> "ProjectionConfig":
        """Derive a config from an instrument preset; keyword overrides win."""
        start_day = hex_day(instrument.stake_start_date)
        end_day = hex_day(instrument.stake_end_date)
        values = dict(
            start_date=instrument.stake_start_date,
            principal=instrument.principal,
            denominator=instrument.denominator,
            shares_held=instrument.tshares,
            start_day=start_day,
            end_day=end_day,
            dampening_start_day=max(start_day, end_day - END_DAMPENING_WINDOW),
        )
        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "ProjectionConfig":
        return replace(self, **overrides)

    def oscillation_params(self) -> OscillationParams:
        return OscillationParams(
            amplitude=self.amplitude,
            frequency=self.frequency,
            phase=self.phase,
            offset=self.offset,
            dampening_rate=self.dampening_rate,
            dampening_start_day=self.dampening_start_day,
        )


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
