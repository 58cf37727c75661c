"""Anchored regression and damped oscillation tests."""

import math

import pytest

from backinglib.errors import InsufficientDataError
from backinglib.regression import (
    DampedOscillationProjector,
    ExponentialRegression,
    LinearRegression,
    OscillationParams,
    create_regression,
)
from backinglib.schema.enums import RegressionKind

ANCHOR = 881
DAYS = list(range(ANCHOR, ANCHOR + 100))
RATE = 0.0004


def _exp_values(rate=RATE):
    return [math.exp(rate * (d - ANCHOR)) for d in DAYS]


# ============================================================================
# Anchor
# ============================================================================

@pytest.mark.parametrize("intensity", [0.05, 0.5, 1.0])
def test_exponential_passes_through_anchor(intensity):
    model = ExponentialRegression(DAYS, [1.3 + 0.01 * i for i in range(100)], ANCHOR, intensity)
    assert model.calculate(ANCHOR) == 1.0


@pytest.mark.parametrize("intensity", [0.5, 1.0])
def test_exponential_passes_through_any_anchor_value(intensity):
    model = ExponentialRegression(DAYS, _exp_values(), ANCHOR, intensity, anchor_value=2.0)
    assert model.calculate(ANCHOR) == 2.0
    assert model.calculate(ANCHOR + 100) == pytest.approx(2.0 * math.exp(RATE * 100 * intensity))


@pytest.mark.parametrize("multiplier", [0.1, 1.0, 7.5])
def test_linear_passes_through_anchor(multiplier):
    model = LinearRegression(DAYS, [1.3 + 0.01 * i for i in range(100)], ANCHOR, multiplier)
    assert model.calculate(ANCHOR) == 1.0


def test_fitted_intercept_is_discarded():
    # Data sit on y = 2 + 0.001x; only the slope survives the fit.
    values = [2.0 + 0.001 * (d - ANCHOR) for d in DAYS]
    model = LinearRegression(DAYS, values, ANCHOR)
    assert model.slope == pytest.approx(0.001)
    assert model.calculate(ANCHOR + 10) == pytest.approx(1.01)


# ============================================================================
# Exponential
# ============================================================================

def test_exponential_recovers_growth_rate():
    model = ExponentialRegression(DAYS, _exp_values(), ANCHOR)
    assert model.slope == pytest.approx(RATE, rel=1e-9)
    assert model.calculate(ANCHOR + 500) == pytest.approx(math.exp(RATE * 500), rel=1e-9)


def test_curve_intensity_scales_exponent():
    full = ExponentialRegression(DAYS, _exp_values(), ANCHOR, curve_intensity=1.0)
    half = ExponentialRegression(DAYS, _exp_values(), ANCHOR, curve_intensity=0.5)
    day = ANCHOR + 1000
    assert half.calculate(day) == pytest.approx(math.sqrt(full.calculate(day)), rel=1e-12)


def test_exponential_rejects_non_positive_ratios():
    with pytest.raises(InsufficientDataError):
        ExponentialRegression([1, 2, 3], [1.0, 0.0, 1.1], 1)


def test_exponential_rejects_bad_intensity():
    with pytest.raises(ValueError):
        ExponentialRegression(DAYS, _exp_values(), ANCHOR, curve_intensity=0.0)


def test_exponential_equation_and_parameters():
    model = ExponentialRegression(DAYS, _exp_values(), ANCHOR, curve_intensity=0.8)
    assert model.parameters == [model.slope, 1.0, 0.8]
    assert model.equation.startswith("y = 1.000000 * e^(")


# ============================================================================
# Linear
# ============================================================================

def test_linear_slope_multiplier():
    values = [1.0 + 0.002 * (d - ANCHOR) for d in DAYS]
    model = LinearRegression(DAYS, values, ANCHOR, slope_multiplier=2.0)
    assert model.base_slope == pytest.approx(0.002)
    assert model.slope == pytest.approx(0.004)
    assert model.calculate(ANCHOR + 100) == pytest.approx(1.4)


# ============================================================================
# Degenerate inputs
# ============================================================================

@pytest.mark.parametrize("cls", [ExponentialRegression, LinearRegression])
def test_single_point_is_rejected(cls):
    with pytest.raises(InsufficientDataError):
        cls([ANCHOR], [1.0], ANCHOR)


@pytest.mark.parametrize("cls", [ExponentialRegression, LinearRegression])
def test_single_distinct_day_is_rejected(cls):
    with pytest.raises(InsufficientDataError):
        cls([ANCHOR, ANCHOR], [1.0, 1.1], ANCHOR)


def test_length_mismatch():
    with pytest.raises(ValueError):
        LinearRegression([1, 2, 3], [1.0, 1.1], 1)


# ============================================================================
# Factory
# ============================================================================

def test_create_regression_by_name_and_enum():
    values = _exp_values()
    assert isinstance(create_regression("linear", DAYS, values, ANCHOR), LinearRegression)
    model = create_regression(RegressionKind.EXPONENTIAL, DAYS, values, ANCHOR, curve_intensity=0.5)
    assert isinstance(model, ExponentialRegression)
    assert model.curve_intensity == 0.5


def test_create_regression_unknown_kind():
    with pytest.raises(ValueError):
        create_regression("cubic", DAYS, _exp_values(), ANCHOR)


# ============================================================================
# Damped oscillation
# ============================================================================

@pytest.fixture
def baseline():
    return ExponentialRegression(DAYS, _exp_values(), ANCHOR)


def test_oscillation_is_undefined_up_to_last_day(baseline):
    projector = DampedOscillationProjector(baseline, last_historical_day=DAYS[-1])
    assert projector.calculate(ANCHOR) is None
    assert projector.calculate(DAYS[-1]) is None
    assert projector.calculate(DAYS[-1] + 1) is not None


def test_oscillation_formula_before_dampening(baseline):
    params = OscillationParams(amplitude=0.5, frequency=0.02, phase=1.0, offset=0.1,
                               dampening_rate=0.01, dampening_start_day=5000)
    last = DAYS[-1]
    projector = DampedOscillationProjector(baseline, last, params)
    day = last + 37

    expected = baseline.calculate(day) + 0.5 * math.sin(0.02 * 37 + 1.0) + 0.1
    assert projector.calculate(day) == pytest.approx(expected, rel=1e-12)


def test_dampening_multiplier(baseline):
    params = OscillationParams(dampening_rate=0.003, dampening_start_day=2000)
    projector = DampedOscillationProjector(baseline, DAYS[-1], params)
    assert projector.dampening_multiplier(1500) == 1.0
    assert projector.dampening_multiplier(2000) == 1.0
    assert projector.dampening_multiplier(2100) == pytest.approx(math.exp(-0.3))


def test_oscillation_decays_far_beyond_dampening_start(baseline):
    params = OscillationParams(amplitude=0.8, dampening_rate=0.003, dampening_start_day=2000)
    projector = DampedOscillationProjector(baseline, DAYS[-1], params)

    residuals = [
        abs(projector.calculate(day) - baseline.calculate(day) - params.offset)
        for day in (4000, 6000, 8000)
    ]

    assert residuals[-1] < 1e-6
    assert all(r <= params.amplitude * math.exp(-0.003 * (d - 2000)) + 1e-12
               for r, d in zip(residuals, (4000, 6000, 8000)))


def test_calculate_many_matches_calculate(baseline):
    projector = DampedOscillationProjector(baseline, DAYS[-1])
    days = [ANCHOR, DAYS[-1], DAYS[-1] + 5]
    assert baseline.calculate_many(days) == [baseline.calculate(d) for d in days]
    assert projector.calculate_many(days)[:2] == [None, None]
