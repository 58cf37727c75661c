"""
Regression models for backing-ratio trends.

This module provides the anchored exponential and linear fits used as
projection baselines, and the damped oscillation layered on top of the
exponential fit past the last observed day.
"""

# Base classes
from .base import RegressionModel

# Model families
from .exponential import ExponentialRegression
from .linear import LinearRegression

# Projection
from .oscillation import DampedOscillationProjector, OscillationParams

# Factory
from .factory import create_regression

__all__ = [
    # Base classes
    'RegressionModel',

    # Model families
    'ExponentialRegression',
    'LinearRegression',

    # Projection
    'DampedOscillationProjector',
    'OscillationParams',

    # Factory
    'create_regression',
]
