"""
Core enumeration types for the backing-ratio engine.
"""

from enum import Enum


class Chain(Enum):
    """Chain a HEX stake (and its yield series) lives on."""

    PULSECHAIN = "PULSECHAIN"
    ETHEREUM = "ETHEREUM"


class DenominatorMode(Enum):
    """What the backing ratio divides by.

    Both conventions exist side by side across token variants; the choice is
    made per instrument and never inferred.
    """

    PRINCIPAL = "PRINCIPAL"
    TOKEN_SUPPLY = "TOKEN_SUPPLY"


class RegressionKind(Enum):
    """Regression model families."""

    EXPONENTIAL = "EXPONENTIAL"
    LINEAR = "LINEAR"
