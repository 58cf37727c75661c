"""Instrument conventions for stake-backed tokens."""

from .instruments import (
    ELUCKY,
    EMAXI,
    INSTRUMENTS,
    PDECI,
    PLUCKY,
    PMAXI,
    PTRIO,
    StakeInstrument,
    get_instrument,
)

__all__ = [
    "StakeInstrument",
    "get_instrument",
    "INSTRUMENTS",
    "PMAXI",
    "EMAXI",
    "PDECI",
    "PLUCKY",
    "ELUCKY",
    "PTRIO",
]
