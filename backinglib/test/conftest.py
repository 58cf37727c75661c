"""
Shared fixtures for the backinglib test suite.
"""

from datetime import date
from typing import List

import pytest

from backinglib.conventions import PMAXI
from backinglib.data.loaders import price_record_from_row, yield_record_from_row
from backinglib.projection import ProjectionConfig
from backinglib.schema import PriceRecord, YieldRecord
from backinglib.test.input_series import AS_OF, PRICE_ROWS, YIELD_ROWS


# ============================================================================
# INPUT SERIES
# ============================================================================

@pytest.fixture
def yield_records() -> List[YieldRecord]:
    return [yield_record_from_row(row) for row in YIELD_ROWS]


@pytest.fixture
def price_records() -> List[PriceRecord]:
    return [price_record_from_row(row, PMAXI) for row in PRICE_ROWS]


@pytest.fixture
def as_of() -> date:
    return AS_OF


# ============================================================================
# CONFIGURATION
# ============================================================================

@pytest.fixture
def maxi_config() -> ProjectionConfig:
    """pMAXI preset with a short horizon (days 881-1100)."""
    return ProjectionConfig.for_instrument(PMAXI, end_day=1100, dampening_start_day=1050)


@pytest.fixture
def simple_config() -> ProjectionConfig:
    return ProjectionConfig(
        start_date=date(2022, 1, 1),
        principal=1_000_000,
        denominator=1_000_000,
        shares_held=100,
        start_day=0,
        end_day=10,
        dampening_start_day=8,
    )
