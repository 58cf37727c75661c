"""End-to-end projection series tests on the hard-coded pMAXI inputs."""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from backinglib.errors import InsufficientDataError
from backinglib.projection import ProjectionSeriesBuilder, project_backing_series
from backinglib.test.input_series import (
    BAD_PAYOUT_DAY,
    EMPTY_PRICE_DAY,
    FALLBACK_DAY,
    NUM_DAYS,
    PRICE_GAP_DAY,
    START_DATE,
    ZERO_REFERENCE_DAY,
)

START_DAY = 881
LAST_DAY = START_DAY + NUM_DAYS - 1


@pytest.fixture
def result(maxi_config, yield_records, price_records, as_of):
    return ProjectionSeriesBuilder(maxi_config, as_of=as_of).build(yield_records, price_records)


def _by_day(points):
    return {p.day_index: p for p in points}


def test_one_point_per_day(result, maxi_config):
    assert len(result) == maxi_config.end_day - maxi_config.start_day + 1 == 220
    assert [p.day_index for p in result] == list(range(881, 1101))
    assert result.ok


def test_history_covers_observed_days(result):
    assert len(result.history) == NUM_DAYS
    assert result.history[0].date == START_DATE
    assert result.history[-1].day_index == LAST_DAY
    assert result.models.last_historical_day == LAST_DAY


def test_trends_are_anchored_at_start_day(result):
    first = result.points[0]
    assert first.trend_value == 1.0
    assert first.linear_trend == 1.0


def test_historical_points_have_no_oscillation(result):
    historical = [p for p in result if p.day_index <= LAST_DAY]
    assert all(p.is_historical for p in historical)
    assert all(p.sine_trend is None for p in historical)


def test_projected_points(result, as_of):
    future = [p for p in result if p.day_index > LAST_DAY]

    assert len(future) == 1100 - LAST_DAY
    assert all(p.backing_ratio is None and p.discount is None for p in future)
    assert all(p.sine_trend is not None for p in future)
    assert future[0].date == as_of + timedelta(days=1)
    assert future[-1].date == as_of + timedelta(days=1100 - LAST_DAY)


def test_sine_trend_rides_the_exponential(result, maxi_config):
    point = _by_day(result.points)[LAST_DAY + 10]
    models = result.models
    assert point.sine_trend == pytest.approx(models.oscillation.calculate(point.day_index))
    assert point.trend_value == pytest.approx(models.exponential.calculate(point.day_index))
    # Past the dampening start the wave shrinks.
    assert models.oscillation.dampening_multiplier(1100) < 1.0


def test_backing_ratio_is_non_decreasing(result):
    ratios = [p.backing_ratio for p in result.history]
    assert all(b >= a for a, b in zip(ratios, ratios[1:]))


def test_irregular_price_days(result):
    points = _by_day(result.points)

    assert points[START_DAY + PRICE_GAP_DAY].discount is None
    assert points[START_DAY + EMPTY_PRICE_DAY].discount is None
    assert points[START_DAY + ZERO_REFERENCE_DAY].discount is None
    # hex_price missing: the ehex price stands in as reference.
    expected = (0.08 + 0.0005 * FALLBACK_DAY) / (0.09 + 0.001 * FALLBACK_DAY)
    assert points[START_DAY + FALLBACK_DAY].discount == pytest.approx(expected)
    # The missing price does not remove the day from the backing series.
    assert points[START_DAY + PRICE_GAP_DAY].backing_ratio is not None


def test_bad_payout_day_adds_no_yield(result):
    day = result.history[BAD_PAYOUT_DAY]
    previous = result.history[BAD_PAYOUT_DAY - 1]
    assert day.daily_yield == 0.0
    assert day.backing_ratio == previous.backing_ratio


def test_malformed_fields_are_reported(result):
    assert {w.field for w in result.malformed} == {"payout_per_share_unit", "tracked_price"}
    assert len(result.malformed) == 2


def test_gap_inside_history(maxi_config, yield_records, price_records, as_of):
    missing = START_DATE + timedelta(days=10)
    yields = [r for r in yield_records if r.date != missing.isoformat()]

    points = _by_day(project_backing_series(yields, price_records, maxi_config, as_of))

    gap = points[START_DAY + 10]
    assert gap.backing_ratio is None
    assert gap.sine_trend is None
    assert gap.date == missing
    assert len(points) == 220


def test_history_longer_than_horizon(maxi_config, yield_records, price_records, as_of):
    config = maxi_config.with_overrides(end_day=900)

    points = project_backing_series(yield_records, price_records, config, as_of)

    assert len(points) == 20
    assert all(p.is_historical for p in points)


@pytest.mark.parametrize("keep", [0, 1])
def test_insufficient_history(maxi_config, yield_records, price_records, keep):
    # The first row predates the stake start and is dropped.
    yields = yield_records[: keep + 1]
    with pytest.raises(InsufficientDataError):
        ProjectionSeriesBuilder(maxi_config).build(yields, price_records)


def test_to_records(result):
    records = result.to_records()
    assert records[0]["date"] == START_DATE.isoformat()
    assert records[0]["dayIndex"] == START_DAY
    assert set(records[0]) == {
        "date", "dayIndex", "backingRatio", "discount", "trendValue", "linearTrend", "sineTrend",
    }
    assert records[-1]["backingRatio"] is None


def test_to_dataframe(result):
    frame = result.to_dataframe()
    assert frame.index.name == "day_index"
    assert len(frame) == 220
    assert frame.index[0] == START_DAY
    assert "sine_trend" in frame.columns


def test_equations(result):
    equations = result.models.equations()
    assert set(equations) == {"exponential", "linear", "oscillation"}


def test_interleaved_builds_keep_their_own_malformed_fields(maxi_config, yield_records, price_records, as_of):
    builder = ProjectionSeriesBuilder(maxi_config, as_of=as_of)
    clean_yields = [r for r in yield_records if r.payout_per_share_unit != "n/a"]
    clean_prices = [p for p in price_records if p.tracked_price != ""]
    inner = []

    class BuildsWhileCoerced:
        # Runs a second build on the same builder mid-coercion, then fails to convert.
        def __float__(self):
            inner.append(builder.build(clean_yields, clean_prices))
            raise ValueError("not a number")

    yields = list(clean_yields)
    yields[5] = replace(yields[5], payout_per_share_unit=BuildsWhileCoerced())

    outer = builder.build(yields, clean_prices)

    assert inner[0].malformed == []
    assert [w.field for w in outer.malformed] == ["payout_per_share_unit"]


def test_projected_dates_default_to_utc_today(monkeypatch, maxi_config, yield_records, price_records):
    from backinglib.projection import builder as builder_module

    monkeypatch.setattr(builder_module, "utc_today", lambda: date(2030, 1, 1))

    points = _by_day(project_backing_series(yield_records, price_records, maxi_config))

    assert points[LAST_DAY + 1].date == date(2030, 1, 2)
