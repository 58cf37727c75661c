"""Fetch-then-project entry point.

The two input series are fetched concurrently and joined; the projection
itself runs synchronously on the joined inputs.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List, Optional, Tuple

from backinglib.conventions.instruments import StakeInstrument
from backinglib.data.base import PriceSource, YieldSource
from backinglib.data.cache import DailyCache
from backinglib.errors import DataSourceError, InsufficientDataError
from backinglib.schema.records import PriceRecord, YieldRecord

from .builder import ProjectionSeriesBuilder
from .config import ProjectionConfig
from .results import ProjectionResult

logger = logging.getLogger(__name__)


class BackingProjectionService:
    """Loads inputs for an instrument and returns its projection.

    Fetch failures and too-short histories come back as a failed
    :class:`ProjectionResult`; configuration errors raise.
    """

    def __init__(
        self,
        yield_source: YieldSource,
        price_source: PriceSource,
        cache: Optional[DailyCache] = None,
    ):
        self.yield_source = yield_source
        self.price_source = price_source
        self.cache = cache

    def _load_yields(self, instrument: StakeInstrument, start: date) -> List[YieldRecord]:
        def load() -> List[YieldRecord]:
            return self.yield_source.load_yield_records(instrument.chain, start)

        if self.cache is None:
            return load()
        return self.cache.get_or_load(f"yields-{instrument.chain.value.lower()}-{start}", load)

    def _load_prices(self, instrument: StakeInstrument, start: date) -> List[PriceRecord]:
        def load() -> List[PriceRecord]:
            return self.price_source.load_price_records(instrument, start)

        if self.cache is None:
            return load()
        return self.cache.get_or_load(f"prices-{instrument.symbol.lower()}-{start}", load)

    async def fetch_inputs(
        self, instrument: StakeInstrument, start_date: Optional[date] = None
    ) -> Tuple[List[YieldRecord], List[PriceRecord]]:
        start = start_date or instrument.stake_start_date
        yields, prices = await asyncio.gather(
            asyncio.to_thread(self._load_yields, instrument, start),
            asyncio.to_thread(self._load_prices, instrument, start),
        )
        logger.info(
            "Fetched %d yield and %d price records for %s",
            len(yields),
            len(prices),
            instrument.symbol,
        )
        return yields, prices

    async def project(
        self,
        instrument: StakeInstrument,
        config: Optional[ProjectionConfig] = None,
        as_of: Optional[date] = None,
    ) -> ProjectionResult:
        config = config or ProjectionConfig.for_instrument(instrument)
        builder = ProjectionSeriesBuilder(config, as_of=as_of)

        try:
            yields, prices = await self.fetch_inputs(instrument, config.start_date)
        except DataSourceError as exc:
            logger.error("Input fetch failed for %s: %s", instrument.symbol, exc)
            return ProjectionResult.failed(exc)

        try:
            return builder.build(yields, prices)
        except InsufficientDataError as exc:
            logger.warning("Cannot project %s: %s", instrument.symbol, exc)
            return ProjectionResult.failed(exc)
