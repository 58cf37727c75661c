"""
Concrete data source implementations.

Provides loaders for the HEX daily stats endpoint, the PostgreSQL price
history table and JSON files on disk.
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx

from backinglib.conventions.instruments import StakeInstrument
from backinglib.errors import DataSourceError
from backinglib.schema.enums import Chain
from backinglib.schema.records import PriceRecord, YieldRecord
from backinglib.utils.date import to_date

from .base import BaseDataSource

logger = logging.getLogger(__name__)

PAYOUT_FIELD = "payoutPerTshareHEX"


def yield_record_from_row(row: Mapping[str, Any], payout_field: str = PAYOUT_FIELD) -> YieldRecord:
    return YieldRecord(
        date=row["date"],
        payout_per_share_unit=row.get(payout_field),
        raw_fields=dict(row),
    )


def price_record_from_row(row: Mapping[str, Any], instrument: StakeInstrument) -> PriceRecord:
    fallback_field = instrument.fallback_reference_price_field
    return PriceRecord(
        date=row["date"],
        tracked_price=row.get(instrument.tracked_price_field),
        reference_price=row.get(instrument.reference_price_field),
        fallback_reference_price=row.get(fallback_field) if fallback_field else None,
    )


def _rows_since(rows: List[Dict[str, Any]], start_date: Optional[date]) -> List[Dict[str, Any]]:
    kept = []
    for row in rows:
        if not isinstance(row, Mapping):
            raise DataSourceError(f"Expected an object per row, got {type(row).__name__}")
        if row.get("date") is None:
            logger.debug("Skipping row without date: %r", row)
            continue
        try:
            day = to_date(row["date"])
        except (TypeError, ValueError) as exc:
            raise DataSourceError(f"Unreadable date in row {row!r}: {exc}") from exc
        if start_date is not None and day < start_date:
            continue
        kept.append(row)
    return kept


class HexDailyStatsSource(BaseDataSource):
    """
    Load the daily payout-per-T-share series from hexdailystats.com.
    """

    ENDPOINTS = {
        Chain.ETHEREUM: "fulldata",
        Chain.PULSECHAIN: "fulldatapulsechain",
    }

    def __init__(
        self,
        base_url: str = "https://hexdailystats.com",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
        payout_field: str = PAYOUT_FIELD,
    ):
        """
        Initialize HTTP yield source.

        Args:
            base_url: Service root
            client: Optional preconfigured httpx client (owned by the caller)
            timeout: Request timeout in seconds when no client is given
            payout_field: JSON field holding the per-T-share payout
        """
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.client = client
        self.timeout = timeout
        self.payout_field = payout_field

    def _fetch_rows(self, chain: Chain) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/{self.ENDPOINTS[chain]}"
        try:
            if self.client is not None:
                response = self.client.get(url)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch %s: %s", url, exc)
            raise DataSourceError(f"Failed to fetch yield data from {url}: {exc}") from exc

        if not isinstance(rows, list):
            raise DataSourceError(f"Unexpected payload from {url}: {type(rows).__name__}")
        return rows

    def load_yield_records(
        self,
        chain: Chain,
        start_date: Optional[date] = None,
    ) -> List[YieldRecord]:
        """
        Load yield records over HTTP.

        Args:
            chain: Chain whose stats to load
            start_date: Optional first day of interest

        Returns:
            List of YieldRecord objects with filters applied
        """
        rows = _rows_since(self._fetch_rows(chain), start_date)
        records = [yield_record_from_row(row, self.payout_field) for row in rows]
        logger.info("Loaded %d yield records for %s", len(records), chain.value)
        return self._apply_filters(records)


class PostgreSQLDataSource(BaseDataSource):
    """
    Load historic prices from PostgreSQL.

    Reads the ``historic_prices`` table (one row per day, one column per token).
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        database: Optional[str] = None,
        table: str = "historic_prices",
    ):
        """
        Initialize PostgreSQL data source.

        Args:
            host: Database host (defaults to env var POSTGRES_HOST)
            port: Database port (defaults to env var POSTGRES_PORT)
            user: Database user (defaults to env var POSTGRES_USER)
            password: Database password (defaults to env var POSTGRES_PASSWORD)
            database: Database name (defaults to env var POSTGRES_DB)
            table: Price history table
        """
        super().__init__()
        self.config = {
            "host": host or os.getenv("POSTGRES_HOST", "localhost"),
            "port": port or int(os.getenv("POSTGRES_PORT", "5432")),
            "user": user or os.getenv("POSTGRES_USER", "postgres"),
            "password": password or os.getenv("POSTGRES_PASSWORD", ""),
            "database": database or os.getenv("POSTGRES_DB", "postgres"),
        }
        self.table = table

    def _fetch_rows(
        self, instrument: StakeInstrument, start_date: Optional[date]
    ) -> List[Dict[str, Any]]:
        """
        Fetch raw price rows from database.

        Rows with a null tracked price are excluded.
        """
        try:
            import psycopg2
            from psycopg2 import sql
        except ImportError:
            raise ImportError(
                "psycopg2 is required for PostgreSQL data source. "
                "Install it with: pip install psycopg2-binary"
            )

        columns = [
            c
            for c in (
                instrument.tracked_price_field,
                instrument.reference_price_field,
                instrument.fallback_reference_price_field,
            )
            if c
        ]
        query = sql.SQL(
            "SELECT date, {columns} FROM {table} "
            "WHERE date >= %s AND {tracked} IS NOT NULL ORDER BY date ASC"
        ).format(
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            table=sql.Identifier(self.table),
            tracked=sql.Identifier(instrument.tracked_price_field),
        )

        try:
            conn = psycopg2.connect(**self.config)
        except psycopg2.Error as exc:
            logger.error("PostgreSQL connection failed: %s", exc)
            raise DataSourceError(f"PostgreSQL connection failed: {exc}") from exc
        try:
            with conn.cursor() as cur:
                cur.execute(query, (start_date or instrument.stake_start_date,))
                names = [d[0] for d in cur.description]
                return [dict(zip(names, row)) for row in cur.fetchall()]
        except psycopg2.Error as exc:
            logger.error("Price query failed for %s: %s", instrument.symbol, exc)
            raise DataSourceError(f"Price query failed for {instrument.symbol}: {exc}") from exc
        finally:
            conn.close()

    def load_price_records(
        self,
        instrument: StakeInstrument,
        start_date: Optional[date] = None,
    ) -> List[PriceRecord]:
        """
        Load price records from PostgreSQL.

        Args:
            instrument: Instrument whose price columns to read
            start_date: First day (defaults to the stake start date)

        Returns:
            List of PriceRecord objects with filters applied
        """
        rows = self._fetch_rows(instrument, start_date)
        records = [price_record_from_row(row, instrument) for row in rows]
        logger.info("Loaded %d price records for %s", len(records), instrument.symbol)
        return self._apply_filters(records)


class JSONDataSource(BaseDataSource):
    """
    Load yield and price series from JSON files.

    Useful for testing, backtesting, or when the network is unavailable.
    Files are ``hex_daily_<chain>.json`` and ``prices_<symbol>.json``, each a
    JSON array of row objects.
    """

    def __init__(self, data_directory: Path):
        """
        Initialize JSON data source.

        Args:
            data_directory: Directory containing JSON files
        """
        super().__init__()
        self.data_directory = Path(data_directory)

    def _load_json_file(self, filepath: Path) -> List[Dict[str, Any]]:
        try:
            with open(filepath, "r") as f:
                rows = json.load(f)
        except (OSError, ValueError) as exc:
            raise DataSourceError(f"Failed to read {filepath}: {exc}") from exc
        if not isinstance(rows, list):
            raise DataSourceError(f"{filepath} must contain a JSON array")
        return rows

    def yield_file(self, chain: Chain) -> Path:
        return self.data_directory / f"hex_daily_{chain.value.lower()}.json"

    def price_file(self, instrument: StakeInstrument) -> Path:
        return self.data_directory / f"prices_{instrument.symbol.lower()}.json"

    def load_yield_records(
        self,
        chain: Chain,
        start_date: Optional[date] = None,
    ) -> List[YieldRecord]:
        rows = _rows_since(self._load_json_file(self.yield_file(chain)), start_date)
        return self._apply_filters([yield_record_from_row(row) for row in rows])

    def load_price_records(
        self,
        instrument: StakeInstrument,
        start_date: Optional[date] = None,
    ) -> List[PriceRecord]:
        rows = _rows_since(self._load_json_file(self.price_file(instrument)), start_date)
        return self._apply_filters([price_record_from_row(row, instrument) for row in rows])
