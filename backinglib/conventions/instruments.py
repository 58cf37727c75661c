"""
Stake-backed token instruments tracked by the engine.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

from backinglib.errors import ConfigurationError
from backinglib.schema.enums import Chain, DenominatorMode
from backinglib.utils.date import days_between


@dataclass(frozen=True)
class StakeInstrument:
    """A token backed by a single HEX stake."""

    symbol: str
    chain: Chain
    stake_start_date: date
    stake_end_date: date
    principal: float
    token_supply: float
    tshares: float
    denominator_mode: DenominatorMode
    tracked_price_field: str
    reference_price_field: str
    fallback_reference_price_field: Optional[str] = None

    @property
    def denominator(self) -> float:
        """Backing-ratio denominator selected by ``denominator_mode``."""
        if self.denominator_mode == DenominatorMode.PRINCIPAL:
            return self.principal
        return self.token_supply

    @property
    def total_staked_days(self) -> int:
        return days_between(self.stake_start_date, self.stake_end_date)


# Predefined instruments
PMAXI = StakeInstrument(
    symbol="pMAXI",
    chain=Chain.PULSECHAIN,
    stake_start_date=date(2022, 5, 1),
    stake_end_date=date(2037, 7, 16),
    principal=294_323_603.77,
    token_supply=274_546_065,
    tshares=42_104.44,
    denominator_mode=DenominatorMode.PRINCIPAL,
    tracked_price_field="maxi_price",
    reference_price_field="hex_price",
    fallback_reference_price_field="ehex_price",
)

EMAXI = StakeInstrument(
    symbol="eMAXI",
    chain=Chain.ETHEREUM,
    stake_start_date=date(2022, 5, 1),
    stake_end_date=date(2037, 7, 16),
    principal=294_323_603.77,
    token_supply=274_546_065,
    tshares=42_104.44,
    denominator_mode=DenominatorMode.PRINCIPAL,
    tracked_price_field="emaxi_price",
    reference_price_field="ehex_price",
)

PDECI = StakeInstrument(
    symbol="pDECI",
    chain=Chain.PULSECHAIN,
    stake_start_date=date(2022, 9, 27),
    stake_end_date=date(2032, 11, 9),
    principal=565_991_988,
    token_supply=565_991_988,
    tshares=71_337.83,
    denominator_mode=DenominatorMode.TOKEN_SUPPLY,
    tracked_price_field="deci_price",
    reference_price_field="hex_price",
    fallback_reference_price_field="ehex_price",
)

PLUCKY = StakeInstrument(
    symbol="pLUCKY",
    chain=Chain.PULSECHAIN,
    stake_start_date=date(2022, 9, 27),
    stake_end_date=date(2029, 9, 25),
    principal=74_985_502,
    token_supply=74_985_502,
    tshares=7_524.68,
    denominator_mode=DenominatorMode.PRINCIPAL,
    tracked_price_field="lucky_price",
    reference_price_field="hex_price",
    fallback_reference_price_field="ehex_price",
)

ELUCKY = StakeInstrument(
    symbol="eLUCKY",
    chain=Chain.ETHEREUM,
    stake_start_date=date(2022, 9, 27),
    stake_end_date=date(2029, 9, 25),
    principal=74_985_502,
    token_supply=74_985_502,
    tshares=7_524.68,
    denominator_mode=DenominatorMode.TOKEN_SUPPLY,
    tracked_price_field="elucky_price",
    reference_price_field="ehex_price",
)

PTRIO = StakeInstrument(
    symbol="pTRIO",
    chain=Chain.PULSECHAIN,
    stake_start_date=date(2022, 9, 27),
    stake_end_date=date(2025, 10, 12),
    principal=69_617_911,
    token_supply=69_617_911,
    tshares=4_698.32,
    denominator_mode=DenominatorMode.TOKEN_SUPPLY,
    tracked_price_field="trio_price",
    reference_price_field="hex_price",
    fallback_reference_price_field="ehex_price",
)

INSTRUMENTS: Dict[str, StakeInstrument] = {
    inst.symbol.upper(): inst for inst in (PMAXI, EMAXI, PDECI, PLUCKY, ELUCKY, PTRIO)
}


def get_instrument(symbol: str) -> StakeInstrument:
    """Look up a predefined instrument by symbol (case-insensitive)."""
    try:
        return INSTRUMENTS[symbol.upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown instrument: {symbol}. Available: {', '.join(sorted(INSTRUMENTS))}"
        ) from None
