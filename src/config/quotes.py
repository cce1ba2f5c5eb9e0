"""
Quote configuration for poolQuotes.

Holds the contract addresses used for quoting and the fixed list of
tracked pools.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from ..batchers.multicall import MULTICALL3_ADDRESS as DEFAULT_MULTICALL_ADDRESS
from ..quotes.contracts import QUOTER_ADDRESS as DEFAULT_QUOTER_ADDRESS
from .base import BaseConfig

DEFAULT_POOLS = [
    "0x290a6a7460b308ee3f19023d2d00de604bcf5b42",  # MATIC/ETH
    "0xcbcdf9626bc03e24f779434178a73a0b4bad62ed",  # WBTC/ETH
    "0x2F62f2B4c5fcd7570a709DeC05D68EA19c82A9ec",  # SHIB/ETH
    "0x1d42064Fc4Beb5F8aAF85F4617AE8b3b5B8Bd801",  # UNI/ETH
]


@dataclass
class QuoteConfig(BaseConfig):
    """Quoter, multicall and tracked pool settings."""

    QUOTER_ADDRESS: str = field(
        default_factory=lambda: BaseConfig.get_env("QUOTER_ADDRESS", DEFAULT_QUOTER_ADDRESS)
    )
    MULTICALL_ADDRESS: str = field(
        default_factory=lambda: BaseConfig.get_env("MULTICALL_ADDRESS", DEFAULT_MULTICALL_ADDRESS)
    )
    POOLS: List[str] = field(
        default_factory=lambda: BaseConfig.get_env_list("QUOTE_POOLS", DEFAULT_POOLS)
    )
    INPUT_AMOUNT: Decimal = field(
        default_factory=lambda: BaseConfig.get_env_decimal("QUOTE_INPUT_AMOUNT", "1")
    )

    # Deadline for the single multicall round trip
    BATCH_TIMEOUT_SECONDS: float = field(
        default_factory=lambda: BaseConfig.get_env_float("BATCH_TIMEOUT_SECONDS", 30.0)
    )
