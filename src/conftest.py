"""
Shared pytest fixtures: an in-memory stand-in for the pools, tokens and
Multicall3 contract the quote pipeline reads from.
"""

from unittest.mock import MagicMock

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3.exceptions import BadFunctionCallOutput

from src.quotes.contracts import ERC20_BYTES32_ABI, POOL_ABI

MATIC_ETH_POOL = "0x290a6a7460b308ee3f19023d2d00de604bcf5b42"
WBTC_ETH_POOL = "0xcbcdf9626bc03e24f779434178a73a0b4bad62ed"

MATIC = "0x7D1AfA7B718fb893dB30A3aBc0Cfc608AaCfeBB0"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
WBTC = "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599"
MKR = "0x9f8F72aA9304c8B593d555F12eF6589cC3A579A2"


class FakeChain:
    """Serves pool and token reads through a mocked ``web3.eth.contract``."""

    def __init__(self):
        self.pools = {}
        self.tokens = {}
        self.bytes32_symbols = set()
        self.web3 = MagicMock()
        self.web3.eth.contract.side_effect = self._contract

    def add_token(self, address: str, symbol: str, decimals: int, bytes32_symbol: bool = False):
        self.tokens[address.lower()] = (symbol, decimals)
        if bytes32_symbol:
            self.bytes32_symbols.add(address.lower())

    def add_pool(self, address: str, token0: str, token1: str, fee: int = 3000):
        self.pools[address.lower()] = (token0, token1, fee)

    def set_quotes(self, block_number: int, amounts):
        """Make the next multicall return ``amounts`` as uint256 entries."""
        payloads = [encode(["uint256"], [amount]) for amount in amounts]
        self.web3.eth.call.return_value = HexBytes(
            encode(["uint256", "bytes[]"], [block_number, payloads])
        )

    def _contract(self, address, abi):
        key = address.lower()
        contract = MagicMock()

        if abi is POOL_ABI:
            pool = self.pools.get(key)
            for index, name in enumerate(["token0", "token1", "fee"]):
                self._bind(contract, name, pool[index] if pool else None, missing=pool is None)
        elif abi is ERC20_BYTES32_ABI:
            token = self.tokens.get(key)
            symbol = token[0].encode().ljust(32, b"\x00") if token else None
            self._bind(contract, "symbol", symbol, missing=token is None)
        else:
            token = self.tokens.get(key)
            string_symbol_missing = token is None or key in self.bytes32_symbols
            self._bind(contract, "symbol", token[0] if token else None, missing=string_symbol_missing)
            self._bind(contract, "decimals", token[1] if token else None, missing=token is None)

        return contract

    @staticmethod
    def _bind(contract, name, value, missing=False):
        call = getattr(contract.functions, name).return_value.call
        if missing:
            call.side_effect = BadFunctionCallOutput(
                f"Could not decode contract function call to {name}()"
            )
        else:
            call.return_value = value


@pytest.fixture
def fake_chain():
    """Two mainnet pools: MATIC/ETH and WBTC/ETH."""
    chain = FakeChain()
    chain.add_token(MATIC, "MATIC", 18)
    chain.add_token(WBTC, "WBTC", 8)
    chain.add_token(WETH, "ETH", 18)
    chain.add_pool(MATIC_ETH_POOL, MATIC, WETH, 3000)
    chain.add_pool(WBTC_ETH_POOL, WBTC, WETH, 3000)
    return chain
