"""
Quote request builder.

Resolves the two tokens behind each Uniswap V3 pool, reads their display
metadata and produces one quoter read request per pool. Nothing is sent to
the quoter here: the requests are executed later as a single multicall.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, List, Sequence, Union

from web3 import Web3

from ..batchers.base import ReadRequest
from .contracts import (
    ERC20_BYTES32_ABI,
    QUOTE_EXACT_INPUT_SINGLE,
    QUOTER_ADDRESS,
    decode_bytes32_symbol,
    pool_contract,
    token_contract,
)
from .errors import InvalidAddress, MetadataUnavailable
from .models import QuoteRequest, TokenMetadata
from .units import to_base_units

logger = logging.getLogger(__name__)


async def _call(function) -> Any:
    """Run a bound contract function's blocking call() off the event loop."""
    return await asyncio.to_thread(function.call)


class QuoteRequestBuilder:
    """
    Builds ``quoteExactInputSingle`` read requests for Uniswap V3 pools.

    Metadata reads for different pools are independent, so ``build_all``
    issues them concurrently and only returns once every pool is resolved.
    """

    def __init__(self, web3: Web3, quoter_address: str = QUOTER_ADDRESS):
        """
        Initialize the builder.

        Args:
            web3: Web3 instance used for metadata reads
            quoter_address: Address of the Uniswap V3 Quoter
        """
        self.web3 = web3
        self.quoter_address = Web3.to_checksum_address(quoter_address)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def build(
        self,
        input_amount: Union[Decimal, int, str],
        pool_address: str,
        correlation_id: int = 0,
    ) -> QuoteRequest:
        """
        Build the quoter request for one pool.

        Args:
            input_amount: Amount of token0 to quote, in display units
            pool_address: Uniswap V3 pool address
            correlation_id: Position of this request in the batch

        Returns:
            QuoteRequest wrapping the ReadRequest and the pair metadata

        Raises:
            InvalidAddress: Pool address is malformed or not a pool
            MetadataUnavailable: Token symbol or decimals could not be read
            InvalidAmount: Amount is not positive, finite or representable
            AmountOverflow: Amount does not fit in a uint256
        """
        if not isinstance(pool_address, str) or not Web3.is_address(pool_address):
            raise InvalidAddress(f"Invalid pool address: {pool_address!r}")

        pool_address = Web3.to_checksum_address(pool_address)
        token0, token1, fee = await self._read_pool(pool_address)

        token_in, token_out = await asyncio.gather(
            self.read_token_metadata(token0),
            self.read_token_metadata(token1),
        )

        amount_in = to_base_units(input_amount, token_in.decimals)

        read_request = ReadRequest(
            target=self.quoter_address,
            function_signature=QUOTE_EXACT_INPUT_SINGLE,
            arguments=(token_in.address, token_out.address, fee, amount_in, 0),
            output_types=("uint256",),
            correlation_id=correlation_id,
        )

        self.logger.debug(
            f"Built quote request {correlation_id}: {token_in.symbol}/{token_out.symbol} "
            f"fee={fee} amount_in={amount_in}"
        )

        return QuoteRequest(
            read_request=read_request,
            input_amount=Decimal(str(input_amount)),
            pool_address=pool_address,
            token_in=token_in,
            token_out=token_out,
            fee=fee,
        )

    async def build_all(
        self,
        input_amount: Union[Decimal, int, str],
        pool_addresses: Sequence[str],
    ) -> List[QuoteRequest]:
        """
        Build requests for every pool, preserving the order of ``pool_addresses``.

        The first failure aborts the whole set.
        """
        for index, pool_address in enumerate(pool_addresses):
            self.logger.info(
                f"Generating request for Pool Address (Index - {index}): {pool_address}"
            )

        requests = await asyncio.gather(
            *(
                self.build(input_amount, pool_address, correlation_id=index)
                for index, pool_address in enumerate(pool_addresses)
            )
        )
        return list(requests)

    async def _read_pool(self, pool_address: str):
        """Read token0, token1 and fee from a pool."""
        pool = pool_contract(self.web3, pool_address)
        try:
            token0, token1, fee = await asyncio.gather(
                _call(pool.functions.token0()),
                _call(pool.functions.token1()),
                _call(pool.functions.fee()),
            )
        except Exception as e:
            self.logger.error(f"Failed to resolve pool {pool_address}: {e}")
            raise InvalidAddress(
                f"Address {pool_address} does not resolve to a pool: {e}"
            ) from e

        return Web3.to_checksum_address(token0), Web3.to_checksum_address(token1), int(fee)

    async def read_token_metadata(self, token_address: str) -> TokenMetadata:
        """
        Read symbol and decimals for a token.

        Falls back to a bytes32 symbol for tokens that predate the string ABI.
        """
        token = token_contract(self.web3, token_address)

        try:
            decimals = await _call(token.functions.decimals())
        except Exception as e:
            raise MetadataUnavailable(
                f"Failed to read decimals for {token_address}: {e}"
            ) from e

        try:
            symbol = await _call(token.functions.symbol())
        except Exception as string_error:
            self.logger.debug(
                f"string symbol() failed for {token_address}, trying bytes32: {string_error}"
            )
            legacy = token_contract(self.web3, token_address, abi=ERC20_BYTES32_ABI)
            try:
                symbol = decode_bytes32_symbol(await _call(legacy.functions.symbol()))
            except Exception as e:
                raise MetadataUnavailable(
                    f"Failed to read symbol for {token_address}: {e}"
                ) from e

        if not symbol:
            raise MetadataUnavailable(f"Token {token_address} has an empty symbol")

        return TokenMetadata(
            address=Web3.to_checksum_address(token_address),
            symbol=symbol,
            decimals=int(decimals),
        )
