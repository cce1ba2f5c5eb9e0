"""
Quote pipeline.

Runs the three stages once: build the quoter requests, execute them as a
single multicall, then map the results back onto their pairs.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from web3 import Web3

from ..batchers.base import BatchConfig
from ..batchers.multicall import MulticallBatcher
from ..config import ConfigManager
from ..quotes.builder import QuoteRequestBuilder
from ..quotes.formatter import format_quotes
from ..quotes.models import PairQuote

logger = logging.getLogger(__name__)


@dataclass
class QuoteReport:
    """Quotes for every tracked pool and the block they were read at."""

    block_number: int
    quotes: List[PairQuote] = field(default_factory=list)


class QuotePipeline:
    """
    Linear, single pass quote pipeline.

    Every failure propagates to the caller; nothing is retried.
    """

    def __init__(self, config: ConfigManager, web3: Optional[Web3] = None):
        """
        Initialize the pipeline.

        Args:
            config: Configuration built at startup
            web3: Web3 instance (created from the chain config if omitted)
        """
        self.config = config
        # HTTP requests never outlive the batch deadline
        self.web3 = web3 or config.chains.create_web3(
            timeout=config.quotes.BATCH_TIMEOUT_SECONDS
        )
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.builder = QuoteRequestBuilder(
            self.web3, quoter_address=config.quotes.QUOTER_ADDRESS
        )
        self.batcher = MulticallBatcher(
            self.web3,
            multicall_address=config.quotes.MULTICALL_ADDRESS,
            config=BatchConfig(timeout=config.quotes.BATCH_TIMEOUT_SECONDS),
        )

    async def run(
        self,
        input_amount: Optional[Union[Decimal, str]] = None,
        pools: Optional[Sequence[str]] = None,
        block_identifier: Union[int, str] = "latest",
    ) -> QuoteReport:
        """
        Quote ``input_amount`` of token0 on every pool.

        Args:
            input_amount: Amount to quote (configured amount if omitted)
            pools: Pool addresses (configured pools if omitted)
            block_identifier: Block to evaluate the multicall at

        Returns:
            QuoteReport with one quote per pool, in pool order
        """
        input_amount = self.config.quotes.INPUT_AMOUNT if input_amount is None else input_amount
        pools = list(self.config.quotes.POOLS if pools is None else pools)

        self.logger.info(f"Quoting {input_amount} on {len(pools)} pools")

        requests = await self.builder.build_all(input_amount, pools)
        result = await self.batcher.aggregate(
            [request.read_request for request in requests], block_identifier
        )
        quotes = format_quotes(requests, result)

        return QuoteReport(block_number=result.block_number, quotes=quotes)
