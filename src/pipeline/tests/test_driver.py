"""
End-to-end tests for the quote pipeline against a mocked node.
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest
from eth_abi import decode

from src.batchers.errors import BatchSubmissionFailed
from src.batchers.multicall import AGGREGATE_SELECTOR, MULTICALL3_ADDRESS
from src.conftest import MATIC, MATIC_ETH_POOL, WBTC, WBTC_ETH_POOL, WETH
from src.quotes.contracts import QUOTER_ADDRESS
from src.quotes.errors import InvalidAddress
from src.quotes.formatter import render_quote

from ..driver import QuotePipeline, QuoteReport


@pytest.fixture
def config():
    """Mock ConfigManager for the pipeline."""
    mock_config = Mock()
    mock_config.quotes.QUOTER_ADDRESS = QUOTER_ADDRESS
    mock_config.quotes.MULTICALL_ADDRESS = MULTICALL3_ADDRESS
    mock_config.quotes.BATCH_TIMEOUT_SECONDS = 5.0
    mock_config.quotes.POOLS = [MATIC_ETH_POOL, WBTC_ETH_POOL]
    mock_config.quotes.INPUT_AMOUNT = Decimal("1")
    return mock_config


class TestQuotePipeline:
    """Test the builder -> multicall -> formatter pass."""

    @pytest.mark.asyncio
    async def test_matic_and_wbtc_quotes(self, config, fake_chain):
        """Test the two pair example end to end."""
        fake_chain.set_quotes(18500000, [4 * 10**14, 142 * 10**17])
        pipeline = QuotePipeline(config, web3=fake_chain.web3)

        report = await pipeline.run()

        assert isinstance(report, QuoteReport)
        assert report.block_number == 18500000
        assert [render_quote(q) for q in report.quotes] == [
            "1 MATIC price is 0.0004 ETH",
            "1 WBTC price is 14.2 ETH",
        ]

    @pytest.mark.asyncio
    async def test_one_multicall_for_all_pools(self, config, fake_chain):
        """Test that every quote travels in a single eth.call."""
        fake_chain.set_quotes(1, [4 * 10**14, 142 * 10**17])
        pipeline = QuotePipeline(config, web3=fake_chain.web3)

        await pipeline.run()

        assert fake_chain.web3.eth.call.call_count == 1
        data = fake_chain.web3.eth.call.call_args.args[0]["data"]
        (calls,) = decode(["(address,bytes)[]"], data[len(AGGREGATE_SELECTOR):])

        quoted_pairs = [
            decode(["address", "address", "uint24", "uint256", "uint160"], calldata[4:])
            for _, calldata in calls
        ]
        assert [(t_in.lower(), t_out.lower(), amount) for t_in, t_out, _, amount, _ in quoted_pairs] == [
            (MATIC.lower(), WETH.lower(), 10**18),
            (WBTC.lower(), WETH.lower(), 10**8),
        ]

    @pytest.mark.asyncio
    async def test_overrides(self, config, fake_chain):
        """Test overriding amount, pools and block at run time."""
        fake_chain.set_quotes(17000000, [71 * 10**17])
        pipeline = QuotePipeline(config, web3=fake_chain.web3)

        report = await pipeline.run(
            input_amount=Decimal("0.5"), pools=[WBTC_ETH_POOL], block_identifier=17000000
        )

        assert [render_quote(q) for q in report.quotes] == ["0.5 WBTC price is 7.1 ETH"]
        assert fake_chain.web3.eth.call.call_args.args[1] == 17000000

    @pytest.mark.asyncio
    async def test_builder_failure_skips_multicall(self, config, fake_chain):
        """Test that a bad pool aborts before anything is aggregated."""
        config.quotes.POOLS = [MATIC_ETH_POOL, "0x0000000000000000000000000000000000000001"]
        pipeline = QuotePipeline(config, web3=fake_chain.web3)

        with pytest.raises(InvalidAddress):
            await pipeline.run()

        fake_chain.web3.eth.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_network_failure(self, config, fake_chain):
        """Test that a failed multicall yields no quotes."""
        fake_chain.web3.eth.call.side_effect = ConnectionError("connection reset by peer")
        pipeline = QuotePipeline(config, web3=fake_chain.web3)

        with pytest.raises(BatchSubmissionFailed):
            await pipeline.run()

    def test_http_timeout_follows_batch_deadline(self, config):
        """Test that the node connection is created with the batch deadline."""
        QuotePipeline(config)

        config.chains.create_web3.assert_called_once_with(timeout=5.0)
