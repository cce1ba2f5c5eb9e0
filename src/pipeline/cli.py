#!/usr/bin/env python3
"""
Command-line interface for the pool quote pipeline.

Usage:
    uv run python -m src.pipeline.cli
    uv run python -m src.pipeline.cli --amount 10
    uv run python -m src.pipeline.cli --pool 0x290a6a7460b308ee3f19023d2d00de604bcf5b42 --block 18500000
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from src.batchers.errors import BatchError
from src.config import ConfigError, ConfigManager
from src.pipeline.driver import QuotePipeline, QuoteReport
from src.quotes.errors import QuoteError
from src.quotes.formatter import render_block, render_quote

logger = logging.getLogger(__name__)


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value}")


def _block(value: str):
    return value if value in ("latest", "pending", "safe", "finalized", "earliest") else int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Quote Uniswap V3 pools in a single multicall round trip",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Quote 1 token0 on every configured pool
  uv run python -m src.pipeline.cli

  # Quote 10 token0 on a single pool at a fixed block
  uv run python -m src.pipeline.cli --amount 10 --pool 0x290a6a7460b308ee3f19023d2d00de604bcf5b42 --block 18500000
        """,
    )
    parser.add_argument(
        "--amount", type=_decimal, help="Input amount in token0 units (default: QUOTE_INPUT_AMOUNT)"
    )
    parser.add_argument(
        "--pool",
        action="append",
        dest="pools",
        help="Pool address to quote; repeat for several (default: QUOTE_POOLS)",
    )
    parser.add_argument(
        "--block", type=_block, default="latest", help="Block number or tag to quote at"
    )
    parser.add_argument("--rpc-url", help="Override ETHEREUM_RPC_URL")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser


def print_report(report: QuoteReport) -> None:
    """Print the block reference and one line per quote."""
    print(render_block(report.block_number))
    for quote in report.quotes:
        print("=========")
        print(render_quote(quote))
        print("=========")


async def run(args: argparse.Namespace) -> QuoteReport:
    """Build the configuration and run the pipeline once."""
    config = ConfigManager(log_level=args.log_level, rpc_url=args.rpc_url)
    config.validate_configuration()

    pipeline = QuotePipeline(config)
    return await pipeline.run(
        input_amount=args.amount, pools=args.pools, block_identifier=args.block
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    args = build_parser().parse_args(argv)

    try:
        report = asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("⏹️  Quote run interrupted by user")
        return 130
    except (ConfigError, QuoteError, BatchError) as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return 1
    except Exception as e:
        logger.exception(f"💥 Unexpected error: {e}")
        return 1

    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
