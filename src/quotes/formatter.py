"""
Quote result formatting.

Maps the decoded multicall results back onto the pairs that produced them
and renders the console lines.
"""

from typing import List, Sequence

from ..batchers.base import BatchResult
from .errors import LengthMismatch
from .models import PairQuote, QuoteRequest
from .units import format_decimal, from_base_units


def format_quotes(
    requests: Sequence[QuoteRequest], result: BatchResult
) -> List[PairQuote]:
    """
    Zip quote requests with their batch results.

    Each output amount is scaled by the decimals of its own output token.

    Args:
        requests: Quote requests in submission order
        result: Batch result for those requests

    Returns:
        One PairQuote per request, in the same order

    Raises:
        LengthMismatch: The result does not have one entry per request
    """
    if len(requests) != len(result.results):
        raise LengthMismatch(
            f"Got {len(result.results)} results for {len(requests)} requests"
        )

    return [
        PairQuote(
            input_amount=request.input_amount,
            input_symbol=request.token_in.symbol,
            output_symbol=request.token_out.symbol,
            output_amount=from_base_units(raw_value, request.token_out.decimals),
        )
        for request, raw_value in zip(requests, result.results)
    ]


def render_quote(quote: PairQuote) -> str:
    return (
        f"{format_decimal(quote.input_amount)} {quote.input_symbol} price is "
        f"{format_decimal(quote.output_amount)} {quote.output_symbol}"
    )


def render_block(block_number: int) -> str:
    return f"BlockNo for the multicall: {block_number}"
