"""
Uniswap V3 quote building and formatting.
"""

from .builder import QuoteRequestBuilder
from .errors import (
    QuoteError,
    InvalidAddress,
    MetadataUnavailable,
    InvalidAmount,
    AmountOverflow,
    LengthMismatch,
)
from .formatter import format_quotes, render_block, render_quote
from .models import PairQuote, QuoteRequest, TokenMetadata
from .units import format_decimal, from_base_units, to_base_units

__all__ = [
    "QuoteRequestBuilder",
    "QuoteError",
    "InvalidAddress",
    "MetadataUnavailable",
    "InvalidAmount",
    "AmountOverflow",
    "LengthMismatch",
    "format_quotes",
    "render_block",
    "render_quote",
    "PairQuote",
    "QuoteRequest",
    "TokenMetadata",
    "format_decimal",
    "from_base_units",
    "to_base_units",
]
