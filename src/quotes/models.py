"""
Data types passed between the quote builder, the batcher and the formatter.
"""

from dataclasses import dataclass
from decimal import Decimal

from ..batchers.base import ReadRequest


@dataclass(frozen=True)
class TokenMetadata:
    """Display metadata for an ERC20 token."""

    address: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class QuoteRequest:
    """A quoter read request together with the pair it prices."""

    read_request: ReadRequest
    input_amount: Decimal
    pool_address: str
    token_in: TokenMetadata
    token_out: TokenMetadata
    fee: int

    @property
    def correlation_id(self) -> int:
        return self.read_request.correlation_id


@dataclass(frozen=True)
class PairQuote:
    """Output amount received for a fixed input amount on one pool."""

    input_amount: Decimal
    input_symbol: str
    output_symbol: str
    output_amount: Decimal
