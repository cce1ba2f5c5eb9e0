"""
Exceptions raised while building and formatting pool quotes.
"""


class QuoteError(Exception):
    """Base exception for quote building and formatting."""
    pass


class InvalidAddress(QuoteError):
    """Raised when a pool address is malformed or does not resolve to a pool."""
    pass


class MetadataUnavailable(QuoteError):
    """Raised when a token's symbol or decimals cannot be read."""
    pass


class InvalidAmount(QuoteError):
    """Raised when an input amount is not positive, finite and representable."""
    pass


class AmountOverflow(QuoteError):
    """Raised when an amount in base units does not fit in a uint256."""
    pass


class LengthMismatch(QuoteError):
    """Raised when a batch result does not line up with its requests."""
    pass
