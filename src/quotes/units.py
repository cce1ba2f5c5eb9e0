"""
Conversion between human readable token amounts and base units.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from .errors import AmountOverflow, InvalidAmount

UINT256_MAX = 2**256 - 1

# Enough digits for any uint256 value at any token precision
_PRECISION = 160


def to_base_units(amount: Union[Decimal, int, str], decimals: int) -> int:
    """
    Convert a human amount into the integer base units of a token.

    Args:
        amount: Positive, finite amount in display units
        decimals: Token precision

    Returns:
        Amount in base units

    Raises:
        InvalidAmount: Amount is not positive, not finite or too precise
        AmountOverflow: Amount does not fit in a uint256
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidAmount(f"Invalid amount: {amount!r}") from e

    if not value.is_finite() or value <= 0:
        raise InvalidAmount(f"Amount must be positive and finite, got {amount}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = value.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise InvalidAmount(
            f"Amount {amount} has more than {decimals} fractional digits"
        )

    base_units = int(scaled)
    if base_units > UINT256_MAX:
        raise AmountOverflow(f"Amount {amount} overflows uint256 at {decimals} decimals")

    return base_units


def from_base_units(value: int, decimals: int) -> Decimal:
    """Convert integer base units into an exact Decimal in display units."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(int(value)).scaleb(-decimals)


def format_decimal(value: Decimal) -> str:
    """Render a Decimal in plain notation without trailing zeros."""
    if value == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        text = format(value.normalize(), "f")
    return text
