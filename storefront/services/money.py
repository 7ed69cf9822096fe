"""
Money Utilities - Safe Decimal operations for prices and totals.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through str so 0.1 stays 0.1
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def parse_decimal(value: object) -> Decimal:
    """
    Strictly parse a price from an external payload.

    Unlike to_decimal, bad input is an error, not zero.

    Raises:
        ValueError: for None, bools, non-numeric types, unparseable or non-finite values
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        raise ValueError(f"price must be a number, got {type(value).__name__}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"price is not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"price must be finite: {value!r}")
    return result


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_json_number(value: Number) -> Union[int, float, str]:
    """
    Convert a Decimal price back to a JSON value.

    Integral values become int so ``100`` is stored as ``100``, not ``100.0``.
    Values a float cannot hold exactly are kept as a decimal string, so a
    snapshot always restores the same Decimal.
    Use only at serialization boundaries.
    """
    decimal_value = to_decimal(value)
    if decimal_value == decimal_value.to_integral_value():
        return int(decimal_value)
    as_float = float(decimal_value)
    if Decimal(str(as_float)) == decimal_value:
        return as_float
    return str(decimal_value)
