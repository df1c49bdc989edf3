"""
Exact conversion between human-denominated token amounts and their native integer representation.

All arithmetic is performed with `decimal.Decimal` inside a local context wide enough to hold any
uint256 value, so no binary floating point rounding is ever introduced. Floats are accepted for
convenience, but are converted through their shortest `repr` (e.g. `0.1` is read as `"0.1"`).
"""

import decimal
from decimal import Decimal

from swapstake.constants import MAX_UINT256, MIN_UINT256
from swapstake.exceptions.amount import InvalidAmount

type HumanAmount = str | int | float | Decimal

# 78 significant digits covers MAX_UINT256, plus headroom for the fractional part of any token
_PRECISION = 200


def _context() -> decimal.Context:
    return decimal.Context(prec=_PRECISION, traps=[decimal.InvalidOperation, decimal.Inexact])


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidAmount(decimals, "decimal precision must be an integer")
    if decimals < 0:
        raise InvalidAmount(decimals, "decimal precision must be non-negative")


def _parse(amount: HumanAmount) -> Decimal:
    match amount:
        case bool():
            raise InvalidAmount(amount, "booleans are not amounts")
        case Decimal():
            value = amount
        case int():
            value = Decimal(amount)
        case float():
            value = Decimal(repr(amount))
        case str():
            try:
                value = Decimal(amount.strip().replace("_", ""))
            except decimal.InvalidOperation:
                raise InvalidAmount(amount, "not a decimal number") from None
        case _:
            raise InvalidAmount(amount, f"unsupported type {type(amount).__name__}")

    if not value.is_finite():
        raise InvalidAmount(amount, "amount must be finite")
    if value.is_signed() and value != 0:
        raise InvalidAmount(amount, "amount must not be negative")
    return value


def fractional_digits(amount: HumanAmount) -> int:
    """
    Return the number of significant fractional digits in the amount. Trailing zeros after the
    decimal point are not significant.
    """

    value = _parse(amount)
    if value == 0:
        return 0
    try:
        exponent = value.normalize(context=_context()).as_tuple().exponent
    except decimal.Inexact:
        raise InvalidAmount(amount, "too many significant digits") from None
    assert isinstance(exponent, int)
    return max(0, -exponent)


def to_native_units(amount: HumanAmount, decimals: int) -> int:
    """
    Convert a human-denominated amount into the integer amount used on-chain by a token with the
    given decimal precision, e.g. `to_native_units("1.5", 6) == 1_500_000`.

    Raises `InvalidAmount` if the amount is negative, not a finite number, has more significant
    fractional digits than `decimals`, or does not fit in a uint256.
    """

    _check_decimals(decimals)
    value = _parse(amount)

    if (digits := fractional_digits(value)) > decimals:
        raise InvalidAmount(
            amount,
            f"{digits} fractional digits exceeds the token precision of {decimals}",
        )

    try:
        with decimal.localcontext(_context()):
            native = value.scaleb(decimals)
    except decimal.Inexact:
        raise InvalidAmount(amount, "amount exceeds the maximum uint256 value") from None

    result = int(native)
    if result > MAX_UINT256:
        raise InvalidAmount(amount, "amount exceeds the maximum uint256 value")
    return result


def from_native_units(amount: int, decimals: int) -> Decimal:
    """
    Convert an on-chain integer amount back into a human-denominated `Decimal`. This is the exact
    inverse of `to_native_units`.
    """

    _check_decimals(decimals)
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(amount, "native amounts must be integers")
    if amount < 0:
        raise InvalidAmount(amount, "amount must not be negative")

    with decimal.localcontext(_context()):
        return Decimal(amount).scaleb(-decimals)


def check_uint256(amount: int) -> int:
    """
    Validate that a native amount can be ABI-encoded as a uint256.
    """

    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(amount, "native amounts must be integers")
    if not MIN_UINT256 <= amount <= MAX_UINT256:
        raise InvalidAmount(amount, "amount is outside the uint256 range")
    return amount
