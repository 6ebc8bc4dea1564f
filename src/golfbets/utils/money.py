"""Exact money arithmetic helpers.

Balances are kept as ``Fraction`` so that even splits (wolf hunters, tied
prop-bet winners) stay exact and zero-sum checks need no tolerance. Amounts
are only rounded to currency when a settlement is emitted or displayed.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from fractions import Fraction
from numbers import Rational
from typing import Union

Money = Fraction
MoneyLike = Union[int, float, str, Decimal, Fraction]

ZERO = Fraction(0)

def to_money(value: MoneyLike) -> Money:
    """Convert a user-supplied amount to an exact ``Fraction``.

    Floats go through their shortest ``repr`` so ``0.1`` means ten cents.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a money amount: {value!r}")
    if isinstance(value, Rational):
        return Fraction(value)
    try:
        decimal_value = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a money amount: {value!r}") from e
    if not decimal_value.is_finite():
        raise ValueError(f"Not a money amount: {value!r}")
    return Fraction(decimal_value)

def quantize(amount: Money, places: int = 2) -> Decimal:
    """Round an exact amount to currency precision, half away from zero."""
    exponent = Decimal(1).scaleb(-places)
    exact = Decimal(amount.numerator) / Decimal(amount.denominator)
    return exact.quantize(exponent, rounding=ROUND_HALF_UP)

def format_money(amount: Money, places: int = 2) -> str:
    """Format an amount as ``$12.50`` / ``-$3.00``."""
    rounded = quantize(amount, places)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.{places}f}"
