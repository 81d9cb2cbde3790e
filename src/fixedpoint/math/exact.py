"""
Exact Arithmetic — integer primitives behind the fixed-point type

Decimal values are stored as ``decimal.Decimal``, but every computation that
could lose digits goes through Python ``int`` or ``fractions.Fraction``:
Decimal arithmetic rounds to the active context precision (28 digits by
default), which would silently break exactness for large amounts.

INVARIANTS:
1. No function here consults or modifies a decimal context
2. Truncation is always toward zero
3. minor_units_to_decimal(truncate_to_minor_units(v, s), s) == v
   whenever v has at most s fractional digits
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from fractions import Fraction
from typing import Union

from src.fixedpoint.config import FLOAT_MULTIPLIER_FACTOR
from src.fixedpoint.errors import InvalidScaleError

ExactSource = Union[Decimal, int, str]


# =============================================================================
# POWERS OF TEN
# =============================================================================


def pow10(exponent: int) -> int:
    """
    10 ** exponent as an int.

    Raises:
        ValueError: if exponent is negative
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    return 10**exponent


def check_scale(scale: int) -> None:
    """
    Validate a scale before any value is computed with it.

    Raises:
        TypeError: scale is not an int (bool included)
        InvalidScaleError: scale < 0
    """
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise TypeError(f"scale must be an int, got {type(scale).__name__}")
    if scale < 0:
        raise InvalidScaleError(scale)


# =============================================================================
# CONVERSIONS
# =============================================================================


def as_exact_decimal(value: ExactSource) -> Decimal:
    """
    Coerce an exact source into a finite Decimal.

    Floats are refused: they carry binary rounding error and must be
    converted explicitly (see Fixed.from_number).

    Args:
        value: Decimal, int or decimal string (e.g. "12.50")

    Returns:
        Finite Decimal equal to value

    Raises:
        TypeError: for floats, bools and any other type
        ValueError: for unparsable strings and NaN/Infinity

    Examples:
        >>> as_exact_decimal("1.50")
        Decimal('1.50')
        >>> as_exact_decimal(7)
        Decimal('7')
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int) and not isinstance(value, bool):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Cannot convert '{value}' to Decimal") from e
    else:
        raise TypeError(
            f"Unsupported value type: {type(value).__name__} "
            "(Decimal, int or str expected)"
        )

    if not result.is_finite():
        raise ValueError(f"Value contains NaN/Inf: {value}")
    return result


def natural_scale(value: Decimal) -> int:
    """
    Number of fractional digits the value really needs.

    Trailing zeros do not count: Decimal("1.500") needs 1 digit,
    Decimal("100") and Decimal("1E+2") need 0.
    """
    _, digits, exponent = value.as_tuple()
    if exponent >= 0:
        return 0

    trailing_zeros = 0
    for digit in reversed(digits):
        if digit != 0:
            break
        trailing_zeros += 1

    if trailing_zeros == len(digits):
        # zero coefficient
        return 0
    return max(0, -exponent - trailing_zeros)


def truncate_to_minor_units(value: Union[Decimal, Fraction], scale: int) -> int:
    """
    trunc(value * 10^scale), computed exactly.

    Examples:
        >>> truncate_to_minor_units(Decimal("3.567"), 2)
        356
        >>> truncate_to_minor_units(Decimal("-3.567"), 2)
        -356
    """
    return math.trunc(Fraction(value) * pow10(scale))


def minor_units_to_decimal(minor_units: int, scale: int) -> Decimal:
    """
    Exact Decimal for minor_units / 10^scale with exponent -scale.

    Built from the digit tuple, so no context rounding can apply.

    Examples:
        >>> minor_units_to_decimal(150, 2)
        Decimal('1.50')
        >>> minor_units_to_decimal(-5, 1)
        Decimal('-0.5')
    """
    sign = 1 if minor_units < 0 else 0
    digits = tuple(int(char) for char in str(abs(minor_units)))
    return Decimal((sign, digits, -scale))


# =============================================================================
# FLOAT MULTIPLIERS
# =============================================================================


def round_half_up(value: float) -> int:
    """Round the exact binary value of a float to an int, ties away from zero."""
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def scale_float_multiplier(multiplier: float) -> int:
    """
    Fixed-precision integer form of |multiplier|.

    ``round_half_up(|multiplier| * 10^14)``: the multiplier is treated as a
    rational with denominator FLOAT_MULTIPLIER_FACTOR.

    Raises:
        ValueError: if multiplier is NaN/Inf
    """
    if not math.isfinite(multiplier):
        raise ValueError(f"Multiplier contains NaN/Inf: {multiplier}")
    return round_half_up(abs(multiplier) * float(FLOAT_MULTIPLIER_FACTOR))
