"""
Fixed — exact fixed-scale decimal value

A Fixed pairs an exact Decimal with a scale (the number of fractional digits
retained). Internally the value is always minor_units / 10^scale, so that
1.00 at scale 2 is stored as 100 minor units.

INVARIANTS:
1. scale >= 0; a negative scale raises InvalidScaleError before anything
   else is computed
2. Rescaling down truncates toward zero (3.567 at scale 2 is 3.56)
3. Equality ignores scale: Fixed("1.0", scale=1) == Fixed("1.00", scale=2)
4. Arithmetic is exact; only multiply(float) / divide(number) are
   approximate by contract
5. sum(x.allocate(ratios)) == x for every valid ratio list
6. Immutable: derived attributes are computed once in __post_init__
"""

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import List, Sequence, Tuple, Union

from src.fixedpoint.codec.decoder import FixedDecoder
from src.fixedpoint.codec.encoder import FixedEncoder
from src.fixedpoint.codec.separators import Separators
from src.fixedpoint.config import (
    DEFAULT_PARSE_PATTERN,
    DEFAULT_SCALE,
    FLOAT_MULTIPLIER_FACTOR,
    FLOAT_ROUNDING_THRESHOLD,
)
from src.fixedpoint.errors import (
    AllocationError,
    UnsupportedOperandError,
)
from src.fixedpoint.math.exact import (
    ExactSource,
    as_exact_decimal,
    check_scale,
    minor_units_to_decimal,
    natural_scale,
    pow10,
    scale_float_multiplier,
    truncate_to_minor_units,
)

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


# =============================================================================
# FIXED
# =============================================================================


@dataclass(frozen=True, eq=False, repr=False)
class Fixed:
    """
    Fixed scale decimal.

    Fixed(value, scale) keeps value exactly when it has no more than `scale`
    fractional digits and truncates toward zero otherwise.

    Examples:
        >>> Fixed("1.5", scale=1) + Fixed("2.25", scale=2)
        Fixed('3.75', scale=2)
        >>> Fixed("3.567", scale=2)
        Fixed('3.56', scale=2)
    """

    value: Decimal
    scale: int = DEFAULT_SCALE

    # derived, computed once
    minor_units: int = field(init=False)
    integer_part: int = field(init=False)
    decimal_part: int = field(init=False)

    def __post_init__(self):
        check_scale(self.scale)
        if isinstance(self.value, float):
            raise TypeError(
                f"Cannot build a Fixed from float {self.value!r}; "
                "use Fixed.from_number to accept floating point input"
            )

        source = as_exact_decimal(self.value)
        minor_units = truncate_to_minor_units(source, self.scale)
        value = minor_units_to_decimal(minor_units, self.scale)
        if value != source:
            logger.debug("Truncated %s to scale %d: %s", source, self.scale, value)

        factor = pow10(self.scale)
        integer_part = abs(minor_units) // factor
        if minor_units < 0:
            integer_part = -integer_part

        object.__setattr__(self, "value", value)
        object.__setattr__(self, "minor_units", minor_units)
        object.__setattr__(self, "integer_part", integer_part)
        object.__setattr__(self, "decimal_part", abs(minor_units - integer_part * factor))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_decimal(cls, value: ExactSource, scale: int = DEFAULT_SCALE) -> "Fixed":
        """Fixed from an exact Decimal, int or decimal string."""
        return cls(value, scale)

    @classmethod
    def from_minor_units(cls, minor_units: int, scale: int = DEFAULT_SCALE) -> "Fixed":
        """
        Fixed from a count of minor units.

        Examples:
            >>> Fixed.from_minor_units(100, scale=2)
            Fixed('1.00', scale=2)
        """
        check_scale(scale)
        if isinstance(minor_units, bool) or not isinstance(minor_units, int):
            raise TypeError(
                f"minor_units must be an int, got {type(minor_units).__name__}"
            )
        return cls(minor_units_to_decimal(minor_units, scale), scale)

    @classmethod
    def from_number(cls, amount: Union[int, float], scale: int = DEFAULT_SCALE) -> "Fixed":
        """
        Fixed from an int or a float.

        A float is first rendered with `scale` fixed decimals (correctly
        rounded from its binary value) and then decoded, so
        Fixed.from_number(1.2345, scale=2) is 1.23.

        Raises:
            InvalidScaleError: scale < 0
            ValueError: float is NaN/Inf
            UnsupportedOperandError: amount is neither int nor float
        """
        check_scale(scale)
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise UnsupportedOperandError(
                f'Unsupported type of amount: "{type(amount).__name__}" '
                "(int or float are expected)"
            )
        if isinstance(amount, int):
            return cls(amount, scale)

        if not math.isfinite(amount):
            raise ValueError(f"Amount contains NaN/Inf: {amount}")

        decoder = FixedDecoder(
            pattern=DEFAULT_PARSE_PATTERN, scale=scale, separators=Separators.default()
        )
        return cls(decoder.decode(f"{amount:.{scale}f}"), scale)

    @classmethod
    def parse(
        cls,
        amount: str,
        pattern: str = DEFAULT_PARSE_PATTERN,
        scale: int = DEFAULT_SCALE,
        invert_separators: bool = False,
    ) -> "Fixed":
        """
        Parse amount using pattern.

        With invert_separators the decimal separator is ',' and the thousand
        separator '.'.

        Raises:
            InvalidScaleError: scale < 0
            IllegalPatternError: pattern is malformed
            FixedParseError: amount does not match the pattern

        Examples:
            >>> Fixed.parse("1.234,56", pattern="#.##0,00", invert_separators=True)
            Fixed('1234.56', scale=2)
        """
        check_scale(scale)
        decoder = FixedDecoder(
            pattern=pattern,
            scale=scale,
            separators=Separators.default(invert=invert_separators),
        )
        return cls(decoder.decode(amount), scale)

    @classmethod
    def from_fixed(cls, fixed: "Fixed", scale: int = DEFAULT_SCALE) -> "Fixed":
        """Copy of fixed at a new scale (truncating when the scale shrinks)."""
        return cls(fixed.value, scale)

    def with_scale(self, scale: int) -> "Fixed":
        return Fixed.from_fixed(self, scale)

    # -------------------------------------------------------------------------
    # Derived attributes
    # -------------------------------------------------------------------------

    @property
    def scale_factor(self) -> int:
        """10 ** scale"""
        return pow10(self.scale)

    @property
    def is_zero(self) -> bool:
        return self.minor_units == 0

    @property
    def is_negative(self) -> bool:
        return self.minor_units < 0

    @property
    def is_positive(self) -> bool:
        return self.minor_units > 0

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    @property
    def sort_key(self) -> Tuple[Decimal, int]:
        """Total order: value first, scale breaks ties."""
        return (self.value, self.scale)

    def compare_to(self, other: "Fixed") -> int:
        """-1, 0 or 1, comparing value first and scale on equal values."""
        if self.sort_key < other.sort_key:
            return -1
        if self.sort_key > other.sort_key:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        # scale is not part of equality, so it is not part of the hash
        return hash(self.value)

    def __lt__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "Fixed") -> bool:
        if not isinstance(other, Fixed):
            return NotImplemented
        return self.value >= other.value

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _minor_units_at(self, scale: int) -> int:
        """minor_units expressed at a scale >= self.scale"""
        return self.minor_units * pow10(scale - self.scale)

    def __add__(self, other: "Fixed") -> "Fixed":
        """The result scale is the larger scale of the two operands."""
        if not isinstance(other, Fixed):
            return NotImplemented
        scale = max(self.scale, other.scale)
        return Fixed.from_minor_units(
            self._minor_units_at(scale) + other._minor_units_at(scale), scale
        )

    def __sub__(self, other: "Fixed") -> "Fixed":
        if not isinstance(other, Fixed):
            return NotImplemented
        scale = max(self.scale, other.scale)
        return Fixed.from_minor_units(
            self._minor_units_at(scale) - other._minor_units_at(scale), scale
        )

    def __neg__(self) -> "Fixed":
        return Fixed.from_minor_units(-self.minor_units, self.scale)

    def __mul__(self, other: Union["Fixed", Number]) -> "Fixed":
        """
        Fixed * Fixed is exact with scale = sum of the operand scales.
        Numbers are delegated to multiply().
        """
        if isinstance(other, Fixed):
            return Fixed.from_minor_units(
                self.minor_units * other.minor_units, self.scale + other.scale
            )
        if _is_number(other):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other: Number) -> "Fixed":
        if _is_number(other):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, other: Union["Fixed", Number]) -> "Fixed":
        """
        Fixed / Fixed: the exact quotient truncated toward zero at the larger
        scale of the two operands. Numbers are delegated to divide().
        """
        if isinstance(other, Fixed):
            if other.is_zero:
                raise ZeroDivisionError(f"Cannot divide {self} by zero")
            scale = max(self.scale, other.scale)
            quotient = Fraction(self.minor_units, self.scale_factor) / Fraction(
                other.minor_units, other.scale_factor
            )
            return Fixed.from_minor_units(truncate_to_minor_units(quotient, scale), scale)
        if _is_number(other):
            return self.divide(other)
        return NotImplemented

    def multiply(self, multiplier: Union["Fixed", Number]) -> "Fixed":
        """
        Multiply by an int, float, Decimal or Fixed.

        - int: exact, same scale
        - Decimal: exact, the multiplier keeps its natural scale
        - float: approximate, see _multiply_float; same scale

        Raises:
            UnsupportedOperandError: any other multiplier type
        """
        if isinstance(multiplier, Fixed):
            return self * multiplier
        if isinstance(multiplier, int) and not isinstance(multiplier, bool):
            return Fixed.from_minor_units(self.minor_units * multiplier, self.scale)
        if isinstance(multiplier, Decimal):
            exact = as_exact_decimal(multiplier)
            return self * Fixed(exact, natural_scale(exact))
        if isinstance(multiplier, float):
            return self._multiply_float(multiplier)

        raise UnsupportedOperandError(
            f'Unsupported type of multiplier: "{type(multiplier).__name__}" '
            "(int, float, Decimal or Fixed are expected)"
        )

    def _multiply_float(self, multiplier: float) -> "Fixed":
        """
        The multiplier becomes round_half_up(|m| * 10^14) / 10^14; the product
        with |minor_units| is divided back with truncation and the remainder
        rounds half up. The sign is reapplied last.
        """
        product = abs(self.minor_units) * scale_float_multiplier(multiplier)
        result, remainder = divmod(product, FLOAT_MULTIPLIER_FACTOR)
        if remainder >= FLOAT_ROUNDING_THRESHOLD:
            result += 1
        if remainder:
            logger.debug("Rounded %s * %r at scale %d", self, multiplier, self.scale)

        if (self.minor_units < 0) != (multiplier < 0):
            result = -result
        return Fixed.from_minor_units(result, self.scale)

    def divide(self, divisor: Union["Fixed", Number]) -> "Fixed":
        """
        Divide by a Fixed, Decimal, int or float.

        Fixed and Decimal divisors divide exactly (truncating at the result
        scale). Plain numbers are approximate: the value is multiplied by
        the float 1.0 / divisor.

        Raises:
            ZeroDivisionError: divisor is zero
            UnsupportedOperandError: any other divisor type
        """
        if isinstance(divisor, Fixed):
            return self / divisor
        if isinstance(divisor, Decimal):
            exact = as_exact_decimal(divisor)
            return self / Fixed(exact, natural_scale(exact))
        if isinstance(divisor, bool) or not isinstance(divisor, (int, float)):
            raise UnsupportedOperandError(
                f'Unsupported type of divisor: "{type(divisor).__name__}" '
                "(int, float, Decimal or Fixed are expected)"
            )
        if divisor == 0:
            raise ZeroDivisionError(f"Cannot divide {self} by zero")
        return self.multiply(1.0 / float(divisor))

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def allocate(self, ratios: Sequence[int]) -> List["Fixed"]:
        """
        Split the value into shares proportional to ratios.

        Every share gets floor(|minor_units| * ratio / sum(ratios)); the
        units left over are handed out one at a time, in ratio order, to
        entries with a non-zero ratio. Shares carry the sign and scale of
        this value and always sum to it exactly.

        Raises:
            AllocationError: empty ratios, a negative or non-int ratio, or
                ratios summing to zero

        Examples:
            >>> Fixed.from_minor_units(101, scale=2).allocate([1, 1])
            [Fixed('0.51', scale=2), Fixed('0.50', scale=2)]
        """
        ratios = list(ratios)
        if not ratios:
            raise AllocationError(
                "List of ratios must not be empty, cannot allocate to nothing."
            )
        for ratio in ratios:
            if isinstance(ratio, bool) or not isinstance(ratio, int):
                raise AllocationError(
                    f"Ratio must be an int, got {type(ratio).__name__}: {ratios}"
                )
            if ratio < 0:
                raise AllocationError(f"Ratio must not be negative: {ratios}")

        total_volume = sum(ratios)
        if total_volume == 0:
            raise AllocationError(
                "Sum of ratios must be greater than zero, cannot allocate to nothing."
            )

        absolute_value = abs(self.minor_units)
        shares = [absolute_value * ratio // total_volume for ratio in ratios]
        remainder = absolute_value - sum(shares)

        for i, ratio in enumerate(ratios):
            if remainder == 0:
                break
            if ratio > 0:
                shares[i] += 1
                remainder -= 1

        sign = -1 if self.minor_units < 0 else 1
        return [Fixed.from_minor_units(sign * share, self.scale) for share in shares]

    allocation_according_to = allocate

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_decimal(self) -> Decimal:
        return self.value

    def format(self, pattern: str, invert_separators: bool = False) -> str:
        """
        Render with pattern, e.g. '#,##0.00'.

        Raises:
            IllegalPatternError: pattern is malformed
        """
        return FixedEncoder(pattern, Separators.default(invert=invert_separators)).encode(self)

    def __str__(self) -> str:
        if self.scale == 0:
            pattern = "#"
        else:
            pattern = "#." + "#" * self.scale
        return FixedEncoder(pattern, Separators.default()).encode(self)

    def __repr__(self) -> str:
        return f"Fixed('{self.value:f}', scale={self.scale})"
