"""
Tests for the exact arithmetic primitives

Checks:
1. Powers of ten
2. Coercion to finite Decimal
3. Natural scale of a Decimal
4. Exact truncation and minor-unit reconstruction
5. Float multiplier scaling (10^14, half-up)
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.fixedpoint.config import FLOAT_MULTIPLIER_FACTOR
from src.fixedpoint.errors import InvalidScaleError
from src.fixedpoint.math.exact import (
    as_exact_decimal,
    check_scale,
    minor_units_to_decimal,
    natural_scale,
    pow10,
    round_half_up,
    scale_float_multiplier,
    truncate_to_minor_units,
)


# =============================================================================
# POWERS OF TEN
# =============================================================================


class TestPow10:
    """Tests for pow10"""

    def test_small_exponents(self) -> None:
        assert pow10(0) == 1
        assert pow10(2) == 100

    def test_large_exponent_is_exact(self) -> None:
        """No float involved: 10^40 is an exact int"""
        assert pow10(40) == int("1" + "0" * 40)

    def test_negative_exponent_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            pow10(-1)


class TestCheckScale:
    """Tests for check_scale"""

    def test_valid(self) -> None:
        check_scale(0)
        check_scale(12)

    def test_negative(self) -> None:
        with pytest.raises(InvalidScaleError):
            check_scale(-1)

    def test_bool_and_float_rejected(self) -> None:
        with pytest.raises(TypeError):
            check_scale(True)
        with pytest.raises(TypeError):
            check_scale(1.0)


# =============================================================================
# CONVERSIONS
# =============================================================================


class TestAsExactDecimal:
    """Tests for as_exact_decimal"""

    def test_accepts_decimal_int_and_str(self) -> None:
        assert as_exact_decimal(Decimal("1.50")) == Decimal("1.50")
        assert as_exact_decimal(7) == Decimal(7)
        assert as_exact_decimal(" -2.25 ") == Decimal("-2.25")

    def test_rejects_float(self) -> None:
        """Floats must go through Fixed.from_number"""
        with pytest.raises(TypeError):
            as_exact_decimal(1.5)

    def test_rejects_bool(self) -> None:
        with pytest.raises(TypeError):
            as_exact_decimal(True)

    def test_rejects_garbage_string(self) -> None:
        with pytest.raises(ValueError, match="Cannot convert"):
            as_exact_decimal("twelve")

    def test_rejects_nan_and_infinity(self) -> None:
        with pytest.raises(ValueError, match="NaN/Inf"):
            as_exact_decimal(Decimal("NaN"))
        with pytest.raises(ValueError, match="NaN/Inf"):
            as_exact_decimal("Infinity")


class TestNaturalScale:
    """Tests for natural_scale"""

    def test_trailing_zeros_ignored(self) -> None:
        assert natural_scale(Decimal("1.500")) == 1
        assert natural_scale(Decimal("1.000")) == 0

    def test_integers(self) -> None:
        assert natural_scale(Decimal("100")) == 0
        assert natural_scale(Decimal("1E+2")) == 0

    def test_zero(self) -> None:
        assert natural_scale(Decimal("0.000")) == 0

    def test_fractional_digits(self) -> None:
        assert natural_scale(Decimal("0.125")) == 3
        assert natural_scale(Decimal("-3.05")) == 2


class TestTruncateToMinorUnits:
    """Tests for truncate_to_minor_units"""

    def test_truncates_toward_zero(self) -> None:
        assert truncate_to_minor_units(Decimal("3.567"), 2) == 356
        assert truncate_to_minor_units(Decimal("-3.567"), 2) == -356

    def test_exact_values_unchanged(self) -> None:
        assert truncate_to_minor_units(Decimal("3.5"), 2) == 350

    def test_fraction_input(self) -> None:
        assert truncate_to_minor_units(Fraction(1, 3), 4) == 3333
        assert truncate_to_minor_units(Fraction(-2, 3), 2) == -66

    def test_beyond_default_decimal_precision(self) -> None:
        """40 significant digits survive, unlike a 28-digit Decimal context"""
        value = Decimal("1234567890123456789012345678901234567.891")
        assert truncate_to_minor_units(value, 3) == 1234567890123456789012345678901234567891


class TestMinorUnitsToDecimal:
    """Tests for minor_units_to_decimal"""

    def test_exponent_matches_scale(self) -> None:
        result = minor_units_to_decimal(150, 2)
        assert result == Decimal("1.50")
        assert result.as_tuple().exponent == -2

    def test_negative(self) -> None:
        assert minor_units_to_decimal(-5, 1) == Decimal("-0.5")

    def test_zero_is_not_negative(self) -> None:
        assert not minor_units_to_decimal(0, 2).is_signed()

    def test_scale_zero(self) -> None:
        assert minor_units_to_decimal(42, 0) == Decimal(42)


# =============================================================================
# FLOAT MULTIPLIERS
# =============================================================================


class TestFloatMultiplier:
    """Tests for round_half_up and scale_float_multiplier"""

    def test_round_half_up_ties_away_from_zero(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -3
        assert round_half_up(2.4) == 2

    def test_scale_factor(self) -> None:
        assert scale_float_multiplier(0.5) == 5 * 10**13
        assert scale_float_multiplier(1.0) == FLOAT_MULTIPLIER_FACTOR

    def test_sign_dropped(self) -> None:
        assert scale_float_multiplier(-1.5) == 15 * 10**13

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValueError, match="NaN/Inf"):
            scale_float_multiplier(float("nan"))
