"""
Exact integer primitives used by the fixed-point type.
"""

from src.fixedpoint.math.exact import (
    ExactSource,
    as_exact_decimal,
    check_scale,
    minor_units_to_decimal,
    natural_scale,
    pow10,
    round_half_up,
    scale_float_multiplier,
    truncate_to_minor_units,
)

__all__ = [
    # Types
    "ExactSource",
    # Powers of ten / scale
    "pow10",
    "check_scale",
    # Conversions
    "as_exact_decimal",
    "minor_units_to_decimal",
    "natural_scale",
    "truncate_to_minor_units",
    # Float multipliers
    "round_half_up",
    "scale_float_multiplier",
]
