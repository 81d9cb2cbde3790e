"""
fixedpoint — exact fixed-scale decimals with a pattern codec

Fixed values keep an exact decimal together with the number of fractional
digits retained (the scale), and render to / parse from display patterns
such as '#,##0.00'.
"""

from src.fixedpoint.codec import FixedDecoder, FixedEncoder, Separators
from src.fixedpoint.domain import Fixed
from src.fixedpoint.errors import (
    AllocationError,
    FixedError,
    FixedParseError,
    IllegalPatternError,
    InvalidScaleError,
    UnsupportedOperandError,
)

__all__ = [
    # Value type
    "Fixed",
    # Codec
    "FixedDecoder",
    "FixedEncoder",
    "Separators",
    # Exceptions
    "AllocationError",
    "FixedError",
    "FixedParseError",
    "IllegalPatternError",
    "InvalidScaleError",
    "UnsupportedOperandError",
]
