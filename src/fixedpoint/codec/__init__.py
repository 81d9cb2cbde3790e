"""
Pattern codec: display patterns such as '#,##0.00' in both directions.
"""

from src.fixedpoint.codec.decoder import FixedDecoder
from src.fixedpoint.codec.encoder import FixedEncoder
from src.fixedpoint.codec.pattern import (
    ParsedPattern,
    PatternSegment,
    check_zeros,
    compress_money,
    get_money_pattern,
    parse_pattern,
)
from src.fixedpoint.codec.separators import Separators

__all__ = [
    # Encoder / decoder
    "FixedDecoder",
    "FixedEncoder",
    # Configuration
    "Separators",
    # Pattern grammar
    "ParsedPattern",
    "PatternSegment",
    "check_zeros",
    "compress_money",
    "get_money_pattern",
    "parse_pattern",
]
