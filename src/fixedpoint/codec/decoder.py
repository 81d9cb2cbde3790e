"""
FixedDecoder — reads a decimal amount from text written with a pattern

The pattern decides which separators the text may use: a text containing a
decimal separator is only accepted when the pattern has one. Grouping
separators and spaces are dropped from the major part. Fractional digits
beyond the requested scale are truncated, never rounded, so that
encode/decode round trips at the same scale are stable.
"""

import logging
from decimal import Decimal
from typing import Optional

from src.fixedpoint.codec.pattern import parse_pattern
from src.fixedpoint.codec.separators import Separators
from src.fixedpoint.config import DEFAULT_PARSE_PATTERN, DEFAULT_SCALE, LITERAL_SPACE
from src.fixedpoint.errors import FixedParseError
from src.fixedpoint.math.exact import check_scale

logger = logging.getLogger(__name__)

_DIGITS = "0123456789"
_SIGNS = "+-"


class FixedDecoder:
    """Decodes text into an exact Decimal with at most `scale` fractional digits."""

    def __init__(
        self,
        pattern: str = DEFAULT_PARSE_PATTERN,
        scale: int = DEFAULT_SCALE,
        separators: Optional[Separators] = None,
    ):
        check_scale(scale)
        self.pattern = pattern
        self.scale = scale
        self.separators = separators or Separators.default()

    def decode(self, amount: str) -> Decimal:
        """
        Decode amount.

        Args:
            amount: Text such as '1,234.56' or '-0.5'

        Returns:
            Decimal with at most `scale` fractional digits

        Raises:
            IllegalPatternError: if the pattern is malformed
            FixedParseError: if the text does not fit the pattern/separators

        Examples:
            >>> FixedDecoder("#,##0.00", scale=2).decode("1,234.567")
            Decimal('1234.56')
        """
        parsed = parse_pattern(self.pattern, self.separators)
        decimal_separator = self.separators.decimal_separator
        thousand_separator = self.separators.thousand_separator

        text = amount.strip()
        if not text:
            raise FixedParseError("Cannot decode an empty amount")

        negative = False
        major_digits = []
        minor_digits = []
        in_minor = False

        for pos, char in enumerate(text):
            if char in _DIGITS:
                (minor_digits if in_minor else major_digits).append(char)
            elif char == thousand_separator:
                if in_minor:
                    raise FixedParseError(
                        f"Thousand separator '{char}' found after the decimal "
                        f"separator at position {pos} in '{amount}'"
                    )
            elif char == decimal_separator:
                if not parsed.has_decimal_separator:
                    raise FixedParseError(
                        f"'{amount}' contains a decimal separator '{char}' but the "
                        f"pattern '{self.pattern}' has none"
                    )
                if in_minor:
                    raise FixedParseError(
                        f"'{amount}' contains more than one decimal separator '{char}'"
                    )
                in_minor = True
            elif char in _SIGNS:
                if pos != 0:
                    raise FixedParseError(
                        f"Unexpected sign '{char}' at position {pos} in '{amount}'"
                    )
                negative = char == "-"
            elif char == LITERAL_SPACE:
                continue
            else:
                raise FixedParseError(
                    f"Unexpected character '{char}' at position {pos} in '{amount}'"
                )

        if not major_digits and not minor_digits:
            raise FixedParseError(f"No digits found in '{amount}'")

        if len(minor_digits) > self.scale:
            logger.debug(
                "Truncating '%s' to %d fractional digits", amount, self.scale
            )
            minor_digits = minor_digits[: self.scale]

        literal = "".join(major_digits) or "0"
        if minor_digits:
            literal += "." + "".join(minor_digits)
        if negative:
            literal = "-" + literal
        return Decimal(literal)
