"""
FixedEncoder — renders a Fixed value according to a display pattern

Major units are formatted by Babel with the pattern's grouping and minimum
digits; minor units are taken from the value's fractional digits and
padded, truncated or trimmed according to the minor placeholders.

Examples:
    '#,##0.00'  1234.5  -> '1,234.50'
    '#.##'      1.50    -> '1.5'
    '#.#'       -0.5    -> '-0.5'
    '#.##0,00'  (inverted separators) 1234.5 -> '1.234,50'
"""

from decimal import Decimal, localcontext
from typing import TYPE_CHECKING, Optional

from babel.numbers import format_decimal, get_group_symbol

from src.fixedpoint.codec.pattern import NUMBER_MARKER, PatternSegment, parse_pattern
from src.fixedpoint.codec.separators import Separators
from src.fixedpoint.config import FORMAT_LOCALE, MANDATORY_DIGIT

if TYPE_CHECKING:
    from src.fixedpoint.domain.fixed import Fixed

# Babel patterns always use ',' for grouping
_BABEL_GROUPING = ","


class FixedEncoder:
    """
    Encodes a Fixed value to a string using a pattern.

    The pattern is validated on every encode, so an invalid pattern fails
    whatever value is being rendered.
    """

    def __init__(self, pattern: str, separators: Optional[Separators] = None):
        self.pattern = pattern
        self.separators = separators or Separators.default()

    def encode(self, amount: "Fixed") -> str:
        """
        Render amount.

        When no minor digits remain only the decimal separator is dropped;
        literal spaces of the minor segment are kept ('#.## ' renders 1.00
        as '1 ').

        Raises:
            IllegalPatternError: if the pattern is malformed
        """
        parsed = parse_pattern(self.pattern, self.separators)

        formatted = self.format_major_part(amount, parsed.major)
        if parsed.minor is not None:
            minor_digits = self.format_minor_digits(amount, parsed.minor)
            if minor_digits:
                formatted += self.separators.decimal_separator
            formatted += parsed.minor.expand(minor_digits)

        return formatted

    def format_major_part(self, amount: "Fixed", segment: PatternSegment) -> str:
        """
        Major segment with the number substituted.

        A segment without placeholders (e.g. the empty major side of '.00')
        renders no digits, but a negative value still gets its '-' right
        before the decimal separator: -0.5 with ' .0' is ' -.5'.
        """
        if NUMBER_MARKER not in segment.template:
            if amount.is_negative:
                return segment.template + "-"
            return segment.template
        return segment.expand(self.format_major_units(amount, segment.money))

    def format_major_units(self, amount: "Fixed", money: str) -> str:
        """
        Group the integer part with Babel and restore the sign.

        The sign is added by hand so that values between -1 and 0, whose
        integer part is 0, still render with a leading '-'.
        """
        thousand_separator = self.separators.thousand_separator
        babel_pattern = money.replace(thousand_separator, _BABEL_GROUPING)

        magnitude = Decimal(abs(amount.integer_part))
        with localcontext() as ctx:
            # Babel runs Decimal operations; keep every integer digit
            ctx.prec = max(ctx.prec, len(magnitude.as_tuple().digits) + 1)
            formatted = format_decimal(magnitude, format=babel_pattern, locale=FORMAT_LOCALE)

        formatted = formatted.replace(get_group_symbol(FORMAT_LOCALE), thousand_separator)
        if amount.is_negative:
            formatted = "-" + formatted
        return formatted

    def format_minor_digits(self, amount: "Fixed", segment: PatternSegment) -> str:
        """
        Fractional digits as displayed by the minor placeholders.

        - digits beyond the placeholder count are truncated
        - any '0' placeholder pads the digits with zeros to the full width
        - with only '#' placeholders trailing zero digits are dropped
        """
        width = segment.digit_count
        digits = str(amount.decimal_part).rjust(amount.scale, "0") if amount.scale else ""

        if len(digits) > width:
            digits = digits[:width]

        if segment.has_mandatory_digits:
            return digits.ljust(width, MANDATORY_DIGIT)
        return digits.rstrip("0")
