"""
Pattern Grammar — shared scanner for FixedEncoder and FixedDecoder

A display pattern is made of:
- '#'  optional digit
- '0'  mandatory digit (zero padded)
- the thousand separator (grouping), any number of times
- the decimal separator, at most once
- ' '  literal space, copied verbatim

Everything else is an IllegalPatternError.

RULES (checked per segment, major = before the decimal separator,
minor = after it):
1. The money characters (placeholders and grouping) form one contiguous run;
   a space ends the run and no money character may follow it
2. Once runs of '0' are compressed, the run must end with '0' and, scanning
   from the end, no '0' may appear after the first '#'
3. A major run may not end with a grouping separator or contain two
   adjacent grouping separators
"""

import re
from dataclasses import dataclass
from typing import Optional

from src.fixedpoint.codec.separators import Separators
from src.fixedpoint.config import LITERAL_SPACE, MANDATORY_DIGIT, OPTIONAL_DIGIT
from src.fixedpoint.errors import IllegalPatternError

# Marker left in a compressed segment where the number is substituted
NUMBER_MARKER = OPTIONAL_DIGIT


# =============================================================================
# PARSED FORM
# =============================================================================


@dataclass(frozen=True)
class PatternSegment:
    """One side of the decimal separator."""

    # money characters only, spaces removed (e.g. '#,##0')
    money: str
    # segment with the money run replaced by a single NUMBER_MARKER
    template: str

    @property
    def digit_count(self) -> int:
        return sum(1 for char in self.money if char in (OPTIONAL_DIGIT, MANDATORY_DIGIT))

    @property
    def has_mandatory_digits(self) -> bool:
        return MANDATORY_DIGIT in self.money

    def expand(self, number: str) -> str:
        """Substitute the rendered number into the template."""
        return self.template.replace(NUMBER_MARKER, number)


@dataclass(frozen=True)
class ParsedPattern:
    """A validated pattern split at its decimal separator."""

    pattern: str
    major: PatternSegment
    # None when the pattern has no decimal separator
    minor: Optional[PatternSegment]

    @property
    def has_decimal_separator(self) -> bool:
        return self.minor is not None


# =============================================================================
# SCANNER
# =============================================================================


def parse_pattern(pattern: str, separators: Separators) -> ParsedPattern:
    """
    Validate a pattern and split it into major / minor segments.

    Args:
        pattern: Display pattern, e.g. '#,##0.00'
        separators: Decimal / thousand characters the pattern is written with

    Returns:
        ParsedPattern

    Raises:
        IllegalPatternError: if any rule of the grammar is violated

    Examples:
        >>> parsed = parse_pattern("#,##0.00", Separators())
        >>> parsed.major.money, parsed.minor.money
        ('#,##0', '00')
    """
    decimal_separator = separators.decimal_separator
    if pattern.count(decimal_separator) > 1:
        raise IllegalPatternError(
            "A format pattern may contain, at most, a single decimal "
            f"separator '{decimal_separator}': '{pattern}'"
        )

    major, found, minor = pattern.partition(decimal_separator)
    return ParsedPattern(
        pattern=pattern,
        major=_parse_segment(major, separators, minor=False),
        minor=_parse_segment(minor, separators, minor=True) if found else None,
    )


def _parse_segment(segment: str, separators: Separators, minor: bool) -> PatternSegment:
    money = get_money_pattern(segment, separators)
    check_zeros(money, separators.thousand_separator, minor=minor)
    if not minor:
        check_grouping(money, separators.thousand_separator)
    return PatternSegment(money=money, template=compress_money(segment, separators))


def get_money_pattern(segment: str, separators: Separators) -> str:
    """
    Extract the contiguous run of money characters from a segment.

    Raises:
        IllegalPatternError: on an unknown character or a broken run
    """
    money_chars = (OPTIONAL_DIGIT, MANDATORY_DIGIT, separators.thousand_separator)
    found_money = False
    in_money = False
    money = []

    for pos, char in enumerate(segment):
        if char in money_chars:
            if found_money and not in_money:
                raise IllegalPatternError(
                    f"Found '{char}' at location {pos} of '{segment}'. All money "
                    f"characters ({''.join(money_chars)}) must be contiguous"
                )
            money.append(char)
            in_money = True
            found_money = True
        elif char == LITERAL_SPACE:
            in_money = False
        else:
            raise IllegalPatternError(
                f"The pattern contains an unknown character: '{char}'"
            )

    return "".join(money)


def check_zeros(money: str, thousand_separator: str, minor: bool) -> None:
    """
    Check that '0' placeholders only form the trailing block of the run.

    Grouping separators may sit between the zeros ('0,000').
    """
    if MANDATORY_DIGIT not in money:
        return

    illegal = IllegalPatternError(
        "The '0' pattern characters must only be at the end of the pattern "
        f"for {'Minor' if minor else 'Major'} Units: '{money}'"
    )

    compressed = re.sub(f"{MANDATORY_DIGIT}+", MANDATORY_DIGIT, money)
    if compressed[-1] != MANDATORY_DIGIT:
        raise illegal

    zeros_ended = False
    for char in reversed(compressed):
        if char == MANDATORY_DIGIT:
            if zeros_ended:
                raise illegal
        elif char != thousand_separator:
            zeros_ended = True


def check_grouping(money: str, thousand_separator: str) -> None:
    """Grouping separators must separate digits."""
    if not money:
        return
    if not any(char in (OPTIONAL_DIGIT, MANDATORY_DIGIT) for char in money):
        raise IllegalPatternError(
            f"The pattern has grouping separators but no digits: '{money}'"
        )
    if money.endswith(thousand_separator) or thousand_separator * 2 in money:
        raise IllegalPatternError(
            f"Misplaced thousand separator '{thousand_separator}' in '{money}'"
        )


def compress_money(segment: str, separators: Separators) -> str:
    """Replace the run of money characters with a single NUMBER_MARKER."""
    money_class = re.escape(
        OPTIONAL_DIGIT + MANDATORY_DIGIT + separators.thousand_separator
    )
    return re.sub(f"[{money_class}]+", NUMBER_MARKER, segment)
