"""
Exceptions raised by the fixed-point value type and its pattern codec.

Each error also derives from the builtin a caller would naturally catch
(ValueError / TypeError), so ``except ValueError`` keeps working.
"""


class FixedError(Exception):
    """Base class for every fixed-point failure."""


class InvalidScaleError(FixedError, ValueError):
    """A negative scale was requested."""

    def __init__(self, scale: int):
        self.scale = scale
        super().__init__(
            f"A negative scale of {scale} was passed. The scale must be >= 0."
        )


class IllegalPatternError(FixedError, ValueError):
    """The display pattern is malformed."""


class FixedParseError(FixedError, ValueError):
    """The text cannot be read with the given pattern and separators."""


class AllocationError(FixedError, ValueError):
    """Ratios passed to an allocation are empty, negative or sum to zero."""


class UnsupportedOperandError(FixedError, TypeError):
    """A multiplier or divisor of an unsupported numeric kind was passed."""
