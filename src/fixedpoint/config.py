"""
Defaults — scale, patterns, separators and float multiplication constants

Every tunable used by the value type and the pattern codec lives here, so
that the construction helpers, the encoder and the decoder agree on the
same defaults.
"""

from typing import Final

# =============================================================================
# SCALE & PATTERNS
# =============================================================================

# Scale used when a caller does not pass one (minor units = cents)
DEFAULT_SCALE: Final[int] = 2

# Pattern used by Fixed.parse and Fixed.from_number
DEFAULT_PARSE_PATTERN: Final[str] = "#.#"

# =============================================================================
# SEPARATORS
# =============================================================================

DEFAULT_DECIMAL_SEPARATOR: Final[str] = "."
DEFAULT_THOUSAND_SEPARATOR: Final[str] = ","

# Placeholder characters of the pattern grammar
OPTIONAL_DIGIT: Final[str] = "#"
MANDATORY_DIGIT: Final[str] = "0"
LITERAL_SPACE: Final[str] = " "

# =============================================================================
# FLOAT MULTIPLICATION (fixed-precision rational multiplier)
# =============================================================================

# A float multiplier m is turned into round_half_up(|m| * 10^14) / 10^14
FLOAT_MULTIPLIER_FACTOR: Final[int] = 10**14

# Remainder at or above half the factor rounds away from zero
FLOAT_ROUNDING_THRESHOLD: Final[int] = 5 * 10**13

# =============================================================================
# GROUPING
# =============================================================================

# Locale handed to Babel when formatting the integer part. Its grouping
# symbol is swapped for the configured thousand separator afterwards.
FORMAT_LOCALE: Final[str] = "en_US"
