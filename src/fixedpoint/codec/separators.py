"""
Separators — decimal and grouping characters used by the pattern codec

Immutable Pydantic model shared by FixedEncoder and FixedDecoder. The two
characters are swapped as a pair by ``invert=True`` ("1.234,56" style).
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from src.fixedpoint.config import (
    DEFAULT_DECIMAL_SEPARATOR,
    DEFAULT_THOUSAND_SEPARATOR,
    LITERAL_SPACE,
    MANDATORY_DIGIT,
    OPTIONAL_DIGIT,
)

_RESERVED = {OPTIONAL_DIGIT, MANDATORY_DIGIT, LITERAL_SPACE, "-", "+"}


class Separators(BaseModel):
    """
    Decimal / thousand separator pair.

    Both are single characters, they must differ, and neither may be a
    placeholder, a space, a sign or a digit.
    """

    decimal_separator: str = Field(
        DEFAULT_DECIMAL_SEPARATOR, min_length=1, max_length=1, description="Decimal point"
    )
    thousand_separator: str = Field(
        DEFAULT_THOUSAND_SEPARATOR, min_length=1, max_length=1, description="Grouping character"
    )

    model_config = {"frozen": True}

    @field_validator("decimal_separator", "thousand_separator")
    @classmethod
    def validate_not_reserved(cls, v: str) -> str:
        if v in _RESERVED or v.isdigit():
            raise ValueError(f"'{v}' is reserved and cannot be used as a separator")
        return v

    @model_validator(mode="after")
    def validate_distinct(self) -> "Separators":
        if self.decimal_separator == self.thousand_separator:
            raise ValueError(
                f"decimal and thousand separators must differ, both are "
                f"'{self.decimal_separator}'"
            )
        return self

    @classmethod
    def default(cls, invert: bool = False) -> "Separators":
        """
        '.' decimal / ',' grouping, or the inverted pair when invert is set.
        """
        if invert:
            return cls(
                decimal_separator=DEFAULT_THOUSAND_SEPARATOR,
                thousand_separator=DEFAULT_DECIMAL_SEPARATOR,
            )
        return cls()
