"""Pydantic wire models for the value types.

Numbers cross process boundaries as JSON objects of decimal strings, so no
precision is lost to JSON numbers:

    BigDecimalModel.from_number(BigDecimal.of("-1.50")).model_dump()
    # {"unscaled_value": "-150", "scale": 2}

Models rebuild values only through the validating factories.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from bignum.big_decimal import BigDecimal
from bignum.big_integer import BigInteger
from bignum.big_rational import BigRational
from bignum.calculator.base import int_to_decimal
from bignum.errors import NumberFormatError

__all__ = ["IntegerString", "BigIntegerModel", "BigDecimalModel", "BigRationalModel"]


def validate_integer_string(value: Any) -> str:
    """Validate that a value is an integer, returned as a canonical decimal string.

    Args:
        value: Value to validate (string, int or BigInteger)

    Returns:
        Canonical signed decimal string

    Raises:
        ValueError: If value is not an integer in decimal notation
    """
    if isinstance(value, bool):
        raise ValueError(f"Integer must be string or int, got {type(value).__name__}")

    if isinstance(value, BigInteger):
        return str(value)

    if isinstance(value, int):
        return int_to_decimal(value)

    if not isinstance(value, str):
        raise ValueError(f"Integer must be string or int, got {type(value).__name__}")

    try:
        return str(BigInteger.parse(value))
    except NumberFormatError as err:
        raise ValueError(f"Integer must be a decimal integer string: '{value}'") from err


# Arbitrary-size signed integer as decimal string (validated, canonical)
IntegerString = Annotated[
    str,
    BeforeValidator(validate_integer_string),
    Field(description="Arbitrary-size integer as decimal string"),
]


class BigIntegerModel(BaseModel):
    """Wire form of a BigInteger."""

    value: IntegerString

    @classmethod
    def from_number(cls, number: BigInteger) -> "BigIntegerModel":
        return cls(value=str(number))

    def to_number(self) -> BigInteger:
        return BigInteger.of(self.value)


class BigDecimalModel(BaseModel):
    """Wire form of a BigDecimal: value == unscaled_value / 10**scale."""

    unscaled_value: IntegerString
    scale: int = Field(ge=0, description="Number of digits after the decimal point")

    @classmethod
    def from_number(cls, number: BigDecimal) -> "BigDecimalModel":
        return cls(unscaled_value=str(number.unscaled_value), scale=number.scale)

    def to_number(self) -> BigDecimal:
        return BigDecimal.of_unscaled_value(self.unscaled_value, self.scale)


class BigRationalModel(BaseModel):
    """Wire form of a BigRational, not reduced."""

    numerator: IntegerString
    denominator: IntegerString

    @classmethod
    def from_number(cls, number: BigRational) -> "BigRationalModel":
        return cls(numerator=str(number.numerator), denominator=str(number.denominator))

    def to_number(self) -> BigRational:
        """Rebuild the fraction.

        Raises:
            DivisionByZeroError: If the denominator is zero
        """
        return BigRational.nd(self.numerator, self.denominator)
