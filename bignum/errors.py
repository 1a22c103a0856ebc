"""Error hierarchy for bignum arithmetic.

Every error derives from MathError, itself an ArithmeticError, and where a
builtin exception already names the same failure it is mixed in too, so
callers can catch either:

    try:
        BigInteger.of(a).quotient(b)
    except ZeroDivisionError:
        ...
"""

from __future__ import annotations


class MathError(ArithmeticError):
    """Base class for bignum errors."""

    pass


class NumberFormatError(MathError, ValueError):
    """Input text does not match the required number grammar."""

    @classmethod
    def invalid_format(cls, value: str) -> NumberFormatError:
        return cls(f'The given value "{value}" does not represent a valid number.')

    @classmethod
    def char_not_in_base(cls, char: str, base: int) -> NumberFormatError:
        return cls(f'"{char}" is not a valid character in base {base}.')


class DivisionByZeroError(MathError, ZeroDivisionError):
    """Division, modulo or denominator by zero."""

    @classmethod
    def division_by_zero(cls) -> DivisionByZeroError:
        return cls("Division by zero.")

    @classmethod
    def modulus_must_not_be_zero(cls) -> DivisionByZeroError:
        return cls("The modulus must not be zero.")

    @classmethod
    def denominator_must_not_be_zero(cls) -> DivisionByZeroError:
        return cls("The denominator of a rational number cannot be zero.")


class RoundingNecessaryError(MathError):
    """An exact result was requested but the operation is inexact."""

    @classmethod
    def rounding_necessary(cls) -> RoundingNecessaryError:
        return cls("Rounding is necessary to represent the result of the operation.")

    @classmethod
    def non_terminating_decimal(cls) -> RoundingNecessaryError:
        return cls("The division yields a non-terminating decimal expansion.")

    @classmethod
    def not_an_integer(cls, value: object) -> RoundingNecessaryError:
        return cls(f"{value} cannot be represented exactly as an integer.")


class IntegerOverflowError(MathError, OverflowError):
    """Value does not fit the requested fixed-width target."""

    @classmethod
    def to_int_overflow(cls, value: object, min_value: int, max_value: int) -> IntegerOverflowError:
        return cls(
            f"{value} is out of range {min_value} to {max_value} "
            "and cannot be represented as an integer."
        )

    @classmethod
    def to_float_overflow(cls, value: object) -> IntegerOverflowError:
        return cls(f"{value} is too large to be represented as a float.")


class NegativeNumberError(MathError, ValueError):
    """Operation undefined for negative operands (sqrt, modulus, exponent)."""

    pass


class InvalidArgumentError(MathError, ValueError):
    """Argument outside the accepted domain (empty min/max, bad base, scale)."""

    pass


__all__ = [
    "MathError",
    "NumberFormatError",
    "DivisionByZeroError",
    "RoundingNecessaryError",
    "IntegerOverflowError",
    "NegativeNumberError",
    "InvalidArgumentError",
]
