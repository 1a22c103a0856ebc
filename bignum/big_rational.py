"""Arbitrary-precision rational number.

A BigRational is a numerator over a strictly positive denominator. Arithmetic
never reduces the fraction; call simplified() when lowest terms matter.

Usage:
    from bignum import BigRational

    r = BigRational.of("123/456").plus("2/3")   # 1281/1368
    r.simplified()                             # 427/456
    BigRational.nd(1, 3).to_repeating_decimal_string()  # 0.(3)
"""

from __future__ import annotations

import math
from typing import ClassVar

from bignum.big_decimal import BigDecimal
from bignum.big_integer import BigInteger
from bignum.big_number import BigNumber, NumberLike, _parse
from bignum.calculator.registry import get_calculator
from bignum.errors import DivisionByZeroError, IntegerOverflowError, RoundingNecessaryError
from bignum.rounding import RoundingMode

__all__ = ["BigRational"]

# Significant digits computed when a float conversion has to go through a decimal
_FLOAT_DIGITS = 20

# Doubles reach down to about 1e-324
_FLOAT_MAX_SCALE = 350


class BigRational(BigNumber):
    """An immutable fraction of two BigIntegers."""

    __slots__ = ("_numerator", "_denominator")
    _numerator: BigInteger
    _denominator: BigInteger

    _rank: ClassVar[int] = 2

    @classmethod
    def _create(cls, numerator: BigInteger, denominator: BigInteger) -> BigRational:
        """Wrap a numerator and a positive denominator without validation."""
        instance = object.__new__(cls)
        instance._numerator = numerator
        instance._denominator = denominator
        return instance

    @classmethod
    def _of_signed(cls, numerator: BigInteger, denominator: BigInteger) -> BigRational:
        """Build from any non-zero denominator, moving its sign to the numerator."""
        if denominator.is_zero():
            raise DivisionByZeroError.denominator_must_not_be_zero()
        if denominator.is_negative():
            return cls._create(numerator.negated(), denominator.negated())
        return cls._create(numerator, denominator)

    # --- Factories ---

    @classmethod
    def nd(cls, numerator: NumberLike, denominator: NumberLike) -> BigRational:
        """Create a fraction from two integers. The result is not reduced.

        Raises:
            DivisionByZeroError: If the denominator is zero
        """
        return cls._of_signed(BigInteger.of(numerator), BigInteger.of(denominator))

    @classmethod
    def of(cls, value: NumberLike) -> BigRational:
        """Create a BigRational from a number or a "n/d", integer or decimal string.

        Raises:
            NumberFormatError: If a string is not a valid number
            DivisionByZeroError: If a fraction string has a zero denominator
        """
        if isinstance(value, BigRational):
            return value
        return _parse(value).to_big_rational()

    @classmethod
    def zero(cls) -> BigRational:
        return ZERO

    @classmethod
    def one(cls) -> BigRational:
        return ONE

    @classmethod
    def ten(cls) -> BigRational:
        return TEN

    # --- Accessors ---

    @property
    def numerator(self) -> BigInteger:
        return self._numerator

    @property
    def denominator(self) -> BigInteger:
        return self._denominator

    @property
    def integral_part(self) -> BigInteger:
        """Integer part, truncated toward zero: 7/3 gives 2, -7/3 gives -2."""
        return self._numerator.quotient(self._denominator)

    @property
    def fractional_part(self) -> BigRational:
        """What remains after the integral part: 7/3 gives 1/3, -7/3 gives -1/3."""
        return BigRational._create(self._numerator.remainder(self._denominator), self._denominator)

    # --- Arithmetic ---

    def plus(self, that: NumberLike) -> BigRational:
        that = BigRational.of(that)
        numerator = self._numerator.multiplied_by(that._denominator).plus(
            that._numerator.multiplied_by(self._denominator)
        )
        denominator = self._denominator.multiplied_by(that._denominator)
        return BigRational._create(numerator, denominator)

    def minus(self, that: NumberLike) -> BigRational:
        that = BigRational.of(that)
        numerator = self._numerator.multiplied_by(that._denominator).minus(
            that._numerator.multiplied_by(self._denominator)
        )
        denominator = self._denominator.multiplied_by(that._denominator)
        return BigRational._create(numerator, denominator)

    def multiplied_by(self, that: NumberLike) -> BigRational:
        that = BigRational.of(that)
        numerator = self._numerator.multiplied_by(that._numerator)
        denominator = self._denominator.multiplied_by(that._denominator)
        return BigRational._create(numerator, denominator)

    def divided_by(self, that: NumberLike) -> BigRational:
        """Quotient, as the product with the reciprocal.

        Raises:
            DivisionByZeroError: If that is zero
        """
        that = BigRational.of(that)
        numerator = self._numerator.multiplied_by(that._denominator)
        denominator = self._denominator.multiplied_by(that._numerator)
        if denominator.is_zero():
            raise DivisionByZeroError.division_by_zero()
        return BigRational._of_signed(numerator, denominator)

    def power(self, exponent: int) -> BigRational:
        """This number raised to an integer power. A negative exponent uses the reciprocal.

        Raises:
            DivisionByZeroError: If the exponent is negative and this number is zero
            InvalidArgumentError: If the exponent magnitude exceeds MAX_POWER
        """
        if exponent == 0:
            return ONE
        if exponent == 1:
            return self
        if exponent < 0:
            return self.reciprocal().power(-exponent)
        return BigRational._create(self._numerator.power(exponent), self._denominator.power(exponent))

    def reciprocal(self) -> BigRational:
        """The fraction turned upside down.

        Raises:
            DivisionByZeroError: If this number is zero
        """
        return BigRational._of_signed(self._denominator, self._numerator)

    def abs(self) -> BigRational:
        return self.negated() if self.is_negative() else self

    def negated(self) -> BigRational:
        if self._numerator.is_zero():
            return self
        return BigRational._create(self._numerator.negated(), self._denominator)

    def quotient_and_remainder(self) -> tuple[BigInteger, BigInteger]:
        """Truncated division of the numerator by the denominator."""
        return self._numerator.quotient_and_remainder(self._denominator)

    def simplified(self) -> BigRational:
        """The equal fraction in lowest terms; zero becomes 0/1."""
        gcd = self._numerator.gcd(self._denominator)
        if gcd._value == "1":
            return self

        numerator = self._numerator.quotient(gcd)
        denominator = self._denominator.quotient(gcd)
        return BigRational._create(numerator, denominator)

    # --- BigNumber interface ---

    def compare_to(self, that: NumberLike) -> int:
        that = BigRational.of(that)
        if self._denominator == that._denominator:
            return self._numerator.compare_to(that._numerator)
        return self._numerator.multiplied_by(that._denominator).compare_to(
            that._numerator.multiplied_by(self._denominator)
        )

    @property
    def sign(self) -> int:
        return self._numerator.sign

    def is_finite_decimal(self) -> bool:
        """Whether the value has a terminating decimal expansion."""
        try:
            self.to_big_decimal()
        except RoundingNecessaryError:
            return False
        return True

    def to_big_integer(self) -> BigInteger:
        """Exact conversion to a BigInteger.

        Raises:
            RoundingNecessaryError: If the value is not an integer
        """
        quotient, remainder = get_calculator().div_qr(self._numerator._value, self._denominator._value)
        if remainder != "0":
            raise RoundingNecessaryError.not_an_integer(self)
        return BigInteger._create(quotient)

    def to_big_decimal(self) -> BigDecimal:
        """Exact conversion to a BigDecimal.

        Raises:
            RoundingNecessaryError: If the decimal expansion does not terminate
        """
        return self._numerator.to_big_decimal().exactly_divided_by(self._denominator)

    def to_big_rational(self) -> BigRational:
        return self

    def to_scale(self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> BigDecimal:
        return self._numerator.to_big_decimal().divided_by(self._denominator, scale, rounding_mode)

    def to_int(self) -> int:
        """Exact conversion to an int in the signed 64-bit range.

        Raises:
            RoundingNecessaryError: If the value is not an integer
            IntegerOverflowError: If the value does not fit
        """
        return self.to_big_integer().to_int()

    def to_float(self) -> float:
        """Nearest float, going through a decimal when either part overflows a float.

        Raises:
            IntegerOverflowError: If the value is beyond the float range
        """
        numerator = float(str(self._numerator))
        denominator = float(str(self._denominator))
        if math.isfinite(numerator) and math.isfinite(denominator):
            return numerator / denominator

        # Scale counts decimal places, not significant digits, so shift it by
        # the estimated order of magnitude.
        magnitude = len(str(self._numerator.abs())) - len(str(self._denominator))
        scale = min(_FLOAT_MAX_SCALE, max(0, _FLOAT_DIGITS - magnitude))

        result = float(str(self.to_scale(scale, RoundingMode.HALF_EVEN)))
        if not math.isfinite(result):
            raise IntegerOverflowError.to_float_overflow(self)
        return result

    def to_repeating_decimal_string(self) -> str:
        """Decimal expansion with the repeating part in parentheses.

        10/3 gives "3.(3)", 171/70 gives "2.4(428571)" and 1/2 gives "0.5".
        The period can be as long as the denominator minus one.
        """
        if self._numerator.is_zero():
            return "0"

        calculator = get_calculator()
        sign = "-" if self._numerator.is_negative() else ""
        denominator = self._denominator._value

        integral, remainder = calculator.div_qr(calculator.abs(self._numerator._value), denominator)
        if remainder == "0":
            return sign + integral

        digits: list[str] = []
        positions: dict[str, int] = {}

        while remainder != "0":
            if remainder in positions:
                start = positions[remainder]
                return f"{sign}{integral}.{''.join(digits[:start])}({''.join(digits[start:])})"

            positions[remainder] = len(digits)
            digit, remainder = calculator.div_qr(remainder + "0", denominator)
            digits.append(digit)

        return f"{sign}{integral}.{''.join(digits)}"

    def _fraction_parts(self) -> tuple[str, str]:
        # Lowest terms, so equal fractions hash alike
        reduced = self.simplified()
        return reduced._numerator._value, reduced._denominator._value

    def __str__(self) -> str:
        if self._denominator._value == "1":
            return self._numerator._value
        return f"{self._numerator._value}/{self._denominator._value}"

    # --- Operators ---

    def __add__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return BigRational.of(other).minus(self)

    def __mul__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __truediv__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return self.divided_by(other)

    def __rtruediv__(self, other: NumberLike) -> BigRational:
        if not _is_rational_operand(other):
            return NotImplemented
        return BigRational.of(other).divided_by(self)

    def __pow__(self, exponent: int) -> BigRational:
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)

    def __neg__(self) -> BigRational:
        return self.negated()

    def __pos__(self) -> BigRational:
        return self

    def __abs__(self) -> BigRational:
        return self.abs()

    def __int__(self) -> int:
        return int(self.integral_part)


def _is_rational_operand(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (BigNumber, int))


ZERO = BigRational._create(BigInteger.zero(), BigInteger.one())
ONE = BigRational._create(BigInteger.one(), BigInteger.one())
TEN = BigRational._create(BigInteger.ten(), BigInteger.one())
