"""Arbitrary-precision decimal number.

A BigDecimal is an unscaled integer and a non-negative scale, its value being
unscaled / 10**scale. The scale is part of the value's identity: "1.50" and
"1.5" print differently but compare (and hash) equal.

Usage:
    from bignum import BigDecimal, RoundingMode

    price = BigDecimal.of("19.99")
    total = price.multiplied_by(3)                          # 59.97
    share = total.divided_by(7, 2, RoundingMode.HALF_EVEN)  # 8.57
    BigDecimal.of(1).exactly_divided_by(8)                  # 0.125
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, ClassVar

from bignum.big_integer import BigInteger
from bignum.big_number import BigNumber, NumberLike, _parse
from bignum.calculator.base import MAX_POWER
from bignum.calculator.registry import get_calculator
from bignum.errors import (
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidArgumentError,
    NegativeNumberError,
    RoundingNecessaryError,
)
from bignum.rounding import RoundingMode

if TYPE_CHECKING:
    from bignum.big_rational import BigRational

__all__ = ["BigDecimal"]


class BigDecimal(BigNumber):
    """An immutable arbitrary-precision decimal number."""

    __slots__ = ("_value", "_scale")
    _value: str
    _scale: int

    _rank: ClassVar[int] = 1

    @classmethod
    def _create(cls, value: str, scale: int) -> BigDecimal:
        """Wrap a canonical unscaled string and a scale >= 0 without validation."""
        instance = object.__new__(cls)
        instance._value = value
        instance._scale = scale
        return instance

    # --- Factories ---

    @classmethod
    def of(cls, value: NumberLike) -> BigDecimal:
        """Create a BigDecimal from any value that converts exactly.

        Raises:
            NumberFormatError: If a string is not a valid number
            RoundingNecessaryError: If a rational value has no finite decimal expansion
        """
        if isinstance(value, BigDecimal):
            return value
        return _parse(value).to_big_decimal()

    @classmethod
    def of_unscaled_value(cls, value: NumberLike, scale: int = 0) -> BigDecimal:
        """Create a BigDecimal equal to value / 10**scale.

        Raises:
            InvalidArgumentError: If the scale is negative
        """
        if scale < 0:
            raise InvalidArgumentError(f"The scale cannot be negative: {scale}")
        return cls._create(str(BigInteger.of(value)), scale)

    @classmethod
    def zero(cls) -> BigDecimal:
        return ZERO

    @classmethod
    def one(cls) -> BigDecimal:
        return ONE

    @classmethod
    def ten(cls) -> BigDecimal:
        return TEN

    # --- Arithmetic ---

    def plus(self, that: NumberLike) -> BigDecimal:
        """Sum, with the larger of the two scales."""
        that = BigDecimal.of(that)
        if that._value == "0" and that._scale <= self._scale:
            return self
        if self._value == "0" and self._scale <= that._scale:
            return that

        a = self._value_with_min_scale(that._scale)
        b = that._value_with_min_scale(self._scale)
        return BigDecimal._create(get_calculator().add(a, b), max(self._scale, that._scale))

    def minus(self, that: NumberLike) -> BigDecimal:
        """Difference, with the larger of the two scales."""
        that = BigDecimal.of(that)
        if that._value == "0" and that._scale <= self._scale:
            return self

        a = self._value_with_min_scale(that._scale)
        b = that._value_with_min_scale(self._scale)
        return BigDecimal._create(get_calculator().sub(a, b), max(self._scale, that._scale))

    def multiplied_by(self, that: NumberLike) -> BigDecimal:
        """Product, with the sum of the two scales."""
        that = BigDecimal.of(that)
        if that._value == "1" and that._scale == 0:
            return self
        if self._value == "1" and self._scale == 0:
            return that

        return BigDecimal._create(get_calculator().mul(self._value, that._value), self._scale + that._scale)

    def divided_by(
        self,
        that: NumberLike,
        scale: int,
        rounding_mode: RoundingMode = RoundingMode.UNNECESSARY,
    ) -> BigDecimal:
        """Quotient at the given scale, rounded with the given mode.

        Raises:
            DivisionByZeroError: If that is zero
            InvalidArgumentError: If the scale is negative
            RoundingNecessaryError: If UNNECESSARY is used and the quotient does not fit the scale
        """
        that = BigDecimal.of(that)
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()
        if scale < 0:
            raise InvalidArgumentError(f"The scale cannot be negative: {scale}")
        if that._value == "1" and that._scale == 0 and scale == self._scale:
            return self

        p = self._value_with_min_scale(that._scale + scale)
        q = that._value_with_min_scale(self._scale - scale)
        return BigDecimal._create(get_calculator().div_round(p, q, rounding_mode), scale)

    def exactly_divided_by(self, that: NumberLike) -> BigDecimal:
        """Exact quotient, at the smallest scale that represents it.

        Raises:
            DivisionByZeroError: If that is zero
            RoundingNecessaryError: If the quotient has no finite decimal expansion
        """
        that = BigDecimal.of(that)
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        calculator = get_calculator()

        # self / that == (a * 10**sb) / (b * 10**sa); only the reduced
        # denominator decides whether the expansion terminates.
        denominator = calculator.abs(that._value) + "0" * self._scale
        numerator = self._value + "0" * that._scale if self._value != "0" else "0"
        gcd = calculator.gcd(numerator, denominator)
        reduced = calculator.div_q(denominator, gcd)

        scale = _scale_for_denominator(reduced)
        if scale is None:
            raise RoundingNecessaryError.non_terminating_decimal()

        return self.divided_by(that, scale)

    def quotient(self, that: NumberLike) -> BigDecimal:
        """Integer quotient truncated toward zero, with scale 0.

        Raises:
            DivisionByZeroError: If that is zero
        """
        return self.quotient_and_remainder(that)[0]

    def remainder(self, that: NumberLike) -> BigDecimal:
        """Remainder of the truncated division, with the larger of the two scales.

        Raises:
            DivisionByZeroError: If that is zero
        """
        return self.quotient_and_remainder(that)[1]

    def quotient_and_remainder(self, that: NumberLike) -> tuple[BigDecimal, BigDecimal]:
        that = BigDecimal.of(that)
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()

        p = self._value_with_min_scale(that._scale)
        q = that._value_with_min_scale(self._scale)
        quotient, remainder = get_calculator().div_qr(p, q)

        return (
            BigDecimal._create(quotient, 0),
            BigDecimal._create(remainder, max(self._scale, that._scale)),
        )

    def power(self, exponent: int) -> BigDecimal:
        """This number raised to a non-negative integer power; the scale is multiplied.

        Raises:
            InvalidArgumentError: If the exponent is not in the range 0 to MAX_POWER
        """
        if exponent < 0 or exponent > MAX_POWER:
            raise InvalidArgumentError(f"The exponent {exponent} is not in the range 0 to {MAX_POWER}.")
        if exponent == 0:
            return ONE
        if exponent == 1:
            return self
        return BigDecimal._create(get_calculator().pow(self._value, exponent), self._scale * exponent)

    def sqrt(self, scale: int) -> BigDecimal:
        """Square root truncated to the given scale.

        Raises:
            InvalidArgumentError: If the scale is negative
            NegativeNumberError: If this number is negative
        """
        if scale < 0:
            raise InvalidArgumentError(f"The scale cannot be negative: {scale}")
        if self._value[0] == "-":
            raise NegativeNumberError(f"Cannot take the square root of a negative number: {self}")
        if self._value == "0":
            return BigDecimal._create("0", scale)

        # floor(sqrt(v / 10**s) * 10**scale) == floor(sqrt(v * 10**(2*scale - s)));
        # truncating the radicand first does not change the floor.
        shift = 2 * scale - self._scale
        if shift >= 0:
            radicand = self._value + "0" * shift
        else:
            radicand = self._value[:shift] or "0"

        return BigDecimal._create(get_calculator().sqrt(radicand), scale)

    def abs(self) -> BigDecimal:
        return self.negated() if self.is_negative() else self

    def negated(self) -> BigDecimal:
        if self._value == "0":
            return self
        return BigDecimal._create(get_calculator().neg(self._value), self._scale)

    # --- Scale ---

    def to_scale(self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> BigDecimal:
        """The same value at another scale, rounding when digits are dropped.

        Raises:
            InvalidArgumentError: If the scale is negative
            RoundingNecessaryError: If UNNECESSARY is used and non-zero digits would be dropped
        """
        if scale < 0:
            raise InvalidArgumentError(f"The scale cannot be negative: {scale}")
        if scale == self._scale:
            return self
        if scale > self._scale:
            return BigDecimal._create(self._value_with_min_scale(scale), scale)

        divisor = "1" + "0" * (self._scale - scale)
        return BigDecimal._create(get_calculator().div_round(self._value, divisor, rounding_mode), scale)

    def with_point_moved_left(self, places: int) -> BigDecimal:
        """Divide by 10**places by raising the scale. A negative count moves right."""
        if places == 0:
            return self
        if places < 0:
            return self.with_point_moved_right(-places)
        return BigDecimal._create(self._value, self._scale + places)

    def with_point_moved_right(self, places: int) -> BigDecimal:
        """Multiply by 10**places, lowering the scale down to zero first."""
        if places == 0:
            return self
        if places < 0:
            return self.with_point_moved_left(-places)

        scale = self._scale - places
        if scale >= 0:
            return BigDecimal._create(self._value, scale)

        value = self._value + "0" * -scale if self._value != "0" else "0"
        return BigDecimal._create(value, 0)

    def stripped_of_trailing_zeros(self) -> BigDecimal:
        """The same value at the smallest scale that represents it."""
        if self._scale == 0:
            return self
        if self._value == "0":
            return ZERO

        trimmed = self._value.rstrip("0")
        removed = min(len(self._value) - len(trimmed), self._scale)
        if removed == 0:
            return self
        return BigDecimal._create(self._value[:-removed], self._scale - removed)

    # --- Accessors ---

    @property
    def unscaled_value(self) -> BigInteger:
        return BigInteger._create(self._value)

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def precision(self) -> int:
        """Number of digits in the unscaled value; 1 for zero."""
        return len(get_calculator().abs(self._value))

    @property
    def integral_part(self) -> BigInteger:
        """Integer part, truncated toward zero: -123.456 gives -123."""
        return self.to_big_integer(RoundingMode.DOWN)

    @property
    def fractional_part(self) -> BigDecimal:
        """Fractional part at the same scale, with the sign of this number: -123.456 gives -0.456."""
        return self.minus(self.integral_part)

    def has_non_zero_fractional_part(self) -> bool:
        if self._scale == 0:
            return False
        return self._padded_digits()[-self._scale :].strip("0") != ""

    # --- BigNumber interface ---

    def compare_to(self, that: NumberLike) -> int:
        that = BigNumber.of(that)
        if not isinstance(that, (BigDecimal, BigInteger)):
            return -that.compare_to(self)

        that = that.to_big_decimal()
        a = self._value_with_min_scale(that._scale)
        b = that._value_with_min_scale(self._scale)
        return get_calculator().cmp(a, b)

    @property
    def sign(self) -> int:
        if self._value == "0":
            return 0
        return -1 if self._value[0] == "-" else 1

    def to_big_integer(self, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> BigInteger:
        """Convert to a BigInteger, rounding with the given mode.

        Raises:
            RoundingNecessaryError: If UNNECESSARY is used and the fractional part is non-zero
        """
        return BigInteger._create(self.to_scale(0, rounding_mode)._value)

    def to_big_decimal(self) -> BigDecimal:
        return self

    def to_big_rational(self) -> BigRational:
        from bignum.big_rational import BigRational

        return BigRational._create(BigInteger._create(self._value), BigInteger._create("1" + "0" * self._scale))

    def to_int(self) -> int:
        """Exact conversion to an int in the signed 64-bit range.

        Raises:
            RoundingNecessaryError: If the fractional part is non-zero
            IntegerOverflowError: If the value does not fit
        """
        return self.to_big_integer().to_int()

    def to_float(self) -> float:
        result = float(str(self))
        if not math.isfinite(result):
            raise IntegerOverflowError.to_float_overflow(self)
        return result

    def _fraction_parts(self) -> tuple[str, str]:
        return self._value, "1" + "0" * self._scale

    def __str__(self) -> str:
        if self._scale == 0:
            return self._value

        digits = self._padded_digits()
        sign = "-" if self._value[0] == "-" else ""
        return f"{sign}{digits[: -self._scale]}.{digits[-self._scale :]}"

    # --- Helpers ---

    def _value_with_min_scale(self, scale: int) -> str:
        """Unscaled value rescaled up to the given scale, if it is larger."""
        if scale <= self._scale or self._value == "0":
            return self._value
        return self._value + "0" * (scale - self._scale)

    def _padded_digits(self) -> str:
        """Unsigned unscaled digits, left-padded to at least scale + 1 digits."""
        digits = self._value[1:] if self._value[0] == "-" else self._value
        return digits.rjust(self._scale + 1, "0")

    # --- Operators ---

    def __add__(self, other: BigDecimal | BigInteger | int) -> BigDecimal:
        if not _is_decimal_operand(other):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other: BigInteger | int) -> BigDecimal:
        if not _is_decimal_operand(other):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: BigDecimal | BigInteger | int) -> BigDecimal:
        if not _is_decimal_operand(other):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other: BigInteger | int) -> BigDecimal:
        if not _is_decimal_operand(other):
            return NotImplemented
        return BigDecimal.of(other).minus(self)

    def __mul__(self, other: BigDecimal | BigInteger | int) -> BigDecimal:
        if not _is_decimal_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other: BigInteger | int) -> BigDecimal:
        if not _is_decimal_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __neg__(self) -> BigDecimal:
        return self.negated()

    def __pos__(self) -> BigDecimal:
        return self

    def __abs__(self) -> BigDecimal:
        return self.abs()

    def __int__(self) -> int:
        return int(self.integral_part)


def _is_decimal_operand(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (BigDecimal, BigInteger, int))


def _scale_for_denominator(denominator: str) -> int | None:
    """Scale needed to write 1/denominator exactly, or None if it never terminates.

    The denominator must be positive and already reduced against the numerator.
    A terminating expansion needs only the prime factors 2 and 5; the scale is
    the larger of their multiplicities.
    """
    calculator = get_calculator()

    stripped = denominator.rstrip("0")
    scale = len(denominator) - len(stripped)
    d = stripped

    for prime in ("5", "2"):
        while int(d[-1]) % int(prime) == 0:
            d = calculator.div_q(d, prime)
            scale += 1

    return scale if d == "1" else None


ZERO = BigDecimal._create("0", 0)
ONE = BigDecimal._create("1", 0)
TEN = BigDecimal._create("10", 0)
