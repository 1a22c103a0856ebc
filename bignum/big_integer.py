"""Arbitrary-precision integer.

Usage:
    from bignum import BigInteger

    a = BigInteger.of("1234567891234567889999999")
    b = a.power(2).plus(1)           # named methods take any NumberLike
    c = (a * 3) // 7                 # operators follow Python's int semantics
    BigInteger.parse("ff", 16)       # BigInteger('255')

quotient() and remainder() truncate toward zero; the // and % operators floor,
exactly like int.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, ClassVar

from bignum.big_number import BigNumber, NumberLike, _parse
from bignum.calculator.base import DICTIONARY, decimal_to_int
from bignum.calculator.registry import get_calculator
from bignum.errors import (
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidArgumentError,
    NumberFormatError,
)
from bignum.rounding import RoundingMode

if TYPE_CHECKING:
    from bignum.big_decimal import BigDecimal
    from bignum.big_rational import BigRational

__all__ = ["BigInteger", "INT_MIN", "INT_MAX"]

# Range accepted by to_int(): a signed 64-bit word
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_INT_MIN_STR = str(INT_MIN)
_INT_MAX_STR = str(INT_MAX)

# Prefixes accepted by parse() for the matching base
_BASE_PREFIXES = {16: "0x", 8: "0o", 2: "0b"}


class BigInteger(BigNumber):
    """An immutable arbitrary-size integer.

    Holds a canonical signed decimal string. Instances come from the factories
    (of, parse, zero, one, ten) or from arithmetic on other instances.
    """

    __slots__ = ("_value",)
    _value: str

    _rank: ClassVar[int] = 0

    @classmethod
    def _create(cls, value: str) -> BigInteger:
        """Wrap a canonical decimal string without validation."""
        instance = object.__new__(cls)
        instance._value = value
        return instance

    # --- Factories ---

    @classmethod
    def of(cls, value: NumberLike) -> BigInteger:
        """Create a BigInteger from any value that converts exactly.

        Raises:
            NumberFormatError: If a string is not a valid number
            RoundingNecessaryError: If the value has a non-zero fractional part
        """
        if isinstance(value, BigInteger):
            return value
        return _parse(value).to_big_integer()

    @classmethod
    def parse(cls, text: str, base: int = 10) -> BigInteger:
        """Parse an integer written in the given base (2 to 36).

        Digits are case-insensitive. An optional sign may precede the digits;
        with base 16, 8 or 2 the matching 0x, 0o or 0b prefix is also accepted.

        Raises:
            InvalidArgumentError: If the base is out of range
            NumberFormatError: If the text is empty or has a digit outside the base
        """
        if base < 2 or base > 36:
            raise InvalidArgumentError(f"Base {base} is not in range 2 to 36.")

        sign = ""
        digits = text
        if digits[:1] in ("+", "-"):
            sign = "-" if digits[0] == "-" else ""
            digits = digits[1:]

        digits = digits.lower()
        prefix = _BASE_PREFIXES.get(base)
        if prefix is not None and digits.startswith(prefix):
            digits = digits[len(prefix) :]

        if not digits:
            raise NumberFormatError(f'The value "{text}" cannot be empty.')

        allowed = DICTIONARY[:base]
        for char in digits:
            if char not in allowed:
                raise NumberFormatError.char_not_in_base(char, base)

        digits = digits.lstrip("0")
        if not digits:
            return ZERO

        # Base 10 digits are already canonical
        value = digits if base == 10 else get_calculator().from_base(digits, base)
        return cls._create(sign + value)

    @classmethod
    def zero(cls) -> BigInteger:
        return ZERO

    @classmethod
    def one(cls) -> BigInteger:
        return ONE

    @classmethod
    def ten(cls) -> BigInteger:
        return TEN

    # --- Arithmetic ---

    def plus(self, that: NumberLike) -> BigInteger:
        that = BigInteger.of(that)
        if that._value == "0":
            return self
        if self._value == "0":
            return that
        return BigInteger._create(get_calculator().add(self._value, that._value))

    def minus(self, that: NumberLike) -> BigInteger:
        that = BigInteger.of(that)
        if that._value == "0":
            return self
        return BigInteger._create(get_calculator().sub(self._value, that._value))

    def multiplied_by(self, that: NumberLike) -> BigInteger:
        that = BigInteger.of(that)
        if that._value == "1":
            return self
        if self._value == "1":
            return that
        return BigInteger._create(get_calculator().mul(self._value, that._value))

    def divided_by(
        self, that: NumberLike, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY
    ) -> BigInteger:
        """Divide, rounding the result with the given mode.

        Raises:
            DivisionByZeroError: If that is zero
            RoundingNecessaryError: If UNNECESSARY is used and the division is inexact
        """
        that = BigInteger.of(that)
        if that._value == "1":
            return self
        if that._value == "0":
            raise DivisionByZeroError.division_by_zero()
        return BigInteger._create(get_calculator().div_round(self._value, that._value, rounding_mode))

    def quotient(self, that: NumberLike) -> BigInteger:
        """Quotient of the division, truncated toward zero."""
        that = BigInteger.of(that)
        if that._value == "1":
            return self
        return BigInteger._create(get_calculator().div_q(self._value, that._value))

    def remainder(self, that: NumberLike) -> BigInteger:
        """Remainder of the truncated division; zero or with the sign of this number."""
        that = BigInteger.of(that)
        if that._value == "1":
            return ZERO
        return BigInteger._create(get_calculator().div_r(self._value, that._value))

    def quotient_and_remainder(self, that: NumberLike) -> tuple[BigInteger, BigInteger]:
        that = BigInteger.of(that)
        quotient, remainder = get_calculator().div_qr(self._value, that._value)
        return BigInteger._create(quotient), BigInteger._create(remainder)

    def mod(self, that: NumberLike) -> BigInteger:
        """Floor modulo by a positive modulus; the result is always in [0, that).

        Raises:
            DivisionByZeroError: If that is zero
            NegativeNumberError: If that is negative
        """
        that = BigInteger.of(that)
        return BigInteger._create(get_calculator().mod(self._value, that._value))

    def mod_pow(self, exponent: NumberLike, modulus: NumberLike) -> BigInteger:
        """This number raised to exponent, modulo modulus.

        Raises:
            DivisionByZeroError: If the modulus is zero
            NegativeNumberError: If the exponent or the modulus is negative
        """
        exponent = BigInteger.of(exponent)
        modulus = BigInteger.of(modulus)
        return BigInteger._create(get_calculator().mod_pow(self._value, exponent._value, modulus._value))

    def power(self, exponent: int) -> BigInteger:
        """This number raised to an integer power.

        Raises:
            InvalidArgumentError: If the exponent magnitude exceeds MAX_POWER
            RoundingNecessaryError: If the exponent is negative and the result is not an integer
        """
        if exponent == 1:
            return self
        return BigInteger._create(get_calculator().pow(self._value, exponent))

    def gcd(self, that: NumberLike) -> BigInteger:
        that = BigInteger.of(that)
        return BigInteger._create(get_calculator().gcd(self._value, that._value))

    def sqrt(self) -> BigInteger:
        """Integer square root, rounded down.

        Raises:
            NegativeNumberError: If this number is negative
        """
        return BigInteger._create(get_calculator().sqrt(self._value))

    def abs(self) -> BigInteger:
        return self.negated() if self.is_negative() else self

    def negated(self) -> BigInteger:
        if self._value == "0":
            return self
        return BigInteger._create(get_calculator().neg(self._value))

    # --- Bits and parity ---

    def shifted_left(self, distance: int) -> BigInteger:
        """Multiply by 2 ** distance. A negative distance shifts right."""
        if distance == 0:
            return self
        if distance < 0:
            return self.shifted_right(-distance)
        return self.multiplied_by(TWO.power(distance))

    def shifted_right(self, distance: int) -> BigInteger:
        """Divide by 2 ** distance, rounding toward negative infinity like >>."""
        if distance == 0:
            return self
        if distance < 0:
            return self.shifted_left(-distance)
        return self.divided_by(TWO.power(distance), RoundingMode.FLOOR)

    def is_even(self) -> bool:
        return self._value[-1] in "02468"

    def is_odd(self) -> bool:
        return not self.is_even()

    def get_bit_length(self) -> int:
        """Number of bits needed for the magnitude, like int.bit_length()."""
        if self._value == "0":
            return 0
        return len(get_calculator().to_base(self.abs()._value, 2))

    # --- BigNumber interface ---

    def compare_to(self, that: NumberLike) -> int:
        that = BigNumber.of(that)
        if isinstance(that, BigInteger):
            return get_calculator().cmp(self._value, that._value)
        return -that.compare_to(self)

    @property
    def sign(self) -> int:
        if self._value == "0":
            return 0
        return -1 if self._value[0] == "-" else 1

    def to_big_integer(self) -> BigInteger:
        return self

    def to_big_decimal(self) -> BigDecimal:
        from bignum.big_decimal import BigDecimal

        return BigDecimal._create(self._value, 0)

    def to_big_rational(self) -> BigRational:
        from bignum.big_rational import BigRational

        return BigRational._create(self, ONE)

    def to_scale(self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> BigDecimal:
        return self.to_big_decimal().to_scale(scale, rounding_mode)

    def to_int(self) -> int:
        """Convert to an int in the signed 64-bit range.

        Raises:
            IntegerOverflowError: If the value does not fit
        """
        calculator = get_calculator()
        if calculator.cmp(self._value, _INT_MIN_STR) < 0 or calculator.cmp(self._value, _INT_MAX_STR) > 0:
            raise IntegerOverflowError.to_int_overflow(self, INT_MIN, INT_MAX)
        return int(self._value)

    def to_float(self) -> float:
        """Nearest float.

        Raises:
            IntegerOverflowError: If the magnitude is beyond the float range
        """
        result = float(self._value)
        if not math.isfinite(result):
            raise IntegerOverflowError.to_float_overflow(self)
        return result

    def to_base(self, base: int) -> str:
        """String representation in the given base (2 to 36), lowercase.

        Raises:
            InvalidArgumentError: If the base is out of range
        """
        if base == 10:
            return self._value
        if base < 2 or base > 36:
            raise InvalidArgumentError(f"Base {base} is not in range 2 to 36.")
        return get_calculator().to_base(self._value, base)

    def _fraction_parts(self) -> tuple[str, str]:
        return self._value, "1"

    def __str__(self) -> str:
        return self._value

    # --- Operators ---

    def __add__(self, other: BigInteger | int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other: int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: BigInteger | int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other: int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return BigInteger.of(other).minus(self)

    def __mul__(self, other: BigInteger | int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other: int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __floordiv__(self, other: BigInteger | int) -> BigInteger:
        """Floor division, like int.

        Raises:
            DivisionByZeroError: If other is zero
        """
        if not _is_integer_operand(other):
            return NotImplemented
        return self.divided_by(other, RoundingMode.FLOOR)

    def __rfloordiv__(self, other: int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return BigInteger.of(other).divided_by(self, RoundingMode.FLOOR)

    def __mod__(self, other: BigInteger | int) -> BigInteger:
        """Modulo with the sign of the divisor, like int.

        Raises:
            DivisionByZeroError: If other is zero
        """
        if not _is_integer_operand(other):
            return NotImplemented
        divisor = BigInteger.of(other)
        return self.minus(self.divided_by(divisor, RoundingMode.FLOOR).multiplied_by(divisor))

    def __rmod__(self, other: int) -> BigInteger:
        if not _is_integer_operand(other):
            return NotImplemented
        return BigInteger.of(other).__mod__(self)

    def __pow__(self, exponent: int) -> BigInteger:
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)

    def __neg__(self) -> BigInteger:
        return self.negated()

    def __pos__(self) -> BigInteger:
        return self

    def __abs__(self) -> BigInteger:
        return self.abs()

    def __int__(self) -> int:
        return decimal_to_int(self._value)

    def __index__(self) -> int:
        return decimal_to_int(self._value)


def _is_integer_operand(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (BigInteger, int))


ZERO = BigInteger._create("0")
ONE = BigInteger._create("1")
TWO = BigInteger._create("2")
TEN = BigInteger._create("10")
