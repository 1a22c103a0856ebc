"""Common base class for arbitrary-precision numbers.

BigNumber.of() is the single entry point that turns user input into a
number. Every method taking "a number" accepts a BigNumber, an int, a float
or a string, coerced with the same rules:

    "123"          -> BigInteger
    "-1.50"        -> BigDecimal (unscaled -150, scale 2)
    "1.2e3"        -> BigDecimal (unscaled 1200, scale 0)
    "7/3"          -> BigRational
"""

from __future__ import annotations

import math
import re
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, TypeVar, Union

from bignum.calculator.base import int_to_decimal
from bignum.calculator.registry import get_calculator
from bignum.errors import DivisionByZeroError, InvalidArgumentError, NumberFormatError
from bignum.rounding import RoundingMode

if TYPE_CHECKING:
    from bignum.big_decimal import BigDecimal
    from bignum.big_integer import BigInteger
    from bignum.big_rational import BigRational

__all__ = ["BigNumber", "NumberLike"]

NumberLike = Union["BigNumber", int, float, str]

T = TypeVar("T", bound="BigNumber")

# [+-]?digits(.digits)?([eE][+-]?digits)?
DECIMAL_PATTERN = re.compile(
    r"(?P<sign>[+-])?(?P<integral>[0-9]+)"
    r"(?:\.(?P<fraction>[0-9]+))?"
    r"(?:[eE](?P<exponent>[+-]?[0-9]+))?"
)

# [+-]?digits/digits
FRACTION_PATTERN = re.compile(r"(?P<sign>[+-])?(?P<numerator>[0-9]+)/(?P<denominator>[0-9]+)")

_HASH_MODULUS = sys.hash_info.modulus
_HASH_INF = sys.hash_info.inf


class BigNumber(ABC):
    """Common interface for arbitrary-precision numbers.

    Subclasses are immutable: every operation returns a new instance (or an
    existing one when the result is unchanged).
    """

    __slots__ = ()

    # Widening order used when combining numbers of different types
    _rank: ClassVar[int] = -1

    # --- Factories ---

    @classmethod
    def of(cls, value: NumberLike) -> BigNumber:
        """Create a number of the most specific type that represents the value exactly.

        Subclasses override this to return their own type.

        Raises:
            NumberFormatError: If a string does not match any number grammar
            DivisionByZeroError: If a fraction string has a zero denominator
            TypeError: If the value is not a number or string
        """
        return _parse(value)

    @classmethod
    def min(cls: type[T], *values: NumberLike) -> T:
        """Smallest of the given values.

        Raises:
            InvalidArgumentError: If no value is given
        """
        result: T | None = None
        for value in values:
            number = cls.of(value)
            if result is None or number.is_less_than(result):
                result = number  # type: ignore[assignment]
        if result is None:
            raise InvalidArgumentError(f"{cls.__name__}.min() expects at least one value.")
        return result

    @classmethod
    def max(cls: type[T], *values: NumberLike) -> T:
        """Largest of the given values.

        Raises:
            InvalidArgumentError: If no value is given
        """
        result: T | None = None
        for value in values:
            number = cls.of(value)
            if result is None or number.is_greater_than(result):
                result = number  # type: ignore[assignment]
        if result is None:
            raise InvalidArgumentError(f"{cls.__name__}.max() expects at least one value.")
        return result

    @classmethod
    def sum(cls: type[T], *values: NumberLike) -> T:
        """Sum of the given values, in the widest type involved.

        Raises:
            InvalidArgumentError: If no value is given
        """
        result: BigNumber | None = None
        for value in values:
            number = cls.of(value)
            if result is None:
                result = number
            elif result._rank >= number._rank:
                result = result.plus(number)
            else:
                result = number.plus(result)
        if result is None:
            raise InvalidArgumentError(f"{cls.__name__}.sum() expects at least one value.")
        return result  # type: ignore[return-value]

    # --- Abstract interface ---

    @abstractmethod
    def plus(self, that: NumberLike) -> BigNumber: ...

    @abstractmethod
    def compare_to(self, that: NumberLike) -> int:
        """Compare to another number.

        Returns:
            -1, 0 or 1 if this number is less than, equal to, or greater than that
        """
        ...

    @property
    @abstractmethod
    def sign(self) -> int:
        """-1 if negative, 0 if zero, 1 if positive."""
        ...

    @abstractmethod
    def to_big_integer(self) -> BigInteger: ...

    @abstractmethod
    def to_big_decimal(self) -> BigDecimal: ...

    @abstractmethod
    def to_big_rational(self) -> BigRational: ...

    @abstractmethod
    def to_scale(self, scale: int, rounding_mode: RoundingMode = RoundingMode.UNNECESSARY) -> BigDecimal:
        """Convert to a BigDecimal with the given scale, rounding if necessary."""
        ...

    @abstractmethod
    def to_int(self) -> int:
        """Exact conversion to a signed 64-bit range int."""
        ...

    @abstractmethod
    def to_float(self) -> float: ...

    @abstractmethod
    def _fraction_parts(self) -> tuple[str, str]:
        """Numerator and positive denominator, as canonical decimal strings."""
        ...

    @abstractmethod
    def __str__(self) -> str: ...

    # --- Comparisons ---

    def is_equal_to(self, that: NumberLike) -> bool:
        return self.compare_to(that) == 0

    def is_less_than(self, that: NumberLike) -> bool:
        return self.compare_to(that) < 0

    def is_less_than_or_equal_to(self, that: NumberLike) -> bool:
        return self.compare_to(that) <= 0

    def is_greater_than(self, that: NumberLike) -> bool:
        return self.compare_to(that) > 0

    def is_greater_than_or_equal_to(self, that: NumberLike) -> bool:
        return self.compare_to(that) >= 0

    # --- Sign predicates ---

    def is_zero(self) -> bool:
        return self.sign == 0

    def is_negative(self) -> bool:
        return self.sign < 0

    def is_negative_or_zero(self) -> bool:
        return self.sign <= 0

    def is_positive(self) -> bool:
        return self.sign > 0

    def is_positive_or_zero(self) -> bool:
        return self.sign >= 0

    # --- Python protocol ---

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, bool) or not isinstance(other, (BigNumber, int)):
            return NotImplemented
        return self.compare_to(other) == 0

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: NumberLike) -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: NumberLike) -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: NumberLike) -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: NumberLike) -> bool:
        return self.compare_to(other) >= 0

    def __hash__(self) -> int:
        # Same algorithm as fractions.Fraction, so equal ints, Fractions and
        # Decimals hash alike.
        numerator, denominator = self._fraction_parts()
        calculator = get_calculator()
        modulus = str(_HASH_MODULUS)

        negative = numerator[0] == "-"
        n_mod = int(calculator.div_r(calculator.abs(numerator), modulus))
        d_mod = int(calculator.div_r(denominator, modulus))

        if d_mod == 0:
            result = _HASH_INF
        else:
            result = n_mod * pow(d_mod, _HASH_MODULUS - 2, _HASH_MODULUS) % _HASH_MODULUS

        if negative:
            result = -result
        return -2 if result == -1 else result

    def __bool__(self) -> bool:
        return self.sign != 0

    def __float__(self) -> float:
        return self.to_float()

    def __reduce__(self) -> tuple:
        # Unpickling goes back through the validating factory
        return (type(self).of, (str(self),))


def _parse(value: NumberLike) -> BigNumber:
    """Convert a value to the most specific BigNumber type."""
    from bignum.big_decimal import BigDecimal
    from bignum.big_integer import BigInteger
    from bignum.big_rational import BigRational

    if isinstance(value, BigNumber):
        return value

    if isinstance(value, bool):
        raise TypeError("Cannot convert bool to a number")

    if isinstance(value, int):
        return BigInteger._create(int_to_decimal(value))

    if isinstance(value, float):
        if not math.isfinite(value):
            raise NumberFormatError.invalid_format(str(value))
        return _parse(repr(value))

    if not isinstance(value, str):
        raise TypeError(f"Cannot convert {type(value).__name__} to a number")

    match = FRACTION_PATTERN.fullmatch(value)
    if match is not None:
        sign = "-" if match.group("sign") == "-" else ""
        numerator = canonical_integer(sign, match.group("numerator"))
        denominator = canonical_integer("", match.group("denominator"))
        if denominator == "0":
            raise DivisionByZeroError.denominator_must_not_be_zero()
        return BigRational._create(BigInteger._create(numerator), BigInteger._create(denominator))

    match = DECIMAL_PATTERN.fullmatch(value)
    if match is None:
        raise NumberFormatError.invalid_format(value)

    sign = "-" if match.group("sign") == "-" else ""
    integral = match.group("integral")
    fraction = match.group("fraction")
    exponent = match.group("exponent")

    if fraction is None and exponent is None:
        return BigInteger._create(canonical_integer(sign, integral))

    fraction = fraction or ""
    unscaled = canonical_integer(sign, integral + fraction)
    scale = len(fraction) - int(exponent or "0")

    if scale < 0:
        # Positive exponent beyond the fraction: shift the digits in
        if unscaled != "0":
            unscaled += "0" * -scale
        scale = 0

    return BigDecimal._create(unscaled, scale)


def canonical_integer(sign: str, digits: str) -> str:
    """Canonical signed integer string from a sign and unvalidated-length digits."""
    digits = digits.lstrip("0")
    if not digits:
        return "0"
    return sign + digits
