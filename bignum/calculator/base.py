"""Calculator interface: primitive arithmetic on canonical decimal strings.

Every operand and result is a canonical signed decimal string: digits only,
no leading zeros except "0" itself, an optional leading "-" on non-zero
values, never a leading "+". Passing anything else is undefined behaviour;
the value types validate input before it reaches a calculator.

Backends implement the underscore-prefixed primitives. The public methods
validate the operands that have a restricted domain (zero divisors, negative
exponents, negative radicands) so every backend raises the same errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from bignum.errors import (
    DivisionByZeroError,
    InvalidArgumentError,
    NegativeNumberError,
    RoundingNecessaryError,
)
from bignum.rounding import RoundingMode

__all__ = ["Calculator", "DICTIONARY", "MAX_POWER", "int_to_decimal", "decimal_to_int"]

# Digits used for bases 2 to 36
DICTIONARY = "0123456789abcdefghijklmnopqrstuvwxyz"

# Largest exponent accepted by pow()
MAX_POWER = 1_000_000

# Base conversion works on groups small enough that base**k < 10**9
_GROUP_LIMIT = 10**9


class Calculator(ABC):
    """Performs basic operations on arbitrary size integers.

    Implementations must be stateless: a single instance is shared by every
    value object in the process.
    """

    name: ClassVar[str] = "abstract"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # --- Sign helpers ---

    def abs(self, n: str) -> str:
        """Absolute value."""
        return n[1:] if n[0] == "-" else n

    def neg(self, n: str) -> str:
        """Negated value. Zero stays unsigned."""
        if n == "0":
            return "0"
        if n[0] == "-":
            return n[1:]
        return "-" + n

    def cmp(self, a: str, b: str) -> int:
        """Compare two numbers.

        Returns:
            -1, 0 or 1 if a is less than, equal to, or greater than b
        """
        a_neg = a[0] == "-"
        b_neg = b[0] == "-"

        if a_neg and not b_neg:
            return -1
        if b_neg and not a_neg:
            return 1

        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) != len(b_dig):
            result = -1 if len(a_dig) < len(b_dig) else 1
        elif a_dig == b_dig:
            result = 0
        else:
            # Same length, no leading zeros: lexicographic order is numeric order
            result = -1 if a_dig < b_dig else 1

        return -result if a_neg else result

    # --- Primitives ---

    @abstractmethod
    def add(self, a: str, b: str) -> str:
        """Sum of a and b."""
        ...

    @abstractmethod
    def sub(self, a: str, b: str) -> str:
        """Difference a - b."""
        ...

    @abstractmethod
    def mul(self, a: str, b: str) -> str:
        """Product of a and b."""
        ...

    @abstractmethod
    def _div_qr(self, a: str, b: str) -> tuple[str, str]:
        """Truncating division, b guaranteed non-zero."""
        ...

    @abstractmethod
    def _pow(self, a: str, e: int) -> str:
        """a ** e for 0 <= e <= MAX_POWER."""
        ...

    @abstractmethod
    def _mod_pow(self, base: str, exp: str, mod: str) -> str:
        """base ** exp mod mod, with exp >= 0 and mod > 0."""
        ...

    @abstractmethod
    def _sqrt(self, n: str) -> str:
        """floor(sqrt(n)) for n >= 0."""
        ...

    # --- Validated operations ---

    def div_qr(self, a: str, b: str) -> tuple[str, str]:
        """Quotient and remainder of a / b, truncated toward zero.

        The remainder is zero or has the sign of the dividend, so that
        a == q * b + r and abs(r) < abs(b).

        Raises:
            DivisionByZeroError: If b is zero
        """
        if b == "0":
            raise DivisionByZeroError.division_by_zero()
        return self._div_qr(a, b)

    def div_q(self, a: str, b: str) -> str:
        """Truncated quotient of a / b."""
        return self.div_qr(a, b)[0]

    def div_r(self, a: str, b: str) -> str:
        """Remainder of a / b, with the sign of a."""
        return self.div_qr(a, b)[1]

    def pow(self, a: str, e: int) -> str:
        """a raised to the integer power e.

        pow(x, 0) is "1" for every x, zero included. A negative exponent only
        has an integer result when abs(a) == 1.

        Raises:
            InvalidArgumentError: If abs(e) exceeds MAX_POWER
            RoundingNecessaryError: If e < 0 and abs(a) != 1
        """
        if e < -MAX_POWER or e > MAX_POWER:
            raise InvalidArgumentError(f"The exponent {e} is not in the range 0 to {MAX_POWER}.")
        if e < 0:
            if a == "1":
                return "1"
            if a == "-1":
                return "-1" if e % 2 else "1"
            raise RoundingNecessaryError(f"{a} ** {e} is not an integer.")
        if e == 0:
            return "1"
        if e == 1:
            return a
        return self._pow(a, e)

    def mod_pow(self, base: str, exp: str, mod: str) -> str:
        """Modular exponentiation, result in [0, mod).

        Raises:
            DivisionByZeroError: If mod is zero
            NegativeNumberError: If exp or mod is negative
        """
        if mod == "0":
            raise DivisionByZeroError.modulus_must_not_be_zero()
        if mod[0] == "-":
            raise NegativeNumberError(f"The modulus cannot be negative: {mod}")
        if exp[0] == "-":
            raise NegativeNumberError(f"The exponent cannot be negative: {exp}")
        if mod == "1":
            return "0"
        return self._mod_pow(base, exp, mod)

    def sqrt(self, n: str) -> str:
        """Integer square root, rounded down.

        Raises:
            NegativeNumberError: If n is negative
        """
        if n[0] == "-":
            raise NegativeNumberError(f"Cannot take the square root of a negative number: {n}")
        if n == "0" or n == "1":
            return n
        return self._sqrt(n)

    def mod(self, a: str, m: str) -> str:
        """Floor modulo of a by a positive modulus, always in [0, m).

        Raises:
            DivisionByZeroError: If m is zero
            NegativeNumberError: If m is negative
        """
        if m == "0":
            raise DivisionByZeroError.modulus_must_not_be_zero()
        if m[0] == "-":
            raise NegativeNumberError(f"The modulus cannot be negative: {m}")
        r = self.div_r(a, m)
        if r[0] == "-":
            return self.add(r, m)
        return r

    def gcd(self, a: str, b: str) -> str:
        """Greatest common divisor, always non-negative; gcd(0, 0) == 0."""
        a = self.abs(a)
        b = self.abs(b)
        while b != "0":
            a, b = b, self.div_r(a, b)
        return a

    # --- Rounding ---

    def div_round(self, a: str, b: str, rounding_mode: RoundingMode) -> str:
        """Divide a by b, resolving a non-zero remainder with the rounding mode.

        Raises:
            DivisionByZeroError: If b is zero
            RoundingNecessaryError: If UNNECESSARY is used and the division is inexact
        """
        quotient, remainder = self.div_qr(a, b)

        has_discarded_fraction = remainder != "0"
        is_positive_or_zero = (a[0] == "-") == (b[0] == "-")

        def discarded_fraction_sign() -> int:
            # Compare the discarded fraction to one half: 2 * |r| vs |b|
            doubled = self.abs(self.mul(remainder, "2"))
            return self.cmp(doubled, self.abs(b))

        if rounding_mode is RoundingMode.UNNECESSARY:
            if has_discarded_fraction:
                raise RoundingNecessaryError.rounding_necessary()
            increment = False
        elif not has_discarded_fraction:
            increment = False
        elif rounding_mode is RoundingMode.UP:
            increment = True
        elif rounding_mode is RoundingMode.DOWN:
            increment = False
        elif rounding_mode is RoundingMode.CEILING:
            increment = is_positive_or_zero
        elif rounding_mode is RoundingMode.FLOOR:
            increment = not is_positive_or_zero
        elif rounding_mode is RoundingMode.HALF_UP:
            increment = discarded_fraction_sign() >= 0
        elif rounding_mode is RoundingMode.HALF_DOWN:
            increment = discarded_fraction_sign() > 0
        elif rounding_mode is RoundingMode.HALF_CEILING:
            if is_positive_or_zero:
                increment = discarded_fraction_sign() >= 0
            else:
                increment = discarded_fraction_sign() > 0
        elif rounding_mode is RoundingMode.HALF_FLOOR:
            if is_positive_or_zero:
                increment = discarded_fraction_sign() > 0
            else:
                increment = discarded_fraction_sign() >= 0
        elif rounding_mode is RoundingMode.HALF_EVEN:
            last_digit_is_even = int(quotient[-1]) % 2 == 0
            if last_digit_is_even:
                increment = discarded_fraction_sign() > 0
            else:
                increment = discarded_fraction_sign() >= 0
        else:
            raise InvalidArgumentError(f"Invalid rounding mode: {rounding_mode!r}")

        if increment:
            return self.add(quotient, "1" if is_positive_or_zero else "-1")

        return quotient

    # --- Base conversion ---

    def from_base(self, digits: str, base: int) -> str:
        """Convert an unsigned, lowercase string of digits in the given base to decimal.

        The digits must already be validated against DICTIONARY[:base].
        """
        group_size, group_power = _group_for_base(base)
        power_str = str(group_power)

        # The first group absorbs the remainder so the rest are full width
        first = len(digits) % group_size or group_size
        result = str(_parse_small(digits[:first], base))
        for start in range(first, len(digits), group_size):
            group = _parse_small(digits[start : start + group_size], base)
            result = self.add(self.mul(result, power_str), str(group))

        return result

    def to_base(self, n: str, base: int) -> str:
        """Convert a decimal number to the given base, lowercase, with sign."""
        negative = n[0] == "-"
        n = self.abs(n)
        if n == "0":
            return "0"

        group_size, group_power = _group_for_base(base)
        power_str = str(group_power)
        groups: list[str] = []

        while n != "0":
            n, r = self.div_qr(n, power_str)
            groups.append(_format_small(int(r), base, group_size))

        result = "".join(reversed(groups)).lstrip("0")
        return "-" + result if negative else result


def _group_for_base(base: int) -> tuple[int, int]:
    """Largest k such that base**k < 10**9, and base**k itself."""
    size, power = 1, base
    while power * base < _GROUP_LIMIT:
        size += 1
        power *= base
    return size, power


def _parse_small(digits: str, base: int) -> int:
    value = 0
    for char in digits:
        value = value * base + DICTIONARY.index(char)
    return value


def _format_small(value: int, base: int, width: int) -> str:
    chars = []
    for _ in range(width):
        value, digit = divmod(value, base)
        chars.append(DICTIONARY[digit])
    return "".join(reversed(chars))


# CPython 3.11+ refuses int <-> str conversions above 4300 digits; larger
# values are converted in groups of this many digits.
_CONVERSION_DIGITS = 1000
_CONVERSION_BASE = 10**_CONVERSION_DIGITS


def int_to_decimal(value: int) -> str:
    """Canonical decimal string of an int of any size."""
    if -_CONVERSION_BASE < value < _CONVERSION_BASE:
        return str(value)

    sign = "-" if value < 0 else ""
    magnitude = -value if value < 0 else value

    groups: list[int] = []
    while magnitude:
        magnitude, group = divmod(magnitude, _CONVERSION_BASE)
        groups.append(group)

    parts = [str(groups[-1])]
    parts.extend(str(group).zfill(_CONVERSION_DIGITS) for group in reversed(groups[:-1]))
    return sign + "".join(parts)


def decimal_to_int(value: str) -> int:
    """int of a canonical decimal string of any length."""
    if len(value) <= _CONVERSION_DIGITS:
        return int(value)

    negative = value[0] == "-"
    digits = value[1:] if negative else value

    # The first group absorbs the remainder so the rest are full width
    first = len(digits) % _CONVERSION_DIGITS or _CONVERSION_DIGITS
    result = int(digits[:first])
    for start in range(first, len(digits), _CONVERSION_DIGITS):
        result = result * _CONVERSION_BASE + int(digits[start : start + _CONVERSION_DIGITS])

    return -result if negative else result
