"""Calculator delegating to Python's built-in arbitrary-precision int.

Results are bit-identical to NativeCalculator; Python's floor-based // and %
are adapted to truncating division.

Operands cross the int <-> str boundary through int_to_decimal() and
decimal_to_int(), so CPython's 4300-digit conversion limit never applies and
the interpreter-wide setting is left alone.
"""

from __future__ import annotations

import math
from typing import ClassVar

from bignum.calculator.base import Calculator, decimal_to_int, int_to_decimal

__all__ = ["PythonIntCalculator"]


class PythonIntCalculator(Calculator):
    """Calculator backed by the interpreter's int type."""

    name: ClassVar[str] = "python"

    def add(self, a: str, b: str) -> str:
        return int_to_decimal(decimal_to_int(a) + decimal_to_int(b))

    def sub(self, a: str, b: str) -> str:
        return int_to_decimal(decimal_to_int(a) - decimal_to_int(b))

    def mul(self, a: str, b: str) -> str:
        return int_to_decimal(decimal_to_int(a) * decimal_to_int(b))

    def _div_qr(self, a: str, b: str) -> tuple[str, str]:
        x = decimal_to_int(a)
        y = decimal_to_int(b)

        # Truncate toward zero on magnitudes, then restore signs
        q, r = divmod(abs(x), abs(y))
        if (x < 0) != (y < 0):
            q = -q
        if x < 0:
            r = -r

        return int_to_decimal(q), int_to_decimal(r)

    def _pow(self, a: str, e: int) -> str:
        return int_to_decimal(decimal_to_int(a) ** e)

    def _mod_pow(self, base: str, exp: str, mod: str) -> str:
        return int_to_decimal(pow(decimal_to_int(base), decimal_to_int(exp), decimal_to_int(mod)))

    def _sqrt(self, n: str) -> str:
        return int_to_decimal(math.isqrt(decimal_to_int(n)))

    def gcd(self, a: str, b: str) -> str:
        return int_to_decimal(math.gcd(decimal_to_int(a), decimal_to_int(b)))

    def from_base(self, digits: str, base: int) -> str:
        # int() only parses power-of-two bases without a digit limit
        if base & (base - 1) == 0:
            return int_to_decimal(int(digits, base))
        return super().from_base(digits, base)

    def to_base(self, n: str, base: int) -> str:
        if base == 10:
            return n
        # int() parses any base but only formats 2, 8, 10, 16
        return super().to_base(n, base)
