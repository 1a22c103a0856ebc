"""bignum - exact arbitrary-precision integer, decimal and rational arithmetic."""

from bignum.big_decimal import BigDecimal
from bignum.big_integer import BigInteger
from bignum.big_number import BigNumber
from bignum.big_rational import BigRational
from bignum.errors import (
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidArgumentError,
    MathError,
    NegativeNumberError,
    NumberFormatError,
    RoundingNecessaryError,
)
from bignum.rounding import RoundingMode

__version__ = "0.1.0"
__all__ = [
    "BigNumber",
    "BigInteger",
    "BigDecimal",
    "BigRational",
    "RoundingMode",
    "MathError",
    "NumberFormatError",
    "DivisionByZeroError",
    "RoundingNecessaryError",
    "IntegerOverflowError",
    "NegativeNumberError",
    "InvalidArgumentError",
    "__version__",
]
