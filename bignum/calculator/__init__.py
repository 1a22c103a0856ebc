"""Calculator backends for bignum.

This package provides the primitive arithmetic beneath the value types:
- Calculator: interface over canonical signed decimal strings
- NativeCalculator: chunked long arithmetic on word-sized values
- PythonIntCalculator: delegates to Python's built-in int
"""

from bignum.calculator.base import DICTIONARY, MAX_POWER, Calculator, decimal_to_int, int_to_decimal
from bignum.calculator.native import NativeCalculator
from bignum.calculator.python_int import PythonIntCalculator
from bignum.calculator.registry import create_calculator, get_calculator, set_calculator

__all__ = [
    "Calculator",
    "NativeCalculator",
    "PythonIntCalculator",
    "get_calculator",
    "set_calculator",
    "create_calculator",
    "DICTIONARY",
    "MAX_POWER",
    "int_to_decimal",
    "decimal_to_int",
]
