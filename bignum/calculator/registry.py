"""Process-wide Calculator instance shared by every value type.

The instance is resolved on first use from BignumConfig and cached. Value
types never hold a calculator reference of their own; they always ask
get_calculator(), so swapping the backend (in tests) affects every number.

Usage:
    from bignum.calculator.registry import get_calculator

    calc = get_calculator()
    calc.add("1", "2")  # "3"
"""

from __future__ import annotations

import threading

import structlog

from bignum.calculator.base import Calculator
from bignum.calculator.native import NativeCalculator
from bignum.calculator.python_int import PythonIntCalculator
from bignum.config import (
    CALCULATOR_NATIVE,
    CALCULATOR_PYTHON,
    KNOWN_CALCULATORS,
    BignumConfig,
)
from bignum.errors import InvalidArgumentError

logger = structlog.get_logger()

__all__ = ["get_calculator", "set_calculator", "create_calculator"]

_instance: Calculator | None = None
_lock = threading.Lock()


def create_calculator(name: str) -> Calculator:
    """Create a calculator by backend name.

    Raises:
        InvalidArgumentError: If the name is not a known backend
    """
    if name == CALCULATOR_NATIVE:
        return NativeCalculator()
    if name == CALCULATOR_PYTHON:
        return PythonIntCalculator()
    raise InvalidArgumentError(
        f"Unknown calculator backend: {name!r} (expected one of {', '.join(KNOWN_CALCULATORS)})"
    )


def get_calculator() -> Calculator:
    """Return the calculator in use, resolving it from the environment on first call."""
    instance = _instance
    if instance is not None:
        return instance

    with _lock:
        # Another thread may have won while we waited
        instance = _instance
        if instance is None:
            instance = _install(create_calculator(BignumConfig.from_env().calculator), source="config")
        return instance


def set_calculator(calculator: Calculator | None) -> None:
    """Replace the calculator in use.

    Typically only needed in tests. Passing None reverts to resolving the
    backend from the environment on next use.
    """
    global _instance
    with _lock:
        if calculator is None:
            _instance = None
            logger.debug("calculator_reset")
        else:
            _install(calculator, source="explicit")


def _install(calculator: Calculator, source: str) -> Calculator:
    global _instance
    _instance = calculator
    logger.info("calculator_selected", backend=calculator.name, source=source)
    return calculator
