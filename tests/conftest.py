"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import Iterator

import pytest
from hypothesis import settings

from bignum.calculator import Calculator, NativeCalculator, PythonIntCalculator, set_calculator

# Hypothesis profiles; select with HYPOTHESIS_PROFILE=ci
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))

# One instance per backend, shared by every parametrised test
CALCULATORS = [NativeCalculator(), PythonIntCalculator()]


@pytest.fixture(params=CALCULATORS, ids=lambda calc: calc.name)
def calculator(request: pytest.FixtureRequest) -> Iterator[Calculator]:
    """Install each backend in turn as the process-wide calculator.

    Value-type test modules request this fixture (usually through
    pytestmark) so that every test runs against both backends.
    """
    set_calculator(request.param)
    yield request.param
    set_calculator(None)


@pytest.fixture
def default_digit_limit() -> Iterator[None]:
    """Run with CPython's default 4300-digit int/str conversion limit."""
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("interpreter has no int/str digit limit")
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield
    sys.set_int_max_str_digits(previous)
