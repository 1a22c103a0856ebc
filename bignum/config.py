"""Runtime configuration for bignum."""

import os
from dataclasses import dataclass

# Backend names understood by the calculator registry
CALCULATOR_NATIVE = "native"
CALCULATOR_PYTHON = "python"
KNOWN_CALCULATORS = (CALCULATOR_NATIVE, CALCULATOR_PYTHON)

# Environment variable consulted by BignumConfig.from_env()
CALCULATOR_ENV_VAR = "BIGNUM_CALCULATOR"


@dataclass(frozen=True)
class BignumConfig:
    """Process-wide settings, read once when the calculator is first needed.

    Attributes:
        calculator: Backend used by every value type. "native" runs the
            chunked long-arithmetic engine, "python" delegates to the
            interpreter's built-in int.
    """

    calculator: str = CALCULATOR_NATIVE

    @classmethod
    def from_env(cls) -> "BignumConfig":
        """Build a config from environment variables, falling back to defaults.

        - BIGNUM_CALCULATOR: backend name (default: native)
        """
        calculator = os.environ.get(CALCULATOR_ENV_VAR, CALCULATOR_NATIVE).strip().lower()
        return cls(calculator=calculator or CALCULATOR_NATIVE)


# Default configuration instance
DEFAULT_CONFIG = BignumConfig()
