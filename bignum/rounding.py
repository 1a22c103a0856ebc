"""Rounding modes used wherever a value is scaled down or a quotient is inexact."""

from enum import Enum


class RoundingMode(str, Enum):
    """How discarded digits affect a result that cannot be exact at the requested scale.

    The HALF_* modes compare the discarded fraction against exactly one half
    of the divisor; they differ only in how an exact tie is resolved.
    """

    # Raise RoundingNecessaryError if any non-zero digit would be discarded.
    UNNECESSARY = "unnecessary"
    # Away from zero.
    UP = "up"
    # Toward zero (truncation).
    DOWN = "down"
    # Toward positive infinity.
    CEILING = "ceiling"
    # Toward negative infinity.
    FLOOR = "floor"
    # Nearest neighbor, ties away from zero.
    HALF_UP = "half_up"
    # Nearest neighbor, ties toward zero.
    HALF_DOWN = "half_down"
    # Nearest neighbor, ties toward positive infinity.
    HALF_CEILING = "half_ceiling"
    # Nearest neighbor, ties toward negative infinity.
    HALF_FLOOR = "half_floor"
    # Nearest neighbor, ties toward the even neighbor (banker's rounding).
    HALF_EVEN = "half_even"
