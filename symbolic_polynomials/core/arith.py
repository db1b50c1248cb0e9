"""Integer arithmetic underlying the symbolic engine.

The engine never leaves the integers.  Coefficients are Python ints, so there
is no fixed width to overflow, and every operation here is exact:

  floor_div     — division rounding toward -inf
  ceil_div      — division rounding toward +inf
  exact_div     — quotient only when the division leaves no remainder
  integer_root  — exact integer n-th root, or None when there is none

Type contracts used across the package:

  Identifier  = any hashable value, mutually comparable with `<`, printable
  Coefficient = int
  Exponent    = int >= 0
  Assignment  = Mapping[Identifier, int]
"""

from __future__ import annotations

from typing import Hashable, Mapping, Optional

from .errors import DivisionByZero

# Variable name.  Must be hashable, totally ordered and printable via str().
Identifier = Hashable

# Signed integer coefficient of a monomial.
Coefficient = int

# Non-negative power of a composite inside a monomial.
Exponent = int

# (Possibly partial) mapping from variables to their integer values.
Assignment = Mapping[Identifier, int]


def floor_div(numerator: int, denominator: int) -> int:
    """Return floor(numerator / denominator)."""
    if denominator == 0:
        raise DivisionByZero(f"floor({numerator}, 0)")
    return numerator // denominator


def ceil_div(numerator: int, denominator: int) -> int:
    """Return ceil(numerator / denominator), correct for every sign combination."""
    if denominator == 0:
        raise DivisionByZero(f"ceil({numerator}, 0)")
    return -((-numerator) // denominator)


def exact_div(numerator: int, denominator: int) -> Optional[int]:
    """Return numerator / denominator if it is an integer, otherwise None.

    A zero denominator is reported as "not divisible" rather than raised.
    """
    if denominator == 0:
        return None
    quotient, remainder = divmod(numerator, denominator)
    if remainder != 0:
        return None
    return quotient


def integer_root(value: int, n: int) -> Optional[int]:
    """Return the integer r with r**n == value, or None if no such integer exists.

    Uses a binary search over [0, 2**(bits/n + 1)) so that the result is
    exact for arbitrarily large values.  For even n the non-negative root is
    returned; for odd n the root carries the sign of value.

    Args:
        value: The integer whose root is wanted.
        n:     The degree of the root (n >= 1).
    """
    if n < 1:
        raise ValueError(f"Root degree must be >= 1, got {n}")
    if n == 1:
        return value
    if value < 0:
        if n % 2 == 0:
            return None
        root = integer_root(-value, n)
        return None if root is None else -root
    if value < 2:
        return value

    # Largest r with r**n <= value
    low, high = 1, 1 << (value.bit_length() // n + 1)
    while low < high:
        mid = (low + high + 1) // 2
        if mid ** n <= value:
            low = mid
        else:
            high = mid - 1

    # Re-exponentiate as the final check
    if low ** n != value:
        return None
    return low
