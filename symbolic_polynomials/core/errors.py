"""Exceptions raised by the symbolic engine.

  SymbolicError      — common base class
  MissingVariable    — evaluation needed a variable that has no value
  DivisionByZero     — floor/ceil (or polynomial division) by zero
  NotDivisible       — the `/` operator was used on an inexact division
  DeductionFailure   — deduce_values could not produce a consistent assignment

Inexact division through `checked_div` is not an error: it returns None.
"""

from __future__ import annotations

from typing import Any, Optional


class SymbolicError(Exception):
    """Base class for every error raised by symbolic_polynomials."""


class MissingVariable(SymbolicError, KeyError):
    """Evaluation reached a variable with no assigned value."""

    def __init__(self, identifier: Any):
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"No value assigned to variable {self.identifier}"


class DivisionByZero(SymbolicError, ZeroDivisionError):
    """The right operand of a floor/ceil evaluated to zero."""


class NotDivisible(SymbolicError, ArithmeticError):
    """Exact division was requested with `/` but leaves a remainder."""


class DeductionFailure(SymbolicError, ValueError):
    """deduce_values found a contradiction or ran out of solvable equations.

    Attributes:
        polynomial: The (substituted) left-hand side that failed, if any.
        target:     Its expected value, if any.
        value:      The intermediate value that did not check out, if any.
    """

    def __init__(
        self,
        message: str,
        polynomial: Optional[Any] = None,
        target: Optional[int] = None,
        value: Optional[int] = None,
    ):
        super().__init__(message)
        self.polynomial = polynomial
        self.target = target
        self.value = value
