"""Deduce variable values from a system of polynomial = constant equations.

The solver is a fixed-point substitution loop, not general elimination:

  1. An equation whose left-hand side is already constant must match its
     target exactly.
  2. An equation of the shape `a*x^n + b = t` over a single variable x is
     solved for x (the division by a and the n-th root must both be exact),
     x is substituted into every pending equation, and the scan restarts.
  3. Anything else waits until substitutions make it fit 1 or 2.

The scan ends when every equation is verified, or fails with
DeductionFailure once a full pass makes no progress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .config import Config
from .core.arith import Identifier, exact_div, integer_root
from .core.composite import Variable
from .core.errors import DeductionFailure, DivisionByZero
from .core.polynomial import Operand, Polynomial, as_polynomial

_logger = logging.getLogger(__name__)

Equation = Tuple[Operand, int]


@dataclass(frozen=True)
class PowerEquation:
    """Left-hand side of the form coefficient * identifier^exponent + offset."""

    identifier: Identifier
    coefficient: int
    exponent: int
    offset: int = 0

    def describe(self, target: int) -> str:
        """Human-readable form of the equation, e.g. `3*b^2 - 7 = 20`."""
        text = f"{self.coefficient}*{self.identifier}^{self.exponent}"
        if self.offset > 0:
            text += f" + {self.offset}"
        elif self.offset < 0:
            text += f" - {-self.offset}"
        return f"{text} = {target}"

    def solve(self, target: int) -> int:
        """Integer x with coefficient * x^exponent + offset == target.

        Even exponents give the non-negative root.

        Raises:
            DeductionFailure: if the division or the root is not exact.
        """
        value = target - self.offset
        power = exact_div(value, self.coefficient)
        if power is None:
            raise DeductionFailure(
                f"Cannot solve {self.describe(target)}: "
                f"{value} is not divisible by {self.coefficient}",
                target=target, value=value,
            )
        root = integer_root(power, self.exponent)
        if root is None:
            raise DeductionFailure(
                f"Cannot solve {self.describe(target)}: "
                f"{power} has no integer root of degree {self.exponent}",
                target=target, value=power,
            )
        return root


def match_power_equation(poly: Polynomial) -> Optional[PowerEquation]:
    """Match `a*x^n` or `a*x^n + b` with x a plain variable, else None."""
    monomials = poly.monomials
    if len(monomials) == 1:
        term, offset = monomials[0], 0
    elif len(monomials) == 2 and monomials[1].is_constant():
        term, offset = monomials[0], monomials[1].coefficient
    else:
        return None
    if len(term.powers) != 1:
        return None
    composite, exponent = term.powers[0]
    if not isinstance(composite, Variable):
        return None
    return PowerEquation(composite.identifier, term.coefficient, exponent, offset)


def deduce_values(
    equations: Iterable[Equation],
    config: Optional[Config] = None,
) -> Dict[Identifier, int]:
    """Find the variable assignment satisfying every `poly = target` equation.

    Args:
        equations: (left-hand side, target) pairs.
        config:    Only max_deduction_passes is used; None scans until no
                   equation makes progress.

    Returns:
        Mapping from every solved identifier to its value.

    Raises:
        DeductionFailure: on a contradiction, an inexact solution, a
        substitution that makes a floor/ceil divide by zero, or when the
        remaining equations cannot be brought into a solvable shape.
    """
    config = config or Config()
    pending: List[Polynomial] = []
    targets: List[int] = []
    for poly, target in equations:
        pending.append(as_polynomial(poly))
        targets.append(target)
    verified = [False] * len(pending)
    values: Dict[Identifier, int] = {}

    passes = 0
    while not all(verified):
        if config.max_deduction_passes is not None and passes >= config.max_deduction_passes:
            raise DeductionFailure(
                f"Gave up after {passes} passes with "
                f"{verified.count(False)} equations unverified"
            )
        passes += 1
        progress = False

        for i, poly in enumerate(pending):
            if verified[i]:
                continue
            target = targets[i]

            constant = poly.as_constant()
            if constant is not None:
                if constant != target:
                    raise DeductionFailure(
                        f"Equation {i} reduced to {constant}, expected {target}",
                        polynomial=poly, target=target, value=constant,
                    )
                _logger.debug("Equation %d verified: %s = %d", i, poly, target)
                verified[i] = True
                progress = True
                continue

            equation = match_power_equation(poly)
            if equation is None:
                continue
            try:
                root = equation.solve(target)
            except DeductionFailure as e:
                e.polynomial = poly
                raise
            values[equation.identifier] = root
            verified[i] = True
            progress = True
            _logger.debug("Solved %s = %d from equation %d (%s = %d)",
                          equation.identifier, root, i, poly, target)

            substitution = {equation.identifier: root}
            for j in range(len(pending)):
                if verified[j]:
                    continue
                try:
                    pending[j] = pending[j].reduce(substitution)
                except DivisionByZero as e:
                    raise DeductionFailure(
                        f"Equation {j} divides by zero after substituting "
                        f"{equation.identifier} = {root}",
                        polynomial=pending[j], target=targets[j],
                    ) from e
            break  # restart from the first equation

        if not progress:
            unsolved = [i for i, done in enumerate(verified) if not done]
            first = unsolved[0]
            raise DeductionFailure(
                f"Could not deduce all variables: equations {unsolved} remain, "
                f"first is {pending[first]} = {targets[first]}",
                polynomial=pending[first], target=targets[first],
            )

    _logger.info("Deduced %d variables from %d equations in %d passes",
                 len(values), len(pending), passes)
    return values
