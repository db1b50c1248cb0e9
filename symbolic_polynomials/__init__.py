"""Canonical symbolic integer polynomials with floor/ceil/min/max terms."""

from .config import Config
from .core import (
    Identifier, Coefficient, Exponent, Assignment,
    SymbolicError, MissingVariable, DivisionByZero, NotDivisible, DeductionFailure,
    Composite, Variable, Floor, Ceil, Min, Max,
    Monomial, Polynomial,
    make_variable, make_const, make_floor, make_ceil, make_min, make_max,
    Registry, probably_equal,
)
from .deduction import PowerEquation, match_power_equation, deduce_values

__version__ = "0.1.0"
