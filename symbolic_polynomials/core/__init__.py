from .arith import Identifier, Coefficient, Exponent, Assignment, floor_div, ceil_div, exact_div, integer_root
from .errors import SymbolicError, MissingVariable, DivisionByZero, NotDivisible, DeductionFailure
from .composite import Composite, Variable, BinaryComposite, Floor, Ceil, Min, Max
from .monomial import Monomial
from .polynomial import (
    Polynomial, as_polynomial,
    make_variable, make_const, make_floor, make_ceil, make_min, make_max,
)
from .registry import Registry
from .fingerprints import EvalPoint, sample_eval_points, eval_poly_points, eval_distance, probably_equal
