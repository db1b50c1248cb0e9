"""Conversion between Polynomial objects and SymPy expressions.

Used for display/debugging and as an independent oracle: SymPy expands and
compares expressions with its own machinery, so agreement between the two is
a strong check on the canonical arithmetic here.

Variables map to integer SymPy symbols, floor/ceil to `floor(l/r)` and
`ceiling(l/r)`, and min/max to `Min`/`Max`.
"""

from typing import Callable, Optional

import sympy
from sympy import Expr, Symbol

from .core.arith import Identifier
from .core.composite import Ceil, Composite, Floor, Max, Min, Variable
from .core.monomial import Monomial
from .core.polynomial import Polynomial, make_ceil, make_floor, make_max, make_min

SymbolFor = Callable[[Identifier], Symbol]
IdentifierFor = Callable[[Symbol], Identifier]


def default_symbol(identifier: Identifier) -> Symbol:
    """An integer SymPy symbol named after the identifier."""
    return Symbol(str(identifier), integer=True)


def default_identifier(symbol: Symbol) -> Identifier:
    """The symbol name, used as the identifier."""
    return symbol.name


def _composite_to_sympy(composite: Composite, symbol_for: SymbolFor) -> Expr:
    if isinstance(composite, Variable):
        return symbol_for(composite.identifier)
    left = to_sympy(composite.left, symbol_for)
    right = to_sympy(composite.right, symbol_for)
    if isinstance(composite, Floor):
        return sympy.floor(left / right)
    if isinstance(composite, Ceil):
        return sympy.ceiling(left / right)
    if isinstance(composite, Min):
        return sympy.Min(left, right)
    if isinstance(composite, Max):
        return sympy.Max(left, right)
    raise TypeError(f"Unknown composite {composite!r}")


def _monomial_to_sympy(monomial: Monomial, symbol_for: SymbolFor) -> Expr:
    term = sympy.Integer(monomial.coefficient)
    for composite, exponent in monomial.powers:
        term *= _composite_to_sympy(composite, symbol_for) ** exponent
    return term


def to_sympy(poly: Polynomial, symbol_for: Optional[SymbolFor] = None) -> Expr:
    """Convert a Polynomial to a SymPy expression."""
    symbol_for = symbol_for or default_symbol
    if poly.is_zero():
        return sympy.Integer(0)
    return sympy.Add(*[_monomial_to_sympy(m, symbol_for) for m in poly.monomials])


def from_sympy(expr: Expr, identifier_for: Optional[IdentifierFor] = None) -> Polynomial:
    """Convert an integer polynomial SymPy expression to a Polynomial.

    Supports Integer, Symbol, Add, Mul, Pow with a non-negative integer
    exponent, floor/ceiling of a quotient, and Min/Max.

    Raises:
        ValueError: for rational coefficients, negative or symbolic exponents,
                    and any other unsupported node.
    """
    identifier_for = identifier_for or default_identifier
    expr = sympy.sympify(expr)
    if expr.is_Integer:
        return Polynomial.constant(int(expr))
    if expr.is_Rational:
        raise ValueError(f"Non-integer coefficient {expr}")
    if expr.is_Symbol:
        return Polynomial.variable(identifier_for(expr))

    if expr.is_Add:
        result = Polynomial.constant(0)
        for arg in expr.args:
            result = result + from_sympy(arg, identifier_for)
        return result
    if expr.is_Mul:
        result = Polynomial.constant(1)
        for arg in expr.args:
            result = result * from_sympy(arg, identifier_for)
        return result
    if expr.is_Pow:
        base, exponent = expr.args
        if not exponent.is_Integer or exponent < 0:
            raise ValueError(f"Unsupported exponent in {expr}")
        return from_sympy(base, identifier_for) ** int(exponent)

    if isinstance(expr, (sympy.floor, sympy.ceiling)):
        numerator, denominator = sympy.fraction(sympy.together(expr.args[0]))
        left = from_sympy(numerator, identifier_for)
        right = from_sympy(denominator, identifier_for)
        if isinstance(expr, sympy.floor):
            return make_floor(left, right)
        return make_ceil(left, right)
    if isinstance(expr, (sympy.Min, sympy.Max)):
        build = make_min if isinstance(expr, sympy.Min) else make_max
        args = [from_sympy(arg, identifier_for) for arg in expr.args]
        result = args[0]
        for arg in args[1:]:
            result = build(result, arg)
        return result

    raise ValueError(f"Unsupported SymPy expression {expr!r}")


def sympy_equal(poly: Polynomial, expr: Expr, symbol_for: Optional[SymbolFor] = None) -> bool:
    """Check if poly equals expr after expansion."""
    diff = sympy.expand(to_sympy(poly, symbol_for) - sympy.sympify(expr))
    return diff == sympy.Integer(0)
