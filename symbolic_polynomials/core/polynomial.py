"""Canonical symbolic integer polynomials.

A Polynomial is a tuple of Monomials, strictly decreasing by shape (the
monomial order with the coefficient ignored).  No two monomials share a
shape and no stored monomial has coefficient 0, so the empty tuple is the
zero polynomial and every value has exactly one representation.

Every operation returns a new canonical Polynomial; instances are never
mutated after construction and may be shared freely as composite operands.

Smart constructors:
    make_variable(id)     — the polynomial `id`
    make_const(c)         — the constant polynomial `c`
    make_floor(l, r)      — floor(l / r), folded when possible
    make_ceil(l, r)       — ceil(l / r), folded when possible
    make_min(l, r)        — min(l, r), folded when both are constant
    make_max(l, r)        — max(l, r), folded when both are constant
"""

from __future__ import annotations

import functools
import logging
from typing import Callable, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .arith import Assignment, Identifier, ceil_div, floor_div
from .composite import Ceil, Composite, Floor, Max, Min, Variable
from .errors import DivisionByZero, NotDivisible
from .monomial import Monomial

_logger = logging.getLogger(__name__)

Operand = Union[int, Monomial, "Polynomial"]

# Comparison view of the zero polynomial: the single constant monomial 0
_ZERO_TERMS = (Monomial.constant(0),)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _merge(left: Tuple[Monomial, ...], right: Tuple[Monomial, ...], negate: bool = False) -> Tuple[Monomial, ...]:
    """left + right (or left - right) of two canonical monomial sequences."""
    result: List[Monomial] = []
    i, j = 0, 0
    while i < len(left) and j < len(right):
        x, y = left[i], right[j]
        order = x.compare_shape(y)
        if order > 0:
            result.append(x)
            i += 1
        elif order < 0:
            result.append(-y if negate else y)
            j += 1
        else:
            coefficient = x.coefficient - y.coefficient if negate else x.coefficient + y.coefficient
            if coefficient != 0:
                result.append(x.with_coefficient(coefficient))
            i += 1
            j += 1
    result.extend(left[i:])
    result.extend(-y if negate else y for y in right[j:])
    return tuple(result)


@functools.total_ordering
class Polynomial:
    """Sum of monomials in canonical (strictly decreasing) order."""

    __slots__ = ("monomials", "_hash")

    def __init__(self, monomials: Iterable[Union[int, Monomial]] = ()):
        terms = [Monomial.constant(m) if isinstance(m, int) else m for m in monomials]
        terms = [m for m in terms if m.coefficient != 0]
        terms.sort(key=functools.cmp_to_key(lambda x, y: y.compare_shape(x)))

        # [powers, coefficient] per distinct shape, equal shapes are adjacent
        merged: List[list] = []
        for term in terms:
            if merged and merged[-1][0] == term.powers:
                merged[-1][1] += term.coefficient
            else:
                merged.append([term.powers, term.coefficient])
        self.monomials = tuple(Monomial._make(c, p) for p, c in merged if c != 0)
        self._hash = None

    @classmethod
    def _make(cls, monomials: Tuple[Monomial, ...]) -> Polynomial:
        # Trusted constructor: monomials already canonical
        polynomial = cls.__new__(cls)
        polynomial.monomials = monomials
        polynomial._hash = None
        return polynomial

    # ---- Constructors ----

    @classmethod
    def constant(cls, value: int) -> Polynomial:
        if value == 0:
            return cls._make(())
        return cls._make((Monomial.constant(value),))

    @classmethod
    def variable(cls, identifier: Identifier) -> Polynomial:
        return cls._make((Monomial.variable(identifier),))

    @classmethod
    def from_monomial(cls, monomial: Monomial) -> Polynomial:
        if monomial.coefficient == 0:
            return cls._make(())
        return cls._make((monomial,))

    @classmethod
    def from_composite(cls, composite: Composite, exponent: int = 1) -> Polynomial:
        return cls.from_monomial(Monomial(1, ((composite, exponent),)))

    # ---- Queries ----

    @property
    def leading(self) -> Monomial:
        """Greatest monomial under the canonical order (zero for 0)."""
        return self.monomials[0] if self.monomials else _ZERO_TERMS[0]

    def is_zero(self) -> bool:
        return not self.monomials

    def is_constant(self) -> bool:
        return not self.monomials or (len(self.monomials) == 1 and self.monomials[0].is_constant())

    def as_constant(self) -> Optional[int]:
        """The constant value, or None for a non-constant polynomial."""
        if not self.monomials:
            return 0
        if len(self.monomials) == 1 and self.monomials[0].is_constant():
            return self.monomials[0].coefficient
        return None

    def unique_identifiers(self, into: Optional[Set[Identifier]] = None) -> Set[Identifier]:
        """Every variable identifier reachable from this polynomial."""
        if into is None:
            into = set()
        for monomial in self.monomials:
            monomial.unique_identifiers(into)
        return into

    def __len__(self) -> int:
        return len(self.monomials)

    def __iter__(self) -> Iterator[Monomial]:
        return iter(self.monomials)

    def __bool__(self) -> bool:
        return bool(self.monomials)

    # ---- Arithmetic ----

    def __neg__(self) -> Polynomial:
        return Polynomial._make(tuple(-m for m in self.monomials))

    def __pos__(self) -> Polynomial:
        return self

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Polynomial._make(_merge(self.monomials, other.monomials))

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return Polynomial._make(_merge(self.monomials, other.monomials, negate=True))

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def _mul_monomial(self, monomial: Monomial) -> Polynomial:
        # Multiplying by a single monomial keeps the order and distinct shapes
        if monomial.coefficient == 0:
            return Polynomial._make(())
        return Polynomial._make(tuple(m * monomial for m in self.monomials))

    def __mul__(self, other):
        if isinstance(other, int):
            return self._mul_monomial(Monomial.constant(other))
        if isinstance(other, Monomial):
            return self._mul_monomial(other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        result = Polynomial._make(())
        for monomial in other.monomials:
            result = result + self._mul_monomial(monomial)
        return result

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> Polynomial:
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            raise ValueError(f"Negative exponent {exponent}")
        result = Polynomial.constant(1)
        for _ in range(exponent):
            result = result * self
        return result

    # ---- Division ----

    def div_rem(self, divisor: Operand) -> Tuple[Polynomial, Polynomial]:
        """Divide by a single divisor, returning (quotient, remainder).

        At each step the remainder's leading monomial is divided by the
        divisor's leading monomial; the loop stops at the first step where
        that is not exact.  The remainder is zero iff the division is exact.

        Raises:
            DivisionByZero: if the divisor is the zero polynomial.
        """
        divisor = as_polynomial(divisor)
        if divisor.is_zero():
            raise DivisionByZero(f"Division of {self} by zero polynomial")

        lead = divisor.leading
        quotient = Polynomial._make(())
        remainder = self
        while remainder.monomials:
            term = remainder.leading.checked_div(lead)
            if term is None:
                _logger.debug("div_rem stopped: %s does not divide %s", lead, remainder.leading)
                break
            quotient = quotient + term
            remainder = remainder - divisor._mul_monomial(term)
        return quotient, remainder

    def checked_div(self, other: Operand) -> Optional[Polynomial]:
        """Exact quotient self / other, or None when the division is not exact."""
        if isinstance(other, int):
            if other == 0:
                return None
            other = Monomial.constant(other)
        if isinstance(other, Polynomial) and len(other.monomials) == 1:
            other = other.monomials[0]
        if isinstance(other, Monomial):
            if other.coefficient == 0:
                return None
            terms = []
            for monomial in self.monomials:
                term = monomial.checked_div(other)
                if term is None:
                    return None
                terms.append(term)
            return Polynomial._make(tuple(terms))
        if not isinstance(other, Polynomial):
            raise TypeError(f"Cannot divide by {type(other).__name__}")
        if other.is_zero():
            return None
        quotient, remainder = self.div_rem(other)
        if remainder.monomials:
            return None
        return quotient

    def __truediv__(self, other):
        divisor = _coerce(other)
        if divisor is None:
            return NotImplemented
        if divisor.is_zero():
            raise DivisionByZero(f"Division of {self} by zero")
        result = self.checked_div(other)
        if result is None:
            raise NotDivisible(f"{self} is not divisible by {other}")
        return result

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    # ---- Evaluation ----

    def evaluate(self, values: Assignment) -> int:
        """Value under a full assignment.

        Raises:
            MissingVariable: for the first variable without a value.
            DivisionByZero:  for the first floor/ceil with a zero divisor.
        """
        return sum(m.evaluate(values) for m in self.monomials)

    eval = evaluate

    def reduce(self, values: Assignment) -> Polynomial:
        """Partially evaluate under a possibly incomplete assignment."""
        result = Polynomial._make(())
        for monomial in self.monomials:
            result = result + _reduce_monomial(monomial, values)
        return result

    # ---- Comparison ----

    def compare(self, other: Polynomial) -> int:
        left = self.monomials or _ZERO_TERMS
        right = other.monomials or _ZERO_TERMS
        for x, y in zip(left, right):
            order = x.compare(y)
            if order != 0:
                return order
        return _sign(len(left) - len(right))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            return self.as_constant() == other
        if isinstance(other, Monomial):
            if other.coefficient == 0:
                return not self.monomials
            return len(self.monomials) == 1 and self.monomials[0] == other
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.monomials == other.monomials

    def __lt__(self, other: object) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        if self._hash is None:
            if not self.monomials:
                self._hash = hash(0)
            elif len(self.monomials) == 1:
                self._hash = hash(self.monomials[0])
            else:
                self._hash = hash(self.monomials)
        return self._hash

    # ---- Rendering ----

    def __str__(self) -> str:
        if not self.monomials:
            return "0"
        parts = [str(self.monomials[0])]
        for monomial in self.monomials[1:]:
            if monomial.coefficient > 0:
                parts.append(f" + {monomial}")
            else:
                parts.append(f" {monomial}")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Polynomial({self})"

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        """Render as a Python expression, naming variables with `formatter`."""
        if not self.monomials:
            return "0"
        parts = [self.monomials[0].to_code(formatter)]
        for monomial in self.monomials[1:]:
            if monomial.coefficient > 0:
                parts.append(f" + {monomial.to_code(formatter)}")
            else:
                parts.append(f" - {(-monomial).to_code(formatter)}")
        return "".join(parts)


def _coerce(value) -> Optional[Polynomial]:
    if isinstance(value, Polynomial):
        return value
    if isinstance(value, Monomial):
        return Polynomial.from_monomial(value)
    if isinstance(value, int):
        return Polynomial.constant(value)
    return None


def as_polynomial(value: Operand) -> Polynomial:
    """Lift an int or Monomial to a Polynomial; TypeError for anything else."""
    polynomial = _coerce(value)
    if polynomial is None:
        raise TypeError(f"Expected int, Monomial or Polynomial, got {type(value).__name__}")
    return polynomial


def _reduce_monomial(monomial: Monomial, values: Assignment) -> Polynomial:
    coefficient = monomial.coefficient
    kept = []
    rebuilt = []
    for composite, exponent in monomial.powers:
        if isinstance(composite, Variable):
            if composite.identifier in values:
                coefficient *= values[composite.identifier] ** exponent
            else:
                kept.append((composite, exponent))
            continue

        left = composite.left.reduce(values)
        right = composite.right.reduce(values)
        lvalue, rvalue = left.as_constant(), right.as_constant()
        if lvalue is not None and rvalue is not None:
            coefficient *= composite.apply(lvalue, rvalue) ** exponent
        elif left == composite.left and right == composite.right:
            kept.append((composite, exponent))
        else:
            rebuilt.append(_REBUILD[type(composite)](left, right) ** exponent)

    result = Polynomial.from_monomial(Monomial(coefficient, kept))
    for factor in rebuilt:
        result = result * factor
    return result


# ---- Smart constructors ----

def make_variable(identifier: Identifier) -> Polynomial:
    """Return the polynomial consisting of the single variable `identifier`."""
    return Polynomial.variable(identifier)


def make_const(value: int) -> Polynomial:
    """Return the constant polynomial `value` (empty for 0)."""
    return Polynomial.constant(value)


def make_floor(left: Operand, right: Operand) -> Polynomial:
    """floor(left / right), folded to a constant or exact quotient when possible."""
    left, right = as_polynomial(left), as_polynomial(right)
    lvalue, rvalue = left.as_constant(), right.as_constant()
    if lvalue is not None and rvalue is not None:
        return Polynomial.constant(floor_div(lvalue, rvalue))
    quotient = left.checked_div(right)
    if quotient is not None:
        return quotient
    return Polynomial.from_composite(Floor(left, right))


def make_ceil(left: Operand, right: Operand) -> Polynomial:
    """ceil(left / right), folded to a constant or exact quotient when possible."""
    left, right = as_polynomial(left), as_polynomial(right)
    lvalue, rvalue = left.as_constant(), right.as_constant()
    if lvalue is not None and rvalue is not None:
        return Polynomial.constant(ceil_div(lvalue, rvalue))
    quotient = left.checked_div(right)
    if quotient is not None:
        return quotient
    return Polynomial.from_composite(Ceil(left, right))


def make_min(left: Operand, right: Operand) -> Polynomial:
    """min(left, right), folded to a constant when both operands are constant."""
    left, right = as_polynomial(left), as_polynomial(right)
    lvalue, rvalue = left.as_constant(), right.as_constant()
    if lvalue is not None and rvalue is not None:
        return Polynomial.constant(min(lvalue, rvalue))
    return Polynomial.from_composite(Min(left, right))


def make_max(left: Operand, right: Operand) -> Polynomial:
    """max(left, right), folded to a constant when both operands are constant."""
    left, right = as_polynomial(left), as_polynomial(right)
    lvalue, rvalue = left.as_constant(), right.as_constant()
    if lvalue is not None and rvalue is not None:
        return Polynomial.constant(max(lvalue, rvalue))
    return Polynomial.from_composite(Max(left, right))


_REBUILD = {
    Floor: make_floor,
    Ceil: make_ceil,
    Min: make_min,
    Max: make_max,
}
