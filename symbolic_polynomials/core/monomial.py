"""Monomials: an integer coefficient times a product of composite powers.

Representation:
    coefficient: int
    powers:      tuple of (Composite, exponent) pairs, strictly decreasing by
                 Composite order, exponents >= 1

The zero monomial is (0, ()).  A monomial with no powers is a constant.

Monomials compare lexicographically over `powers` (composite first, then
exponent), then by the number of factors, then by coefficient.  Ignoring the
coefficient this is exactly lex order on exponent vectors, so it is
compatible with multiplication and polynomial division terminates.
"""

from __future__ import annotations

import functools
from typing import Callable, Iterable, List, Optional, Set, Tuple, Union

from .arith import Assignment, Identifier
from .composite import Composite, Variable
from .errors import NotDivisible

Power = Tuple[Composite, int]
Powers = Tuple[Power, ...]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare_powers(left: Powers, right: Powers) -> int:
    for (c1, e1), (c2, e2) in zip(left, right):
        order = c1.compare(c2)
        if order != 0:
            return order
        if e1 != e2:
            return _sign(e1 - e2)
    return _sign(len(left) - len(right))


def _canonical_powers(powers: Iterable[Power]) -> Powers:
    """Sort decreasingly, merge repeated composites and drop zero exponents."""
    items = []
    for composite, exponent in powers:
        if exponent < 0:
            raise ValueError(f"Negative exponent {exponent} for {composite}")
        if exponent > 0:
            items.append((composite, exponent))
    items.sort(key=functools.cmp_to_key(lambda x, y: y[0].compare(x[0])))

    merged: List[Power] = []
    for composite, exponent in items:
        if merged and merged[-1][0] == composite:
            merged[-1] = (composite, merged[-1][1] + exponent)
        else:
            merged.append((composite, exponent))
    return tuple(merged)


def _merge_powers(left: Powers, right: Powers) -> Powers:
    """Product of two canonical power sequences (linear merge)."""
    result: List[Power] = []
    i, j = 0, 0
    while i < len(left) and j < len(right):
        order = left[i][0].compare(right[j][0])
        if order > 0:
            result.append(left[i])
            i += 1
        elif order < 0:
            result.append(right[j])
            j += 1
        else:
            result.append((left[i][0], left[i][1] + right[j][1]))
            i += 1
            j += 1
    result.extend(left[i:])
    result.extend(right[j:])
    return tuple(result)


@functools.total_ordering
class Monomial:
    """coefficient * prod(composite ** exponent)."""

    __slots__ = ("coefficient", "powers", "_hash")

    def __init__(self, coefficient: int = 1, powers: Iterable[Power] = ()):
        self.coefficient = coefficient
        self.powers = _canonical_powers(powers) if coefficient != 0 else ()
        self._hash = None

    @classmethod
    def _make(cls, coefficient: int, powers: Powers) -> Monomial:
        # Trusted constructor: powers already canonical
        monomial = cls.__new__(cls)
        monomial.coefficient = coefficient
        monomial.powers = powers if coefficient != 0 else ()
        monomial._hash = None
        return monomial

    # ---- Constructors ----

    @classmethod
    def constant(cls, value: int) -> Monomial:
        """Return the constant monomial `value` (no factors)."""
        return cls._make(value, ())

    @classmethod
    def variable(cls, identifier: Identifier, exponent: int = 1) -> Monomial:
        """Return identifier^exponent with coefficient 1."""
        return cls(1, ((Variable(identifier), exponent),))

    def with_coefficient(self, coefficient: int) -> Monomial:
        """Return the same factors scaled by a new coefficient."""
        return Monomial._make(coefficient, self.powers)

    # ---- Queries ----

    def is_constant(self) -> bool:
        return not self.powers

    def is_zero(self) -> bool:
        return self.coefficient == 0

    def up_to_coefficient(self, other: Monomial) -> bool:
        """True iff both monomials have the same factors and exponents."""
        return self.powers == other.powers

    def compare_shape(self, other: Monomial) -> int:
        return _compare_powers(self.powers, other.powers)

    def compare(self, other: Monomial) -> int:
        order = _compare_powers(self.powers, other.powers)
        if order != 0:
            return order
        return _sign(self.coefficient - other.coefficient)

    def unique_identifiers(self, into: Optional[Set[Identifier]] = None) -> Set[Identifier]:
        if into is None:
            into = set()
        for composite, _ in self.powers:
            composite.collect_identifiers(into)
        return into

    # ---- Evaluation ----

    def evaluate(self, values: Assignment) -> int:
        result = self.coefficient
        for composite, exponent in self.powers:
            result *= composite.evaluate(values) ** exponent
        return result

    # ---- Division ----

    def checked_div(self, other: Union[int, Monomial]) -> Optional[Monomial]:
        """Exact quotient self / other, or None when it does not exist."""
        if isinstance(other, int):
            other = Monomial.constant(other)
        if other.coefficient == 0 or self.coefficient % other.coefficient != 0:
            return None
        coefficient = self.coefficient // other.coefficient
        if coefficient == 0:
            return Monomial.constant(0)

        # Every divisor factor must appear with at least its exponent
        powers: List[Power] = []
        i = 0
        for composite, exponent in other.powers:
            while i < len(self.powers) and self.powers[i][0].compare(composite) > 0:
                powers.append(self.powers[i])
                i += 1
            if i == len(self.powers) or self.powers[i][0] != composite:
                return None
            remaining = self.powers[i][1] - exponent
            if remaining < 0:
                return None
            if remaining > 0:
                powers.append((composite, remaining))
            i += 1
        powers.extend(self.powers[i:])
        return Monomial._make(coefficient, tuple(powers))

    def __truediv__(self, other):
        if not isinstance(other, (int, Monomial)):
            return NotImplemented
        result = self.checked_div(other)
        if result is None:
            raise NotDivisible(f"{self} is not divisible by {other}")
        return result

    def __rtruediv__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        return Monomial.constant(other) / self

    # ---- Arithmetic ----

    def __neg__(self) -> Monomial:
        return Monomial._make(-self.coefficient, self.powers)

    def __pos__(self) -> Monomial:
        return self

    def __mul__(self, other):
        if isinstance(other, int):
            return Monomial._make(self.coefficient * other, self.powers)
        if isinstance(other, Monomial):
            return Monomial._make(
                self.coefficient * other.coefficient,
                _merge_powers(self.powers, other.powers),
            )
        return NotImplemented

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> Monomial:
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            raise ValueError(f"Negative exponent {exponent}")
        if exponent == 0:
            return Monomial.constant(1)
        return Monomial._make(
            self.coefficient ** exponent,
            tuple((c, e * exponent) for c, e in self.powers),
        )

    def __add__(self, other):
        if not isinstance(other, (int, Monomial)):
            return NotImplemented
        from .polynomial import Polynomial

        return Polynomial.from_monomial(self) + other

    __radd__ = __add__

    def __sub__(self, other):
        if not isinstance(other, (int, Monomial)):
            return NotImplemented
        from .polynomial import Polynomial

        return Polynomial.from_monomial(self) - other

    def __rsub__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        from .polynomial import Polynomial

        return Polynomial.constant(other) - self

    # ---- Comparison ----

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            return not self.powers and self.coefficient == other
        if not isinstance(other, Monomial):
            return NotImplemented
        return self.coefficient == other.coefficient and self.powers == other.powers

    def __lt__(self, other: object) -> bool:
        if isinstance(other, int):
            other = Monomial.constant(other)
        if not isinstance(other, Monomial):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        if self._hash is None:
            if not self.powers:
                self._hash = hash(self.coefficient)
            else:
                self._hash = hash((self.coefficient, self.powers))
        return self._hash

    # ---- Rendering ----

    def _factors_str(self) -> str:
        parts = []
        for composite, exponent in self.powers:
            parts.append(str(composite) if exponent == 1 else f"{composite}^{exponent}")
        return "".join(parts)

    def __str__(self) -> str:
        if not self.powers:
            if self.coefficient < 0:
                return f"- {-self.coefficient}"
            return str(self.coefficient)
        if self.coefficient == 1:
            prefix = ""
        elif self.coefficient == -1:
            prefix = "- "
        elif self.coefficient < 0:
            prefix = f"- {-self.coefficient}"
        else:
            prefix = str(self.coefficient)
        return prefix + self._factors_str()

    def __repr__(self) -> str:
        return f"Monomial({self})"

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        factors = []
        for composite, exponent in self.powers:
            code = composite.to_code(formatter)
            factors.append(code if exponent == 1 else f"{code} ** {exponent}")
        if not factors:
            return str(self.coefficient)
        product = " * ".join(factors)
        if self.coefficient == 1:
            return product
        if self.coefficient == -1:
            return f"-{product}"
        return f"{self.coefficient} * {product}"
