"""Irreducible factors of a monomial.

A Composite is either a bare variable or one of four binary operations over
two sub-polynomials that the engine cannot expand further:

  Variable(id)        — a named integer variable
  Floor(left, right)  — floor(left / right)
  Ceil(left, right)   — ceil(left / right)
  Min(left, right)    — min(left, right)
  Max(left, right)    — max(left, right)

Operands are Polynomial instances.  They may be shared between many parent
expressions (a DAG), but equality, hashing and ordering are always
structural, never by identity.

Canonical total order: kinds rank

  Variable(4) > Max(3) > Min(2) > Ceil(1) > Floor(0)

Two variables compare by the *reverse* of their identifier order, so that
`a` sorts before `b` in a decreasing sequence.  Two composites of the same
binary kind compare left operand first, then right operand.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Callable, Set

from .arith import Assignment, Identifier, ceil_div, floor_div
from .errors import MissingVariable

if TYPE_CHECKING:
    from .polynomial import Polynomial


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@functools.total_ordering
class Composite:
    """Base class of the five composite kinds."""

    __slots__ = ()

    # Position of the kind in the canonical order (higher sorts first).
    rank: int = -1

    def compare(self, other: Composite) -> int:
        """Three-way comparison under the canonical order (-1, 0 or 1)."""
        raise NotImplementedError

    def evaluate(self, values: Assignment) -> int:
        raise NotImplementedError

    def collect_identifiers(self, into: Set[Identifier]) -> None:
        raise NotImplementedError

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        raise NotImplementedError

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Composite):
            return NotImplemented
        return self.compare(other) < 0


class Variable(Composite):
    """A primitive integer variable."""

    __slots__ = ("identifier",)

    rank = 4

    def __init__(self, identifier: Identifier):
        self.identifier = identifier

    def compare(self, other: Composite) -> int:
        if other.rank != self.rank:
            return _sign(self.rank - other.rank)
        if self.identifier == other.identifier:
            return 0
        # Reverse of the identifier order
        return 1 if self.identifier < other.identifier else -1

    def evaluate(self, values: Assignment) -> int:
        try:
            return values[self.identifier]
        except KeyError:
            raise MissingVariable(self.identifier) from None

    def collect_identifiers(self, into: Set[Identifier]) -> None:
        into.add(self.identifier)

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        return formatter(self.identifier)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variable):
            return NotImplemented if not isinstance(other, Composite) else False
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash((self.rank, self.identifier))

    def __str__(self) -> str:
        return str(self.identifier)

    def __repr__(self) -> str:
        return f"Variable({self.identifier!r})"


class BinaryComposite(Composite):
    """A floor/ceil/min/max over two polynomials."""

    __slots__ = ("left", "right", "_hash")

    # Display name, also used as the function name in str() output.
    name: str = ""

    def __init__(self, left: Polynomial, right: Polynomial):
        self.left = left
        self.right = right
        self._hash = None

    def apply(self, left: int, right: int) -> int:
        """Apply the operation to two already evaluated operands."""
        raise NotImplementedError

    def compare(self, other: Composite) -> int:
        if other.rank != self.rank:
            return _sign(self.rank - other.rank)
        result = self.left.compare(other.left)
        if result != 0:
            return result
        return self.right.compare(other.right)

    def evaluate(self, values: Assignment) -> int:
        return self.apply(self.left.evaluate(values), self.right.evaluate(values))

    def collect_identifiers(self, into: Set[Identifier]) -> None:
        self.left.unique_identifiers(into)
        self.right.unique_identifiers(into)

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        return f"{self.name}({self.left.to_code(formatter)}, {self.right.to_code(formatter)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Composite):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return self.left == other.left and self.right == other.right

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self.rank, self.left, self.right))
        return self._hash

    def __str__(self) -> str:
        return f"{self.name}({self.left}, {self.right})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.left!r}, {self.right!r})"


class Floor(BinaryComposite):
    __slots__ = ()
    rank = 0
    name = "floor"

    def apply(self, left: int, right: int) -> int:
        return floor_div(left, right)

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        return f"(({self.left.to_code(formatter)}) // ({self.right.to_code(formatter)}))"


class Ceil(BinaryComposite):
    __slots__ = ()
    rank = 1
    name = "ceil"

    def apply(self, left: int, right: int) -> int:
        return ceil_div(left, right)

    def to_code(self, formatter: Callable[[Identifier], str] = str) -> str:
        return f"(-((-({self.left.to_code(formatter)})) // ({self.right.to_code(formatter)})))"


class Min(BinaryComposite):
    __slots__ = ()
    rank = 2
    name = "min"

    def apply(self, left: int, right: int) -> int:
        return left if left < right else right


class Max(BinaryComposite):
    __slots__ = ()
    rank = 3
    name = "max"

    def apply(self, left: int, right: int) -> int:
        return left if left > right else right
