"""Sequential identifier allocation.

Registry hands out fresh integer identifiers 0, 1, 2, ... so that callers
building many expressions do not have to invent variable names.

Usage:
    registry = Registry()
    n = registry.new_variable()        # Polynomial over identifier 0
    m = registry.new_variable()        # Polynomial over identifier 1
    registry.reset()                   # next identifier is 0 again
"""

from __future__ import annotations

from .monomial import Monomial
from .polynomial import Polynomial


class Registry:
    """Allocator of fresh sequential integer identifiers."""

    def __init__(self, start: int = 0):
        self.next_id = start

    def new_identifier(self) -> int:
        """Return the next unused identifier and advance the counter."""
        identifier = self.next_id
        self.next_id += 1
        return identifier

    def new_monomial_variable(self) -> Monomial:
        """A variable monomial over a fresh identifier."""
        return Monomial.variable(self.new_identifier())

    def new_variable(self) -> Polynomial:
        """A variable polynomial over a fresh identifier."""
        return Polynomial.variable(self.new_identifier())

    def specific_monomial_variable(self, identifier: int) -> Monomial:
        """A variable monomial for an explicit identifier (the counter is untouched)."""
        return Monomial.variable(identifier)

    def specific_variable(self, identifier: int) -> Polynomial:
        """A variable polynomial for an explicit identifier (the counter is untouched)."""
        return Polynomial.variable(identifier)

    def reset(self) -> None:
        """Start allocating from 0 again."""
        self.next_id = 0
