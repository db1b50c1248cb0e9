"""Shared fixtures: seeded random sources and random expression factories."""

import random

import pytest

from symbolic_polynomials import (
    Monomial, Polynomial, Variable, make_ceil, make_floor, make_max, make_min, make_variable,
)

IDENTIFIERS = ("a", "b", "c")


def random_monomial(rng: random.Random, max_factors: int = 2, max_exponent: int = 3) -> Monomial:
    powers = [(Variable(rng.choice(IDENTIFIERS)), rng.randint(1, max_exponent))
              for _ in range(rng.randint(0, max_factors))]
    return Monomial(rng.randint(-5, 5), powers)


def random_polynomial(rng: random.Random, max_terms: int = 4) -> Polynomial:
    return Polynomial([random_monomial(rng) for _ in range(rng.randint(0, max_terms))])


def random_composite_polynomial(rng: random.Random, depth: int = 1) -> Polynomial:
    """A polynomial that may contain floor/ceil/min/max factors."""
    base = random_polynomial(rng, max_terms=3)
    if depth == 0 or rng.random() < 0.3:
        return base
    build = rng.choice((make_floor, make_ceil, make_min, make_max))
    left = random_composite_polynomial(rng, depth - 1)
    right = random_composite_polynomial(rng, depth - 1)
    if build in (make_floor, make_ceil) and right.is_zero():
        right = Polynomial.constant(rng.randint(1, 4))
    return base + build(left, right) * random_monomial(rng, max_factors=1)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def random_poly(rng):
    """Factory: random plain polynomial drawn from the shared seeded rng."""
    return lambda: random_polynomial(rng)


@pytest.fixture
def random_composite(rng):
    """Factory: random polynomial that may hold floor/ceil/min/max factors."""
    return lambda: random_composite_polynomial(rng)


@pytest.fixture
def abc():
    return make_variable("a"), make_variable("b"), make_variable("c")
