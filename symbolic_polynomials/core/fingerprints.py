"""Polynomial fingerprinting via Schwartz-Zippel evaluation.

The canonical form identifies polynomials exactly, but it cannot see through
floor/ceil/min/max: `min(a, b) + max(a, b)` and `a + b` are different
canonical values that agree everywhere.  Evaluating both at m random integer
points gives a cheap probabilistic identity check.

  sample_eval_points  — sample m random assignments over some identifiers
  eval_poly_points    — evaluate a polynomial at every sampled assignment
  eval_distance       — L1 distance between two evaluation vectors
  probably_equal      — fingerprint comparison driven by a Config

A point where floor/ceil divides by zero evaluates to None and is skipped by
eval_distance.
"""

from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import Config
from .arith import Identifier
from .errors import DivisionByZero
from .polynomial import Polynomial

# A single evaluation point: one integer value per identifier.
EvalPoint = Dict[Identifier, int]


def sample_eval_points(
    rng: random.Random,
    identifiers: Iterable[Identifier],
    m: int,
    low: int = -3,
    high: int = 3,
) -> List[EvalPoint]:
    """Sample m random integer assignments for Schwartz-Zippel identity testing.

    Args:
        rng:         Random source (seeded by the caller for reproducibility).
        identifiers: Variables to assign; sorted so the result does not
                     depend on set iteration order.
        m:           Number of evaluation points to sample.
        low:         Minimum value for each coordinate (inclusive).
        high:        Maximum value for each coordinate (inclusive).

    Returns:
        List of m dicts mapping each identifier to a value.
    """
    ordered = sorted(identifiers)
    points: List[EvalPoint] = []
    for _ in range(m):
        point = {identifier: rng.randint(low, high) for identifier in ordered}
        points.append(point)
    return points


def eval_poly_points(poly: Polynomial, points: Iterable[EvalPoint]) -> List[Optional[int]]:
    """Evaluate a polynomial at each point in the list.

    Returns one value per point, or None where evaluation divided by zero.
    """
    values: List[Optional[int]] = []
    for point in points:
        try:
            values.append(poly.evaluate(point))
        except DivisionByZero:
            values.append(None)
    return values


def eval_distance(a: Sequence[Optional[int]], b: Sequence[Optional[int]]) -> int:
    """Compute L1 distance between two evaluation vectors (sum of |a_i - b_i|).

    Positions where either side is undefined are ignored.
    """
    if len(a) != len(b):
        raise ValueError("Evaluation vectors must be same length")
    total = 0
    for x, y in zip(a, b):
        if x is None or y is None:
            continue
        total += abs(x - y)
    return total


def probably_equal(p: Polynomial, q: Polynomial, config: Optional[Config] = None) -> bool:
    """True if p and q agree at config.m random points over their variables."""
    if p == q:
        return True
    config = config or Config()
    identifiers = p.unique_identifiers()
    q.unique_identifiers(identifiers)
    rng = random.Random(config.seed)
    points = sample_eval_points(rng, identifiers, config.m, config.eval_low, config.eval_high)
    return eval_distance(eval_poly_points(p, points), eval_poly_points(q, points)) == 0
