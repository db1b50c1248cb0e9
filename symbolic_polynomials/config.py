"""Central configuration dataclass for symbolic_polynomials.

The engine itself is configuration-free: canonical forms, arithmetic and
evaluation are fully determined by their inputs.  The knobs below only bound
the value-deduction loop and parameterize the evaluation fingerprints, and
they are passed explicitly as a single frozen object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Frozen settings for deduction and fingerprinting.

    Groups:
        Deduction:     max_deduction_passes
        Fingerprints:  m, eval_low/high, seed
    """
    # --- Deduction ---
    max_deduction_passes: Optional[int] = None  # None → scan until no progress

    # --- Fingerprints ---
    m: int = 16               # number of evaluation points
    eval_low: int = -3
    eval_high: int = 3
    seed: int = 42

    def __post_init__(self):
        if self.max_deduction_passes is not None and self.max_deduction_passes < 1:
            raise ValueError(f"max_deduction_passes must be >= 1, got {self.max_deduction_passes}")
        if self.m < 1:
            raise ValueError(f"m must be >= 1, got {self.m}")
        if self.eval_low > self.eval_high:
            raise ValueError(f"eval_low ({self.eval_low}) > eval_high ({self.eval_high})")

    @property
    def eval_range(self) -> int:
        """Number of distinct integer values a coordinate can take."""
        return self.eval_high - self.eval_low + 1
