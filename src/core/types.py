"""Core type definitions for the evolutionary core.

This module contains:
- Type aliases for genomes, objective values and scored individuals
- The optimization direction (ProblemType)
- Accessors for scored individuals
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

__all__ = [
    "Gene",
    "Genome",
    "Objective",
    "Phenotype",
    "Bounds",
    "ProblemType",
    "take_genome",
    "take_objective",
]

# A single decision variable
Gene = Any

# Candidate solution: an ordered sequence of decision variables (list, tuple, 1-D array)
Genome = Sequence[Any]

# Objective value: anything totally ordered in the direction of the ProblemType
Objective = Any

# Scored individual as supplied by the optimization loop
Phenotype = tuple[Genome, Objective]

# One inclusive (lo, hi) range per variable position
Bounds = Sequence[tuple[Any, Any]]


class ProblemType(str, Enum):
    """Direction of optimization."""

    MINIMIZING = "minimizing"
    MAXIMIZING = "maximizing"

    def better(self, a: Objective, b: Objective) -> bool:
        """Return True if objective ``a`` is strictly better than ``b``."""
        if self is ProblemType.MINIMIZING:
            return bool(a < b)
        return bool(b < a)

    @property
    def worst(self) -> float:
        """Objective value that no finite objective can lose to."""
        return float("inf") if self is ProblemType.MINIMIZING else float("-inf")


def take_genome(phenotype: Phenotype) -> Genome:
    """Return the genome of a scored individual."""
    return phenotype[0]


def take_objective(phenotype: Phenotype) -> Objective:
    """Return the objective value of a scored individual."""
    return phenotype[1]
