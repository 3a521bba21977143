"""Protocol definitions for the evolutionary core.

This module contains Protocol classes defining interfaces for:
- Projections: map a genome to the scalar a constraint compares
- SelectionOps: choose individuals from a scored population
- ViolationMetrics: score how badly a genome violates a constraint set
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from core.rng import Rand
from core.types import Genome, Phenotype

if TYPE_CHECKING:
    from constraints.model import Constraint

__all__ = ["Projection", "SelectionOp", "ViolationMetric"]


@runtime_checkable
class Projection(Protocol):
    """Protocol for the part of a genome a constraint compares.

    Projections must fail loudly (IndexError, TypeError) on genomes of the
    wrong shape rather than coerce them.
    """

    def __call__(self, genome: Genome) -> Any:
        """Return the comparable scalar for ``genome``."""
        ...


@runtime_checkable
class SelectionOp(Protocol):
    """Protocol for selection operators.

    A selection operator receives a scored population and returns a random
    computation yielding the selected individuals. Its target count is fixed
    when the operator is built. Any internal randomness must come from the
    returned computation, never from a global generator.

    Operators that are meant to be wrapped by constraint handling must only
    compare objective values (``<``, ``==``, sorting, hashing) and never do
    arithmetic on them. They may return the given individuals or rebuilt
    copies, as long as each copy keeps its objective.
    """

    def __call__(self, phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        """Select individuals from ``phenotypes``."""
        ...


@runtime_checkable
class ViolationMetric(Protocol):
    """Protocol for constraint violation scores (lower is better, zero when feasible)."""

    def __call__(self, constraints: Sequence[Constraint], genome: Genome) -> float:
        """Score ``genome`` against ``constraints``."""
        ...
