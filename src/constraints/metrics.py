"""Feasibility and violation metrics for constraint sets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from constraints.model import Constraint
from core.types import Genome

__all__ = [
    "is_feasible",
    "number_of_violations",
    "violations_per_genome",
    "violation_magnitude",
    "degree_of_violation",
]


def is_feasible(constraints: Iterable[Constraint], genome: Genome) -> bool:
    """Return True iff ``genome`` satisfies every constraint."""
    return all(constraint(genome) for constraint in constraints)


def number_of_violations(constraints: Iterable[Constraint], genome: Genome) -> int:
    """Count the constraints ``genome`` violates."""
    return sum(1 for constraint in constraints if not constraint(genome))


def violations_per_genome(constraints: Sequence[Constraint], genomes: Iterable[Genome]) -> np.ndarray:
    """Vectorized ``number_of_violations``: one count per genome."""
    return np.fromiter(
        (number_of_violations(constraints, genome) for genome in genomes),
        dtype=np.int64,
    )


def violation_magnitude(constraint: Constraint, genome: Genome, beta: float, eta: float) -> float:
    """Contribution of one constraint to the degree of violation.

    Zero when the constraint holds. Otherwise ``|value - bound| ** beta``,
    plus ``eta`` when the violated comparison is strict. For a range, the
    bound is the side that was crossed.
    """
    value = constraint.value(genome)
    if constraint.holds(value):
        return 0.0
    kind = constraint.kind
    if kind.is_range:
        bound = constraint.lower if value <= constraint.lower else constraint.upper
    else:
        bound = constraint.threshold
    magnitude = float(abs(value - bound)) ** beta
    if kind.is_strict:
        magnitude += eta
    return magnitude


def degree_of_violation(
    beta: float,
    eta: float,
    constraints: Iterable[Constraint],
    genome: Genome,
) -> float:
    """Sum of per-constraint violation magnitudes.

    Each violated constraint contributes its distance to the crossed bound
    raised to ``beta``. A violated strict comparison (``<``, ``>``, strict
    range) additionally contributes ``eta``, so touching a strict bound
    costs ``eta`` while touching a non-strict one costs nothing.

    Args:
        beta: Exponent applied to each violation distance. Must be positive.
        eta: Penalty added for every violated strict comparison. Must be >= 0.
        constraints: The constraint set.
        genome: Genome to score.

    Returns:
        The non-negative total; 0.0 for a feasible genome.

    Raises:
        ValueError: If ``beta <= 0`` or ``eta < 0``.

    Example:
        >>> from constraints.model import greater_equal, head, less_than
        >>> cs = [greater_equal(head, 0), less_than(lambda g: -g[0], 1)]
        >>> degree_of_violation(2.0, 0.5, cs, [-1.0])
        1.5
    """
    if not beta > 0:
        raise ValueError(f"beta must be positive, got {beta}")
    if not eta >= 0:
        raise ValueError(f"eta must be non-negative, got {eta}")
    return sum(
        (violation_magnitude(constraint, genome, beta, eta) for constraint in constraints),
        0.0,
    )

