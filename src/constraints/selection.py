"""Constraint-aware wrappers around selection operators.

``with_constraints`` makes violation dominate fitness: of two individuals
the one with the lower violation score always wins, and only equal scores
are decided by the objective. It works with any base operator that only
compares objectives, by handing the operator a population whose objectives
are lexicographic ``(violation, objective)`` keys and mapping the selected
individuals back.

Each key remembers the position of its individual in the input population,
so the base operator may return the scored tuples it was given or rebuilt
copies of them.
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from constraints.metrics import is_feasible
from constraints.model import Constraint
from core.protocols import SelectionOp, ViolationMetric
from core.rng import Rand
from core.types import Phenotype, ProblemType, take_objective

__all__ = ["ConstrainedObjective", "with_constraints", "with_death_penalty"]


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class ConstrainedObjective:
    """Objective key ordering by violation first, then by objective.

    The order is arranged so that a base operator built for ``problem_type``
    prefers the lower violation: when minimizing the key sorts as
    ``(violation, objective)``; when maximizing a lower violation sorts as
    larger.

    Attributes:
        violation: Violation score of the individual (lower is better).
        objective: Original objective value.
        problem_type: Direction the base operator optimizes in.
        source: Position of the individual in the population handed to the
            wrapper. Ignored by comparisons.
    """

    violation: Any
    objective: Any
    problem_type: ProblemType
    source: int = field(default=-1, compare=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstrainedObjective):
            return NotImplemented
        return bool(self.violation == other.violation and self.objective == other.objective)

    def __hash__(self) -> int:
        return hash((self.violation, self.objective))

    def __lt__(self, other: ConstrainedObjective) -> bool:
        if not isinstance(other, ConstrainedObjective):
            return NotImplemented
        if self.violation != other.violation:
            if self.problem_type is ProblemType.MINIMIZING:
                return bool(self.violation < other.violation)
            return bool(other.violation < self.violation)
        return bool(self.objective < other.objective)


def _select_keyed(
    select: SelectionOp,
    keyed: list[Phenotype],
    originals: list[Phenotype],
) -> Rand[list[Phenotype]]:
    def recover(chosen: list[Phenotype]) -> list[Phenotype]:
        survivors = []
        for entry in chosen:
            key = take_objective(entry)
            if not isinstance(key, ConstrainedObjective) or not 0 <= key.source < len(originals):
                raise TypeError(
                    f"Base selection operator returned an individual with objective {key!r}; "
                    "it must return individuals from the population it was given"
                )
            survivors.append(originals[key.source])
        return survivors

    return select(keyed).map(recover)


def with_constraints(
    constraints: Sequence[Constraint],
    violation: ViolationMetric,
    problem_type: ProblemType,
    select: SelectionOp,
) -> SelectionOp:
    """Wrap ``select`` so violation scores dominate objective values.

    Args:
        constraints: The constraint set.
        violation: Score function, e.g. ``number_of_violations`` or
            ``functools.partial(degree_of_violation, beta, eta)``.
        problem_type: Direction ``select`` was built for.
        select: Base selection operator; it must only compare objectives.

    Returns:
        A selection operator with the same cardinality and tie-breaking
        randomness as ``select``, returning the original individuals.
    """
    constraints = tuple(constraints)

    def select_constrained(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        originals = list(phenotypes)
        keyed = [
            (genome, ConstrainedObjective(violation(constraints, genome), objective, problem_type, source=i))
            for i, (genome, objective) in enumerate(originals)
        ]
        return _select_keyed(select, keyed, originals)

    return select_constrained


def with_death_penalty(
    constraints: Sequence[Constraint],
    problem_type: ProblemType,
    select: SelectionOp,
) -> SelectionOp:
    """Wrap ``select`` so every infeasible individual has the worst objective.

    Infeasible individuals are scored ``+inf`` when minimizing and ``-inf``
    when maximizing; the original individuals are returned.
    """
    constraints = tuple(constraints)

    def select_penalized(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        originals = list(phenotypes)
        # equal violations leave the penalized objective to decide
        penalized = [
            (
                genome,
                ConstrainedObjective(
                    0,
                    objective if is_feasible(constraints, genome) else problem_type.worst,
                    problem_type,
                    source=i,
                ),
            )
            for i, (genome, objective) in enumerate(originals)
        ]
        return _select_keyed(select, penalized, originals)

    return select_penalized
