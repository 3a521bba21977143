"""Ordering of scored populations."""

from __future__ import annotations

from collections.abc import Iterable

from core.types import Phenotype, ProblemType, take_objective

__all__ = ["best_first", "best_of"]


def best_first(problem_type: ProblemType, phenotypes: Iterable[Phenotype]) -> list[Phenotype]:
    """Sort individuals from best to worst objective.

    The sort is stable, so individuals with equal objectives keep their order.
    Only ``<`` is used on objectives.
    """
    items = list(phenotypes)
    if problem_type is ProblemType.MINIMIZING:
        return sorted(items, key=take_objective)
    return sorted(items, key=take_objective, reverse=True)


def best_of(problem_type: ProblemType, phenotypes: Iterable[Phenotype]) -> Phenotype:
    """Return the best individual; the earliest one wins ties.

    Raises:
        ValueError: If ``phenotypes`` is empty.
    """
    best: Phenotype | None = None
    for phenotype in phenotypes:
        if best is None or problem_type.better(take_objective(phenotype), take_objective(best)):
            best = phenotype
    if best is None:
        raise ValueError("Cannot pick the best of an empty population")
    return best
