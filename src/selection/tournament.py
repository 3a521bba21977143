"""Base selection operators.

Each factory returns a ``SelectionOp``: a function from a scored population
to a ``Rand`` computation yielding the selected individuals. The number of
individuals to select is fixed by the factory arguments.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence

from core.protocols import SelectionOp
from core.rng import Rand, draw_range, pure, rand_do
from core.types import Phenotype, ProblemType
from sampling.samples import sample_without_replacement
from selection.ranking import best_of

__all__ = ["tournament_select", "random_select"]


def tournament_select(problem_type: ProblemType, size: int, n: int) -> SelectionOp:
    """Select ``n`` individuals by repeated tournaments.

    Each tournament samples ``size`` distinct contestants (fewer if the
    population is smaller) and keeps the best by ``problem_type``.

    Args:
        problem_type: Direction of optimization.
        size: Tournament size. Must be at least 1.
        n: Number of tournaments, i.e. selected individuals.

    Raises:
        ValueError: If ``size < 1`` or ``n < 0``.
    """
    if size < 1:
        raise ValueError(f"tournament size must be >= 1, got {size}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    def select(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        population = list(phenotypes)
        if not population:
            return pure([])

        @rand_do
        def tournaments() -> Generator[Rand[list[Phenotype]], list[Phenotype], list[Phenotype]]:
            winners: list[Phenotype] = []
            for _ in range(n):
                contestants = yield sample_without_replacement(size, population)
                winners.append(best_of(problem_type, contestants))
            return winners

        return tournaments()

    return select


def random_select(n: int) -> SelectionOp:
    """Select ``n`` individuals uniformly at random, with replacement.

    Raises:
        ValueError: If ``n < 0``.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    def select(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        population = list(phenotypes)
        if not population:
            return pure([])

        @rand_do
        def picks() -> Generator[Rand[int], int, list[Phenotype]]:
            chosen: list[Phenotype] = []
            for _ in range(n):
                chosen.append(population[(yield draw_range(0, len(population) - 1))])
            return chosen

        return picks()

    return select
