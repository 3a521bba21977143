"""Tests for constraint-aware selection wrappers.

This module tests:
- The lexicographic ordering and hashing of ConstrainedObjective
- with_constraints preferring lower violation over better objective
- Mapping survivors back when the base operator rebuilds individuals
- with_death_penalty
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from typing import Any

import pytest

from constraints.metrics import degree_of_violation, number_of_violations
from constraints.model import greater_equal, head
from constraints.selection import ConstrainedObjective, with_constraints, with_death_penalty
from core.protocols import SelectionOp
from core.rng import Rand, eval_random, new_state, pure, run_random
from core.types import Phenotype, ProblemType
from selection.ranking import best_first
from selection.tournament import random_select, tournament_select

CONSTRAINTS = [greater_equal(head, 0), greater_equal(head, -1)]


def _phenotypes(*xs: float) -> list[tuple[list[float], float]]:
    return [([x], x) for x in xs]


def _rebuilding_top(problem_type: ProblemType, n: int) -> SelectionOp:
    """Keep the ``n`` best individuals, returned as fresh tuples and lists."""

    def select(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        return pure([(list(genome), objective) for genome, objective in best_first(problem_type, phenotypes)[:n]])

    return select


def _deduplicating_top(problem_type: ProblemType, n: int) -> SelectionOp:
    """Keep the ``n`` best distinct objectives, found through a dict."""

    def select(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
        by_objective: dict[Any, Phenotype] = {}
        for phenotype in phenotypes:
            by_objective.setdefault(phenotype[1], phenotype)
        return pure(best_first(problem_type, list(by_objective.values()))[:n])

    return select


# =============================================================================
# ConstrainedObjective ordering
# =============================================================================


class TestConstrainedObjective:
    """Tests for the lexicographic objective key."""

    def test_minimizing_orders_by_violation_then_objective(self) -> None:
        """Lower violation sorts first; equal violations sort by objective."""
        low = ConstrainedObjective(0, 100.0, ProblemType.MINIMIZING)
        high = ConstrainedObjective(1, -100.0, ProblemType.MINIMIZING)
        assert low < high
        assert ConstrainedObjective(1, 1.0, ProblemType.MINIMIZING) < ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING)

    def test_maximizing_prefers_lower_violation(self) -> None:
        """When maximizing, a lower violation compares as larger."""
        low = ConstrainedObjective(0, -100.0, ProblemType.MAXIMIZING)
        high = ConstrainedObjective(1, 100.0, ProblemType.MAXIMIZING)
        assert high < low
        assert ProblemType.MAXIMIZING.better(low, high)
        assert ConstrainedObjective(1, 1.0, ProblemType.MAXIMIZING) < ConstrainedObjective(1, 2.0, ProblemType.MAXIMIZING)

    def test_equality(self) -> None:
        """Keys are equal when violation and objective match."""
        a = ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING)
        assert a == ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING)
        assert a <= ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING)
        assert a != ConstrainedObjective(0, 2.0, ProblemType.MINIMIZING)

    def test_source_is_ignored_by_comparisons(self) -> None:
        """Keys from different positions still compare equal."""
        a = ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING, source=0)
        b = ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING, source=5)
        assert a == b
        assert not a < b

    def test_hashable_and_consistent_with_equality(self) -> None:
        """Equal keys hash alike so they can live in sets and dicts."""
        a = ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING, source=0)
        b = ConstrainedObjective(1, 2.0, ProblemType.MINIMIZING, source=3)
        c = ConstrainedObjective(0, 2.0, ProblemType.MINIMIZING, source=1)
        assert hash(a) == hash(b)
        assert {a, b, c} == {a, c}
        assert len({a, b, c}) == 2


# =============================================================================
# with_constraints
# =============================================================================


class TestWithConstraints:
    """Tests for violation-first selection."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_lesser_violation_preferred(self, seed: int) -> None:
        """An individual violating fewer constraints beats a better objective."""
        select = with_constraints(
            CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, tournament_select(ProblemType.MINIMIZING, 2, 10)
        )
        # [-1] violates one constraint, [-2] both, although -2 is the better objective
        result = eval_random(select(_phenotypes(-1, -2)), new_state(seed))
        assert [genome[0] for genome, _objective in result] == [-1] * 10

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_feasible_preferred(self, seed: int) -> None:
        """A feasible individual beats an infeasible one."""
        select = with_constraints(
            CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, tournament_select(ProblemType.MINIMIZING, 2, 10)
        )
        result = eval_random(select(_phenotypes(0, -1)), new_state(seed))
        assert [genome[0] for genome, _objective in result] == [0] * 10

    def test_maximizing(self) -> None:
        """Violation still dominates when the base operator maximizes."""
        select = with_constraints(
            CONSTRAINTS, number_of_violations, ProblemType.MAXIMIZING, tournament_select(ProblemType.MAXIMIZING, 2, 6)
        )
        population = [([-1], 100.0), ([0], 1.0)]
        result = eval_random(select(population), new_state(4))
        assert result == [([0], 1.0)] * 6

    def test_equal_violations_fall_back_to_objective(self) -> None:
        """With equal violation the objective decides."""
        select = with_constraints(
            CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, tournament_select(ProblemType.MINIMIZING, 2, 5)
        )
        population = [([3], 7.0), ([1], 2.0)]
        result = eval_random(select(population), new_state(5))
        assert result == [([1], 2.0)] * 5

    def test_returns_original_individuals(self) -> None:
        """Selected entries are the very objects handed to the wrapper."""
        population = _phenotypes(0, -1, 2)
        select = with_constraints(CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, random_select(8))
        result = eval_random(select(population), new_state(6))
        assert len(result) == 8
        assert all(any(chosen is original for original in population) for chosen in result)

    def test_base_operator_may_rebuild_individuals(self) -> None:
        """Rebuilt tuples from the base operator map back to the originals."""
        population = [([1], 3.0), ([-1], 0.0), ([2], 1.0)]
        select = with_constraints(
            [greater_equal(head, 0)], number_of_violations, ProblemType.MINIMIZING,
            _rebuilding_top(ProblemType.MINIMIZING, 2),
        )

        result = eval_random(select(population), new_state(1))

        assert result == [([2], 1.0), ([1], 3.0)]
        assert result[0] is population[2]
        assert result[1] is population[0]

    def test_base_operator_may_hash_objectives(self) -> None:
        """Keys can be used as dict keys by the base operator."""
        population = [([1], 3.0), ([-1], 0.0), ([2], 1.0), ([5], 1.0)]
        select = with_constraints(
            [greater_equal(head, 0)], number_of_violations, ProblemType.MINIMIZING,
            _deduplicating_top(ProblemType.MINIMIZING, 2),
        )

        result = eval_random(select(population), new_state(1))

        assert result == [([2], 1.0), ([1], 3.0)]
        assert result[0] is population[2]

    def test_foreign_individual_is_rejected(self) -> None:
        """A base operator inventing individuals gets a clear error."""

        def inventing(phenotypes: Sequence[Phenotype]) -> Rand[list[Phenotype]]:
            return pure([([0], 0.0)])

        select = with_constraints(CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, inventing)
        with pytest.raises(TypeError, match="population it was given"):
            eval_random(select(_phenotypes(1)), new_state(1))

    def test_preserves_base_randomness(self) -> None:
        """The wrapper does not change which individuals a tie-only draw picks."""
        population = [([i], 0.0) for i in range(5)]
        base = random_select(12)
        wrapped = with_constraints(CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, base)
        state = new_state(10)
        plain, plain_state = run_random(base(population), state)
        constrained, constrained_state = run_random(wrapped(population), state)
        assert constrained == plain
        assert constrained_state == plain_state

    def test_degree_of_violation_metric(self) -> None:
        """A partially applied degree_of_violation works as the metric."""
        metric = functools.partial(degree_of_violation, 2.0, 0.5)
        select = with_constraints(
            CONSTRAINTS, metric, ProblemType.MINIMIZING, tournament_select(ProblemType.MINIMIZING, 2, 4)
        )
        # -0.5 violates by 0.25, -3 by 9 + 4
        result = eval_random(select(_phenotypes(-0.5, -3)), new_state(1))
        assert [g[0] for g, _o in result] == [-0.5] * 4

    def test_empty_population(self) -> None:
        """Nothing is selected from an empty population."""
        select = with_constraints(
            CONSTRAINTS, number_of_violations, ProblemType.MINIMIZING, tournament_select(ProblemType.MINIMIZING, 2, 3)
        )
        assert eval_random(select([]), new_state(1)) == []


# =============================================================================
# with_death_penalty
# =============================================================================


class TestWithDeathPenalty:
    """Tests for the death-penalty wrapper."""

    def test_infeasible_always_loses(self) -> None:
        """Infeasible individuals lose whatever their objective."""
        select = with_death_penalty(CONSTRAINTS, ProblemType.MINIMIZING, tournament_select(ProblemType.MINIMIZING, 2, 8))
        population = [([-1], -100.0), ([1], 50.0)]
        assert eval_random(select(population), new_state(3)) == [([1], 50.0)] * 8

    def test_maximizing(self) -> None:
        """The penalty is -inf when maximizing."""
        select = with_death_penalty(CONSTRAINTS, ProblemType.MAXIMIZING, tournament_select(ProblemType.MAXIMIZING, 2, 4))
        population = [([-5], 1e9), ([2], 0.0)]
        assert eval_random(select(population), new_state(3)) == [([2], 0.0)] * 4

    def test_base_operator_may_rebuild_individuals(self) -> None:
        """Rebuilt tuples map back to the originals under the death penalty too."""
        population = [([-1], -5.0), ([3], 2.0), ([1], 4.0)]
        select = with_death_penalty(CONSTRAINTS, ProblemType.MINIMIZING, _rebuilding_top(ProblemType.MINIMIZING, 2))

        result = eval_random(select(population), new_state(2))

        assert result == [([3], 2.0), ([1], 4.0)]
        assert result[0] is population[1]
