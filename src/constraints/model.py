"""Constraint representation for constrained evolutionary search.

This module provides:
- ConstraintKind: the comparison a constraint performs
- Constraint: an immutable predicate over genomes
- Builders: less_than, less_equal, greater_than, greater_equal, equal_to,
  in_range (with the between / strictly_between shorthands)
- Projection helpers: gene, head
- constraint_from_mapping: gene constraints from JSON config entries

A constraint compares ``projection(genome)`` against one threshold
(single-bound kinds) or a pair of bounds (range kinds).

Example:
    >>> c = in_range(0, 2, head)
    >>> [c([x]) for x in (-1, 0, 1, 2, 3)]
    [False, True, True, True, False]
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.errors import InvalidRangeError
from core.types import Genome

__all__ = [
    "ConstraintKind",
    "Constraint",
    "less_than",
    "less_equal",
    "greater_than",
    "greater_equal",
    "equal_to",
    "in_range",
    "between",
    "strictly_between",
    "gene",
    "head",
    "constraint_from_mapping",
]


class ConstraintKind(Enum):
    """Comparison performed by a constraint."""

    LESS_THAN = "<"
    LESS_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    EQUAL = "=="
    IN_RANGE = "<=..<="
    IN_RANGE_STRICT = "<..<"

    @property
    def is_range(self) -> bool:
        return self in (ConstraintKind.IN_RANGE, ConstraintKind.IN_RANGE_STRICT)

    @property
    def is_strict(self) -> bool:
        """Whether touching the bound counts as a violation."""
        return self in (
            ConstraintKind.LESS_THAN,
            ConstraintKind.GREATER_THAN,
            ConstraintKind.IN_RANGE_STRICT,
        )


_COMPARISONS: dict[ConstraintKind, Callable[[Any, Any], bool]] = {
    ConstraintKind.LESS_THAN: operator.lt,
    ConstraintKind.LESS_EQUAL: operator.le,
    ConstraintKind.GREATER_THAN: operator.gt,
    ConstraintKind.GREATER_EQUAL: operator.ge,
    ConstraintKind.EQUAL: operator.eq,
}


@dataclass(frozen=True)
class Constraint:
    """Predicate over genomes: ``projection(genome) <kind> threshold``.

    Single-bound kinds use ``threshold``; range kinds use ``lower`` and
    ``upper`` instead. Use the builder functions rather than constructing
    instances directly.

    Attributes:
        projection: Maps a genome to the compared scalar.
        kind: The comparison.
        threshold: Bound for single-bound kinds.
        lower: Lower bound for range kinds.
        upper: Upper bound for range kinds.
    """

    projection: Callable[[Genome], Any]
    kind: ConstraintKind
    threshold: Any = None
    lower: Any = None
    upper: Any = None

    def __post_init__(self) -> None:
        """Validate the bounds required by ``kind``."""
        if not callable(self.projection):
            raise TypeError(f"projection must be callable, got {type(self.projection).__name__}")
        if self.kind.is_range:
            if self.lower is None or self.upper is None:
                raise ValueError(f"{self.kind.name} constraint needs both lower and upper bounds")
            if self.threshold is not None:
                raise ValueError(f"{self.kind.name} constraint takes no threshold")
            if self.lower > self.upper:
                raise InvalidRangeError(self.lower, self.upper, what="constraint range")
        else:
            if self.threshold is None:
                raise ValueError(f"{self.kind.name} constraint needs a threshold")
            if self.lower is not None or self.upper is not None:
                raise ValueError(f"{self.kind.name} constraint takes no lower/upper bounds")

    def value(self, genome: Genome) -> Any:
        """Return the projected value of ``genome``."""
        return self.projection(genome)

    def holds(self, value: Any) -> bool:
        """Evaluate the comparison on an already projected value."""
        if self.kind is ConstraintKind.IN_RANGE:
            return bool(self.lower <= value <= self.upper)
        if self.kind is ConstraintKind.IN_RANGE_STRICT:
            return bool(self.lower < value < self.upper)
        return bool(_COMPARISONS[self.kind](value, self.threshold))

    def __call__(self, genome: Genome) -> bool:
        """Return True if ``genome`` satisfies the constraint."""
        return self.holds(self.value(genome))

    def __repr__(self) -> str:
        name = getattr(self.projection, "__name__", repr(self.projection))
        if self.kind is ConstraintKind.IN_RANGE:
            return f"Constraint({self.lower!r} <= {name} <= {self.upper!r})"
        if self.kind is ConstraintKind.IN_RANGE_STRICT:
            return f"Constraint({self.lower!r} < {name} < {self.upper!r})"
        return f"Constraint({name} {self.kind.value} {self.threshold!r})"


def less_than(projection: Callable[[Genome], Any], threshold: Any) -> Constraint:
    """``projection(genome) < threshold``"""
    return Constraint(projection, ConstraintKind.LESS_THAN, threshold=threshold)


def less_equal(projection: Callable[[Genome], Any], threshold: Any) -> Constraint:
    """``projection(genome) <= threshold``"""
    return Constraint(projection, ConstraintKind.LESS_EQUAL, threshold=threshold)


def greater_than(projection: Callable[[Genome], Any], threshold: Any) -> Constraint:
    """``projection(genome) > threshold``"""
    return Constraint(projection, ConstraintKind.GREATER_THAN, threshold=threshold)


def greater_equal(projection: Callable[[Genome], Any], threshold: Any) -> Constraint:
    """``projection(genome) >= threshold``"""
    return Constraint(projection, ConstraintKind.GREATER_EQUAL, threshold=threshold)


def equal_to(projection: Callable[[Genome], Any], threshold: Any) -> Constraint:
    """``projection(genome) == threshold``"""
    return Constraint(projection, ConstraintKind.EQUAL, threshold=threshold)


def in_range(
    lower: Any,
    upper: Any,
    projection: Callable[[Genome], Any],
    *,
    strict: bool = False,
) -> Constraint:
    """Double-bound constraint on ``projection(genome)``.

    Args:
        lower: Lower bound.
        upper: Upper bound.
        projection: Maps a genome to the compared scalar.
        strict: If True, ``lower < x < upper``; otherwise ``lower <= x <= upper``.

    Raises:
        InvalidRangeError: If ``lower > upper``.
    """
    kind = ConstraintKind.IN_RANGE_STRICT if strict else ConstraintKind.IN_RANGE
    return Constraint(projection, kind, lower=lower, upper=upper)


def between(lower: Any, upper: Any, projection: Callable[[Genome], Any]) -> Constraint:
    """``lower <= projection(genome) <= upper``"""
    return in_range(lower, upper, projection)


def strictly_between(lower: Any, upper: Any, projection: Callable[[Genome], Any]) -> Constraint:
    """``lower < projection(genome) < upper``"""
    return in_range(lower, upper, projection, strict=True)


def gene(index: int) -> Callable[[Genome], Any]:
    """Projection selecting the variable at ``index``.

    Indexing past the end of a genome raises ``IndexError``.

    Raises:
        ValueError: If ``index`` is negative.
    """
    if index < 0:
        raise ValueError(f"gene index must be non-negative, got {index}")

    def projection(genome: Genome) -> Any:
        return genome[index]

    projection.__name__ = f"gene[{index}]"
    return projection


head = gene(0)


_KINDS_BY_SYMBOL = {kind.value: kind for kind in ConstraintKind if not kind.is_range}


def constraint_from_mapping(mapping: dict[str, Any]) -> Constraint:
    """Build a gene constraint from a config entry.

    Accepted forms::

        {"gene": 0, "op": ">=", "value": 0}
        {"gene": 1, "range": [-1, 1], "strict": false}

    Raises:
        ValueError: If the entry is malformed or the operator is unknown.
    """
    if "gene" not in mapping:
        raise ValueError(f"Constraint entry needs a 'gene' index: {mapping}")
    projection = gene(int(mapping["gene"]))
    if "range" in mapping:
        lower, upper = mapping["range"]
        return in_range(lower, upper, projection, strict=bool(mapping.get("strict", False)))
    op = mapping.get("op")
    if op not in _KINDS_BY_SYMBOL:
        raise ValueError(f"Unknown constraint operator {op!r}; expected one of {sorted(_KINDS_BY_SYMBOL)}")
    if "value" not in mapping:
        raise ValueError(f"Constraint entry needs a 'value': {mapping}")
    return Constraint(projection, _KINDS_BY_SYMBOL[op], threshold=mapping["value"])
