"""Constraint model, violation metrics, constrained generation and selection."""

from constraints.generation import constrained_binary_genomes, constrained_genomes, random_genome
from constraints.metrics import (
    degree_of_violation,
    is_feasible,
    number_of_violations,
    violation_magnitude,
    violations_per_genome,
)
from constraints.model import (
    Constraint,
    ConstraintKind,
    between,
    constraint_from_mapping,
    equal_to,
    gene,
    greater_equal,
    greater_than,
    head,
    in_range,
    less_equal,
    less_than,
    strictly_between,
)
from constraints.selection import ConstrainedObjective, with_constraints, with_death_penalty

__all__ = [
    "Constraint",
    "ConstraintKind",
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
    "is_feasible",
    "number_of_violations",
    "violations_per_genome",
    "violation_magnitude",
    "degree_of_violation",
    "random_genome",
    "constrained_genomes",
    "constrained_binary_genomes",
    "ConstrainedObjective",
    "with_constraints",
    "with_death_penalty",
]
