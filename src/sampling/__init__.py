"""Distribution and sampling primitives built on the random engine."""

from sampling.distributions import normal, normal_pair, with_probability
from sampling.samples import apply_transpositions, sample_indices, sample_without_replacement, shuffle

__all__ = [
    "normal",
    "normal_pair",
    "with_probability",
    "sample_without_replacement",
    "sample_indices",
    "shuffle",
    "apply_transpositions",
]
