"""Core building blocks: random engine, types, protocols, config and logging."""

from core.errors import EvocoreError, InvalidRangeError, RejectionLimitExceeded
from core.rng import (
    GeneratorState,
    Rand,
    draw_bool,
    draw_double,
    draw_int,
    draw_int64,
    draw_random,
    draw_range,
    draw_word,
    draw_word64,
    eval_random,
    from_generator,
    new_state,
    pure,
    rand_do,
    replicate,
    run_random,
    sequence,
)
from core.types import ProblemType

__all__ = [
    "EvocoreError",
    "InvalidRangeError",
    "RejectionLimitExceeded",
    "GeneratorState",
    "Rand",
    "new_state",
    "run_random",
    "eval_random",
    "pure",
    "from_generator",
    "sequence",
    "replicate",
    "rand_do",
    "draw_bool",
    "draw_int",
    "draw_word",
    "draw_int64",
    "draw_word64",
    "draw_double",
    "draw_range",
    "draw_random",
    "ProblemType",
]
