"""Constrained genome generation by rejection sampling.

Candidates are drawn uniformly inside per-variable bounds and kept only when
they satisfy every constraint. There is no retry cap unless the caller
passes a ``RejectionConfig`` with ``max_attempts`` set: an unsatisfiable or
very tight constraint set otherwise keeps drawing forever.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from typing import Any

from constraints.metrics import is_feasible
from constraints.model import Constraint
from core.config import RejectionConfig
from core.errors import InvalidRangeError, RejectionLimitExceeded
from core.logging import get_logger
from core.rng import Rand, draw_bool, draw_range, rand_do, replicate, sequence
from core.types import Bounds

__all__ = ["random_genome", "constrained_genomes", "constrained_binary_genomes"]

logger = get_logger(__name__)


def _check_bounds(bounds: Bounds) -> list[tuple[Any, Any]]:
    checked = []
    for position, (lo, hi) in enumerate(bounds):
        if lo > hi:
            raise InvalidRangeError(lo, hi, what=f"bound for variable {position}")
        checked.append((lo, hi))
    return checked


def random_genome(bounds: Bounds) -> Rand[list[Any]]:
    """Draw one genome with each variable uniform within its inclusive bound.

    Raises:
        InvalidRangeError: If any bound has ``lo > hi``.
    """
    return sequence([draw_range(lo, hi) for lo, hi in _check_bounds(bounds)])


def _rejection_loop(
    constraints: tuple[Constraint, ...],
    n: int,
    candidate: Rand[list[Any]],
    config: RejectionConfig | None,
) -> Rand[list[list[Any]]]:
    max_attempts = config.max_attempts if config is not None else None

    @rand_do
    def generate() -> Generator[Rand[list[Any]], list[Any], list[list[Any]]]:
        genomes: list[list[Any]] = []
        rejected = 0
        while len(genomes) < n:
            genome = yield candidate
            if is_feasible(constraints, genome):
                genomes.append(genome)
                continue
            rejected += 1
            if max_attempts is not None and rejected >= max_attempts:
                logger.warning(
                    "Constrained generation gave up after %d rejected candidates (%d/%d accepted)",
                    rejected,
                    len(genomes),
                    n,
                )
                raise RejectionLimitExceeded(rejected, len(genomes), what="genome")
        logger.debug("Generated %d feasible genomes, %d candidates rejected", n, rejected)
        return genomes

    return generate()


def constrained_genomes(
    constraints: Sequence[Constraint],
    n: int,
    bounds: Bounds,
    config: RejectionConfig | None = None,
) -> Rand[list[list[Any]]]:
    """Generate exactly ``n`` feasible genomes.

    Args:
        constraints: Every returned genome satisfies all of them.
        n: Number of genomes.
        bounds: One inclusive ``(lo, hi)`` range per variable position.
        config: Optional cap on rejected candidates.

    Returns:
        Computation yielding a list of ``n`` genomes (lists).

    Raises:
        ValueError: If ``n`` is negative.
        InvalidRangeError: If a bound has ``lo > hi``.
        RejectionLimitExceeded: When run, if the cap in ``config`` is hit.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return _rejection_loop(tuple(constraints), n, random_genome(bounds), config)


def constrained_binary_genomes(
    constraints: Sequence[Constraint],
    n: int,
    length: int,
    config: RejectionConfig | None = None,
) -> Rand[list[list[bool]]]:
    """Generate exactly ``n`` feasible bit-string genomes of ``length`` booleans.

    Raises:
        ValueError: If ``n`` or ``length`` is negative.
        RejectionLimitExceeded: When run, if the cap in ``config`` is hit.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return _rejection_loop(tuple(constraints), n, replicate(length, draw_bool()), config)
