"""Probability distributions and probabilistic building blocks.

This module provides:
- normal_pair / normal: standard-normal draws via the Box-Muller transform
- with_probability: apply a randomized transform with a given probability
"""

from __future__ import annotations

import math
from collections.abc import Callable, Generator
from typing import TypeVar

from core.rng import Rand, draw_double, pure, rand_do

__all__ = ["normal_pair", "normal", "with_probability"]

T = TypeVar("T")


@rand_do
def normal_pair() -> Generator[Rand[float], float, tuple[float, float]]:
    """Draw two independent standard-normal values.

    Box-Muller: with ``u, v`` uniform, ``r = sqrt(-2 ln u)`` and
    ``theta = 2 pi v`` give ``(r cos theta, r sin theta)``. ``u`` is taken as
    ``1 - draw_double()`` so it lies in (0, 1] and the logarithm stays finite.

    Returns:
        Computation yielding a tuple ``(x, y)``. Consumes exactly two doubles.
    """
    u = 1.0 - (yield draw_double())
    v = yield draw_double()
    r = math.sqrt(-2.0 * math.log(u))
    theta = 2.0 * math.pi * v
    return r * math.cos(theta), r * math.sin(theta)


def normal() -> Rand[float]:
    """Draw one standard-normal value.

    Both uniforms of the underlying pair are consumed, so the state after
    ``normal()`` equals the state after ``normal_pair()``.
    """
    return normal_pair().map(lambda pair: pair[0])


def with_probability(p: float, transform: Callable[[T], Rand[T]]) -> Callable[[T], Rand[T]]:
    """Wrap ``transform`` so it is applied with probability ``p``.

    The wrapped function draws one double ``t``. If ``t < p`` it runs
    ``transform(x)`` and consumes its draws; otherwise it returns ``x``
    unchanged and draws nothing more.

    Args:
        p: Probability in [0, 1].
        transform: Randomized transform, e.g. a per-gene mutation.

    Raises:
        ValueError: If ``p`` is outside [0, 1].
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"probability must be in [0, 1], got {p}")

    def maybe(x: T) -> Rand[T]:
        return draw_double().bind(lambda t: transform(x) if t < p else pure(x))

    return maybe
