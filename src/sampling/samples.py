"""Random samples and shuffles.

All functions return ``Rand`` computations and draw every random number
through ``core.rng.draw_range``, so a sample is fully determined by the
generator state it is run from.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
from typing import TypeVar

from core.config import RejectionConfig
from core.errors import RejectionLimitExceeded
from core.logging import get_logger
from core.rng import Rand, draw_range, rand_do

__all__ = ["sample_without_replacement", "sample_indices", "shuffle", "apply_transpositions"]

T = TypeVar("T")

logger = get_logger(__name__)


@rand_do
def _ordered_sample(n: int, items: list[T]) -> Generator[Rand[int], int, list[T]]:
    picked: list[T] = []
    remaining = min(n, len(items))
    window = len(items)
    pos = 0
    while remaining > 0:
        # skip k of the window, leaving room for the remaining picks
        k = yield draw_range(0, window - remaining)
        pos += k
        picked.append(items[pos])
        pos += 1
        window -= k + 1
        remaining -= 1
    return picked


def sample_without_replacement(n: int, xs: Sequence[T]) -> Rand[list[T]]:
    """Take at most ``n`` random elements of ``xs``, preserving their order.

    At each step an offset ``k`` is drawn from ``[0, m - n]`` where ``m`` is
    the size of the remaining window and ``n`` the number of picks still
    owed; the element ``k`` positions in is taken and the window advances past
    it. No source position is taken twice.

    Args:
        n: Number of elements wanted. Values <= 0 give an empty sample.
        xs: Source sequence (copied when the computation is built).

    Returns:
        Computation yielding exactly ``min(n, len(xs))`` elements.
    """
    return _ordered_sample(n, list(xs))


def sample_indices(
    sample_size: int,
    population_size: int,
    config: RejectionConfig | None = None,
) -> Rand[list[int]]:
    """Select ``sample_size`` distinct indices from ``range(population_size)``.

    Indices are drawn uniformly and duplicates are redrawn, which is cheap
    when ``sample_size`` is much smaller than ``population_size``. The retry
    loop is unbounded unless ``config.max_attempts`` caps the number of
    duplicate draws.

    Args:
        sample_size: Number of distinct indices wanted.
        population_size: Size of the index range.
        config: Optional retry cap.

    Returns:
        Computation yielding the indices in ascending order.

    Raises:
        ValueError: If a size is negative or ``sample_size > population_size``.
        RejectionLimitExceeded: When run, if the retry cap is hit.
    """
    if sample_size < 0 or population_size < 0:
        raise ValueError(
            f"sizes must be non-negative, got sample_size={sample_size}, population_size={population_size}"
        )
    if sample_size > population_size:
        raise ValueError(
            f"cannot draw {sample_size} distinct indices from a population of {population_size}"
        )
    max_attempts = config.max_attempts if config is not None else None

    @rand_do
    def build() -> Generator[Rand[int], int, list[int]]:
        chosen: set[int] = set()
        duplicates = 0
        while len(chosen) < sample_size:
            i = yield draw_range(0, population_size - 1)
            if i not in chosen:
                chosen.add(i)
                continue
            duplicates += 1
            if max_attempts is not None and duplicates >= max_attempts:
                logger.warning(
                    "sample_indices gave up after %d duplicate draws (%d/%d indices)",
                    duplicates,
                    len(chosen),
                    sample_size,
                )
                raise RejectionLimitExceeded(duplicates, len(chosen), what="index")
        logger.debug("sample_indices: %d indices, %d duplicate draws", sample_size, duplicates)
        return sorted(chosen)

    return build()


def apply_transpositions(xs: Sequence[T], swaps: Sequence[int]) -> list[T]:
    """Permute ``xs`` by the Fisher-Yates swap sequence ``swaps``.

    ``swaps[j]`` is the partner of position ``len(xs) - 1 - j``, so it must
    lie in ``[0, len(xs) - 1 - j]``.

    Raises:
        ValueError: If the swap sequence does not match ``xs``.
    """
    items = list(xs)
    if len(swaps) != max(len(items) - 1, 0):
        raise ValueError(f"expected {max(len(items) - 1, 0)} swap indices, got {len(swaps)}")
    for offset, j in enumerate(swaps):
        i = len(items) - 1 - offset
        if not 0 <= j <= i:
            raise ValueError(f"swap index {j} out of range [0, {i}]")
        items[i], items[j] = items[j], items[i]
    return items


@rand_do
def _shuffle(items: list[T]) -> Generator[Rand[int], int, list[T]]:
    swaps: list[int] = []
    for i in range(len(items) - 1, 0, -1):
        swaps.append((yield draw_range(0, i)))
    return apply_transpositions(items, swaps)


def shuffle(xs: Sequence[T]) -> Rand[list[T]]:
    """Return a uniformly random permutation of ``xs``.

    Draws ``r_i`` uniform on ``[0, i]`` for ``i`` from ``len(xs) - 1`` down to
    1 and swaps position ``i`` with ``r_i``, so every one of the ``len(xs)!``
    orderings is equally likely. The input is not modified.
    """
    return _shuffle(list(xs))
