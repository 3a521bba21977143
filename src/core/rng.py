"""Random number generation with explicitly threaded generator state.

This module contains:
- GeneratorState: an immutable snapshot of a PCG64 bit generator
- Rand: a composable random computation ``state -> (value, state')``
- Primitive draws (booleans, 64-bit integers, 53-bit doubles, inclusive ranges)
- Entry points for seeding and running computations

There is no process-wide generator. Every draw consumes one GeneratorState
and produces a new one, so a computation run twice from the same state
returns the same value and the same final state.

Example:
    >>> pair = draw_range(1, 6).bind(lambda a: draw_range(1, 6).map(lambda b: (a, b)))
    >>> eval_random(pair, new_state(7)) == eval_random(pair, new_state(7))
    True
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
from typing import Any, Generic, ParamSpec, TypeVar

import numpy as np

from core.errors import InvalidRangeError

__all__ = [
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
]

T = TypeVar("T")
U = TypeVar("U")
P = ParamSpec("P")

_MAX_SEED = 2**64
_INT64_SIGN = 2**63


@dataclass(frozen=True, slots=True)
class GeneratorState:
    """Immutable snapshot of a PCG64 bit generator.

    Attributes:
        state: 128-bit LCG state.
        inc: 128-bit LCG increment (stream selector).
        has_uint32: Whether a buffered 32-bit half word is pending.
        uinteger: The buffered 32-bit half word.
    """

    state: int
    inc: int
    has_uint32: int = 0
    uinteger: int = 0

    @classmethod
    def capture(cls, generator: np.random.Generator) -> GeneratorState:
        """Snapshot the bit generator behind ``generator``."""
        raw = generator.bit_generator.state
        if raw["bit_generator"] != "PCG64":
            raise TypeError(f"Expected a PCG64 bit generator, got {raw['bit_generator']}")
        return cls(
            state=int(raw["state"]["state"]),
            inc=int(raw["state"]["inc"]),
            has_uint32=int(raw["has_uint32"]),
            uinteger=int(raw["uinteger"]),
        )

    def restore(self) -> np.random.Generator:
        """Return a fresh numpy Generator positioned at this state.

        The returned generator is private to the caller; advancing it never
        changes this snapshot.
        """
        bit_generator = np.random.PCG64(0)
        bit_generator.state = {
            "bit_generator": "PCG64",
            "state": {"state": self.state, "inc": self.inc},
            "has_uint32": self.has_uint32,
            "uinteger": self.uinteger,
        }
        return np.random.Generator(bit_generator)


@dataclass(frozen=True)
class Rand(Generic[T]):
    """A random computation: given a generator state, produce a value and a successor.

    Computations are values; nothing is drawn until ``run`` is called.
    Sequencing is strictly left to right.

    Attributes:
        step: Function mapping a state to ``(value, next_state)``.
    """

    step: Callable[[GeneratorState], tuple[T, GeneratorState]]

    def run(self, state: GeneratorState) -> tuple[T, GeneratorState]:
        """Run the computation from ``state``."""
        return self.step(state)

    def map(self, fn: Callable[[T], U]) -> Rand[U]:
        """Apply a pure function to the result."""

        def step(state: GeneratorState) -> tuple[U, GeneratorState]:
            value, state = self.step(state)
            return fn(value), state

        return Rand(step)

    def bind(self, fn: Callable[[T], Rand[U]]) -> Rand[U]:
        """Feed the result and successor state into the computation built by ``fn``."""

        def step(state: GeneratorState) -> tuple[U, GeneratorState]:
            value, state = self.step(state)
            return fn(value).step(state)

        return Rand(step)

    def then(self, other: Rand[U]) -> Rand[U]:
        """Run this computation for its draws only, then ``other``."""
        return self.bind(lambda _value: other)


def new_state(seed: int | None = None) -> GeneratorState:
    """Create a generator state from a 64-bit seed, or from OS entropy if None.

    Raises:
        ValueError: If the seed is not an integer in [0, 2**64).
    """
    if seed is None:
        return GeneratorState.capture(np.random.Generator(np.random.PCG64(np.random.SeedSequence())))
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ValueError(f"seed must be an integer, got {type(seed).__name__}")
    if not 0 <= int(seed) < _MAX_SEED:
        raise ValueError(f"seed must be in [0, 2**64), got {seed}")
    return GeneratorState.capture(np.random.Generator(np.random.PCG64(int(seed))))


def run_random(computation: Rand[T], state: GeneratorState) -> tuple[T, GeneratorState]:
    """Run ``computation`` from ``state``, returning the value and the final state."""
    return computation.run(state)


def eval_random(computation: Rand[T], state: GeneratorState) -> T:
    """Run ``computation`` from ``state`` and discard the final state."""
    value, _state = computation.run(state)
    return value


def pure(value: T) -> Rand[T]:
    """A computation that returns ``value`` without drawing."""
    return Rand(lambda state: (value, state))


def from_generator(fn: Callable[[np.random.Generator], T]) -> Rand[T]:
    """Lift a function of a numpy Generator into a pure computation.

    ``fn`` receives a private generator restored from the incoming state; the
    successor state is captured once ``fn`` returns.
    """

    def step(state: GeneratorState) -> tuple[T, GeneratorState]:
        generator = state.restore()
        value = fn(generator)
        return value, GeneratorState.capture(generator)

    return Rand(step)


def sequence(computations: Iterable[Rand[T]]) -> Rand[list[T]]:
    """Run computations left to right and collect their results."""
    items = list(computations)

    def step(state: GeneratorState) -> tuple[list[T], GeneratorState]:
        values: list[T] = []
        for computation in items:
            value, state = computation.step(state)
            values.append(value)
        return values, state

    return Rand(step)


def replicate(n: int, computation: Rand[T]) -> Rand[list[T]]:
    """Run ``computation`` ``n`` times and collect the results."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return sequence([computation] * n)


def rand_do(fn: Callable[P, Generator[Rand[Any], Any, T]]) -> Callable[P, Rand[T]]:
    """Build computations from generator functions.

    Inside the decorated function, ``value = yield computation`` runs
    ``computation`` against the current state and resumes with its value; the
    function's return value is the result. Evaluation is iterative, so loops
    with any number of draws do not grow the call stack.

    Example:
        >>> @rand_do
        ... def dice_sum(n):
        ...     total = 0
        ...     for _ in range(n):
        ...         total += yield draw_range(1, 6)
        ...     return total
        >>> 3 <= eval_random(dice_sum(3), new_state(1)) <= 18
        True
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Rand[T]:
        def step(state: GeneratorState) -> tuple[T, GeneratorState]:
            routine = fn(*args, **kwargs)
            try:
                computation = next(routine)
                while True:
                    value, state = computation.step(state)
                    computation = routine.send(value)
            except StopIteration as stop:
                return stop.value, state

        return Rand(step)

    return wrapper


# =============================================================================
# Primitive draws
# =============================================================================


def _next_word64(generator: np.random.Generator) -> int:
    return int(generator.bit_generator.random_raw())


def _to_signed(word: int) -> int:
    return word - 2**64 if word >= _INT64_SIGN else word


def draw_word64() -> Rand[int]:
    """Draw an unsigned 64-bit integer."""
    return from_generator(_next_word64)


def draw_int64() -> Rand[int]:
    """Draw a signed 64-bit integer."""
    return from_generator(lambda generator: _to_signed(_next_word64(generator)))


def draw_word() -> Rand[int]:
    """Draw an unsigned default-width (64-bit) integer."""
    return draw_word64()


def draw_int() -> Rand[int]:
    """Draw a signed default-width (64-bit) integer."""
    return draw_int64()


def draw_bool() -> Rand[bool]:
    """Draw a boolean from the sign of a signed integer draw."""
    return draw_int().map(lambda value: value < 0)


def draw_double() -> Rand[float]:
    """Draw a float uniform on [0, 1) with 53 bits of precision."""
    return from_generator(lambda generator: float(generator.random()))


def _range_value(generator: np.random.Generator, lo: Any, hi: Any) -> Any:
    if isinstance(lo, (bool, np.bool_)) and isinstance(hi, (bool, np.bool_)):
        if lo == hi:
            return bool(lo)
        return bool(generator.integers(0, 1, endpoint=True))
    if isinstance(lo, (int, np.integer)) and isinstance(hi, (int, np.integer)):
        value = int(generator.integers(int(lo), int(hi), endpoint=True))
        return type(lo)(value) if isinstance(lo, np.integer) else value
    if lo == hi:
        return float(lo)
    return float(lo) + (float(hi) - float(lo)) * float(generator.random())


def draw_range(lo: T, hi: T) -> Rand[T]:
    """Draw a value uniformly distributed in the inclusive range [lo, hi].

    Integers (Python or numpy) are drawn exactly uniformly over the integers
    in the range; anything else is treated as a float and drawn as
    ``lo + (hi - lo) * u`` with ``u`` from ``draw_double``.

    Raises:
        InvalidRangeError: If ``lo > hi``.
    """
    if lo > hi:  # type: ignore[operator]
        raise InvalidRangeError(lo, hi)
    return from_generator(lambda generator: _range_value(generator, lo, hi))


_DEFAULT_DRAWS: dict[type, Callable[[], Rand[Any]]] = {
    bool: draw_bool,
    int: draw_int,
    float: draw_double,
}


def draw_random(kind: type[T]) -> Rand[T]:
    """Draw a value of ``kind`` over its default range.

    ``bool`` is a fair coin, ``int`` a signed 64-bit integer and ``float``
    uniform on [0, 1).

    Raises:
        TypeError: If ``kind`` has no default range.
    """
    try:
        return _DEFAULT_DRAWS[kind]()
    except KeyError:
        raise TypeError(f"No default random range for {kind!r}") from None
