"""Tests for normal draws and probabilistic transforms."""

from __future__ import annotations

import math

import pytest

from core.rng import Rand, draw_double, draw_range, eval_random, new_state, replicate, run_random
from sampling.distributions import normal, normal_pair, with_probability


def test_normal_pair_follows_box_muller() -> None:
    """The pair matches Box-Muller on two uniform draws."""
    state = new_state(3)
    (x, y), final = run_random(normal_pair(), state)

    (u, v), expected_final = run_random(replicate(2, draw_double()), state)
    r = math.sqrt(-2.0 * math.log(1.0 - u))
    assert x == pytest.approx(r * math.cos(2.0 * math.pi * v))
    assert y == pytest.approx(r * math.sin(2.0 * math.pi * v))
    assert final == expected_final


def test_normal_consumes_both_uniforms() -> None:
    """normal draws two uniforms and keeps the first value."""
    state = new_state(8)
    value, final = run_random(normal(), state)
    (x, _y), pair_final = run_random(normal_pair(), state)
    assert value == x
    assert final == pair_final


def test_normal_moments() -> None:
    """Normal samples have mean near 0 and variance near 1."""
    values = eval_random(replicate(5000, normal()), new_state(42))
    mean = sum(values) / len(values)
    var = sum((v - mean) ** 2 for v in values) / len(values)
    assert abs(mean) < 0.1
    assert 0.9 < var < 1.1


def test_normal_pair_components_uncorrelated() -> None:
    """The two components of a pair are uncorrelated."""
    pairs = eval_random(replicate(5000, normal_pair()), new_state(7))
    cov = sum(x * y for x, y in pairs) / len(pairs)
    assert abs(cov) < 0.1
    assert all(math.isfinite(x) and math.isfinite(y) for x, y in pairs)


def _add_hundred(x: int) -> Rand[int]:
    return draw_range(0, 10).map(lambda r: x + 100 + r)


def test_with_probability_zero_consumes_one_double() -> None:
    """p=0 returns the input but still draws one double."""
    state = new_state(5)
    value, final = run_random(with_probability(0.0, _add_hundred)(1), state)
    _t, expected_final = run_random(draw_double(), state)
    assert value == 1
    assert final == expected_final


def test_with_probability_one_applies_transform() -> None:
    """p=1 always applies the transform."""
    state = new_state(5)
    value, final = run_random(with_probability(1.0, _add_hundred)(1), state)
    expected, expected_final = run_random(draw_double().then(_add_hundred(1)), state)
    assert 101 <= value <= 111
    assert (value, final) == (expected, expected_final)


def test_with_probability_rate() -> None:
    """The transform is applied at about rate p."""
    mutate = with_probability(0.3, _add_hundred)
    results = eval_random(replicate(4000, mutate(0)), new_state(11))
    applied = sum(1 for r in results if r >= 100)
    assert 1050 < applied < 1350
    assert all(r == 0 for r in results if r < 100)


@pytest.mark.parametrize("p", [-0.1, 1.5, float("nan")])
def test_with_probability_rejects_bad_probability(p: float) -> None:
    """Probabilities outside [0, 1] are rejected."""
    with pytest.raises(ValueError, match="probability"):
        with_probability(p, _add_hundred)
