"""Tests for the epsilon helpers."""

import math

import pytest

from cds_pricing.numerics import SMALL_ARGUMENT, epsilon, epsilon_p, epsilon_pp

SWEEP = [-2e-5, -1e-5, -5e-6, 0.0, 5e-6, 1e-5, 2e-5]


def test_values_at_zero() -> None:
    """Continuous extensions at x = 0."""
    assert epsilon(0.0) == 1.0
    assert epsilon_p(0.0) == 0.5
    assert epsilon_pp(0.0) == pytest.approx(1.0 / 3.0, rel=1e-15)


def test_closed_forms_at_one() -> None:
    """(e - 1), 1 and (e - 2) at x = 1; 1 - 1/e at x = -1."""
    assert epsilon(1.0) == pytest.approx(math.e - 1.0, rel=1e-14)
    assert epsilon(-1.0) == pytest.approx(1.0 - math.exp(-1.0), rel=1e-14)
    assert epsilon_p(1.0) == pytest.approx(1.0, rel=1e-14)
    assert epsilon_pp(1.0) == pytest.approx(math.e - 2.0, rel=1e-13)


@pytest.mark.parametrize("x", SWEEP)
def test_sweep_across_small_argument_switch(x: float) -> None:
    """Both branches agree with the low-order Taylor expansion around the switch."""
    assert epsilon(x) == pytest.approx(1.0 + x / 2.0 + x * x / 6.0, rel=1e-8)
    assert epsilon_p(x) == pytest.approx(0.5 + x / 3.0 + x * x / 8.0, rel=1e-8)
    assert epsilon_pp(x) == pytest.approx(1.0 / 3.0 + x / 4.0 + x * x / 10.0, rel=1e-8)


@pytest.mark.parametrize("sign", [1.0, -1.0])
def test_continuity_just_above_and_below_switch(sign: float) -> None:
    """Series just below the threshold and closed form at it agree."""
    at = sign * SMALL_ARGUMENT
    below = math.nextafter(at, 0.0)
    for f in (epsilon, epsilon_p, epsilon_pp):
        assert f(below) == pytest.approx(f(at), rel=1e-8)


@pytest.mark.parametrize("x", [-0.7, -0.01, 0.01, 0.3, 2.5])
def test_derivatives_match_finite_differences(x: float) -> None:
    """epsilon_p and epsilon_pp are the derivatives of epsilon and epsilon_p."""
    h = 1e-5
    fd_p = (epsilon(x + h) - epsilon(x - h)) / (2 * h)
    fd_pp = (epsilon_p(x + h) - epsilon_p(x - h)) / (2 * h)
    assert epsilon_p(x) == pytest.approx(fd_p, rel=1e-8)
    assert epsilon_pp(x) == pytest.approx(fd_pp, rel=1e-7)
