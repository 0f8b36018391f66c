"""Tests for ZeroRateCurve and HazardRateCurve."""

import math

import pytest

from cds_pricing.curves import HazardRateCurve, ZeroRateCurve, _PiecewiseLinearRTCurve
from cds_pricing.interfaces import CreditCurve, YieldCurve


def test_rt_at_pillars_and_before_first() -> None:
    """rt = r_i t_i at pillars, r_0 t before the first pillar."""
    curve = ZeroRateCurve(name="C", pillars=[1.0, 2.0], zero_rates_cc=[0.02, 0.03])
    assert curve.rt(1.0) == pytest.approx(0.02)
    assert curve.rt(2.0) == pytest.approx(0.06)
    assert curve.rt(0.5) == pytest.approx(0.01)
    assert curve.rt(0.0) == 0.0


def test_rt_linear_between_pillars() -> None:
    """rt(1.5) = (0.02 * 1 + 0.03 * 2) / 2."""
    curve = ZeroRateCurve(name="C", pillars=[1.0, 2.0], zero_rates_cc=[0.02, 0.03])
    assert curve.rt(1.5) == pytest.approx(0.04, abs=1e-15)


def test_rt_extrapolates_last_forward() -> None:
    """Beyond the last pillar the last segment's forward (0.04) is extended."""
    curve = ZeroRateCurve(name="C", pillars=[1.0, 2.0], zero_rates_cc=[0.02, 0.03])
    assert curve.rt(3.0) == pytest.approx(0.10, abs=1e-15)
    assert curve.zero_rate(4.0) == pytest.approx(0.14 / 4.0)


def test_single_pillar_curve_is_flat() -> None:
    curve = HazardRateCurve.flat(name="H", hazard_rate=0.03)
    for t in (0.25, 1.0, 7.5):
        assert curve.zero_rate(t) == pytest.approx(0.03)
        assert curve.survival_probability(t) == pytest.approx(math.exp(-0.03 * t))


def test_df_formula() -> None:
    """DF(t) = exp(-r(t) t)."""
    curve = ZeroRateCurve(name="C", pillars=[1.0], zero_rates_cc=[0.05])
    assert abs(curve.df(1.0) - math.exp(-0.05)) < 1e-15
    assert curve.zero_rate(0.0) == 0.05


@pytest.mark.parametrize("t", [0.3, 1.0, 1.7, 3.0, 4.2, 6.0, 9.0])
@pytest.mark.parametrize("node", [0, 1, 2, 3])
def test_node_rt_sensitivity_matches_bump(t: float, node: int) -> None:
    """rt is linear in the node rates, so a one-sided bump is exact."""
    curve = HazardRateCurve(name="H", pillars=[1.0, 3.0, 5.0, 7.0], hazard_rates=[0.01, 0.02, 0.015, 0.03])
    h = 1e-4
    fd = (curve.bumped_node(node, h).rt(t) - curve.rt(t)) / h
    assert curve.single_node_rt_sensitivity(t, node) == pytest.approx(fd, abs=1e-9)


@pytest.mark.parametrize("t", [0.5, 2.0, 4.0, 8.0])
@pytest.mark.parametrize("node", [0, 1, 2, 3])
def test_node_df_sensitivity_matches_central_difference(t: float, node: int) -> None:
    curve = HazardRateCurve(name="H", pillars=[1.0, 3.0, 5.0, 7.0], hazard_rates=[0.01, 0.02, 0.015, 0.03])
    h = 1e-6
    fd = (curve.bumped_node(node, h).df(t) - curve.bumped_node(node, -h).df(t)) / (2 * h)
    assert curve.single_node_df_sensitivity(t, node) == pytest.approx(fd, abs=1e-9)


def test_node_sensitivity_zero_outside_support() -> None:
    """Node 1 (3Y) only moves the curve between 1Y and 5Y."""
    curve = HazardRateCurve(name="H", pillars=[1.0, 3.0, 5.0, 7.0], hazard_rates=[0.01] * 4)
    assert curve.single_node_df_sensitivity(0.5, 1) == 0.0
    assert curve.single_node_df_sensitivity(1.0, 1) == 0.0
    assert curve.single_node_df_sensitivity(5.0, 1) == 0.0
    assert curve.single_node_df_sensitivity(2.0, 1) != 0.0


def test_node_sensitivity_out_of_range_raises() -> None:
    curve = HazardRateCurve(name="H", pillars=[1.0, 3.0], hazard_rates=[0.01, 0.01])
    with pytest.raises(ValueError, match="node out of range"):
        curve.single_node_rt_sensitivity(1.0, 2)


def test_bumped_curve() -> None:
    """Bumped curve has rates shifted by bump; the source curve is unchanged."""
    curve = ZeroRateCurve(name="C", pillars=[1.0, 2.0], zero_rates_cc=[0.04, 0.05])
    bumped = curve.bumped(0.01)
    assert bumped.zero_rates_cc == pytest.approx([0.05, 0.06])
    assert curve.zero_rates_cc == [0.04, 0.05]
    assert bumped.df(1.0) == pytest.approx(math.exp(-0.05))


def test_bumped_node_only_moves_one_rate() -> None:
    curve = HazardRateCurve(name="H", pillars=[1.0, 2.0, 3.0], hazard_rates=[0.01, 0.02, 0.03])
    assert curve.bumped_node(1, 0.001).hazard_rates == pytest.approx([0.01, 0.021, 0.03])


def test_validate_pillars_strictly_increasing() -> None:
    with pytest.raises(ValueError, match="strictly increasing"):
        ZeroRateCurve(name="C", pillars=[1.0, 1.0], zero_rates_cc=[0.04, 0.04])
    with pytest.raises(ValueError, match="strictly increasing"):
        HazardRateCurve(name="H", pillars=[2.0, 1.0], hazard_rates=[0.01, 0.01])


def test_validate_same_length() -> None:
    with pytest.raises(ValueError, match="same length"):
        ZeroRateCurve(name="C", pillars=[1.0, 2.0], zero_rates_cc=[0.04])
    with pytest.raises(ValueError, match="hazard_rates must have the same length"):
        HazardRateCurve(name="H", pillars=[1.0], hazard_rates=[0.01, 0.02])


def test_validate_non_empty_and_positive() -> None:
    with pytest.raises(ValueError, match="no pillars"):
        ZeroRateCurve(name="C", pillars=[], zero_rates_cc=[])
    with pytest.raises(ValueError, match="positive"):
        HazardRateCurve(name="H", pillars=[0.0, 1.0], hazard_rates=[0.01, 0.01])


def test_curves_satisfy_protocols() -> None:
    yc = ZeroRateCurve.flat(name="C", rate=0.02)
    cc = HazardRateCurve.flat(name="H", hazard_rate=0.01, pillars=[1.0, 5.0])
    assert isinstance(yc, YieldCurve)
    assert isinstance(cc, CreditCurve)
    assert cc.num_knots == 2
    assert cc.time_at_index(1) == 5.0
    assert cc.knot_times == [1.0, 5.0]


def test_shared_curve_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        _PiecewiseLinearRTCurve()
