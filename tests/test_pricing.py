"""Tests for the module-level pricing functions."""

import pytest

import cds_pricing
from cds_pricing.curves import HazardRateCurve, ZeroRateCurve
from cds_pricing.pricers import AnalyticCDSPricer
from cds_pricing.pricing import default_pricer, par_spread, protection_leg, pv, rpv01
from cds_pricing.products.cds import CDSAnalytic, PriceType


def _market() -> tuple[ZeroRateCurve, HazardRateCurve]:
    yc = ZeroRateCurve.flat(name="USD_DISC", rate=0.03, pillars=[1.0, 5.0])
    cc = HazardRateCurve.flat(name="CORP_HAZ", hazard_rate=0.02, pillars=[1.0, 3.0, 5.0])
    return yc, cc


def test_default_pricer_is_isda_standard() -> None:
    assert isinstance(default_pricer(), AnalyticCDSPricer)
    assert default_pricer().use_correct_acc_on_default_formula is False


def test_functions_delegate_to_default_pricer() -> None:
    yc, cc = _market()
    cds = CDSAnalytic.regular(maturity=3.0)
    pricer = AnalyticCDSPricer()
    assert pv(cds, yc, cc, 0.01) == pricer.pv(cds, yc, cc, 0.01)
    assert par_spread(cds, yc, cc) == pricer.par_spread(cds, yc, cc)
    assert protection_leg(cds, yc, cc) == pricer.protection_leg(cds, yc, cc)


def test_rpv01_is_premium_leg_per_basis_point() -> None:
    yc, cc = _market()
    cds = CDSAnalytic.regular(maturity=3.0)
    leg = default_pricer().pv_premium_leg_per_unit_spread(cds, yc, cc, PriceType.DIRTY)
    assert rpv01(cds, yc, cc, PriceType.DIRTY) == pytest.approx(leg / 10_000)


def test_par_spread_relation() -> None:
    """pv(s) = (par - s) x premium leg."""
    yc, cc = _market()
    cds = CDSAnalytic.regular(maturity=3.0)
    par = par_spread(cds, yc, cc)
    leg = rpv01(cds, yc, cc) * 10_000
    assert pv(cds, yc, cc, 0.01) == pytest.approx((par - 0.01) * leg, abs=1e-14)


def test_package_exports() -> None:
    assert cds_pricing.pv is pv
    assert cds_pricing.AnalyticCDSPricer is AnalyticCDSPricer
    assert cds_pricing.epsilon(0.0) == 1.0
