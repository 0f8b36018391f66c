"""
Pricing entrypoint.

Most users of the library should only need the functions below. They delegate
to a module-level `AnalyticCDSPricer` configured as the ISDA standard model
(legacy accrual-on-default formula).

Keeping this as a thin wrapper gives a stable, ergonomic API while still
allowing advanced users to instantiate/configure their own pricer.
"""

from cds_pricing.interfaces import CreditCurve, YieldCurve
from cds_pricing.pricers.analytic_cds_pricer import AnalyticCDSPricer
from cds_pricing.products.cds import CDSAnalytic, PriceType

_default_pricer = AnalyticCDSPricer()


def default_pricer() -> AnalyticCDSPricer:
    """The pricer behind the module-level functions."""
    return _default_pricer


def pv(
    cds: CDSAnalytic,
    yield_curve: YieldCurve,
    credit_curve: CreditCurve,
    fractional_spread: float,
    price_type: PriceType = PriceType.CLEAN,
) -> float:
    """PV for the protection buyer on unit notional."""
    return _default_pricer.pv(cds, yield_curve, credit_curve, fractional_spread, price_type)


def par_spread(cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> float:
    """Fractional par spread."""
    return _default_pricer.par_spread(cds, yield_curve, credit_curve)


def protection_leg(cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> float:
    return _default_pricer.protection_leg(cds, yield_curve, credit_curve)


def rpv01(
    cds: CDSAnalytic,
    yield_curve: YieldCurve,
    credit_curve: CreditCurve,
    price_type: PriceType = PriceType.CLEAN,
) -> float:
    """Risky PV01 on unit notional: premium leg PV per unit spread / 10,000."""
    return _default_pricer.pv_premium_leg_per_unit_spread(cds, yield_curve, credit_curve, price_type) / 10_000.0
