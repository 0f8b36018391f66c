"""ISDA analytic CDS pricing library: curves, CDS description, pricer, and risk."""

from cds_pricing.curves import HazardRateCurve, ZeroRateCurve
from cds_pricing.interfaces import CreditCurve, RiskMeasure, YieldCurve
from cds_pricing.numerics import epsilon, epsilon_p, epsilon_pp
from cds_pricing.pricers import (
    AnalyticCDSPricer,
    BaseCDSPricer,
    CorrectedAccrualOnDefault,
    LegacyAccrualOnDefault,
)
from cds_pricing.pricing import par_spread, pv, rpv01
from cds_pricing.products.cds import CDSAnalytic, PriceType
from cds_pricing.risk import CS01Node, CS01Parallel, cs01_bucketed, cs01_parallel
from cds_pricing.schedule import integration_points, truncate_inclusive

__all__ = [
    "YieldCurve",
    "CreditCurve",
    "RiskMeasure",
    "ZeroRateCurve",
    "HazardRateCurve",
    "CDSAnalytic",
    "PriceType",
    "BaseCDSPricer",
    "AnalyticCDSPricer",
    "LegacyAccrualOnDefault",
    "CorrectedAccrualOnDefault",
    "pv",
    "par_spread",
    "rpv01",
    "CS01Parallel",
    "CS01Node",
    "cs01_parallel",
    "cs01_bucketed",
    "epsilon",
    "epsilon_p",
    "epsilon_pp",
    "integration_points",
    "truncate_inclusive",
]
