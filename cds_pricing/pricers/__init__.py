"""CDS pricer implementations."""

from cds_pricing.pricers.accrual_on_default import (
    CorrectedAccrualOnDefault,
    LegacyAccrualOnDefault,
)
from cds_pricing.pricers.analytic_cds_pricer import AnalyticCDSPricer
from cds_pricing.pricers.base import BaseCDSPricer

__all__ = [
    "BaseCDSPricer",
    "AnalyticCDSPricer",
    "LegacyAccrualOnDefault",
    "CorrectedAccrualOnDefault",
]
