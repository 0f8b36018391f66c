"""CS01 risk measures: parallel (bump hazard curve, reprice) and per node (analytic)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cds_pricing.curves import HazardRateCurve
from cds_pricing.interfaces import YieldCurve
from cds_pricing.pricers.analytic_cds_pricer import AnalyticCDSPricer
from cds_pricing.pricing import default_pricer
from cds_pricing.products.cds import CDSAnalytic
from cds_pricing.risk.base import BaseRiskMeasure

logger = logging.getLogger(__name__)


@dataclass
class CS01Parallel(BaseRiskMeasure):
    """CS01: PV change for a parallel shift of all hazard rates.

    Bump-and-reprice, so the credit curve must support `bumped()`.
    """

    fractional_spread: float
    bump_bp: float = 1.0
    pricer: AnalyticCDSPricer = field(default_factory=default_pricer)

    @property
    def name(self) -> str:
        return f"CS01_{self.bump_bp:g}bp"

    def compute(self, cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: HazardRateCurve) -> float:
        """PV(bumped) - PV(base) for parallel hazard curve shift."""
        bump = self.bump_bp / 10000.0
        bumped_curve = credit_curve.bumped(bump)
        base = self.pricer.pv(cds, yield_curve, credit_curve, self.fractional_spread)
        bumped = self.pricer.pv(cds, yield_curve, bumped_curve, self.fractional_spread)
        logger.debug("%s on %s: base=%.10f bumped=%.10f", self.name, credit_curve.name, base, bumped)
        return bumped - base


@dataclass
class CS01Node(BaseRiskMeasure):
    """Bucketed CS01 of one credit curve node, from the analytic node sensitivity.

    First order: sensitivity x bump, no repricing.
    """

    fractional_spread: float
    node: int
    bump_bp: float = 1.0
    pricer: AnalyticCDSPricer = field(default_factory=default_pricer)

    @property
    def name(self) -> str:
        return f"CS01_node{self.node}"

    def compute(self, cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: HazardRateCurve) -> float:
        sense = self.pricer.pv_credit_sensitivity(cds, yield_curve, credit_curve, self.fractional_spread, self.node)
        return sense * self.bump_bp / 10000.0
