"""
CDS risk measures.

Use the CS01Parallel and CS01Node classes for composability; cs01_parallel and
cs01_bucketed are functional shortcuts.
"""

from __future__ import annotations

from cds_pricing.interfaces import CreditCurve, YieldCurve
from cds_pricing.products.cds import CDSAnalytic
from cds_pricing.risk.base import BaseRiskMeasure
from cds_pricing.risk.cs01 import CS01Node, CS01Parallel


def cs01_parallel(
    cds: CDSAnalytic,
    yield_curve: YieldCurve,
    credit_curve: CreditCurve,
    fractional_spread: float,
    bump_bp: float = 1.0,
) -> float:
    """
    CS01: change in PV when all hazard rates are bumped by bump_bp basis points.
    Returns PV(bumped) - PV(base).
    """
    measure = CS01Parallel(fractional_spread=fractional_spread, bump_bp=bump_bp)
    return measure.compute(cds, yield_curve, credit_curve)


def cs01_bucketed(
    cds: CDSAnalytic,
    yield_curve: YieldCurve,
    credit_curve: CreditCurve,
    fractional_spread: float,
    bump_bp: float = 1.0,
) -> list[float]:
    """First-order PV change for a bump_bp bump of each credit curve node in turn."""
    return [
        CS01Node(fractional_spread=fractional_spread, node=node, bump_bp=bump_bp).compute(
            cds, yield_curve, credit_curve
        )
        for node in range(credit_curve.num_knots)
    ]


__all__ = [
    "BaseRiskMeasure",
    "CS01Parallel",
    "CS01Node",
    "cs01_parallel",
    "cs01_bucketed",
]
