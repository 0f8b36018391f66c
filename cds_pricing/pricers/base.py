"""Base CDS pricer: composes leg values into PV, par spread and their node sensitivities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cds_pricing.interfaces import CreditCurve, YieldCurve
from cds_pricing.products.cds import CDSAnalytic, PriceType


class BaseCDSPricer(ABC):
    """Abstract base class for CDS pricers.

    Subclasses implement the four leg-level operations; everything a caller
    needs on top of them (PV for the protection buyer, par spread, and their
    sensitivities to a credit curve node) is derived here. All amounts are on a
    unit notional; spreads are fractional (100bp = 0.01).
    """

    @abstractmethod
    def protection_leg(self, cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> float:
        """PV of the protection leg."""
        ...

    @abstractmethod
    def protection_leg_credit_sensitivity(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        credit_curve_node: int,
    ) -> float:
        """d protection_leg / d(hazard rate of the node)."""
        ...

    @abstractmethod
    def pv_premium_leg_per_unit_spread(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        price_type: PriceType = PriceType.CLEAN,
    ) -> float:
        """PV of the premium leg per unit of fractional spread (10,000 x RPV01)."""
        ...

    @abstractmethod
    def pv_premium_leg_credit_sensitivity(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        credit_curve_node: int,
    ) -> float:
        """d pv_premium_leg_per_unit_spread / d(hazard rate of the node)."""
        ...

    def pv(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        fractional_spread: float,
        price_type: PriceType = PriceType.CLEAN,
    ) -> float:
        """PV for the protection buyer: protection leg - spread x premium leg."""
        rpv01 = self.pv_premium_leg_per_unit_spread(cds, yield_curve, credit_curve, price_type)
        pro_leg = self.protection_leg(cds, yield_curve, credit_curve)
        return pro_leg - fractional_spread * rpv01

    def pv_credit_sensitivity(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        fractional_spread: float,
        credit_curve_node: int,
    ) -> float:
        """Sensitivity of the (clean or dirty, they differ by a constant) PV to one credit curve node."""
        rpv01_sense = self.pv_premium_leg_credit_sensitivity(cds, yield_curve, credit_curve, credit_curve_node)
        pro_leg_sense = self.protection_leg_credit_sensitivity(cds, yield_curve, credit_curve, credit_curve_node)
        return pro_leg_sense - fractional_spread * rpv01_sense

    def par_spread(self, cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> float:
        """Fractional spread s* such that the clean PV is zero: s* = protection leg / RPV01."""
        rpv01 = self.pv_premium_leg_per_unit_spread(cds, yield_curve, credit_curve, PriceType.CLEAN)
        pro_leg = self.protection_leg(cds, yield_curve, credit_curve)
        return pro_leg / rpv01

    def par_spread_credit_sensitivity(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        credit_curve_node: int,
    ) -> float:
        """Quotient rule: d(a/b) = (a/b) (da/a - db/b)."""
        a = self.protection_leg(cds, yield_curve, credit_curve)
        b = self.pv_premium_leg_per_unit_spread(cds, yield_curve, credit_curve, PriceType.CLEAN)
        spread = a / b
        dadh = self.protection_leg_credit_sensitivity(cds, yield_curve, credit_curve, credit_curve_node)
        dbdh = self.pv_premium_leg_credit_sensitivity(cds, yield_curve, credit_curve, credit_curve_node)
        return spread * (dadh / a - dbdh / b)

    def pv_credit_sensitivities(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        fractional_spread: float,
    ) -> list[float]:
        """Bucketed PV sensitivity, one entry per credit curve node."""
        check_inputs(cds, yield_curve, credit_curve)
        return [
            self.pv_credit_sensitivity(cds, yield_curve, credit_curve, fractional_spread, node)
            for node in range(credit_curve.num_knots)
        ]

    def par_spread_credit_sensitivities(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
    ) -> list[float]:
        """Bucketed par spread sensitivity, one entry per credit curve node."""
        check_inputs(cds, yield_curve, credit_curve)
        return [
            self.par_spread_credit_sensitivity(cds, yield_curve, credit_curve, node)
            for node in range(credit_curve.num_knots)
        ]


def check_inputs(cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> None:
    """Fail fast on missing inputs, before any computation."""
    if cds is None:
        raise ValueError("null cds")
    if yield_curve is None:
        raise ValueError("null yield_curve")
    if credit_curve is None:
        raise ValueError("null credit_curve")


def check_node(credit_curve: CreditCurve, credit_curve_node: int) -> None:
    if not 0 <= credit_curve_node < credit_curve.num_knots:
        raise ValueError("credit_curve_node out of range")
