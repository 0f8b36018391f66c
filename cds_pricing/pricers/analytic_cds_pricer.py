"""
Analytic CDS pricer following the ISDA standard model.

Both legs are integrals over time of the risky discount factor
b(t) = P(t) Q(t) = exp(-rt(t) - ht(t)), where rt and ht are the yield and
credit curves' rate-times-time. On every piece of the integration schedule both
rt and ht are linear in t, so each piece has a closed form; when the combined
exponent step dhrt is tiny, the closed form is replaced by its epsilon() limit.

Node sensitivities are the analytic derivatives of the same piecewise formulas
with respect to the survival probabilities at the two ends of each piece,
chained through the curve's own dQ/d(node).
"""

from __future__ import annotations

import logging
import math
from itertools import pairwise

from cds_pricing.interfaces import CreditCurve, YieldCurve
from cds_pricing.numerics import SMALL_ARGUMENT, epsilon, epsilon_p
from cds_pricing.pricers.accrual_on_default import accrual_on_default_formula
from cds_pricing.pricers.base import BaseCDSPricer, check_inputs, check_node
from cds_pricing.products.cds import CDSAnalytic, PriceType
from cds_pricing.schedule import integration_points, node_support

logger = logging.getLogger(__name__)

DEFAULT_USE_CORRECT_ACC_ON_DEFAULT_FORMULA = False


class AnalyticCDSPricer(BaseCDSPricer):
    """
    Closed-form (piecewise-exact) CDS pricer on unit notional.

    `use_correct_acc_on_default_formula` selects the accrual-on-default integral
    once, at construction. The default (False) reproduces the ISDA standard
    model, known error included; True uses the mathematically correct formula.
    """

    def __init__(self, use_correct_acc_on_default_formula: bool = DEFAULT_USE_CORRECT_ACC_ON_DEFAULT_FORMULA) -> None:
        self._use_correct_acc_on_default_formula = use_correct_acc_on_default_formula
        self._acc_on_default = accrual_on_default_formula(use_correct_acc_on_default_formula)
        logger.debug("AnalyticCDSPricer using %s accrual-on-default formula", self._acc_on_default.name)

    @property
    def use_correct_acc_on_default_formula(self) -> bool:
        return self._use_correct_acc_on_default_formula

    def __repr__(self) -> str:
        return f"AnalyticCDSPricer(use_correct_acc_on_default_formula={self._use_correct_acc_on_default_formula})"

    def protection_leg(self, cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> float:
        r"""
        PV of the protection leg on unit notional:

            (1 - R) / P(T_v) * integral_{T_a}^{T_b} P(t) (-dQ(t))

        with T_a, T_b the protection start and end, T_v the valuation time.
        """
        check_inputs(cds, yield_curve, credit_curve)

        schedule = integration_points(cds.protection_start, cds.protection_end, yield_curve, credit_curve)
        knots = []
        for t in schedule:
            ht = credit_curve.rt(t)
            rt = yield_curve.rt(t)
            knots.append((ht, rt, math.exp(-ht - rt)))

        pv = 0.0
        for (ht0, rt0, b0), (ht1, rt1, b1) in pairwise(knots):
            dht = ht1 - ht0
            drt = rt1 - rt0
            dhrt = dht + drt

            # Equivalent to ISDA's formula, without log(exp(x)) or the explicit
            # time step, and well behaved in the dhrt -> 0 limit.
            if abs(dhrt) < SMALL_ARGUMENT:
                pv += dht * b0 * epsilon(-dhrt)
            else:
                pv += (b0 - b1) * dht / dhrt

        pv *= cds.lgd
        # Cash settles at the valuation time, not today.
        return pv / yield_curve.df(cds.valuation_time)

    def protection_leg_credit_sensitivity(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        credit_curve_node: int,
    ) -> float:
        check_inputs(cds, yield_curve, credit_curve)
        check_node(credit_curve, credit_curve_node)
        lower, upper = node_support(credit_curve, credit_curve_node)
        if cds.protection_end <= lower or cds.protection_start >= upper:
            return 0.0

        schedule = integration_points(cds.protection_start, cds.protection_end, yield_curve, credit_curve)
        knots = []
        for t in schedule:
            ht = credit_curve.rt(t)
            rt = yield_curve.rt(t)
            dqdr = credit_curve.single_node_df_sensitivity(t, credit_curve_node)
            knots.append((ht, rt, math.exp(-ht), math.exp(-rt), dqdr))

        pv_sense = 0.0
        for (ht0, rt0, q0, p0, dqdr0), (ht1, rt1, q1, p1, dqdr1) in pairwise(knots):
            # Node has no support on this piece.
            if dqdr0 == 0.0 and dqdr1 == 0.0:
                continue

            dht = ht1 - ht0
            drt = rt1 - rt0
            dhrt = dht + drt

            if abs(dhrt) < SMALL_ARGUMENT:
                e = epsilon(-dhrt)
                e_p = epsilon_p(-dhrt)
                dpv_dq0 = p0 * ((1 + dht) * e - dht * e_p)
                dpv_dq1 = -p0 * q0 / q1 * (e - dht * e_p)
                pv_sense += dpv_dq0 * dqdr0 + dpv_dq1 * dqdr1
            else:
                w2 = dht / dhrt
                w3 = (1 - w2) * (p0 * q0 - p1 * q1)
                pv_sense += ((w3 / q0 + dht * p0) / dhrt) * dqdr0 - ((w3 / q1 + dht * p1) / dhrt) * dqdr1

        pv_sense *= cds.lgd
        return pv_sense / yield_curve.df(cds.valuation_time)

    def pv_premium_leg_per_unit_spread(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        price_type: PriceType = PriceType.CLEAN,
    ) -> float:
        """
        PV of the premium leg per unit of fractional spread, i.e. 10,000 x RPV01.

        The leg's actual PV is this times the notional and the fractional spread.
        """
        check_inputs(cds, yield_curve, credit_curve)

        pv = 0.0
        for i in range(cds.num_payments):
            q = credit_curve.df(cds.credit_observation_time[i])
            p = yield_curve.df(cds.payment_time[i])
            pv += cds.accrual_fraction[i] * p * q

        if cds.pay_accrued_on_default:
            pv += self._accrual_on_default(cds, yield_curve, credit_curve)

        pv /= yield_curve.df(cds.valuation_time)

        if price_type is PriceType.CLEAN:
            pv -= cds.accrued_premium_per_unit_spread
        return pv

    def pv_premium_leg_credit_sensitivity(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        credit_curve_node: int,
    ) -> float:
        check_inputs(cds, yield_curve, credit_curve)
        check_node(credit_curve, credit_curve_node)

        pv_sense = 0.0
        for i in range(cds.num_payments):
            dqdh = credit_curve.single_node_df_sensitivity(cds.credit_observation_time[i], credit_curve_node)
            p = yield_curve.df(cds.payment_time[i])
            pv_sense += cds.accrual_fraction[i] * p * dqdh

        if cds.pay_accrued_on_default:
            pv_sense += self._accrual_on_default(cds, yield_curve, credit_curve, credit_curve_node)

        return pv_sense / yield_curve.df(cds.valuation_time)

    def _accrual_on_default(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        credit_curve_node: int | None = None,
    ) -> float:
        """Sum over periods of the accrual-on-default value (or its node sensitivity)."""
        n = cds.num_payments
        offset = -cds.curve_one_day if cds.protection_from_start_of_day else 0.0
        schedule = integration_points(cds.accrual_start[0], cds.accrual_end[n - 1], yield_curve, credit_curve)
        offset_step_in = cds.step_in + offset

        acc_pv = 0.0
        for i in range(n):
            offset_acc_start = cds.accrual_start[i] + offset
            offset_acc_end = cds.accrual_end[i] + offset
            acc_rate = cds.accrual_fraction[i] / (offset_acc_end - offset_acc_start)
            if credit_curve_node is None:
                acc_pv += self._acc_on_default.value(
                    acc_rate, offset_step_in, offset_acc_start, offset_acc_end, schedule, yield_curve, credit_curve
                )
            else:
                acc_pv += self._acc_on_default.sensitivity(
                    acc_rate,
                    offset_step_in,
                    offset_acc_start,
                    offset_acc_end,
                    schedule,
                    yield_curve,
                    credit_curve,
                    credit_curve_node,
                )
        return acc_pv
