"""
Yield and credit curve primitives (ISDA curve model).

This module keeps the curve math minimal and explicit:
- Times are **year fractions** measured from today (e.g. 2.0 = 2Y).
- Each node carries a **continuously compounded zero rate** r_i at pillar t_i.
- The curve is **linear in r(t)*t** between pillars, i.e. the forward rate is
  flat on every segment. Before the first pillar r(t) = r_0; beyond the last
  pillar the last segment's forward rate is extended.
- HazardRateCurve: `df(t)` returns survival probability S(t), not a discount
  factor, and the node quantities are zero hazard rates.

This is the curve model of the ISDA standard CDS model, which is what makes the
piecewise closed-form leg integrals exact. Bootstrapping these curves from
market quotes is out of scope.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass


class _PiecewiseLinearRTCurve(ABC):
    """
    Shared curve math; subclasses provide `pillars` and `_node_rates()`.

    `rt(t)` is the zero rate times time, `df(t) = exp(-rt(t))`.
    """

    pillars: list[float]
    _rates_label = "rates"

    @abstractmethod
    def _node_rates(self) -> list[float]:
        ...

    def _validate_nodes(self) -> None:
        rates = self._node_rates()
        if len(self.pillars) != len(rates):
            raise ValueError(f"pillars and {self._rates_label} must have the same length")
        if not self.pillars:
            raise ValueError("curve has no pillars")
        if self.pillars[0] <= 0:
            raise ValueError("pillars must be positive")
        for i in range(1, len(self.pillars)):
            if self.pillars[i] <= self.pillars[i - 1]:
                raise ValueError("pillars must be strictly increasing")

    @property
    def knot_times(self) -> list[float]:
        return list(self.pillars)

    @property
    def num_knots(self) -> int:
        return len(self.pillars)

    def time_at_index(self, index: int) -> float:
        return self.pillars[index]

    def _segment(self, t: float) -> int:
        """Index i of the segment (pillars[i - 1], pillars[i]] containing t.

        Times beyond the last pillar map onto the last segment (extrapolation).
        Only meaningful when t > pillars[0] and there are at least two pillars.
        """
        i = bisect_left(self.pillars, t)
        return min(i, len(self.pillars) - 1)

    def rt(self, t: float) -> float:
        """Zero rate times time at t, i.e. -log(df(t))."""
        p = self.pillars
        r = self._node_rates()
        if t <= p[0] or len(p) == 1:
            return r[0] * t
        i = self._segment(t)
        t1, t2 = p[i - 1], p[i]
        return ((t2 - t) * r[i - 1] * t1 + (t - t1) * r[i] * t2) / (t2 - t1)

    def df(self, t: float) -> float:
        """Discount factor (survival probability for a credit curve) at t."""
        return math.exp(-self.rt(t))

    def zero_rate(self, t: float) -> float:
        """Continuously compounded zero rate at t (the t -> 0 limit at t = 0)."""
        if t == 0.0:
            return self._node_rates()[0]
        return self.rt(t) / t

    def single_node_rt_sensitivity(self, t: float, node: int) -> float:
        """
        d rt(t) / d r_node. Zero outside (pillars[node - 1], pillars[node + 1]),
        except that the last two nodes also move the extrapolated tail.
        """
        p = self.pillars
        if not 0 <= node < len(p):
            raise ValueError("node out of range")
        if t <= p[0] or len(p) == 1:
            return t if node == 0 else 0.0
        i = self._segment(t)
        t1, t2 = p[i - 1], p[i]
        if node == i - 1:
            return t1 * (t2 - t) / (t2 - t1)
        if node == i:
            return t2 * (t - t1) / (t2 - t1)
        return 0.0

    def single_node_df_sensitivity(self, t: float, node: int) -> float:
        """d df(t) / d r_node."""
        drt = self.single_node_rt_sensitivity(t, node)
        if drt == 0.0:
            return 0.0
        return -drt * self.df(t)


@dataclass
class ZeroRateCurve(_PiecewiseLinearRTCurve):
    """
    Discount curve: continuously compounded zero rates at pillar times.

    - **Pillars** are increasing positive times (year fractions).
    - `zero_rates_cc[i]` is the CC zero rate at `pillars[i]`.

    Implements the YieldCurve protocol structurally (no explicit inheritance).
    """

    name: str
    pillars: list[float]
    zero_rates_cc: list[float]

    _rates_label = "zero_rates_cc"

    def __post_init__(self) -> None:
        self._validate_nodes()

    def _node_rates(self) -> list[float]:
        return self.zero_rates_cc

    @classmethod
    def flat(cls, name: str, rate: float, pillars: Sequence[float] = (1.0,)) -> ZeroRateCurve:
        """Curve with the same zero rate at every pillar."""
        return cls(name=name, pillars=list(pillars), zero_rates_cc=[rate] * len(pillars))

    def with_rates(self, zero_rates_cc: Sequence[float]) -> ZeroRateCurve:
        """Same pillars, new zero rates."""
        return ZeroRateCurve(name=self.name, pillars=list(self.pillars), zero_rates_cc=list(zero_rates_cc))

    def bumped(self, bump: float) -> ZeroRateCurve:
        """
        Return a new curve with a *parallel* additive shift to all zero rates.

        `bump` is expressed in absolute rate terms (e.g. 1bp = 0.0001).
        """
        return self.with_rates([r + bump for r in self.zero_rates_cc])

    def bumped_node(self, node: int, bump: float) -> ZeroRateCurve:
        """Return a new curve with `bump` added to a single node's zero rate."""
        rates = list(self.zero_rates_cc)
        rates[node] += bump
        return self.with_rates(rates)


@dataclass
class HazardRateCurve(_PiecewiseLinearRTCurve):
    """
    Credit (survival) curve: zero hazard rates at pillar times.

    Implements the CreditCurve protocol structurally. Here `df(t)` returns
    **survival probability** S(t) = exp(-h(t) t), where h(t) is the zero hazard
    rate interpolated linearly in h(t) t (flat forward hazard between pillars).
    - bumped(bump) adds `bump` to all hazard rates (absolute; 1bp = 0.0001).
    - bumped_node(i, bump) adds `bump` to the hazard rate of node i only; this is
      the quantity the node sensitivities are taken with respect to.
    """

    name: str
    pillars: list[float]
    hazard_rates: list[float]

    _rates_label = "hazard_rates"

    def __post_init__(self) -> None:
        self._validate_nodes()

    def _node_rates(self) -> list[float]:
        return self.hazard_rates

    @classmethod
    def flat(cls, name: str, hazard_rate: float, pillars: Sequence[float] = (1.0,)) -> HazardRateCurve:
        """Curve with a constant hazard rate."""
        return cls(name=name, pillars=list(pillars), hazard_rates=[hazard_rate] * len(pillars))

    def survival_probability(self, t: float) -> float:
        """S(t); alias of df(t)."""
        return self.df(t)

    def with_rates(self, hazard_rates: Sequence[float]) -> HazardRateCurve:
        """Same pillars, new hazard rates."""
        return HazardRateCurve(name=self.name, pillars=list(self.pillars), hazard_rates=list(hazard_rates))

    def bumped(self, bump: float) -> HazardRateCurve:
        """Return new curve with parallel additive shift to all hazard rates."""
        return self.with_rates([h + bump for h in self.hazard_rates])

    def bumped_node(self, node: int, bump: float) -> HazardRateCurve:
        """Return new curve with `bump` added to the hazard rate of one node."""
        rates = list(self.hazard_rates)
        rates[node] += bump
        return self.with_rates(rates)
