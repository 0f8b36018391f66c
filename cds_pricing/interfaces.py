"""
Protocol-based interfaces for the extension points of the CDS library.

Using typing.Protocol enables structural subtyping: any class that implements
the required methods satisfies the protocol without explicit inheritance.
The pricer is written against these contracts only, so any curve backend
(interpolation scheme, bootstrapper) can be substituted.

Curves are read-only inputs: a pricing call never mutates them, and concurrent
calls against the same curve objects are safe as long as the curve
implementation itself is safe for concurrent reads.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cds_pricing.products.cds import CDSAnalytic


@runtime_checkable
class YieldCurve(Protocol):
    """Protocol for discount curves.

    `rt(t)` is the zero rate times time, i.e. -log(df(t)).
    """

    name: str

    @property
    def knot_times(self) -> Sequence[float]:
        """Times at which the curve is natively defined (increasing)."""
        ...

    def df(self, t: float) -> float:
        """Return discount factor to time t (year-fraction)."""
        ...

    def rt(self, t: float) -> float:
        """Return -log(df(t))."""
        ...


@runtime_checkable
class CreditCurve(YieldCurve, Protocol):
    """Protocol for survival curves parameterised by a finite set of nodes.

    `df(t)` is the survival probability. The node sensitivity is zero outside
    the node's local support.
    """

    @property
    def num_knots(self) -> int:
        ...

    def time_at_index(self, index: int) -> float:
        ...

    def single_node_df_sensitivity(self, t: float, node: int) -> float:
        """d df(t) / d(quantity of node `node`)."""
        ...


class AccrualOnDefaultFormula(Protocol):
    """Integral of the premium accrued up to default over one accrual period."""

    def value(
        self,
        acc_rate: float,
        step_in: float,
        acc_start: float,
        acc_end: float,
        integration_points: Sequence[float],
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
    ) -> float:
        ...

    def sensitivity(
        self,
        acc_rate: float,
        step_in: float,
        acc_start: float,
        acc_end: float,
        integration_points: Sequence[float],
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
        node: int,
    ) -> float:
        ...


class RiskMeasure(Protocol):
    """Protocol for risk measure implementations.

    Risk measures are composable objects that compute sensitivities via
    bump-and-reprice or analytic formulas.
    """

    @property
    def name(self) -> str:
        """Human-readable name (e.g., 'CS01_1bp')."""
        ...

    def compute(
        self,
        cds: CDSAnalytic,
        yield_curve: YieldCurve,
        credit_curve: CreditCurve,
    ) -> float:
        """Compute the risk measure value."""
        ...
