"""
Integration schedules for the piecewise-exact leg integrals.

Between consecutive knots of both curves, rt(t) is linear for the yield and the
credit curve alike (flat forward rate and flat forward hazard), so the leg
integrands have closed forms on each piece. The schedule therefore has to
contain every curve knot that falls inside the integration range.
"""

from collections.abc import Iterable

from cds_pricing.interfaces import CreditCurve, YieldCurve


def integration_points(
    start: float,
    end: float,
    yield_curve: YieldCurve,
    credit_curve: CreditCurve,
) -> list[float]:
    """
    Sorted, deduplicated times: start, end and every knot of either curve
    strictly between them.
    """
    if end <= start:
        raise ValueError("end must be greater than start")
    knots = set(yield_curve.knot_times)
    knots.update(credit_curve.knot_times)
    return [start, *sorted(t for t in knots if start < t < end), end]


def truncate_inclusive(lower: float, upper: float, points: Iterable[float]) -> list[float]:
    """
    Points of `points` strictly inside (lower, upper), bracketed by lower and
    upper themselves (whether or not they were in `points`).
    """
    if upper <= lower:
        raise ValueError("upper must be greater than lower")
    return [lower, *(t for t in points if lower < t < upper), upper]


def node_support(credit_curve: CreditCurve, node: int) -> tuple[float, float]:
    """
    Interval outside which the node's sensitivity vanishes:
    (t[node - 1], t[node + 1]), open-ended below the first node. Beyond the last
    pillar the curve extends its last segment, so the last two nodes are
    open-ended above.
    """
    lower = credit_curve.time_at_index(node - 1) if node > 0 else float("-inf")
    last = credit_curve.num_knots - 1
    upper = credit_curve.time_at_index(node + 1) if node < last - 1 else float("inf")
    return lower, upper
