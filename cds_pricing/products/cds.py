"""Analytic description of a single-name CDS (instrument data only; pricing via AnalyticCDSPricer)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

# ISDA measures curve time in ACT/365F, so one calendar day is 1/365.
ONE_DAY = 1.0 / 365.0

# Premium accrues ACT/360 while curve time is ACT/365F.
ACT_360_OVER_ACT_365 = 365.0 / 360.0


class PriceType(Enum):
    """Whether the accrued premium is included in (DIRTY) or excluded from (CLEAN) the premium leg."""

    CLEAN = "clean"
    DIRTY = "dirty"


@dataclass(frozen=True)
class CDSAnalytic:
    """
    A CDS as seen from a valuation date, reduced to the numbers the pricer needs.

    All times are year fractions from today. Per-period tuples are indexed by
    accrual period; the survival probability of period i is sampled at
    `credit_observation_time[i]`, its premium is paid at `payment_time[i]`.
    `accrual_start[0]` may precede today (the premium accrued since then is
    `accrued_premium_per_unit_spread`).
    """

    valuation_time: float
    protection_start: float
    protection_end: float
    accrual_start: tuple[float, ...]
    accrual_end: tuple[float, ...]
    accrual_fraction: tuple[float, ...]
    payment_time: tuple[float, ...]
    credit_observation_time: tuple[float, ...]
    step_in: float
    lgd: float
    accrued_premium_per_unit_spread: float = 0.0
    pay_accrued_on_default: bool = True
    protection_from_start_of_day: bool = True
    curve_one_day: float = ONE_DAY

    def __post_init__(self) -> None:
        for name in (
            "accrual_start",
            "accrual_end",
            "accrual_fraction",
            "payment_time",
            "credit_observation_time",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        self._validate()

    def _validate(self) -> None:
        n = len(self.accrual_start)
        if n == 0:
            raise ValueError("CDS must have at least one accrual period")
        lengths = {
            len(self.accrual_end),
            len(self.accrual_fraction),
            len(self.payment_time),
            len(self.credit_observation_time),
        }
        if lengths != {n}:
            raise ValueError("per-period schedules must have the same length")
        for start, end in zip(self.accrual_start, self.accrual_end):
            if end <= start:
                raise ValueError("accrual periods must have end > start")
        if self.valuation_time < 0:
            raise ValueError("valuation_time must be >= 0")
        if self.protection_end <= self.protection_start:
            raise ValueError("protection_end must be greater than protection_start")
        if not 0.0 <= self.lgd <= 1.0:
            raise ValueError("lgd must be in [0, 1]")

    @property
    def num_payments(self) -> int:
        return len(self.accrual_start)

    @property
    def recovery_rate(self) -> float:
        return 1.0 - self.lgd

    def with_recovery_rate(self, recovery_rate: float) -> CDSAnalytic:
        """Copy of this CDS with a different recovery rate."""
        return replace(self, lgd=1.0 - recovery_rate)

    def with_lgd(self, lgd: float) -> CDSAnalytic:
        """Copy of this CDS with a different loss-given-default."""
        return replace(self, lgd=lgd)

    @classmethod
    def regular(
        cls,
        maturity: float,
        recovery_rate: float = 0.4,
        payment_interval: float = 0.25,
        accrual_start: float = 0.0,
        step_in: float = ONE_DAY,
        valuation_time: float = 0.0,
        pay_accrued_on_default: bool = True,
        protection_from_start_of_day: bool = True,
        accrual_day_count_ratio: float = ACT_360_OVER_ACT_365,
        curve_one_day: float = ONE_DAY,
    ) -> CDSAnalytic:
        """
        Standard CDS with regular premium periods, directly in year fractions.

        Periods of length `payment_interval` are rolled back from `maturity`,
        leaving a short front stub if needed. Accrual fractions are the period
        lengths scaled by `accrual_day_count_ratio` (ACT/360 by default).

        When protection starts at the beginning of the day (ISDA standard):
        - the final accrual period runs one day past maturity,
        - survival is observed one day before each accrual end,
        - protection starts one day before the step-in date.
        """
        if maturity <= accrual_start:
            raise ValueError("maturity must be after accrual_start")
        if payment_interval <= 0:
            raise ValueError("payment_interval must be > 0")

        boundaries = _roll_back(accrual_start, maturity, payment_interval)
        day = curve_one_day if protection_from_start_of_day else 0.0

        starts = boundaries[:-1]
        ends = boundaries[1:]
        ends[-1] += day
        payments = list(boundaries[1:])
        observations = [end - day for end in ends]
        fractions = [(end - start) * accrual_day_count_ratio for start, end in zip(starts, ends)]

        accrued = max(step_in - accrual_start, 0.0) * accrual_day_count_ratio
        protection_start = max(step_in, accrual_start) - day

        return cls(
            valuation_time=valuation_time,
            protection_start=protection_start,
            protection_end=maturity,
            accrual_start=tuple(starts),
            accrual_end=tuple(ends),
            accrual_fraction=tuple(fractions),
            payment_time=tuple(payments),
            credit_observation_time=tuple(observations),
            step_in=step_in,
            lgd=1.0 - recovery_rate,
            accrued_premium_per_unit_spread=accrued,
            pay_accrued_on_default=pay_accrued_on_default,
            protection_from_start_of_day=protection_from_start_of_day,
            curve_one_day=curve_one_day,
        )


def _roll_back(start: float, end: float, interval: float) -> list[float]:
    """Period boundaries from start to end, stepping back from end (short front stub)."""
    # A stub shorter than this is merged into the first regular period.
    tolerance = 1e-9
    boundaries: list[float] = [end]
    k = 1
    while end - k * interval > start + tolerance:
        boundaries.append(end - k * interval)
        k += 1
    boundaries.append(start)
    boundaries.reverse()
    return boundaries


def accrued_premium(cds: CDSAnalytic, fractional_spread: float, notional: float = 1.0) -> float:
    """Cash accrued premium for a given spread and notional."""
    return notional * fractional_spread * cds.accrued_premium_per_unit_spread

