"""Base class for risk measure implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cds_pricing.interfaces import CreditCurve, YieldCurve
from cds_pricing.products.cds import CDSAnalytic


class BaseRiskMeasure(ABC):
    """Base class for risk measure implementations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""
        ...

    @abstractmethod
    def compute(self, cds: CDSAnalytic, yield_curve: YieldCurve, credit_curve: CreditCurve) -> float:
        """Compute the risk measure value."""
        ...
