"""Products: analytic CDS description."""

from cds_pricing.products.cds import CDSAnalytic, PriceType

__all__ = ["CDSAnalytic", "PriceType"]
