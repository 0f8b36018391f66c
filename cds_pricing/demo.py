"""Demo: sample USD curve and hazard curve, price a 5Y CDS with bucketed risk."""

import logging

from cds_pricing.curves import HazardRateCurve, ZeroRateCurve
from cds_pricing.pricers import AnalyticCDSPricer
from cds_pricing.products.cds import CDSAnalytic, PriceType, accrued_premium
from cds_pricing.risk import cs01_bucketed, cs01_parallel


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    usd_curve = ZeroRateCurve(
        name="USD_DISC",
        pillars=[0.5, 1.0, 2.0, 5.0, 10.0],
        zero_rates_cc=[0.045, 0.043, 0.040, 0.038, 0.037],
    )
    hazard_curve = HazardRateCurve(
        name="CORP_HAZ",
        pillars=[0.5, 1.0, 3.0, 5.0, 7.0, 10.0],
        hazard_rates=[0.010, 0.012, 0.015, 0.018, 0.020, 0.021],
    )

    # 5Y quarterly CDS, 10M notional, 100bp coupon, 40% recovery
    notional = 10_000_000
    coupon = 0.01
    cds = CDSAnalytic.regular(maturity=5.0, recovery_rate=0.4)

    legacy = AnalyticCDSPricer()
    corrected = AnalyticCDSPricer(use_correct_acc_on_default_formula=True)

    par = legacy.par_spread(cds, usd_curve, hazard_curve)
    clean = legacy.pv(cds, usd_curve, hazard_curve, coupon, PriceType.CLEAN)
    dirty = legacy.pv(cds, usd_curve, hazard_curve, coupon, PriceType.DIRTY)
    rpv01 = legacy.pv_premium_leg_per_unit_spread(cds, usd_curve, hazard_curve) / 10_000
    par_corrected = corrected.par_spread(cds, usd_curve, hazard_curve)
    cs01 = cs01_parallel(cds, usd_curve, hazard_curve, coupon, bump_bp=1.0)
    buckets = cs01_bucketed(cds, usd_curve, hazard_curve, coupon, bump_bp=1.0)

    print("=== CDS Pricing Demo ===\n")
    print("Market: USD_DISC, CORP_HAZ curves\n")
    print("5Y CDS, 10M notional, 100bp coupon, protection buyer")
    print(f"   Par spread            = {par * 10_000:,.4f} bp")
    print(f"   Par spread (corrected)= {par_corrected * 10_000:,.4f} bp")
    print(f"   RPV01                 = {rpv01 * notional:,.2f}")
    print(f"   PV clean              = {clean * notional:,.2f}")
    print(f"   PV dirty              = {dirty * notional:,.2f}")
    print(f"   Accrued               = {accrued_premium(cds, coupon, notional):,.2f}")
    print(f"   CS01 (parallel)       = {cs01 * notional:,.2f}")
    for t, value in zip(hazard_curve.pillars, buckets):
        print(f"   CS01 {t:>4g}Y           = {value * notional:,.2f}")
    print("\nDone.")


if __name__ == "__main__":
    main()
