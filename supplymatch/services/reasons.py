"""Human-readable match justifications, highest priority first."""

from __future__ import annotations

from ..schemas.parts import PartSpec
from ..schemas.suppliers import Supplier
from ..scoring import ScoreBreakdown

MAX_REASONS = 4


def generate_reasons(
    part: PartSpec,
    supplier: Supplier,
    bd: ScoreBreakdown,
    limit: int = MAX_REASONS,
) -> list[str]:
    """Turn component scores and raw supplier attributes into short reasons.

    Tiered criteria emit only their best tier. The list is cut to `limit`
    after all rules ran, so order equals priority.
    """
    reasons: list[str] = []
    process = part.process or "the requested process"

    if bd.capability > 80:
        reasons.append(f"Strong process match for {process}")
    elif bd.capability > 60:
        reasons.append(f"Good capability fit for {process}")

    if bd.compliance > 90:
        reasons.append("Excellent certification portfolio")
    elif bd.compliance > 70:
        reasons.append("Solid certification coverage")
    elif bd.compliance > 50:
        reasons.append("Partial certification coverage")

    if bd.proximity > 85:
        reasons.append("Optimal location for logistics")
    elif bd.proximity > 70:
        reasons.append("Good regional proximity")

    if supplier.price_index < 0.9:
        reasons.append("Cost advantage vs current supplier")
    elif supplier.price_index < 1.0:
        reasons.append("Slight cost advantage vs current supplier")

    if supplier.quality.on_time_rate > 0.95:
        reasons.append("Proven delivery performance")

    if supplier.quality.defect_rate_ppm < 50:
        reasons.append(f"Low defect rate ({supplier.quality.defect_rate_ppm:g} ppm)")

    if supplier.sustainability and supplier.sustainability.co2e_class == "A":
        reasons.append("Low-carbon production (CO2e class A)")

    if supplier.past_clients:
        reasons.append(f"Experience with {', '.join(supplier.past_clients)}")

    if bd.logistics > 80:
        reasons.append("MOQ and lead time fit the demand")

    return reasons[:max(0, limit)]
