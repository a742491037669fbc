"""
weighting_service.py — User-tunable re-scoring of a shortlist.

Independent of the matching engine: five simple criteria, each 0-100, are
combined with slider weights that are renormalized to their actual sum.

Business Rules:
- price:          clamp((2.0 − price_index) × 50)
- quality:        (on_time × 100 + max(0, 100 − ppm / 50)) / 2
- delivery:       clamp((60 − lead_time_days) × 2)
- certifications: min(100, 20 × certificates valid today)
- capacity:       min(100, capacity.value / 1000 × 10)
- total = Σ(raw × w) / Σ(w), 0 when every weight is 0
- Re-sorted descending (stable) on every call

Called by: routers/weighting.py
Depends on: schemas/weighting.py, scoring.py (clamp, round_half_up)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

from loguru import logger

from ..schemas.suppliers import Supplier
from ..schemas.weighting import CRITERIA, ScoringWeights, WeightedScore, WeightSummary
from ..scoring import clamp, finite, round_half_up


def price_score(supplier: Supplier, when: date) -> float:
    return clamp((2.0 - supplier.price_index) * 50)


def quality_score(supplier: Supplier, when: date) -> float:
    on_time = supplier.quality.on_time_rate * 100
    defects = max(0.0, 100 - supplier.quality.defect_rate_ppm / 50)
    return (on_time + defects) / 2


def delivery_score(supplier: Supplier, when: date) -> float:
    return clamp((60 - supplier.lead_time_days) * 2)


def certifications_score(supplier: Supplier, when: date) -> float:
    valid = sum(1 for c in supplier.certifications if c.is_valid_at(when))
    return min(100.0, valid * 20.0)


def capacity_score(supplier: Supplier, when: date) -> float:
    return min(100.0, supplier.capacity.value / 1000 * 10)


CRITERION_SCORERS: dict[str, Callable[[Supplier, date], float]] = {
    "price": price_score,
    "quality": quality_score,
    "delivery": delivery_score,
    "certifications": certifications_score,
    "capacity": capacity_score,
}


def weighted_total(raw: dict[str, float], weights: ScoringWeights) -> float:
    total_weight = weights.total
    if total_weight <= 0:
        return 0.0
    return sum(raw[c] * getattr(weights, c) for c in CRITERIA) / total_weight


def score_candidates(
    suppliers: Sequence[Supplier],
    weights: ScoringWeights | None = None,
    as_of: date | None = None,
) -> list[WeightedScore]:
    """Re-score and re-sort a candidate set under the given slider weights."""
    weights = weights or ScoringWeights.defaults()
    when = as_of or date.today()

    rows: list[WeightedScore] = []
    for supplier in suppliers:
        raw = {c: finite(CRITERION_SCORERS[c](supplier, when)) for c in CRITERIA}
        total = int(clamp(round_half_up(weighted_total(raw, weights))))
        rows.append(WeightedScore(
            supplier=supplier,
            total_score=total,
            breakdown={c: round(v, 1) for c, v in raw.items()},
        ))

    rows.sort(key=lambda r: r.total_score, reverse=True)
    logger.debug(f"Weighted {len(rows)} candidates, total weight {weights.total:g}")
    return rows


def weight_summary(weights: ScoringWeights | None = None) -> WeightSummary:
    weights = weights or ScoringWeights.defaults()
    return WeightSummary(
        weights=weights.as_dict(),
        total_weight=weights.total,
        is_balanced=weights.total == 100,
    )
