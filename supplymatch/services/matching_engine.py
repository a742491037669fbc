"""
matching_engine.py — Ranks candidate suppliers for one part.

For every supplier: capability, compliance, proximity, logistics and quality
sub-scores are combined into switching_cost_score; savings, audit readiness
and reasons are attached; results are sorted and truncated.

Business Rules:
- estimated_savings_rate = clamp((baseline − price_index) / baseline, 0, 0.35),
  baseline = current_price_index (1.0 by default)
- Results under min_score are dropped, then stable sort by score descending
  (ties keep catalog order), then cut to max_results
- A supplier whose scoring fails is logged and skipped; the pass never aborts
- Pure: no caching, no module state, inputs are never mutated

Called by: routers/matching.py, services/bom_import.py, scripts/match_bom.py
Depends on: scoring.py, services/compliance.py, services/regions.py, services/reasons.py
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from loguru import logger

from ..schemas.matching import MatchOptions, MatchResult
from ..schemas.parts import PartSpec
from ..schemas.suppliers import Supplier
from ..scoring import (
    ScoreBreakdown,
    aggregate,
    score_capability,
    score_logistics,
    score_quality,
)
from .compliance import classify_audit_readiness, score_compliance
from .reasons import generate_reasons
from .regions import score_proximity
from .similarity import SynonymTable, load_synonym_table

MAX_SAVINGS_RATE = 0.35


def estimate_savings_rate(price_index: float, current_price_index: float = 1.0) -> float:
    if current_price_index <= 0:
        return 0.0
    rate = (current_price_index - price_index) / current_price_index
    return round(max(0.0, min(MAX_SAVINGS_RATE, rate)), 4)


def score_supplier(
    part: PartSpec,
    supplier: Supplier,
    options: MatchOptions,
    when: date,
    synonyms: SynonymTable | None = None,
) -> MatchResult:
    """Score a single supplier. Returns the full result with breakdown."""
    bd = ScoreBreakdown(
        capability=score_capability(part, supplier, synonyms),
        compliance=score_compliance(part, supplier, options.required_certs, when),
        proximity=score_proximity(supplier, options.region_scope),
        logistics=score_logistics(part, supplier),
        quality=score_quality(supplier),
    )
    aggregate(bd)

    return MatchResult(
        supplier=supplier,
        switching_cost_score=bd.final_score,
        estimated_savings_rate=estimate_savings_rate(supplier.price_index, options.current_price_index),
        audit_readiness=classify_audit_readiness(supplier, when),
        reasons=generate_reasons(part, supplier, bd),
        breakdown=bd.to_dict(),
    )


def match_suppliers(
    part: PartSpec,
    suppliers: Sequence[Supplier],
    options: MatchOptions | None = None,
    synonyms: SynonymTable | None = None,
) -> list[MatchResult]:
    """Rank `suppliers` for `part`. Deterministic for identical inputs."""
    opts = options or MatchOptions()
    when = opts.as_of or date.today()
    table = synonyms if synonyms is not None else load_synonym_table()

    results: list[MatchResult] = []
    skipped = 0
    for supplier in suppliers:
        try:
            result = score_supplier(part, supplier, opts, when, table)
        except Exception as e:
            skipped += 1
            logger.warning(f"Scoring failed for supplier {getattr(supplier, 'id', '?')}: {e}")
            continue
        if result.switching_cost_score >= opts.min_score:
            results.append(result)

    # sorted() is stable: equal scores keep catalog order
    ranked = sorted(results, key=lambda r: r.switching_cost_score, reverse=True)
    ranked = ranked[:opts.max_results]

    logger.debug(
        f"Matched part {part.part_number or '?'}: {len(suppliers)} candidates, "
        f"{len(results)} above min_score, {skipped} skipped, {len(ranked)} returned"
    )
    return ranked
