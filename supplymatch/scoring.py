"""
Scoring Engine — component scores behind the switching cost score.

Switching Cost Score = Capability×40 + Compliance×25 + Proximity×15 +
                       Logistics×10 + Quality×10

Each factor produces a 0-100 sub-score. Weights are fixed; user-tunable
weighting lives in services/weighting_service.py.
"""
import math
from dataclasses import dataclass

from .schemas.parts import PartSpec
from .schemas.suppliers import Supplier
from .services.similarity import SynonymTable, similarity

# --- Aggregation weights (fractions of 1) ---

SWITCHING_WEIGHTS = {
    "capability": 0.40,
    "compliance": 0.25,
    "proximity": 0.15,
    "logistics": 0.10,
    "quality": 0.10,
}

CAPABILITY_WEIGHTS = {"process": 0.40, "material": 0.35, "category": 0.25}

IDEAL_LEAD_TIME_DAYS = 14
LEAD_TIME_SOFT_LIMIT_DAYS = 21
MOQ_WEIGHT = 0.6
LEAD_TIME_WEIGHT = 0.4


# --- Helpers ---

def finite(value: float) -> float:
    """NaN/±inf → 0.0 so a bad sub-score never poisons the weighted total."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """2.5 → 3 (Python's round() would give 2)."""
    return int(math.floor(value + 0.5))


# --- Score breakdown (returned with every result) ---

@dataclass
class ScoreBreakdown:
    capability: float = 0
    compliance: float = 0
    proximity: float = 0
    logistics: float = 0
    quality: float = 0
    raw_total: float = 0
    final_score: int = 0

    def to_dict(self) -> dict:
        return {
            "capability": round(self.capability, 1),
            "compliance": round(self.compliance, 1),
            "proximity": round(self.proximity, 1),
            "logistics": round(self.logistics, 1),
            "quality": round(self.quality, 1),
        }


# --- Individual scoring functions ---

def score_capability(part: PartSpec, supplier: Supplier, synonyms: SynonymTable | None = None) -> float:
    """Process/material/category fit, 0-100. Empty sides score 0 on their axis."""
    process_fit = similarity(part.process, supplier.processes, synonyms)
    material_fit = similarity(part.material, supplier.materials, synonyms)
    category_fit = similarity(part.process, supplier.categories, synonyms)
    return (
        process_fit * CAPABILITY_WEIGHTS["process"]
        + material_fit * CAPABILITY_WEIGHTS["material"]
        + category_fit * CAPABILITY_WEIGHTS["category"]
    ) * 100


def score_moq_fit(monthly_demand: float, moq: int) -> float:
    if moq <= 0 or monthly_demand >= moq:
        return 100.0
    return clamp(monthly_demand / moq * 100)


def score_lead_time(lead_time_days: int) -> float:
    """Ideal is 14 days: −3/day up to 21 days, −5/day beyond."""
    if lead_time_days <= LEAD_TIME_SOFT_LIMIT_DAYS:
        return clamp(100 - 3 * (lead_time_days - IDEAL_LEAD_TIME_DAYS))
    return clamp(100 - 5 * (lead_time_days - LEAD_TIME_SOFT_LIMIT_DAYS))


def score_logistics(part: PartSpec, supplier: Supplier) -> float:
    """MOQ fit ×0.6 + lead-time fit ×0.4."""
    return (
        score_moq_fit(part.monthly_demand, supplier.moq) * MOQ_WEIGHT
        + score_lead_time(supplier.lead_time_days) * LEAD_TIME_WEIGHT
    )


def score_quality(supplier: Supplier) -> float:
    """On-time ×0.7 + defect score ×0.3 (1000 ppm → 0)."""
    on_time = supplier.quality.on_time_rate * 100
    defects = max(0.0, 100 - supplier.quality.defect_rate_ppm / 10)
    return on_time * 0.7 + defects * 0.3


def aggregate(bd: ScoreBreakdown) -> ScoreBreakdown:
    """Fill raw_total/final_score from the component scores."""
    bd.capability = clamp(finite(bd.capability))
    bd.compliance = clamp(finite(bd.compliance))
    bd.proximity = clamp(finite(bd.proximity))
    bd.logistics = clamp(finite(bd.logistics))
    bd.quality = clamp(finite(bd.quality))

    bd.raw_total = sum(getattr(bd, name) * w for name, w in SWITCHING_WEIGHTS.items())
    bd.final_score = int(clamp(round_half_up(bd.raw_total)))
    return bd
