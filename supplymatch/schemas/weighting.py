"""
schemas/weighting.py — User-tunable weighting panel models

Business Rules:
- Each weight is a 0-50 slider; the five need not add to 100
- Totals are renormalized to the actual weight sum at scoring time

Called by: services/weighting_service.py, routers/weighting.py
Depends on: pydantic, config.py
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ..config import get_settings
from .suppliers import Supplier

CRITERIA = ("price", "quality", "delivery", "certifications", "capacity")


class ScoringWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: float = Field(25, ge=0, le=50)
    quality: float = Field(30, ge=0, le=50)
    delivery: float = Field(20, ge=0, le=50)
    certifications: float = Field(15, ge=0, le=50)
    capacity: float = Field(10, ge=0, le=50)

    @classmethod
    def defaults(cls) -> ScoringWeights:
        """Slider positions after "Reset" (configurable via WEIGHT_* env vars)."""
        s = get_settings()
        return cls(
            price=s.weight_price,
            quality=s.weight_quality,
            delivery=s.weight_delivery,
            certifications=s.weight_certifications,
            capacity=s.weight_capacity,
        )

    @property
    def total(self) -> float:
        return sum(getattr(self, c) for c in CRITERIA)

    def as_dict(self) -> dict[str, float]:
        return {c: getattr(self, c) for c in CRITERIA}


class WeightedScore(BaseModel):
    supplier: Supplier
    total_score: int = Field(..., ge=0, le=100)
    breakdown: dict[str, float] = Field(default_factory=dict)


class WeightSummary(BaseModel):
    weights: dict[str, float]
    total_weight: float
    is_balanced: bool


# ── API wrappers ────────────────────────────────────────────────────────


class WeightingRequest(BaseModel):
    suppliers: list[Supplier] = Field(default_factory=list)
    weights: ScoringWeights | None = None
    as_of: date | None = None


class WeightingResponse(BaseModel):
    summary: WeightSummary
    results: list[WeightedScore] = Field(default_factory=list)
