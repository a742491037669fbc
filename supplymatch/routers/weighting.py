"""Weighting API — re-score a shortlist with user slider weights."""

from fastapi import APIRouter

from ..schemas.weighting import WeightingRequest, WeightingResponse, WeightSummary
from ..services.weighting_service import score_candidates, weight_summary

router = APIRouter(tags=["weighting"])


@router.get("/api/weighting/defaults", response_model=WeightSummary)
def default_weights():
    return weight_summary()


@router.post("/api/weighting/score", response_model=WeightingResponse)
def score_shortlist(payload: WeightingRequest):
    results = score_candidates(payload.suppliers, payload.weights, payload.as_of)
    return WeightingResponse(summary=weight_summary(payload.weights), results=results)
