"""Matching API — ranked supplier shortlist for one part."""

from fastapi import APIRouter

from ..schemas.matching import MatchRequest, MatchResponse
from ..services.matching_engine import match_suppliers

router = APIRouter(tags=["matching"])


@router.post("/api/match", response_model=MatchResponse)
def match(payload: MatchRequest):
    results = match_suppliers(payload.part, payload.suppliers, payload.options)
    return MatchResponse(
        part_number=payload.part.part_number,
        candidates=len(payload.suppliers),
        results=results,
    )
